# riverlabel/core/reporting.py
"""
JSON-ready dicts for the layout handed to a renderer: path, analysis,
candidates, selection and glyphs. Plain data only.
"""

from __future__ import annotations

import math

from riverlabel.core.config import SCHEMA_VERSION
from riverlabel.core.error_codes import user_message
from riverlabel.core.path_model import PathModel
from riverlabel.core.pipeline import LabelLayout
from riverlabel.core.types import (
    GeometryMetrics,
    GlyphPlacement,
    PlacementCandidate,
    PlacementOutcome,
    RejectedRegion,
)


def region_to_dict(region: RejectedRegion) -> dict:
    return {
        "start_idx": region.start_idx,
        "end_idx": region.end_idx,
        "length_pt": region.length,
        "reason": region.reason,
    }


def candidate_to_dict(c: PlacementCandidate) -> dict:
    return {
        "start_idx": c.start_idx,
        "end_idx": c.end_idx,
        "window_length_pt": c.window_length,
        "score": c.score,
        "scores": {
            "curvature": c.scores.curvature,
            "width": c.scores.width,
            "position": c.scores.position,
            "straightness": c.scores.straightness,
        },
        "center_pt": {"x": c.center_pt[0], "y": c.center_pt[1]},
    }


def glyphs_to_dicts(glyphs: list[GlyphPlacement] | tuple[GlyphPlacement, ...]) -> list[dict]:
    """Glyphs with angle in both radians and degrees."""
    return [
        {
            "char": g.char,
            "x": g.x,
            "y": g.y,
            "angle_rad": g.angle_rad,
            "angle_deg": math.degrees(g.angle_rad),
            "advance_pt": g.advance_pt,
        }
        for g in glyphs
    ]


def metrics_to_dict(metrics: GeometryMetrics) -> dict:
    return {
        "curvatures": list(metrics.curvatures),
        "avg_curvature": metrics.avg_curvature,
        "max_curvature": metrics.max_curvature,
        "rejected_regions": [region_to_dict(r) for r in metrics.rejected_regions],
    }


def outcome_to_dict(outcome: PlacementOutcome) -> dict:
    return {
        "placement": None if outcome.placement is None else candidate_to_dict(outcome.placement),
        "fits": outcome.fits,
        "text_length_pt": outcome.text_length_pt,
        "warning": outcome.warning,
        "warning_code": outcome.warning_code,
        "user_message": None if outcome.warning_code is None else user_message(outcome.warning_code),
        "candidates": [candidate_to_dict(c) for c in outcome.candidates],
    }


def path_to_dict(path: PathModel) -> dict:
    minx, miny, maxx, maxy = path.bounds
    return {
        "coords": path.coords(),
        "has_widths": path.has_widths,
        "total_length_pt": path.total_length,
        "bounds": {"minx": minx, "miny": miny, "maxx": maxx, "maxy": maxy},
    }


def layout_to_dict(layout: LabelLayout) -> dict:
    """Exact structure printed by the CLI."""
    return {
        "schema_version": SCHEMA_VERSION,
        "label": {
            "text": layout.label.text,
            "font_size_pt": layout.label.font_size_pt,
            "font_family": layout.label.font_family,
        },
        "path": path_to_dict(layout.path),
        "analysis": metrics_to_dict(layout.metrics),
        "result": outcome_to_dict(layout.outcome),
        "glyphs": glyphs_to_dicts(layout.glyphs),
    }
