# riverlabel/core/pipeline.py
"""
End-to-end label layout: input -> PathModel -> analysis -> placement -> glyphs.
Pure and synchronous; every call builds fresh data.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from shapely.geometry.base import BaseGeometry

from riverlabel.core.analysis import analyze_geometry
from riverlabel.core.config import EDGE_FRACTION, MIN_WIDTH_PT, SHARP_CURVE_THRESHOLD_DEG
from riverlabel.core.glyphs import place_glyphs
from riverlabel.core.path_model import PathModel, build_path_model, path_from_polygon, path_from_wkt
from riverlabel.core.placement import find_optimal_placement
from riverlabel.core.text_metrics import pillow_advance_width
from riverlabel.core.types import AdvanceWidthFn, GeometryMetrics, GlyphPlacement, LabelSpec, PlacementOutcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LabelLayout:
    """Everything a renderer needs: the path, its analysis, the placement and the glyphs."""
    label: LabelSpec
    path: PathModel
    metrics: GeometryMetrics
    outcome: PlacementOutcome
    glyphs: tuple[GlyphPlacement, ...]


def build_path(source: Any, is_polygon: bool = False) -> PathModel:
    """
    PathModel from any supported input: an existing PathModel, POLYGON WKT
    text, a Shapely polygon, a polygon vertex ring (is_polygon=True) or a
    [x, y] / [x, y, width] coordinate list.
    """
    if isinstance(source, PathModel):
        return source
    if isinstance(source, str):
        return path_from_wkt(source)
    if isinstance(source, BaseGeometry) or is_polygon:
        return path_from_polygon(source)
    return build_path_model(source)


def label_river(
    source: PathModel | str | BaseGeometry | Sequence[Sequence[float]],
    label: LabelSpec,
    advance_width: AdvanceWidthFn = pillow_advance_width,
    is_polygon: bool = False,
    curvature_threshold: float = SHARP_CURVE_THRESHOLD_DEG,
    min_width: float = MIN_WIDTH_PT,
    edge_fraction: float = EDGE_FRACTION,
) -> LabelLayout:
    """
    Run the full pipeline. Construction errors (InvalidGeometry,
    CenterlineExtractionFailed, InvalidPath) propagate; placement problems
    come back as a warning on the outcome, with no glyphs when nothing can
    be placed.
    """
    path = build_path(source, is_polygon=is_polygon)
    metrics = analyze_geometry(
        path,
        curvature_threshold=curvature_threshold,
        min_width=min_width,
        edge_fraction=edge_fraction,
    )
    outcome = find_optimal_placement(
        path,
        label.text,
        label.font_size_pt,
        metrics,
        font_family=label.font_family,
        advance_width=advance_width,
    )
    glyphs: list[GlyphPlacement] = []
    if outcome.placement is not None:
        glyphs = place_glyphs(
            label.text,
            path,
            outcome.placement.start_idx,
            label.font_size_pt,
            font_family=label.font_family,
            advance_width=advance_width,
        )
    logger.info(
        "Label %r: %d candidates, selected=%s, warning=%s",
        label.text,
        len(outcome.candidates),
        None if outcome.placement is None else (outcome.placement.start_idx, outcome.placement.end_idx),
        outcome.warning_code,
    )
    return LabelLayout(label=label, path=path, metrics=metrics, outcome=outcome, glyphs=tuple(glyphs))
