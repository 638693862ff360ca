# riverlabel/core/placement.py
"""
Placement selection: pick the best-scoring window for a label, or fall back to
the longest usable run with a warning. Never raises for "no good answer";
the outcome carries a warning key and message instead.
"""

from __future__ import annotations

import logging
from typing import Sequence

from riverlabel.core.candidates import find_candidates, find_usable_runs, rejected_index_mask
from riverlabel.core.config import DEFAULT_FONT_FAMILY
from riverlabel.core.error_codes import NO_FITTING_PLACEMENT, NO_USABLE_PATH
from riverlabel.core.path_model import PathModel
from riverlabel.core.text_metrics import measure_text_length_pt, pillow_advance_width
from riverlabel.core.types import AdvanceWidthFn, GeometryMetrics, PlacementCandidate, PlacementOutcome

logger = logging.getLogger(__name__)


def select_optimal(candidates: Sequence[PlacementCandidate]) -> PlacementCandidate | None:
    """
    Highest overall score; exact ties go to the higher position score, then
    to the first candidate encountered.
    """
    best: PlacementCandidate | None = None
    for c in candidates:
        if best is None or c.score > best.score:
            best = c
        elif c.score == best.score and c.scores.position > best.scores.position:
            best = c
    return best


def place_window(
    path: PathModel,
    text_length_pt: float,
    metrics: GeometryMetrics,
) -> PlacementOutcome:
    """
    Scorer entry for a measured label length. With fitting windows, returns
    the optimal one and every candidate. Otherwise returns the longest usable
    run with a NO_FITTING_PLACEMENT warning, or no placement with
    NO_USABLE_PATH when every point is rejected.
    """
    rejected = rejected_index_mask(metrics, len(path.points))
    candidates = find_candidates(path, text_length_pt, metrics, rejected=rejected)
    if candidates:
        return PlacementOutcome(
            placement=select_optimal(candidates),
            candidates=tuple(candidates),
            text_length_pt=text_length_pt,
        )

    runs = find_usable_runs(path, metrics, rejected=rejected)
    if not runs:
        warning = (
            "No suitable placement found: entire river path has problematic geometry "
            "(sharp curves, narrow sections, or too short)"
        )
        logger.warning(warning)
        return PlacementOutcome(
            placement=None,
            candidates=(),
            text_length_pt=text_length_pt,
            warning=warning,
            warning_code=NO_USABLE_PATH,
        )

    longest = runs[0]
    for run in runs[1:]:
        if run.window_length > longest.window_length:
            longest = run
    warning = (
        f"Text length ({text_length_pt:.1f}pt) exceeds longest suitable segment "
        f"({longest.window_length:.1f}pt). Text may be truncated or overlap."
    )
    logger.warning(warning)
    return PlacementOutcome(
        placement=longest,
        candidates=tuple(runs),
        text_length_pt=text_length_pt,
        warning=warning,
        warning_code=NO_FITTING_PLACEMENT,
    )


def find_optimal_placement(
    path: PathModel,
    text: str,
    font_size_pt: float,
    metrics: GeometryMetrics,
    font_family: str = DEFAULT_FONT_FAMILY,
    advance_width: AdvanceWidthFn = pillow_advance_width,
) -> PlacementOutcome:
    """Measure the label with advance_width, then place it (see place_window)."""
    text_length = measure_text_length_pt(text, font_size_pt, font_family, advance_width)
    return place_window(path, text_length, metrics)
