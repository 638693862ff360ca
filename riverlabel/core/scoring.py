# riverlabel/core/scoring.py
"""
Window scoring: curvature, width, position and straightness, each 0..100,
combined with fixed weights from config. Higher is better.
"""

from __future__ import annotations

import math

from riverlabel.core.config import (
    CURVATURE_PENALTY_PER_DEG,
    IDEAL_WIDTH_PT,
    MAX_SCORE,
    NEUTRAL_WIDTH_SCORE,
    SCORE_WEIGHT_CURVATURE,
    SCORE_WEIGHT_POSITION,
    SCORE_WEIGHT_STRAIGHTNESS,
    SCORE_WEIGHT_WIDTH,
    STRAIGHTNESS_PENALTY_PER_DEG,
)
from riverlabel.core.geometry import heading_rad, wrap_angle_rad
from riverlabel.core.path_model import PathModel
from riverlabel.core.types import ComponentScores, GeometryMetrics


def _clamp_score(s: float) -> float:
    return max(0.0, min(MAX_SCORE, s))


def curvature_score(metrics: GeometryMetrics, start_idx: int, end_idx: int) -> float:
    """100 - 3 * mean smoothed curvature over the window, floored at 0."""
    curv = metrics.curvatures
    window = [curv[i] for i in range(start_idx, end_idx + 1) if i < len(curv)]
    mean = sum(window) / len(window) if window else 0.0
    return _clamp_score(MAX_SCORE - CURVATURE_PENALTY_PER_DEG * mean)


def width_score(path: PathModel, start_idx: int, end_idx: int) -> float:
    """
    Mean known width relative to IDEAL_WIDTH_PT, capped at 100. Neutral when
    the path has no widths or the window has no known width.
    """
    if path.widths is None:
        return NEUTRAL_WIDTH_SCORE
    known = [
        path.widths[i] for i in range(start_idx, end_idx + 1)
        if i < len(path.widths) and path.widths[i] is not None
    ]
    if not known:
        return NEUTRAL_WIDTH_SCORE
    mean = sum(known) / len(known)  # type: ignore[arg-type]
    return _clamp_score(MAX_SCORE * mean / IDEAL_WIDTH_PT)


def position_score(path: PathModel, start_idx: int, end_idx: int) -> float:
    """Linear falloff from 100 at the path's arclength midpoint to 0 at either end."""
    total = path.total_length
    if total <= 0:
        return MAX_SCORE
    center = path.cumulative[start_idx] + path.segment_length(start_idx, end_idx) / 2.0
    half = total / 2.0
    return _clamp_score(MAX_SCORE * (1.0 - abs(center - half) / half))


def heading_spread_deg(path: PathModel, start_idx: int, end_idx: int) -> float:
    """
    Standard deviation of segment headings in the window, in degrees.
    Differences from the arithmetic mean heading are wrapped to [-180, 180]
    before squaring; the mean itself is not a circular mean.
    """
    pts = path.points
    angles = [heading_rad(pts[i], pts[i + 1]) for i in range(start_idx, end_idx) if i < len(pts) - 1]
    if not angles:
        return 0.0
    mean = sum(angles) / len(angles)
    variance = sum(wrap_angle_rad(a - mean) ** 2 for a in angles) / len(angles)
    return math.degrees(math.sqrt(variance))


def straightness_score(path: PathModel, start_idx: int, end_idx: int) -> float:
    """100 - 5 * heading spread; windows under 2 segments score 100."""
    if end_idx - start_idx < 2:
        return MAX_SCORE
    return _clamp_score(MAX_SCORE - STRAIGHTNESS_PENALTY_PER_DEG * heading_spread_deg(path, start_idx, end_idx))


def score_window(
    path: PathModel,
    metrics: GeometryMetrics,
    start_idx: int,
    end_idx: int,
) -> tuple[float, ComponentScores]:
    """
    Combined score and components for window [start_idx, end_idx].
    Weights: curvature 0.4, width 0.2, position 0.2, straightness 0.2.
    """
    scores = ComponentScores(
        curvature=curvature_score(metrics, start_idx, end_idx),
        width=width_score(path, start_idx, end_idx),
        position=position_score(path, start_idx, end_idx),
        straightness=straightness_score(path, start_idx, end_idx),
    )
    overall = (
        SCORE_WEIGHT_CURVATURE * scores.curvature
        + SCORE_WEIGHT_WIDTH * scores.width
        + SCORE_WEIGHT_POSITION * scores.position
        + SCORE_WEIGHT_STRAIGHTNESS * scores.straightness
    )
    return _clamp_score(overall), scores
