# riverlabel/core/analysis.py
"""
Geometry analysis of a river path: smoothed curvature per point and the
regions excluded from label placement (sharp curves, narrow sections and the
first/last stretch of the path).
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from riverlabel.core.config import (
    EDGE_FRACTION,
    MIN_WIDTH_PT,
    SHARP_CURVE_THRESHOLD_DEG,
)
from riverlabel.core.geometry import segment_length
from riverlabel.core.path_model import PathModel
from riverlabel.core.types import GeometryMetrics, RegionReason, RejectedRegion

logger = logging.getLogger(__name__)


def _raw_curvature(path: PathModel) -> list[float]:
    """Turn angle (deg) at each interior point divided by mean adjacent segment length."""
    pts = path.points
    n = len(pts)
    raw = [0.0] * n
    for i in range(1, n - 1):
        v1x = pts[i][0] - pts[i - 1][0]
        v1y = pts[i][1] - pts[i - 1][1]
        v2x = pts[i + 1][0] - pts[i][0]
        v2y = pts[i + 1][1] - pts[i][1]
        mag1 = math.hypot(v1x, v1y)
        mag2 = math.hypot(v2x, v2y)
        if mag1 == 0 or mag2 == 0:
            continue
        cos_a = (v1x * v2x + v1y * v2y) / (mag1 * mag2)
        angle_deg = math.degrees(math.acos(max(-1.0, min(1.0, cos_a))))
        raw[i] = angle_deg / ((mag1 + mag2) / 2.0)
    return raw


def calculate_curvature(path: PathModel) -> list[float]:
    """
    Curvature (degrees per unit distance) per point, smoothed with a window-3
    moving average. Index 0 and n-1 are always 0; points next to them average
    with their one interior neighbour. Empty for paths under 3 points.
    """
    n = len(path.points)
    if n < 3:
        return []
    raw = _raw_curvature(path)
    smoothed = [0.0] * n
    for i in range(1, n - 1):
        if i == 1:
            smoothed[i] = (raw[i] + raw[i + 1]) / 2.0
        elif i == n - 2:
            smoothed[i] = (raw[i - 1] + raw[i]) / 2.0
        else:
            smoothed[i] = (raw[i - 1] + raw[i] + raw[i + 1]) / 3.0
    return smoothed


def _runs_to_regions(path: PathModel, flags: Sequence[bool], reason: RegionReason) -> list[RejectedRegion]:
    """One region per maximal run of True flags; a run reaching the end closes there."""
    regions: list[RejectedRegion] = []
    start = -1
    for i, flagged in enumerate(flags):
        if flagged and start < 0:
            start = i
        elif not flagged and start >= 0:
            regions.append(RejectedRegion(start, i - 1, path.segment_length(start, i - 1), reason))
            start = -1
    if start >= 0:
        end = len(flags) - 1
        regions.append(RejectedRegion(start, end, path.segment_length(start, end), reason))
    return regions


def find_sharp_curves(
    path: PathModel,
    threshold: float = SHARP_CURVE_THRESHOLD_DEG,
    curvatures: Sequence[float] | None = None,
) -> list[RejectedRegion]:
    """Regions whose smoothed curvature exceeds threshold."""
    if len(path.points) < 3:
        return []
    if curvatures is None:
        curvatures = calculate_curvature(path)
    return _runs_to_regions(path, [c > threshold for c in curvatures], "sharp-curve")


def find_narrow_sections(path: PathModel, min_width: float = MIN_WIDTH_PT) -> list[RejectedRegion]:
    """
    Regions whose width is below min_width. Points with unknown width never
    count as narrow. No width data yields no regions.
    """
    if path.widths is None:
        return []
    flags = [w is not None and w < min_width for w in path.widths]
    return _runs_to_regions(path, flags, "narrow-section")


def get_edge_sections(
    path: PathModel,
    fraction: float = EDGE_FRACTION,
) -> tuple[RejectedRegion, RejectedRegion]:
    """
    Prefix and suffix regions each covering `fraction` of the total length,
    including the point where the running length first reaches it. If the
    threshold is never reached the region spans the whole path.
    """
    pts = path.points
    n = len(pts)
    threshold = path.total_length * fraction

    start_end = 0
    acc = 0.0
    for i in range(n - 1):
        acc += segment_length(pts[i], pts[i + 1])
        if acc >= threshold:
            start_end = i + 1
            break
    if start_end == 0 and n > 1:
        start_end = n - 1

    end_start = n - 1
    acc = 0.0
    for i in range(n - 1, 0, -1):
        acc += segment_length(pts[i], pts[i - 1])
        if acc >= threshold:
            end_start = i - 1
            break
    if end_start == n - 1 and n > 1:
        end_start = 0

    last = max(0, n - 1)
    return (
        RejectedRegion(0, start_end, path.segment_length(0, start_end), "path-edge"),
        RejectedRegion(end_start, last, path.segment_length(end_start, last), "path-edge"),
    )


def analyze_geometry(
    path: PathModel,
    curvature_threshold: float = SHARP_CURVE_THRESHOLD_DEG,
    min_width: float = MIN_WIDTH_PT,
    edge_fraction: float = EDGE_FRACTION,
) -> GeometryMetrics:
    """
    Full analysis: curvature profile, sharp-curve / narrow / edge regions,
    mean interior curvature and max curvature. Paths under 3 points give
    empty results and zero metrics.
    """
    if len(path.points) < 3:
        return GeometryMetrics((), (), (), None, 0.0, 0.0)

    curvatures = calculate_curvature(path)
    sharp = find_sharp_curves(path, curvature_threshold, curvatures=curvatures)
    narrow = find_narrow_sections(path, min_width)
    edges = get_edge_sections(path, edge_fraction)

    interior = curvatures[1:-1]
    avg_curvature = sum(interior) / len(interior) if interior else 0.0
    max_curvature = max(curvatures) if curvatures else 0.0

    logger.debug(
        "Analysis: %d points, %d sharp-curve, %d narrow-section regions, avg=%.3f max=%.3f",
        len(path.points), len(sharp), len(narrow), avg_curvature, max_curvature,
    )
    return GeometryMetrics(
        curvatures=tuple(curvatures),
        sharp_curves=tuple(sharp),
        narrow_sections=tuple(narrow),
        edge_sections=edges,
        avg_curvature=avg_curvature,
        max_curvature=max_curvature,
    )
