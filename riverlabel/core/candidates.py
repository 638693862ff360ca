# riverlabel/core/candidates.py
"""
Candidate windows: contiguous index ranges that avoid every rejected point and
are long enough for the label. Also the maximal usable runs used as fallback
when the label fits nowhere.
"""

from __future__ import annotations

import logging

import numpy as np

from riverlabel.core.path_model import PathModel
from riverlabel.core.scoring import score_window
from riverlabel.core.types import GeometryMetrics, PlacementCandidate

logger = logging.getLogger(__name__)


def rejected_index_mask(metrics: GeometryMetrics, n_points: int) -> np.ndarray:
    """Boolean mask over point indices; True where any rejected region covers the point."""
    mask = np.zeros(n_points, dtype=bool)
    for region in metrics.rejected_regions:
        lo = max(0, region.start_idx)
        hi = min(n_points - 1, region.end_idx)
        if hi >= lo:
            mask[lo:hi + 1] = True
    return mask


def window_center_point(path: PathModel, start_idx: int, end_idx: int) -> tuple[float, float]:
    """Point at half the window's arclength (the start point for empty windows)."""
    pts = path.points
    target = path.segment_length(start_idx, end_idx) / 2.0
    acc = 0.0
    for i in range(start_idx, min(end_idx, len(pts) - 1)):
        seg = path.segment_length(i, i + 1)
        if acc + seg >= target:
            ratio = (target - acc) / seg if seg > 0 else 0.0
            return (
                pts[i][0] + (pts[i + 1][0] - pts[i][0]) * ratio,
                pts[i][1] + (pts[i + 1][1] - pts[i][1]) * ratio,
            )
        acc += seg
    return pts[min(end_idx, len(pts) - 1)]


def _make_candidate(
    path: PathModel,
    metrics: GeometryMetrics,
    start_idx: int,
    end_idx: int,
    window_length: float,
) -> PlacementCandidate:
    score, scores = score_window(path, metrics, start_idx, end_idx)
    return PlacementCandidate(
        start_idx=start_idx,
        end_idx=end_idx,
        window_length=window_length,
        score=score,
        scores=scores,
        center_pt=window_center_point(path, start_idx, end_idx),
    )


def find_candidates(
    path: PathModel,
    text_length_pt: float,
    metrics: GeometryMetrics,
    rejected: np.ndarray | None = None,
) -> list[PlacementCandidate]:
    """
    Every window [start, end] with no rejected index whose arclength is at
    least text_length_pt. Each usable start index is extended point by point
    until the next point is rejected; every extension that fits is emitted, so
    windows from the same start overlap.
    """
    pts = path.points
    n = len(pts)
    if rejected is None:
        rejected = rejected_index_mask(metrics, n)
    candidates: list[PlacementCandidate] = []
    for start_idx in range(n - 1):
        if rejected[start_idx]:
            continue
        window_length = 0.0
        for end_idx in range(start_idx + 1, n):
            if rejected[end_idx]:
                break
            window_length += path.segment_length(end_idx - 1, end_idx)
            if bool(np.any(rejected[start_idx + 1:end_idx])):
                break
            if window_length >= text_length_pt:
                candidates.append(_make_candidate(path, metrics, start_idx, end_idx, window_length))
    logger.debug("Candidates: %d windows fit %.1f pt", len(candidates), text_length_pt)
    return candidates


def find_usable_runs(
    path: PathModel,
    metrics: GeometryMetrics,
    rejected: np.ndarray | None = None,
) -> list[PlacementCandidate]:
    """
    Maximal non-overlapping runs of non-rejected points, each scored,
    regardless of label length. A lone usable point is a run of length 0.
    """
    n = len(path.points)
    if rejected is None:
        rejected = rejected_index_mask(metrics, n)
    runs: list[PlacementCandidate] = []
    i = 0
    while i < n:
        if rejected[i]:
            i += 1
            continue
        end = i
        while end + 1 < n and not rejected[end + 1]:
            end += 1
        runs.append(_make_candidate(path, metrics, i, end, path.segment_length(i, end)))
        i = end + 1
    return runs
