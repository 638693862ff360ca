# riverlabel/core/centerline.py
"""
Centerline approximation from a closed river boundary: cross-section midpoints
along the dominant bounding-box axis, each carrying the local river width,
then a short moving average. Not a medial-axis solver.
"""

from __future__ import annotations

import logging
from typing import Literal, Sequence

import numpy as np
from shapely.geometry.base import BaseGeometry

from riverlabel.core.config import CENTERLINE_SMOOTHING_WINDOW, MAX_CENTERLINE_SAMPLES
from riverlabel.core.error_codes import CenterlineExtractionFailed, InvalidGeometry
from riverlabel.core.geometry import (
    ensure_polygon,
    exterior_ring,
    largest_polygon,
    open_ring,
    points_bounds,
)

logger = logging.getLogger(__name__)

SampleAxis = Literal["x", "y"]

CenterSample = tuple[float, float, float]
"""(x, y, width) on the centerline."""


def _ring_array(ring: Sequence[Sequence[float]]) -> np.ndarray:
    """Vertex ring as (N, 2) float array; raises InvalidGeometry on bad input."""
    try:
        pts = open_ring(ring)
    except (TypeError, ValueError, IndexError) as exc:
        raise InvalidGeometry(f"Polygon vertices must be (x, y) pairs: {exc}") from exc
    if len(pts) < 3:
        raise InvalidGeometry(f"Polygon must have at least 3 vertices, got {len(pts)}")
    xy = np.asarray(pts, dtype=np.float64)
    if not np.all(np.isfinite(xy)):
        raise InvalidGeometry("Polygon vertices must be finite numbers")
    return xy


def cross_section_intersections(
    ring: Sequence[Sequence[float]] | np.ndarray,
    value: float,
    axis: SampleAxis,
) -> np.ndarray:
    """
    Intersect the line x = value (axis "x") or y = value (axis "y") with every
    ring edge; return the other coordinate of each hit whose edge parameter lies
    in [0, 1]. Edges parallel to the line are skipped.
    """
    xy = ring if isinstance(ring, np.ndarray) else np.asarray(open_ring(ring), dtype=np.float64)
    if xy.shape[0] < 2:
        return np.zeros(0)
    a = 0 if axis == "x" else 1
    b = 1 - a
    p1 = xy
    p2 = np.roll(xy, -1, axis=0)
    u1, u2 = p1[:, a], p2[:, a]
    crosses = ((u1 <= value) & (u2 >= value)) | ((u1 >= value) & (u2 <= value))
    crosses &= u1 != u2
    if not np.any(crosses):
        return np.zeros(0)
    t = (value - u1[crosses]) / (u2[crosses] - u1[crosses])
    return p1[crosses, b] + t * (p2[crosses, b] - p1[crosses, b])


def smooth_centerline(
    samples: Sequence[CenterSample],
    window: int = CENTERLINE_SMOOTHING_WINDOW,
) -> list[CenterSample]:
    """
    Centered moving average over (x, y, width); ends average with the
    neighbours they have. Fewer than 3 samples are returned unchanged.
    """
    if len(samples) < 3 or window < 2:
        return [tuple(map(float, s)) for s in samples]  # type: ignore[misc]
    arr = np.asarray(samples, dtype=np.float64)
    kernel = np.ones(window)
    counts = np.convolve(np.ones(arr.shape[0]), kernel, mode="same")
    out = np.zeros_like(arr)
    for c in range(arr.shape[1]):
        out[:, c] = np.convolve(arr[:, c], kernel, mode="same") / counts
    return [(float(x), float(y), float(w)) for x, y, w in out]


def extract_centerline(
    ring: Sequence[Sequence[float]],
    max_samples: int = MAX_CENTERLINE_SAMPLES,
) -> list[CenterSample]:
    """
    Build (x, y, width) centerline samples from a closed polygon ring.
    Samples evenly along the longer bounding-box axis (at most max_samples,
    and at most half the vertex count); each cross-section's extreme hits give
    the center and width. Raises InvalidGeometry for fewer than 3 vertices and
    CenterlineExtractionFailed when no cross-section has two hits.
    """
    xy = _ring_array(ring)
    minx, miny, maxx, maxy = points_bounds([(float(x), float(y)) for x, y in xy])
    span_x = maxx - minx
    span_y = maxy - miny
    horizontal = span_x > span_y
    n_samples = max(1, min(int(max_samples), xy.shape[0] // 2))
    if horizontal:
        lo, hi, axis = minx, maxx, "x"
    else:
        lo, hi, axis = miny, maxy, "y"
    if n_samples == 1:
        positions = np.array([(lo + hi) / 2.0])
    else:
        positions = np.linspace(lo, hi, n_samples, endpoint=True)

    raw: list[CenterSample] = []
    for v in positions:
        hits = cross_section_intersections(xy, float(v), axis)  # type: ignore[arg-type]
        if hits.shape[0] < 2:
            continue
        low = float(np.min(hits))
        high = float(np.max(hits))
        center = (low + high) / 2.0
        width = high - low
        if horizontal:
            raw.append((float(v), center, width))
        else:
            raw.append((center, float(v), width))

    logger.debug(
        "Centerline: %d of %d cross-sections usable (axis=%s, vertices=%d)",
        len(raw), len(positions), axis, xy.shape[0],
    )
    if not raw:
        raise CenterlineExtractionFailed(
            f"No usable cross-sections in polygon with {xy.shape[0]} vertices"
        )
    return smooth_centerline(raw)


def centerline_from_polygon(geom: BaseGeometry, max_samples: int = MAX_CENTERLINE_SAMPLES) -> list[CenterSample]:
    """Centerline of a Shapely polygon (largest part of a MultiPolygon)."""
    poly = largest_polygon(ensure_polygon(geom))
    if poly is None:
        raise InvalidGeometry("Geometry has no polygon to extract a centerline from")
    return extract_centerline(exterior_ring(poly), max_samples=max_samples)

