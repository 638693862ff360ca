# tests/test_centerline.py
"""
Cross-section centerline: dominant axis, sample count bound, widths,
smoothing and failure modes.
"""

from __future__ import annotations

import numpy as np
import pytest
from shapely.geometry import MultiPolygon, Polygon

from riverlabel.core.centerline import (
    centerline_from_polygon,
    cross_section_intersections,
    extract_centerline,
    smooth_centerline,
)
from riverlabel.core.error_codes import CenterlineExtractionFailed, InvalidGeometry


def _ribbon_ring(length: float = 100.0, width: float = 20.0, step: float = 10.0) -> list[tuple[float, float]]:
    n = int(round(length / step))
    bottom = [(i * step, 0.0) for i in range(n + 1)]
    top = [((n - i) * step, width) for i in range(n + 1)]
    return bottom + top


def test_horizontal_ribbon_centerline() -> None:
    samples = extract_centerline(_ribbon_ring())
    # 22 vertices -> 11 samples at x = 0, 10, ..., 100
    assert len(samples) == 11
    for x, y, w in samples:
        assert y == pytest.approx(10.0)
        assert w == pytest.approx(20.0)
    # ends average with their single neighbour
    assert samples[0][0] == pytest.approx(5.0)
    assert samples[5][0] == pytest.approx(50.0)
    assert samples[-1][0] == pytest.approx(95.0)


def test_vertical_ribbon_samples_along_y() -> None:
    ring = [(y, x) for x, y in _ribbon_ring()]
    samples = extract_centerline(ring)
    assert len(samples) == 11
    for x, y, w in samples:
        assert x == pytest.approx(10.0)
        assert w == pytest.approx(20.0)
    assert samples[0][1] == pytest.approx(5.0)


def test_sample_count_bounded_by_max_and_vertex_count() -> None:
    ring = _ribbon_ring(length=1000.0, step=2.0)  # 1002 vertices
    assert len(extract_centerline(ring)) <= 100
    assert len(extract_centerline(ring, max_samples=20)) == 20


def test_closing_duplicate_is_ignored() -> None:
    ring = _ribbon_ring()
    a = extract_centerline(ring)
    b = extract_centerline(ring + [ring[0]])
    assert len(a) == len(b)
    for p, q in zip(a, b):
        assert p == pytest.approx(q)


def test_tapering_polygon_widths_follow_banks() -> None:
    # Wedge: width grows linearly from 10 at x=0 to 30 at x=100
    bottom = [(float(x), -5.0 - x * 0.1) for x in range(0, 101, 10)]
    top = [(float(x), 5.0 + x * 0.1) for x in range(100, -1, -10)]
    samples = extract_centerline(bottom + top)
    widths = [w for _, _, w in samples]
    assert widths[0] < widths[-1]
    assert all(abs(y) < 1e-9 for _, y, _ in samples)


def test_cross_section_intersections() -> None:
    square = [(0, 0), (10, 0), (10, 10), (0, 10)]
    hits = cross_section_intersections(square, 5.0, "x")
    assert sorted(hits.tolist()) == pytest.approx([0.0, 10.0])
    hits = cross_section_intersections(square, 20.0, "x")
    assert hits.shape[0] == 0


def test_smooth_centerline_window_three() -> None:
    samples = [(0.0, 0.0, 10.0), (10.0, 3.0, 20.0), (20.0, 0.0, 30.0), (30.0, 3.0, 40.0)]
    out = smooth_centerline(samples)
    assert out[0] == pytest.approx((5.0, 1.5, 15.0))
    assert out[1] == pytest.approx((10.0, 1.0, 20.0))
    assert out[3] == pytest.approx((25.0, 1.5, 35.0))
    short = [(0.0, 0.0, 1.0), (1.0, 1.0, 2.0)]
    assert smooth_centerline(short) == short


def test_too_few_vertices_is_invalid_geometry() -> None:
    with pytest.raises(InvalidGeometry):
        extract_centerline([(0, 0), (1, 1)])
    with pytest.raises(InvalidGeometry):
        extract_centerline([(0, 0), (1, 1), (0, 0)])


def test_non_finite_vertices_are_invalid_geometry() -> None:
    with pytest.raises(InvalidGeometry):
        extract_centerline([(0, 0), (np.nan, 1), (2, 0), (1, -1)])


def test_degenerate_polygon_fails_extraction() -> None:
    with pytest.raises(CenterlineExtractionFailed):
        extract_centerline([(1, 1), (1, 1), (1, 1), (1, 1)])


def test_centerline_from_multipolygon_uses_largest_part() -> None:
    big = Polygon(_ribbon_ring())
    small = Polygon([(200, 0), (210, 0), (210, 5), (200, 5)])
    samples = centerline_from_polygon(MultiPolygon([small, big]))
    assert len(samples) == 11
    assert all(x <= 100.0 for x, _, _ in samples)
