# tests/test_analysis.py
"""
Geometry analysis: curvature profile, sharp-curve / narrow / edge regions,
aggregate metrics and the under-3-points degenerate case.
"""

from __future__ import annotations

import pytest

from riverlabel.core.analysis import (
    analyze_geometry,
    calculate_curvature,
    find_narrow_sections,
    find_sharp_curves,
    get_edge_sections,
)
from riverlabel.core.path_model import PathModel, build_path_model


def _straight(n: int, step: float = 10.0) -> PathModel:
    return build_path_model([[i * step, 0] for i in range(n)])


def test_straight_path_has_zero_curvature() -> None:
    path = _straight(6)
    curv = calculate_curvature(path)
    assert len(curv) == 6
    assert all(c == pytest.approx(0.0, abs=1e-9) for c in curv)


def test_unit_right_angle_turn_smoothed_to_half() -> None:
    path = build_path_model([[0, 0], [1, 0], [1, 1]])
    curv = calculate_curvature(path)
    assert curv[0] == 0
    assert curv[2] == 0
    assert curv[1] > 0
    assert curv[1] == pytest.approx(45.0)


def test_right_angle_turn_scales_with_segment_length() -> None:
    path = build_path_model([[0, 0], [10, 0], [10, 10]])
    curv = calculate_curvature(path)
    # 90 deg over mean segment length 10, halved by smoothing
    assert curv[1] == pytest.approx(4.5)
    assert curv[0] == 0 and curv[2] == 0


def test_degenerate_segment_is_zero_curvature() -> None:
    path = build_path_model([[0, 0], [0, 0], [10, 0], [20, 5]])
    curv = calculate_curvature(path)
    assert len(curv) == 4
    assert curv[0] == 0 and curv[3] == 0
    assert all(c >= 0 for c in curv)


def test_curvature_profile_properties_on_wiggly_path() -> None:
    coords = [[i * 5.0, (-1) ** i * 3.0 + i * 0.5] for i in range(15)]
    path = build_path_model(coords)
    curv = calculate_curvature(path)
    assert len(curv) == len(coords)
    assert curv[0] == 0 and curv[-1] == 0
    assert all(c >= 0 for c in curv)


def test_sharp_curves_cover_zigzag_interior() -> None:
    path = build_path_model([[0, 0], [1, 0], [1, 1], [2, 1], [2, 2]])
    regions = find_sharp_curves(path, 30)
    assert len(regions) == 1
    r = regions[0]
    assert (r.start_idx, r.end_idx) == (1, 3)
    assert r.reason == "sharp-curve"
    assert r.length == pytest.approx(2.0)
    curv = calculate_curvature(path)
    mean = sum(curv[i] for i in r.indices()) / len(r.indices())
    assert mean > 30


def test_sharp_curve_run_reaching_last_index_closes_at_end() -> None:
    path = build_path_model([[0, 0], [1, 0], [1, 1], [2, 1]])
    regions = find_sharp_curves(path, 30, curvatures=[0.0, 50.0, 50.0, 50.0])
    assert [(r.start_idx, r.end_idx) for r in regions] == [(1, 3)]


def test_narrow_section_single_region() -> None:
    path = build_path_model([[0, 0, 20], [10, 0, 5], [20, 0, 5], [30, 0, 20], [40, 0, 20]])
    regions = find_narrow_sections(path, 10)
    assert len(regions) == 1
    assert (regions[0].start_idx, regions[0].end_idx) == (1, 2)
    assert regions[0].reason == "narrow-section"
    assert regions[0].length == pytest.approx(10.0)


def test_narrow_sections_ignore_unknown_widths() -> None:
    path = build_path_model([[0, 0, 20], [10, 0], [20, 0, 5], [30, 0, 20]])
    regions = find_narrow_sections(path, 10)
    assert [(r.start_idx, r.end_idx) for r in regions] == [(2, 2)]


def test_narrow_sections_without_width_data() -> None:
    assert find_narrow_sections(_straight(5), 10) == []


def test_edge_sections_uniform_spacing() -> None:
    start, end = get_edge_sections(_straight(11))
    assert (start.start_idx, start.end_idx) == (0, 1)
    assert (end.start_idx, end.end_idx) == (9, 10)
    assert start.reason == end.reason == "path-edge"
    assert start.length == pytest.approx(10.0)
    assert end.length == pytest.approx(10.0)


def test_edge_sections_non_uniform_spacing_cover_ten_percent() -> None:
    path = build_path_model([[0, 0], [1, 0], [2, 0], [3, 0], [50, 0], [100, 0]])
    start, end = get_edge_sections(path)
    threshold = 0.1 * path.total_length
    assert (start.start_idx, start.end_idx) == (0, 4)
    assert path.segment_length(0, start.end_idx - 1) < threshold <= path.segment_length(0, start.end_idx)
    assert (end.start_idx, end.end_idx) == (4, 5)
    assert path.segment_length(end.start_idx, 5) >= threshold


def test_analyze_geometry_metrics() -> None:
    path = build_path_model([[0, 0], [1, 0], [1, 1]])
    m = analyze_geometry(path)
    assert m.avg_curvature == pytest.approx(45.0)
    assert m.max_curvature == pytest.approx(45.0)
    assert len(m.curvatures) == 3
    assert m.edge_sections is not None
    reasons = [r.reason for r in m.rejected_regions]
    assert reasons.count("path-edge") == 2


def test_analyze_geometry_straight_path() -> None:
    m = analyze_geometry(_straight(9, step=50.0))
    assert m.avg_curvature == pytest.approx(0.0)
    assert m.max_curvature == pytest.approx(0.0)
    assert m.sharp_curves == ()
    assert m.narrow_sections == ()
    for r in m.rejected_regions:
        assert 0 <= r.start_idx <= r.end_idx <= 8


def test_analyze_geometry_with_widths_finds_narrow_region() -> None:
    path = build_path_model([[i * 10.0, 0, 20 if i != 5 else 2] for i in range(11)])
    m = analyze_geometry(path, min_width=10)
    assert [(r.start_idx, r.end_idx) for r in m.narrow_sections] == [(5, 5)]


def test_analyze_geometry_under_three_points_is_empty() -> None:
    path = PathModel(
        points=((0.0, 0.0), (1.0, 0.0)),
        widths=None,
        cumulative=(0.0, 1.0),
        total_length=1.0,
        bounds=(0.0, 0.0, 1.0, 0.0),
    )
    m = analyze_geometry(path)
    assert m.curvatures == ()
    assert m.rejected_regions == []
    assert m.avg_curvature == 0.0 and m.max_curvature == 0.0
    assert calculate_curvature(path) == []
