# tests/test_io.py
"""
WKT parsing and polygon validation for boundary input.
"""

from __future__ import annotations

import pytest
from shapely.geometry import MultiPolygon, Polygon

from riverlabel.core.error_codes import InvalidGeometry
from riverlabel.core.io import parse_wkt, polygon_ring, validate_geometry, wkt_to_ring


def test_parse_wkt_strips_trailing_text() -> None:
    geom = parse_wkt("POLYGON((0 0, 4 0, 4 2, 0 2, 0 0))\n2.")
    assert isinstance(geom, Polygon)
    assert geom.area == pytest.approx(8.0)


def test_parse_wkt_rejects_empty_and_garbage() -> None:
    with pytest.raises(InvalidGeometry):
        parse_wkt("")
    with pytest.raises(InvalidGeometry):
        parse_wkt("   ")
    with pytest.raises(InvalidGeometry):
        parse_wkt("POLYGON((0 0, 1")


def test_non_polygon_geometry_rejected() -> None:
    with pytest.raises(InvalidGeometry):
        wkt_to_ring("LINESTRING (0 0, 10 0, 20 5)")


def test_multipolygon_uses_largest_part() -> None:
    small = Polygon([(0, 0), (1, 0), (1, 1), (0, 1)])
    big = Polygon([(10, 0), (20, 0), (20, 5), (10, 5)])
    assert validate_geometry(MultiPolygon([small, big])).equals(big)


def test_polygon_ring_drops_closing_vertex() -> None:
    ring = wkt_to_ring("POLYGON((0 0, 4 0, 4 2, 0 2, 0 0))")
    assert len(ring) == 4
    assert ring[0] != ring[-1]
    assert polygon_ring(Polygon(ring)) == ring
