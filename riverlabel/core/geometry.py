# riverlabel/core/geometry.py
"""
Geometry helpers: polygon normalization, bounds, vertex rings, segment
lengths and headings shared by the centerline, analysis and placement stages.
"""

from __future__ import annotations

import math
from typing import Sequence

from shapely.geometry import MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry

Point = tuple[float, float]


def ensure_polygon(geom: BaseGeometry) -> Polygon | MultiPolygon:
    """Return geom as Polygon or MultiPolygon; fix invalid with buffer(0)."""
    if geom is None or geom.is_empty:
        return Polygon()
    if isinstance(geom, (Polygon, MultiPolygon)):
        if not geom.is_valid:
            geom = geom.buffer(0)
        return geom  # type: ignore[return-value]
    if hasattr(geom, "geoms"):
        polys = [ensure_polygon(g) for g in geom.geoms]
        polys = [p for p in polys if p is not None and not p.is_empty]
        if not polys:
            return Polygon()
        if len(polys) == 1:
            return polys[0]
        return MultiPolygon(polys)
    return Polygon()


def largest_polygon(geom: BaseGeometry) -> Polygon | None:
    """If MultiPolygon, return the part with the largest area; if Polygon, return it; else None."""
    if geom is None or geom.is_empty:
        return None
    if isinstance(geom, Polygon):
        return geom
    if isinstance(geom, MultiPolygon):
        best = None
        best_area = -1.0
        for g in geom.geoms:
            if isinstance(g, Polygon) and not g.is_empty and g.area > best_area:
                best_area = g.area
                best = g
        return best
    return None


def points_bounds(points: Sequence[Point]) -> tuple[float, float, float, float]:
    """Axis-aligned (minx, miny, maxx, maxy) over a point sequence."""
    if not points:
        return (0.0, 0.0, 0.0, 0.0)
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return (min(xs), min(ys), max(xs), max(ys))


def exterior_ring(poly: Polygon) -> list[Point]:
    """Exterior vertices without the closing duplicate."""
    coords = [(float(x), float(y)) for x, y, *_ in poly.exterior.coords]
    return open_ring(coords)


def open_ring(ring: Sequence[Sequence[float]]) -> list[Point]:
    """Drop an explicit closing vertex equal to the first one."""
    pts = [(float(p[0]), float(p[1])) for p in ring]
    if len(pts) > 1 and pts[0] == pts[-1]:
        pts = pts[:-1]
    return pts


def segment_length(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p2[0] - p1[0], p2[1] - p1[1])


def heading_rad(p1: Point, p2: Point) -> float:
    """Direction of travel from p1 to p2, atan2(dy, dx)."""
    return math.atan2(p2[1] - p1[1], p2[0] - p1[0])


def wrap_angle_rad(a: float) -> float:
    """Wrap an angle difference into [-pi, pi]."""
    while a > math.pi:
        a -= 2 * math.pi
    while a < -math.pi:
        a += 2 * math.pi
    return a
