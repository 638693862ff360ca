# riverlabel/core/io.py
"""
Parse river polygon WKT text into a validated Shapely polygon and its vertex ring.
Supports Polygon, MultiPolygon, GeometryCollection (largest polygon used).
Invalid geometry is fixed with buffer(0) when possible.
"""

from __future__ import annotations

from shapely import wkt
from shapely.errors import ShapelyError
from shapely.geometry import (
    GeometryCollection,
    MultiPolygon,
    Polygon,
)
from shapely.geometry.base import BaseGeometry

from riverlabel.core.error_codes import InvalidGeometry
from riverlabel.core.geometry import Point, exterior_ring


def _first_wkt_only(wkt_string: str) -> str:
    """
    Return the first complete WKT geometry, stripping trailing text (e.g. "2." or extra lines).
    Handles GEOSException "Unexpected text after end of geometry".
    """
    s = wkt_string.strip()
    for prefix in ("MULTIPOLYGON", "POLYGON", "GEOMETRYCOLLECTION"):
        if s.upper().startswith(prefix):
            i = len(prefix)
            depth = 0
            end = -1
            while i < len(s):
                c = s[i]
                if c == "(":
                    depth += 1
                elif c == ")":
                    depth -= 1
                    if depth == 0:
                        end = i + 1
                        break
                i += 1
            if end > 0:
                return s[:end].strip()
            break
    return s


def parse_wkt(wkt_string: str) -> BaseGeometry:
    """
    Parse WKT string into a Shapely geometry.
    Only the first geometry is parsed when trailing text follows it.
    Raises InvalidGeometry on empty or unparseable text.
    """
    if not isinstance(wkt_string, str) or not wkt_string.strip():
        raise InvalidGeometry("WKT text is empty")
    single = _first_wkt_only(wkt_string)
    try:
        return wkt.loads(single)
    except (ShapelyError, ValueError) as exc:
        raise InvalidGeometry(f"WKT parsing failed: {exc}") from exc


def _extract_polygons(geom: BaseGeometry) -> list[Polygon]:
    """Extract one or more Polygon(s) from any supported geometry type."""
    if geom.is_empty:
        return []
    if isinstance(geom, Polygon):
        return [geom]
    if isinstance(geom, MultiPolygon):
        return list(geom.geoms)
    if isinstance(geom, GeometryCollection):
        out: list[Polygon] = []
        for g in geom.geoms:
            out.extend(_extract_polygons(g))
        return out
    return []


def validate_geometry(geom: BaseGeometry) -> Polygon:
    """
    Validate and fix geometry; return the largest polygon part.
    Raises InvalidGeometry when nothing polygonal survives.
    """
    if geom is None or geom.is_empty:
        raise InvalidGeometry("Geometry is empty or None")
    polygons = _extract_polygons(geom)
    if not polygons:
        raise InvalidGeometry(f"No polygon(s) found in geometry of type {geom.geom_type}")
    fixed: list[Polygon] = []
    for p in polygons:
        fixed.extend(_extract_polygons(p.buffer(0)) if not p.is_valid else [p])
    fixed = [p for p in fixed if not p.is_empty]
    best = max(fixed, key=lambda p: p.area) if fixed else None
    if best is None:
        raise InvalidGeometry("Geometry became empty after validation/fix")
    return best


def polygon_ring(geom: BaseGeometry) -> list[Point]:
    """Vertex ring of the largest polygon in geom (no closing duplicate)."""
    poly = validate_geometry(geom)
    ring = exterior_ring(poly)
    if len(ring) < 3:
        raise InvalidGeometry(f"Polygon must have at least 3 vertices, got {len(ring)}")
    return ring


def wkt_to_ring(wkt_string: str) -> list[Point]:
    """Parse WKT text and return the vertex ring of its largest polygon."""
    return polygon_ring(parse_wkt(wkt_string))
