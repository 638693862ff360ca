# riverlabel/core/path_model.py
"""
Normalized river path: ordered points, optional per-point width, cumulative
arclength, total length and bounds. Built from a coordinate list or from a
polygon boundary via the centerline extractor; immutable afterwards.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np
from shapely.geometry.base import BaseGeometry

from riverlabel.core.centerline import centerline_from_polygon, extract_centerline
from riverlabel.core.config import MIN_PATH_POINTS
from riverlabel.core.error_codes import InvalidPath
from riverlabel.core.geometry import Point, points_bounds
from riverlabel.core.io import wkt_to_ring

_FIELD_NAMES = ("x", "y", "width")


@dataclass(frozen=True)
class PathModel:
    """
    River path. widths is None when no point carries a width; otherwise it is
    index-aligned with points and holds None where a point's width is unknown.
    cumulative[i] is the arclength from points[0] to points[i].
    """
    points: tuple[Point, ...]
    widths: tuple[float | None, ...] | None
    cumulative: tuple[float, ...]
    total_length: float
    bounds: tuple[float, float, float, float]

    def __len__(self) -> int:
        return len(self.points)

    @property
    def has_widths(self) -> bool:
        return self.widths is not None

    def segment_length(self, start_idx: int, end_idx: int) -> float:
        """Arclength between two point indices (0 when end_idx <= start_idx)."""
        if end_idx <= start_idx:
            return 0.0
        return self.cumulative[end_idx] - self.cumulative[start_idx]

    def coords(self) -> list[list[float]]:
        """Back to [x, y] / [x, y, width] lists; unknown widths are left off."""
        out: list[list[float]] = []
        for i, (x, y) in enumerate(self.points):
            w = self.widths[i] if self.widths is not None else None
            out.append([x, y] if w is None else [x, y, w])
        return out


def _is_sequence(obj: Any) -> bool:
    return isinstance(obj, (list, tuple, np.ndarray))


def _is_finite_number(v: Any) -> bool:
    if isinstance(v, (bool, np.bool_)) or not isinstance(v, numbers.Real):
        return False
    return math.isfinite(float(v))


def validate_coordinates(coords: Any) -> None:
    """
    Raise InvalidPath naming the offending point and rule, or return None.
    Rules: a sequence of at least MIN_PATH_POINTS entries, each [x, y] or
    [x, y, width] of finite real numbers.
    """
    if not _is_sequence(coords):
        raise InvalidPath("Coordinates must be a list of [x, y] or [x, y, width] entries")
    if len(coords) < MIN_PATH_POINTS:
        raise InvalidPath(
            f"River path must have at least {MIN_PATH_POINTS} coordinate points, got {len(coords)}"
        )
    for i, coord in enumerate(coords):
        if not _is_sequence(coord):
            raise InvalidPath(f"Coordinate at index {i} must be a sequence [x, y] or [x, y, width]")
        if len(coord) not in (2, 3):
            raise InvalidPath(
                f"Coordinate at index {i} must have 2 or 3 elements [x, y] or [x, y, width], got {len(coord)}"
            )
        for j, v in enumerate(coord):
            if not _is_finite_number(v):
                raise InvalidPath(
                    f"Coordinate at index {i}: {_FIELD_NAMES[j]} must be a finite number, got {v!r}"
                )


def build_path_model(coords: Sequence[Sequence[float]]) -> PathModel:
    """
    Validate a coordinate list and build the PathModel.
    Any point with a width makes the path width-aware; points without one are
    recorded as None (unknown), never as zero.
    """
    validate_coordinates(coords)
    points: list[Point] = []
    widths: list[float | None] = []
    has_width = False
    for coord in coords:
        points.append((float(coord[0]), float(coord[1])))
        if len(coord) == 3:
            has_width = True
            widths.append(float(coord[2]))
        else:
            widths.append(None)

    xy = np.asarray(points, dtype=np.float64)
    seg = np.hypot(np.diff(xy[:, 0]), np.diff(xy[:, 1]))
    cumulative = np.concatenate(([0.0], np.cumsum(seg)))
    return PathModel(
        points=tuple(points),
        widths=tuple(widths) if has_width else None,
        cumulative=tuple(float(c) for c in cumulative),
        total_length=float(cumulative[-1]),
        bounds=points_bounds(points),
    )


def path_from_polygon(source: BaseGeometry | Sequence[Sequence[float]]) -> PathModel:
    """
    PathModel from a polygon boundary: a Shapely polygon or an ordered vertex
    ring. The centerline must yield at least MIN_PATH_POINTS samples.
    """
    if isinstance(source, BaseGeometry):
        samples = centerline_from_polygon(source)
    else:
        samples = extract_centerline(source)
    return build_path_model(samples)


def path_from_wkt(wkt_string: str) -> PathModel:
    """PathModel from POLYGON WKT text."""
    return path_from_polygon(wkt_to_ring(wkt_string))
