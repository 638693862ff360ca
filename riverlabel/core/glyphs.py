# riverlabel/core/glyphs.py
"""
Per-character placement along the path: each glyph is centered on its slot by
arclength from the window start and rotated to the local segment direction.
Labels longer than the remaining path clamp to the last point.
"""

from __future__ import annotations

from riverlabel.core.config import DEFAULT_FONT_FAMILY
from riverlabel.core.error_codes import InvalidPath
from riverlabel.core.geometry import heading_rad
from riverlabel.core.path_model import PathModel
from riverlabel.core.text_metrics import char_advances, pillow_advance_width
from riverlabel.core.types import AdvanceWidthFn, GlyphPlacement


def _check_start(path: PathModel, start_idx: int) -> None:
    if path is None or not path.points:
        raise InvalidPath("Invalid path: path must have points")
    if not 0 <= start_idx < len(path.points):
        raise InvalidPath(f"Invalid start index: {start_idx} (path has {len(path.points)} points)")


def _end_heading(path: PathModel, idx: int) -> float:
    """Direction at point idx: outgoing segment if any, else incoming, else 0."""
    pts = path.points
    if idx < len(pts) - 1:
        return heading_rad(pts[idx], pts[idx + 1])
    if idx > 0:
        return heading_rad(pts[idx - 1], pts[idx])
    return 0.0


def interpolate_position(path: PathModel, start_idx: int, distance: float) -> tuple[float, float, float]:
    """
    (x, y, angle_rad) at `distance` along the path from points[start_idx].
    Walks segments forward and interpolates inside the one holding the target;
    past the end, returns the last point with the last segment's direction.
    """
    _check_start(path, start_idx)
    pts = path.points
    if distance <= 0:
        x, y = pts[start_idx]
        return (x, y, _end_heading(path, start_idx))

    remaining = distance
    idx = start_idx
    while idx < len(pts) - 1:
        p1, p2 = pts[idx], pts[idx + 1]
        seg = path.segment_length(idx, idx + 1)
        if remaining <= seg and seg > 0:
            t = remaining / seg
            return (
                p1[0] + (p2[0] - p1[0]) * t,
                p1[1] + (p2[1] - p1[1]) * t,
                heading_rad(p1, p2),
            )
        remaining -= seg
        idx += 1

    last = len(pts) - 1
    x, y = pts[last]
    return (x, y, _end_heading(path, last))


def place_glyphs(
    text: str,
    path: PathModel,
    start_idx: int,
    font_size_pt: float,
    font_family: str = DEFAULT_FONT_FAMILY,
    advance_width: AdvanceWidthFn = pillow_advance_width,
) -> list[GlyphPlacement]:
    """One GlyphPlacement per character, in reading order along the path."""
    if not text:
        return []
    _check_start(path, start_idx)
    placements: list[GlyphPlacement] = []
    current = 0.0
    for ch, w in zip(text, char_advances(text, font_size_pt, font_family, advance_width)):
        x, y, angle = interpolate_position(path, start_idx, current + w / 2.0)
        placements.append(GlyphPlacement(char=ch, x=x, y=y, angle_rad=angle, advance_pt=w))
        current += w
    return placements
