# riverlabel/core/text_metrics.py
"""
Glyph advance widths in pt. 1 pt = 1 geometry unit.
Two interchangeable advance_width(char, font_size_pt, font_family) functions:
Pillow font metrics, and a fixed ratio of the font size.
"""

from __future__ import annotations

import warnings
from functools import lru_cache

from riverlabel.core.config import DEFAULT_FONT_FAMILY, FALLBACK_CHAR_WIDTH_RATIO
from riverlabel.core.types import AdvanceWidthFn

_font_warning_emitted: set[str] = set()


@lru_cache(maxsize=32)
def _load_font(font_family: str, font_size_pt: float):
    """Load PIL ImageFont; fallback with warning if font not found."""
    from PIL import ImageFont

    size = max(1, int(round(font_size_pt)))
    candidates = [
        font_family + ".ttf",
        font_family.replace(" ", "") + ".ttf",
        "DejaVuSans.ttf",
        "arial.ttf",
        "Arial.ttf",
    ]
    for name in candidates:
        try:
            return ImageFont.truetype(name, size=size)
        except (OSError, IOError):
            continue
    if font_family not in _font_warning_emitted:
        _font_warning_emitted.add(font_family)
        warnings.warn(f"Font not found: {font_family!r}; using default.", UserWarning)
    return ImageFont.load_default()


def pillow_advance_width(char: str, font_size_pt: float, font_family: str = DEFAULT_FONT_FAMILY) -> float:
    """Advance width of one character from Pillow font metrics, scaled to font_size_pt."""
    font = _load_font(font_family, float(font_size_pt))
    w = float(font.getlength(char))
    size_used = getattr(font, "size", font_size_pt)
    scale = font_size_pt / max(1.0, float(size_used))
    return w * scale


def fixed_ratio_advance_width(char: str, font_size_pt: float, font_family: str = DEFAULT_FONT_FAMILY) -> float:
    """Approximate advance: FALLBACK_CHAR_WIDTH_RATIO * font size for every character."""
    return font_size_pt * FALLBACK_CHAR_WIDTH_RATIO


def char_advances(
    text: str,
    font_size_pt: float,
    font_family: str = DEFAULT_FONT_FAMILY,
    advance_width: AdvanceWidthFn = pillow_advance_width,
) -> list[float]:
    """Advance per character; raises ValueError for a negative advance."""
    out: list[float] = []
    for ch in text:
        w = float(advance_width(ch, font_size_pt, font_family))
        if w < 0:
            raise ValueError(f"Advance width for {ch!r} is negative: {w}")
        out.append(w)
    return out


def measure_text_length_pt(
    text: str,
    font_size_pt: float,
    font_family: str = DEFAULT_FONT_FAMILY,
    advance_width: AdvanceWidthFn = pillow_advance_width,
) -> float:
    """Label length along the path: sum of per-character advances (0 for empty text)."""
    if not text:
        return 0.0
    return float(sum(char_advances(text, font_size_pt, font_family, advance_width)))
