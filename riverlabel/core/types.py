# riverlabel/core/types.py
"""
Dataclasses for label spec, analysis output, placement candidates and glyphs.
All are immutable once built; a new label or river produces new instances.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal


RegionReason = Literal["sharp-curve", "narrow-section", "path-edge"]

AdvanceWidthFn = Callable[[str, float, str], float]
"""advance_width(char, font_size_pt, font_family) -> advance in pt."""


@dataclass(frozen=True)
class LabelSpec:
    """Label text and typography."""
    text: str
    font_family: str
    font_size_pt: float


@dataclass(frozen=True)
class RejectedRegion:
    """Inclusive index range of path points excluded from placement."""
    start_idx: int
    end_idx: int
    length: float
    reason: RegionReason

    def indices(self) -> range:
        return range(self.start_idx, self.end_idx + 1)


@dataclass(frozen=True)
class ComponentScores:
    """Per-factor window scores, each in [0, 100]."""
    curvature: float
    width: float
    position: float
    straightness: float


@dataclass(frozen=True)
class PlacementCandidate:
    """A scored window [start_idx, end_idx] on the path."""
    start_idx: int
    end_idx: int
    window_length: float
    score: float
    scores: ComponentScores
    center_pt: tuple[float, float]


@dataclass(frozen=True)
class GlyphPlacement:
    """One character anchored on the path, centered on its slot."""
    char: str
    x: float
    y: float
    angle_rad: float
    advance_pt: float


@dataclass(frozen=True)
class GeometryMetrics:
    """
    Curvature profile, rejected regions and aggregate curvature metrics.
    edge_sections is (start, end) or None for paths under 3 points.
    """
    curvatures: tuple[float, ...]
    sharp_curves: tuple[RejectedRegion, ...]
    narrow_sections: tuple[RejectedRegion, ...]
    edge_sections: tuple[RejectedRegion, RejectedRegion] | None
    avg_curvature: float
    max_curvature: float

    @property
    def rejected_regions(self) -> list[RejectedRegion]:
        """Every rejected region: sharp curves, narrow sections, then both edges."""
        out = list(self.sharp_curves) + list(self.narrow_sections)
        if self.edge_sections is not None:
            out.extend(self.edge_sections)
        return out


@dataclass(frozen=True)
class PlacementOutcome:
    """
    Scorer output: the selected window (or None), an optional warning, and
    every candidate considered so the caller can show them.
    """
    placement: PlacementCandidate | None
    candidates: tuple[PlacementCandidate, ...]
    text_length_pt: float
    warning: str | None = None
    warning_code: str | None = None

    @property
    def fits(self) -> bool:
        """True when the selection holds the whole label."""
        return self.placement is not None and self.warning_code is None
