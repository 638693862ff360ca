# riverlabel/core/config.py
"""
Central configuration for curved river label placement.
All tunable values live here; no magic numbers in other modules.
Units: 1 pt = 1 geometry unit.
"""

from __future__ import annotations
import os

# ----- Centerline extraction -----
MAX_CENTERLINE_SAMPLES: int = 100
"""Upper bound on cross-section samples along the dominant axis."""

CENTERLINE_SMOOTHING_WINDOW: int = 3
"""Centered moving-average window for centerline (x, y, width) samples."""

# ----- Path model -----
MIN_PATH_POINTS: int = 3
"""Fewest points a path may have."""

# ----- Geometry analysis -----
SHARP_CURVE_THRESHOLD_DEG: float = 30.0
"""Smoothed curvature (degrees per unit distance) above which a point is a sharp curve."""

MIN_WIDTH_PT: float = 10.0
"""Widths below this mark a narrow section."""

EDGE_FRACTION: float = 0.1
"""Fraction of total length excluded at each end of the path."""

# ----- Scoring weights -----
SCORE_WEIGHT_CURVATURE: float = 0.4
SCORE_WEIGHT_WIDTH: float = 0.2
SCORE_WEIGHT_POSITION: float = 0.2
SCORE_WEIGHT_STRAIGHTNESS: float = 0.2

# ----- Scoring constants -----
CURVATURE_PENALTY_PER_DEG: float = 3.0
"""Curvature score = 100 - penalty * mean curvature."""

STRAIGHTNESS_PENALTY_PER_DEG: float = 5.0
"""Straightness score = 100 - penalty * heading spread (deg)."""

IDEAL_WIDTH_PT: float = 20.0
"""Fixed reference width; mean width at or above it scores 100."""

NEUTRAL_WIDTH_SCORE: float = 50.0
"""Width score when the path carries no width data."""

MAX_SCORE: float = 100.0

# ----- Fonts -----
DEFAULT_FONT_FAMILY: str = "DejaVu Sans"
DEFAULT_FONT_SIZE_PT: float = 16.0

FALLBACK_CHAR_WIDTH_RATIO: float = 0.6
"""Approximate advance width as ratio * font size when no rasterizer is used."""

# ----- Output -----
SCHEMA_VERSION: str = "1.0"

# ----- Logging -----
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
"""Log level for the CLI. Set env LOG_LEVEL=DEBUG for stage details."""
