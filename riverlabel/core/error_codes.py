# riverlabel/core/error_codes.py
"""
Errors raised while building the path, and warning keys returned by placement.
Construction errors are fatal and raised; placement warnings are returned with
the best-effort result so the caller decides what to show.
"""


class RiverLabelError(ValueError):
    """Base class for construction-time failures."""


class InvalidGeometry(RiverLabelError):
    """Polygon boundary is malformed or has fewer than 3 vertices."""


class CenterlineExtractionFailed(RiverLabelError):
    """No cross-section of the polygon produced a usable center point."""


class InvalidPath(RiverLabelError):
    """Coordinate list or start index is not usable."""


# Known warning keys (returned in PlacementOutcome.warning_code)
NO_FITTING_PLACEMENT = "no_fitting_placement"
NO_USABLE_PATH = "no_usable_path"

# User-facing messages (short, actionable)
USER_MESSAGES: dict[str, str] = {
    NO_FITTING_PLACEMENT: "Label is longer than every usable stretch of the river. Try a smaller font or shorter text.",
    NO_USABLE_PATH: "Every part of the river is too curved, too narrow or too close to an end to hold a label.",
}


def user_message(error_key: str | None, fallback: str = "Something went wrong.") -> str:
    """Return a user-facing message for the given warning key."""
    if not error_key:
        return fallback
    return USER_MESSAGES.get(error_key, fallback)
