"""Limit constants for the carousel editor.

This module contains all limits and constraints:
- Slide count bounds
- Element size minimums
- History depth
- Zoom range
- Asset loading retries and timeouts

MODIFICATION GUIDE:
------------------
- CAROUSEL_* limits: LinkedIn/Instagram document carousels cap at 10 pages
- ELEMENT_* minimums: Applied to every element at rest (after a gesture ends)
- ASSET_* settings: Adjust for slow image hosts
"""

from typing import Final

# =============================================================================
# SLIDE COLLECTION LIMITS
# =============================================================================

MAX_SLIDES: Final[int] = 10
"""Maximum slides in a carousel document."""

MIN_SLIDES: Final[int] = 1
"""Minimum slides in a carousel document. Delete is blocked at this count."""


# =============================================================================
# ELEMENT GEOMETRY LIMITS
# =============================================================================

MIN_ELEMENT_WIDTH: Final[int] = 50
"""Minimum element width in canvas pixels."""

MIN_ELEMENT_HEIGHT: Final[int] = 20
"""Minimum element height in canvas pixels."""

FULL_TURN_DEGREES: Final[float] = 360.0
"""Rotation is normalized into [0, FULL_TURN_DEGREES)."""


# =============================================================================
# EDITOR VIEW LIMITS
# =============================================================================

HISTORY_MAX_ENTRIES: Final[int] = 50
"""Maximum undo snapshots kept per session."""

ZOOM_MIN: Final[float] = 0.25
"""Smallest editor zoom factor."""

ZOOM_MAX: Final[float] = 2.0
"""Largest editor zoom factor."""


# =============================================================================
# ASSET LOADING
# =============================================================================

ASSET_TIMEOUT_SECONDS: Final[float] = 30.0
"""Timeout for fetching a remote image asset."""

ASSET_MAX_RETRIES: Final[int] = 3
"""Attempts for fetching a remote image asset before giving up."""
