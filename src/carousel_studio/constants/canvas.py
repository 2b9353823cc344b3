"""Canvas constants for the carousel editor.

Dimensions, preview scale and fonts shared by the editor, the thumbnail
strip and the export pipeline.
"""

from typing import Final

# =============================================================================
# CANVAS DIMENSIONS
# =============================================================================
# Square format used by LinkedIn document carousels

CANVAS_WIDTH: Final[int] = 1080
"""Canvas width in pixels at scale 1."""

CANVAS_HEIGHT: Final[int] = 1080
"""Canvas height in pixels at scale 1."""

THUMBNAIL_SCALE: Final[float] = 0.24
"""Scale factor used for slide strip thumbnails."""

DEFAULT_BACKGROUND: Final[str] = "#ffffff"
"""Background color of a freshly added slide."""

TRANSPARENT: Final[str] = "transparent"
"""Color literal meaning 'do not paint'."""


# =============================================================================
# TYPOGRAPHY
# =============================================================================

DEFAULT_FONT_FAMILY: Final[str] = "Inter"
"""Font family for new text elements."""

DEFAULT_FONTS: Final[tuple[str, ...]] = (
    "Inter",
    "Playfair Display",
    "Roboto",
    "Open Sans",
    "Montserrat",
    "Lato",
    "Poppins",
    "Raleway",
)
"""Fonts offered by the editor."""

DEFAULT_LINE_HEIGHT: Final[float] = 1.2
"""Line height multiplier when a text element does not set one."""

