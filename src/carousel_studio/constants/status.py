"""Status enums for the carousel editor.

- Element edit state machine
- Export formats, quality presets and run status
- Notice severity

MODIFICATION GUIDE:
------------------
- Add new enum values at the END to maintain backwards compatibility
- Use .value for the serialized string
"""

from enum import Enum


# =============================================================================
# EDIT STATE MACHINE
# =============================================================================

class EditMode(str, Enum):
    """State of the active element in the transform engine.

    Workflow:
        IDLE -> SELECTED -> DRAGGING     -> SELECTED -> IDLE
                         -> TRANSFORMING -> SELECTED
                         -> EDITING      -> SELECTED
    """

    IDLE = "idle"
    """Nothing selected."""

    SELECTED = "selected"
    """One element selected, no gesture in progress."""

    DRAGGING = "dragging"
    """Selected element is being moved."""

    TRANSFORMING = "transforming"
    """Selected element is being resized or rotated."""

    EDITING = "editing"
    """Selected text element is hidden behind an inline text input."""


# =============================================================================
# EXPORT
# =============================================================================

class ExportFormat(str, Enum):
    """Export document formats."""

    PDF = "pdf"
    PNG = "png"


class ExportQuality(str, Enum):
    """Export quality presets."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


QUALITY_PIXEL_RATIOS: dict[ExportQuality, int] = {
    ExportQuality.LOW: 1,
    ExportQuality.MEDIUM: 2,
    ExportQuality.HIGH: 3,
}
"""Pixel ratio used for each quality preset."""


class ExportStatus(str, Enum):
    """Lifecycle of an export run."""

    PENDING = "pending"
    LOADING_ASSETS = "loading_assets"
    COMPOSITING = "compositing"
    ASSEMBLING = "assembling"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


# =============================================================================
# NOTICES
# =============================================================================

class NoticeLevel(str, Enum):
    """Severity of a user-visible editor notice."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
