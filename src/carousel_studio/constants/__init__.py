"""Global constants package for the carousel editor.

PACKAGE STRUCTURE:
-----------------
- limits.py : Slide count bounds, element minimums, history and zoom limits
- canvas.py : Canvas size, thumbnail scale and fonts
- paths.py  : Config, logs and draft locations
- status.py : Edit state machine, export enums, notice levels
- types.py  : Type aliases

USAGE EXAMPLES:
--------------
    from carousel_studio.constants import MAX_SLIDES, CANVAS_WIDTH
    from carousel_studio.constants import EditMode, ExportFormat
"""

from .canvas import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    DEFAULT_BACKGROUND,
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONTS,
    DEFAULT_LINE_HEIGHT,
    THUMBNAIL_SCALE,
    TRANSPARENT,
)
from .limits import (
    ASSET_MAX_RETRIES,
    ASSET_TIMEOUT_SECONDS,
    FULL_TURN_DEGREES,
    HISTORY_MAX_ENTRIES,
    MAX_SLIDES,
    MIN_ELEMENT_HEIGHT,
    MIN_ELEMENT_WIDTH,
    MIN_SLIDES,
    ZOOM_MAX,
    ZOOM_MIN,
)
from .paths import (
    EXPORT_FILE_PREFIX,
    PROJECT_ROOT,
    THUMBNAIL_PATTERN,
    get_config_path,
    get_draft_path,
    get_logs_dir,
)
from .status import (
    QUALITY_PIXEL_RATIOS,
    EditMode,
    ExportFormat,
    ExportQuality,
    ExportStatus,
    NoticeLevel,
)
from .types import (
    JSON,
    ElementPatch,
)

__all__ = [
    # Canvas
    "CANVAS_WIDTH",
    "CANVAS_HEIGHT",
    "THUMBNAIL_SCALE",
    "DEFAULT_BACKGROUND",
    "TRANSPARENT",
    "DEFAULT_FONT_FAMILY",
    "DEFAULT_FONTS",
    "DEFAULT_LINE_HEIGHT",
    # Limits
    "MAX_SLIDES",
    "MIN_SLIDES",
    "MIN_ELEMENT_WIDTH",
    "MIN_ELEMENT_HEIGHT",
    "FULL_TURN_DEGREES",
    "HISTORY_MAX_ENTRIES",
    "ZOOM_MIN",
    "ZOOM_MAX",
    "ASSET_TIMEOUT_SECONDS",
    "ASSET_MAX_RETRIES",
    # Paths
    "PROJECT_ROOT",
    "EXPORT_FILE_PREFIX",
    "THUMBNAIL_PATTERN",
    "get_config_path",
    "get_draft_path",
    "get_logs_dir",
    # Status
    "EditMode",
    "ExportFormat",
    "ExportQuality",
    "ExportStatus",
    "NoticeLevel",
    "QUALITY_PIXEL_RATIOS",
    # Types
    "JSON",
    "ElementPatch",
]
