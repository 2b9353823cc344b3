"""Path-related constants for the carousel editor.

- Project root detection
- Config, logs and draft locations
- Export file naming
"""

from pathlib import Path
from typing import Final

# =============================================================================
# PROJECT ROOT DETECTION
# =============================================================================

def get_project_root() -> Path:
    """Get the project root directory.

    Walks up from this file to find the directory containing 'pyproject.toml'.
    Falls back to current working directory if not found.

    Returns:
        Path to project root directory.
    """
    current = Path(__file__).resolve().parent

    for _ in range(10):  # Max 10 levels up
        if (current / "pyproject.toml").exists():
            return current
        parent = current.parent
        if parent == current:  # Reached filesystem root
            break
        current = parent

    return Path.cwd()


# =============================================================================
# MAIN DIRECTORIES
# =============================================================================

PROJECT_ROOT: Path = get_project_root()
"""Project root directory. Auto-detected from file location."""

CONFIG_DIR_NAME: Final[str] = "config"
"""Name of the configuration directory."""

LOGS_DIR_NAME: Final[str] = "logs"
"""Name of the logs directory."""

DRAFTS_DIR_NAME: Final[str] = "drafts"
"""Name of the directory holding autosaved drafts."""


# =============================================================================
# FILE NAMES
# =============================================================================

EDITOR_CONFIG_FILENAME: Final[str] = "editor.yaml"
"""Editor configuration file inside the config directory."""

LOG_FILENAME: Final[str] = "carousel.log"
"""Log file written by the CLI."""

DRAFT_FILENAME: Final[str] = "carousel-draft.json"
"""Default autosave draft file name."""

EXPORT_FILE_PREFIX: Final[str] = "carousel"
"""Prefix of generated export file names."""

THUMBNAIL_PATTERN: Final[str] = "slide_{number:02d}.png"
"""File name pattern for exported thumbnails and PNG pages (1-based number)."""


def get_config_path() -> Path:
    """Default editor config path."""
    return PROJECT_ROOT / CONFIG_DIR_NAME / EDITOR_CONFIG_FILENAME


def get_logs_dir() -> Path:
    """Default log directory."""
    return PROJECT_ROOT / LOGS_DIR_NAME


def get_draft_path() -> Path:
    """Default autosave draft path."""
    return PROJECT_ROOT / DRAFTS_DIR_NAME / DRAFT_FILENAME
