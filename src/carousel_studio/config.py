"""Editor configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    ASSET_MAX_RETRIES,
    ASSET_TIMEOUT_SECONDS,
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    DEFAULT_BACKGROUND,
    EXPORT_FILE_PREFIX,
    HISTORY_MAX_ENTRIES,
    MAX_SLIDES,
    THUMBNAIL_SCALE,
    ExportFormat,
    ExportQuality,
    get_config_path,
    get_draft_path,
    get_logs_dir,
)

# Load .env file
load_dotenv()


class CanvasSettings(BaseModel):
    """Canvas geometry."""

    width: int = Field(default=CANVAS_WIDTH, gt=0)
    height: int = Field(default=CANVAS_HEIGHT, gt=0)
    thumbnail_scale: float = Field(default=THUMBNAIL_SCALE, gt=0)
    default_background: str = DEFAULT_BACKGROUND
    max_slides: int = Field(default=MAX_SLIDES, ge=1, le=MAX_SLIDES)


class HistorySettings(BaseModel):
    """Undo history settings."""

    max_entries: int = Field(default=HISTORY_MAX_ENTRIES, ge=1)


class ExportSettings(BaseModel):
    """Export defaults and asset loading."""

    default_format: ExportFormat = ExportFormat.PDF
    default_quality: ExportQuality = ExportQuality.HIGH
    asset_timeout_seconds: float = Field(default=ASSET_TIMEOUT_SECONDS, gt=0)
    asset_max_retries: int = Field(default=ASSET_MAX_RETRIES, ge=1)
    file_prefix: str = EXPORT_FILE_PREFIX


class StorageSettings(BaseModel):
    """Draft autosave location."""

    draft_path: Path | None = None

    def get_draft_path(self) -> Path:
        return self.draft_path or get_draft_path()


class FontSettings(BaseModel):
    """Where the compositor looks for font files."""

    fonts_dir: Path | None = None


class EditorConfig(BaseModel):
    """Full editor configuration."""

    canvas: CanvasSettings = Field(default_factory=CanvasSettings)
    history: HistorySettings = Field(default_factory=HistorySettings)
    export: ExportSettings = Field(default_factory=ExportSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    fonts: FontSettings = Field(default_factory=FontSettings)


class EditorSettings(BaseSettings):
    """Environment overrides (CAROUSEL_CONFIG_PATH, CAROUSEL_LOG_DIR, ...)."""

    model_config = SettingsConfigDict(env_prefix="CAROUSEL_", env_file=".env", extra="ignore")

    config_path: Path | None = None
    log_dir: Path | None = None
    fonts_dir: Path | None = None

    def get_config_path(self) -> Path:
        return self.config_path or get_config_path()

    def get_log_dir(self) -> Path:
        return self.log_dir or get_logs_dir()


def load_editor_config(
    config_path: Path | None = None,
    settings: EditorSettings | None = None,
) -> EditorConfig:
    """Load editor configuration from YAML file.

    Args:
        config_path: Explicit config file. Defaults to the path from the
            environment, then config/editor.yaml under the project root.
        settings: Environment settings. Read from the environment if omitted.

    Returns:
        EditorConfig, with defaults for anything the file leaves out.
    """
    settings = settings or EditorSettings()
    if config_path is None:
        config_path = settings.get_config_path()

    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        config = EditorConfig(**data)
    else:
        # Return default config if file doesn't exist
        config = EditorConfig()

    if settings.fonts_dir is not None:
        config.fonts.fonts_dir = settings.fonts_dir
    return config
