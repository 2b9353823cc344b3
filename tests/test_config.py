"""Tests for editor configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from carousel_studio.config import EditorConfig, EditorSettings, load_editor_config
from carousel_studio.constants import MAX_SLIDES, ExportFormat, ExportQuality


class TestLoadEditorConfig:
    """Tests for load_editor_config."""

    def test_missing_file_gives_defaults(self, tmp_path: Path):
        config = load_editor_config(tmp_path / "missing.yaml", EditorSettings())

        assert config == EditorConfig()
        assert config.canvas.width == 1080
        assert config.canvas.max_slides == MAX_SLIDES

    def test_yaml_overrides(self, tmp_path: Path):
        path = tmp_path / "editor.yaml"
        path.write_text(
            "canvas:\n"
            "  default_background: '#000000'\n"
            "  thumbnail_scale: 0.3\n"
            "history:\n"
            "  max_entries: 5\n"
            "export:\n"
            "  default_format: png\n"
            "  default_quality: low\n"
            "storage:\n"
            f"  draft_path: {tmp_path / 'draft.json'}\n",
            encoding="utf-8",
        )

        config = load_editor_config(path, EditorSettings())

        assert config.canvas.default_background == "#000000"
        assert config.canvas.thumbnail_scale == 0.3
        assert config.canvas.width == 1080
        assert config.history.max_entries == 5
        assert config.export.default_format == ExportFormat.PNG
        assert config.export.default_quality == ExportQuality.LOW
        assert config.storage.get_draft_path() == tmp_path / "draft.json"

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "editor.yaml"
        path.write_text("", encoding="utf-8")

        assert load_editor_config(path, EditorSettings()) == EditorConfig()

    def test_rejects_too_many_slides(self, tmp_path: Path):
        path = tmp_path / "editor.yaml"
        path.write_text("canvas:\n  max_slides: 11\n", encoding="utf-8")

        with pytest.raises(PydanticValidationError):
            load_editor_config(path, EditorSettings())

    def test_bundled_config_loads(self):
        bundled = Path(__file__).parent.parent / "config" / "editor.yaml"

        config = load_editor_config(bundled, EditorSettings())

        assert config.canvas.max_slides == MAX_SLIDES


class TestEditorSettings:
    """Tests for environment overrides."""

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        config_file = tmp_path / "custom.yaml"
        config_file.write_text("history:\n  max_entries: 7\n", encoding="utf-8")
        monkeypatch.setenv("CAROUSEL_CONFIG_PATH", str(config_file))
        monkeypatch.setenv("CAROUSEL_FONTS_DIR", str(tmp_path / "fonts"))

        settings = EditorSettings()
        config = load_editor_config(settings=settings)

        assert settings.get_config_path() == config_file
        assert config.history.max_entries == 7
        assert config.fonts.fonts_dir == tmp_path / "fonts"

    def test_log_dir_default(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("CAROUSEL_LOG_DIR", raising=False)

        assert EditorSettings().get_log_dir().name == "logs"
