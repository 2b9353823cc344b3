"""Tests for the carousel CLI commands.

Runs the Typer app in-process against drafts written to tmp_path.
"""

from __future__ import annotations

import json
from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image
from typer.testing import CliRunner

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from carousel_studio.cli import app
from carousel_studio.cli.core.types import Failure, Success
from carousel_studio.cli.deck.params import NewDeckParams, ThumbnailParams
from carousel_studio.cli.deck.validators import validate_new_params, validate_thumbnail_params
from carousel_studio.cli.export.params import ExportParams
from carousel_studio.cli.export.validators import validate_export_params
from carousel_studio.elements import create_image_element
from carousel_studio.services import Draft, DraftStore
from carousel_studio.slides import Slide


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def template_draft(tmp_path: Path, runner: CliRunner) -> Path:
    """Draft created from the minimal-dark template through the CLI."""
    path = tmp_path / "deck.json"
    result = runner.invoke(app, ["new", str(path), "--template", "minimal-dark"])
    assert result.exit_code == 0, result.output
    return path


class TestParamsAndValidators:
    """Tests for CLI params and validators."""

    def test_export_params_normalize_case(self):
        params = ExportParams.from_cli(draft="d.json", format="PDF", quality="Low", output=None)

        assert params.format == "pdf"
        assert params.quality == "low"
        assert params.output is None

    def test_export_rejects_unknown_format(self, tmp_path: Path):
        draft = tmp_path / "d.json"
        draft.write_text("[]")

        result = validate_export_params(ExportParams.from_cli(draft=str(draft), format="gif"))

        assert isinstance(result, Failure)
        assert "gif" in result.error

    def test_export_png_needs_directory(self, tmp_path: Path):
        draft = tmp_path / "d.json"
        draft.write_text("[]")

        result = validate_export_params(
            ExportParams.from_cli(draft=str(draft), format="png", output=str(draft))
        )

        assert isinstance(result, Failure)

    def test_new_requires_force_to_overwrite(self, tmp_path: Path):
        draft = tmp_path / "d.json"
        draft.write_text("[]")

        refused = validate_new_params(NewDeckParams.from_cli(draft=str(draft)))
        allowed = validate_new_params(NewDeckParams.from_cli(draft=str(draft), force=True))

        assert isinstance(refused, Failure)
        assert isinstance(allowed, Success)

    def test_thumbnail_scale_default_and_bounds(self, tmp_path: Path):
        draft = tmp_path / "d.json"
        draft.write_text("[]")

        params = ThumbnailParams.from_cli(draft=str(draft), output_dir=str(tmp_path / "thumbs"))
        assert params.scale == 0.24
        assert isinstance(validate_thumbnail_params(params), Success)

        too_big = ThumbnailParams.from_cli(draft=str(draft), output_dir=str(tmp_path), scale=9)
        assert isinstance(validate_thumbnail_params(too_big), Failure)


class TestDeckCommands:
    """Tests for new, info, templates and thumbnails."""

    def test_new_from_template(self, template_draft: Path):
        data = json.loads(template_draft.read_text(encoding="utf-8"))

        assert len(data["slides"]) == 3
        assert data["templateId"] == "minimal-dark"

    def test_new_blank(self, tmp_path: Path, runner: CliRunner):
        path = tmp_path / "blank.json"

        result = runner.invoke(app, ["new", str(path)])

        assert result.exit_code == 0
        assert len(json.loads(path.read_text(encoding="utf-8"))["slides"]) == 1

    def test_new_refuses_existing(self, template_draft: Path, runner: CliRunner):
        result = runner.invoke(app, ["new", str(template_draft)])

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_new_force_overwrites_with_warning(self, template_draft: Path, runner: CliRunner):
        result = runner.invoke(app, ["new", str(template_draft), "--force"])

        assert result.exit_code == 0
        assert "Overwriting existing draft" in result.output
        assert len(json.loads(template_draft.read_text(encoding="utf-8"))["slides"]) == 1

    def test_new_unknown_template(self, tmp_path: Path, runner: CliRunner):
        result = runner.invoke(app, ["new", str(tmp_path / "x.json"), "-t", "nope"])

        assert result.exit_code == 1
        assert not (tmp_path / "x.json").exists()

    def test_info(self, template_draft: Path, runner: CliRunner):
        result = runner.invoke(app, ["info", str(template_draft)])

        assert result.exit_code == 0
        assert "3 slide(s)" in result.output

    def test_info_missing_draft(self, tmp_path: Path, runner: CliRunner):
        result = runner.invoke(app, ["info", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "Draft not found" in result.output

    def test_info_corrupt_draft(self, tmp_path: Path, runner: CliRunner):
        path = tmp_path / "bad.json"
        path.write_text("{oops", encoding="utf-8")

        result = runner.invoke(app, ["info", str(path)])

        assert result.exit_code == 1

    def test_templates(self, runner: CliRunner):
        result = runner.invoke(app, ["templates"])

        assert result.exit_code == 0
        assert "minimal-dark" in result.output

    def test_thumbnails(self, template_draft: Path, tmp_path: Path, runner: CliRunner):
        out = tmp_path / "thumbs"

        result = runner.invoke(app, ["thumbnails", str(template_draft), str(out), "--scale", "0.1"])

        assert result.exit_code == 0, result.output
        files = sorted(p.name for p in out.iterdir())
        assert files == ["slide_01.png", "slide_02.png", "slide_03.png"]
        assert Image.open(out / "slide_01.png").size == (108, 108)


class TestExportCommand:
    """Tests for the export command."""

    def test_export_pdf(self, template_draft: Path, tmp_path: Path, runner: CliRunner):
        output = tmp_path / "out" / "deck.pdf"

        result = runner.invoke(
            app, ["export", str(template_draft), "-f", "pdf", "-q", "low", "-o", str(output)]
        )

        assert result.exit_code == 0, result.output
        assert output.read_bytes().startswith(b"%PDF")

    def test_export_png_pages(self, template_draft: Path, tmp_path: Path, runner: CliRunner):
        output = tmp_path / "pages"

        result = runner.invoke(
            app, ["export", str(template_draft), "--format", "png", "--quality", "low", "--output", str(output)]
        )

        assert result.exit_code == 0, result.output
        pages = sorted(output.iterdir())
        assert len(pages) == 3
        assert Image.open(BytesIO(pages[0].read_bytes())).size == (1080, 1080)

    def test_export_invalid_quality(self, template_draft: Path, runner: CliRunner):
        result = runner.invoke(app, ["export", str(template_draft), "-q", "ultra"])

        assert result.exit_code == 1
        assert "Invalid quality" in result.output

    def test_export_broken_image_names_slide(self, tmp_path: Path, runner: CliRunner):
        draft = tmp_path / "broken.json"
        slides = [
            Slide(),
            Slide(elements=[create_image_element(str(tmp_path / "missing.png"), 100, 100)]),
        ]
        DraftStore(draft).save(Draft(slides=slides))

        result = runner.invoke(
            app, ["export", str(draft), "-q", "low", "-o", str(tmp_path / "out.pdf")]
        )

        assert result.exit_code == 1
        assert "could not be loaded" in result.output
        assert not (tmp_path / "out.pdf").exists()
