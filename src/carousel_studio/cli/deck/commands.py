"""Deck CLI commands - thin wrappers orchestrating params, validation, display, and service."""

from __future__ import annotations

import asyncio
from typing import Optional

import typer

from ..core.console import console, print_error, print_warning
from ..core.types import Failure
from .display import (
    show_created,
    show_deck_summary,
    show_templates,
    show_thumbnails_result,
)
from .params import DeckInfoParams, NewDeckParams, ThumbnailParams
from .service import DeckService
from .validators import validate_info_params, validate_new_params, validate_thumbnail_params


def info(
    draft: str = typer.Argument(..., help="Draft file (JSON)"),
) -> None:
    """Show the slides of a draft."""
    params = DeckInfoParams.from_cli(draft=draft)

    validation = validate_info_params(params)
    if isinstance(validation, Failure):
        print_error(validation.error, validation.details)
        raise typer.Exit(1)

    result = DeckService().describe(params.draft_path)
    if isinstance(result, Failure):
        print_error(result.error, result.details)
        raise typer.Exit(1)

    show_deck_summary(console, result.value)


def new(
    draft: str = typer.Argument(..., help="Draft file to create"),
    template: Optional[str] = typer.Option(None, "--template", "-t", help="Template ID"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing draft"),
) -> None:
    """Create a draft, blank or from a template."""
    params = NewDeckParams.from_cli(draft=draft, template=template, force=force)

    validation = validate_new_params(params)
    if isinstance(validation, Failure):
        print_error(validation.error, validation.details)
        raise typer.Exit(1)

    if params.draft_path.exists():
        print_warning(f"Overwriting existing draft: {params.draft_path}")

    result = DeckService().create(params.draft_path, params.template_id)
    if isinstance(result, Failure):
        print_error(result.error, result.details)
        raise typer.Exit(1)

    show_created(console, result.value, params.template_id)


def templates() -> None:
    """List the built-in templates."""
    show_templates(console)


def thumbnails(
    draft: str = typer.Argument(..., help="Draft file (JSON)"),
    output_dir: str = typer.Argument(..., help="Directory for the PNG thumbnails"),
    scale: Optional[float] = typer.Option(None, "--scale", "-s", help="Scale factor (default: 0.24)"),
) -> None:
    """Render every slide as a PNG thumbnail."""
    params = ThumbnailParams.from_cli(draft=draft, output_dir=output_dir, scale=scale)

    validation = validate_thumbnail_params(params)
    if isinstance(validation, Failure):
        print_error(validation.error, validation.details)
        raise typer.Exit(1)

    result = asyncio.run(DeckService().thumbnails(params.draft_path, params.output_dir, params.scale))
    if isinstance(result, Failure):
        print_error(result.error, result.details)
        raise typer.Exit(1)

    show_thumbnails_result(console, result.value)
