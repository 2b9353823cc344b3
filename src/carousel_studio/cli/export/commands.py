"""Export CLI command - thin wrapper orchestrating params, validation, display, and service."""

from __future__ import annotations

import asyncio
from typing import Optional

import typer

from carousel_studio.services import ExportProgress

from ..core.console import console, print_error
from ..core.types import Failure
from .display import show_export_config, show_export_progress, show_export_result
from .params import ExportParams
from .service import ExportService
from .validators import validate_export_params


def export(
    draft: str = typer.Argument(..., help="Draft file (JSON)"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="pdf or png"),
    quality: Optional[str] = typer.Option(None, "--quality", "-q", help="low, medium or high"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output file (pdf) or directory"),
) -> None:
    """Export a draft as a PDF document or one PNG per slide."""
    params = ExportParams.from_cli(draft=draft, format=format, quality=quality, output=output)

    validation = validate_export_params(params)
    if isinstance(validation, Failure):
        print_error(validation.error, validation.details)
        raise typer.Exit(1)

    show_export_config(console, params)

    async def on_progress(progress: ExportProgress) -> None:
        show_export_progress(console, progress)

    result = asyncio.run(
        ExportService().export(
            params.draft_path,
            format=params.format,
            quality=params.quality,
            output=params.output,
            progress=on_progress,
        )
    )
    if isinstance(result, Failure):
        print_error(result.error, result.details)
        raise typer.Exit(1)

    show_export_result(console, result.value)
