"""Display functions for the export command - pure functions for Rich output."""

from __future__ import annotations


from rich.console import Console
from rich.panel import Panel

from carousel_studio.constants import ExportStatus
from carousel_studio.services import ExportProgress

from ..core.types import ExportResult
from .params import ExportParams


def show_export_config(console: Console, params: ExportParams) -> None:
    """Display export configuration panel."""
    console.print(Panel(
        f"Exporting [cyan]{params.draft_path}[/cyan]\n"
        f"Format: [yellow]{params.format or 'default'}[/yellow]\n"
        f"Quality: [yellow]{params.quality or 'default'}[/yellow]\n"
        f"Output: [green]{params.output or 'current directory'}[/green]",
        title="Carousel Export",
    ))


def show_export_progress(console: Console, progress: ExportProgress) -> None:
    """Display one progress update."""
    if progress.status == ExportStatus.COMPOSITING and progress.current_slide is not None:
        console.print(
            f"  [dim][{progress.progress:>4.0%}][/dim] {progress.message}"
        )
    elif progress.status in (ExportStatus.LOADING_ASSETS, ExportStatus.ASSEMBLING):
        console.print(f"  [cyan]{progress.message}...[/cyan]")


def show_export_result(console: Console, result: ExportResult) -> None:
    """Display successful export result."""
    files = "\n".join(f"  {path}" for path in result.paths[:5])
    if len(result.paths) > 5:
        files += f"\n  ... and {len(result.paths) - 5} more"
    duration = f"{result.duration_seconds:.1f}s" if result.duration_seconds is not None else "-"

    console.print(Panel(
        f"[bold green]Carousel exported successfully![/bold green]\n\n"
        f"[bold]Format:[/] {result.format.upper()}\n"
        f"[bold]Pages:[/] {result.page_count}\n"
        f"[bold]Time:[/] {duration}\n"
        f"[bold]Files:[/]\n{files}",
        title="Complete",
        border_style="green",
    ))
