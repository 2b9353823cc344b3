"""Display functions for deck commands - pure functions for Rich output."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from carousel_studio.slides import list_templates

from ..core.types import DeckSummary, ExportResult


def show_deck_summary(console: Console, summary: DeckSummary) -> None:
    """Display a table of the draft's slides."""
    table = Table(title=f"Carousel: {summary.path.name}")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Slide ID", style="dim")
    table.add_column("Background")
    table.add_column("Text", justify="right")
    table.add_column("Shapes", justify="right")
    table.add_column("Images", justify="right")
    table.add_column("Total", justify="right", style="bold")

    for row in summary.slides:
        marker = " *" if row.number - 1 == summary.current_index else ""
        background = row.background + (" + image" if row.has_background_image else "")
        table.add_row(
            f"{row.number}{marker}",
            row.slide_id,
            background,
            str(row.element_counts.get("text", 0)),
            str(row.element_counts.get("shape", 0)),
            str(row.element_counts.get("image", 0)),
            str(row.total_elements),
        )

    console.print(table)
    template = f" | Template: [yellow]{summary.template_id}[/yellow]" if summary.template_id else ""
    console.print(f"[dim]{len(summary.slides)} slide(s){template}[/dim]")


def show_created(console: Console, path, template_id: Optional[str]) -> None:
    console.print(Panel(
        f"[bold green]Draft created[/bold green]\n\n"
        f"[bold]Path:[/] {path}\n"
        f"[bold]Template:[/] {template_id or 'blank'}",
        title="New Carousel",
        border_style="green",
    ))


def show_templates(console: Console) -> None:
    """Display the built-in templates."""
    table = Table(title="Templates")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Category", style="yellow")
    table.add_column("Slides", justify="right")
    for template in list_templates():
        table.add_row(
            template.id,
            template.name,
            template.category.value,
            str(len(template.default_slides)),
        )
    console.print(table)


def show_thumbnails_result(console: Console, result: ExportResult) -> None:
    duration = f"{result.duration_seconds:.1f}s" if result.duration_seconds is not None else "-"
    console.print(Panel(
        f"[bold green]Thumbnails rendered[/bold green]\n\n"
        f"[bold]Slides:[/] {result.page_count}\n"
        f"[bold]Output:[/] {result.paths[0].parent if result.paths else '-'}\n"
        f"[bold]Time:[/] {duration}",
        title="Complete",
        border_style="green",
    ))
