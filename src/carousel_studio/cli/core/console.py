"""Rich console singleton for CLI output."""

import sys

from rich.console import Console

# Windows cp1252 encoding doesn't support Unicode box drawing characters
_safe_box = sys.platform == "win32"

# Global console instance - used across all CLI modules
console = Console(safe_box=_safe_box)


def print_error(message: str, details: dict | None = None) -> None:
    """Print a command error, preceded by a blank line.

    Args:
        message: Error message, e.g. a failed validation or export
        details: Optional details dict (hint, reason, slide, element...)
    """
    console.print(f"\n[red]Error: {message}[/red]")
    if details:
        for key, value in details.items():
            console.print(f"  [dim]{key}:[/dim] [yellow]{value}[/yellow]")


def print_warning(message: str) -> None:
    """Print a warning that does not stop the command.

    Args:
        message: Warning message
    """
    console.print(f"[yellow]Warning: {message}[/yellow]")
