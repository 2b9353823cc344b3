"""Typer app configuration and logging setup."""

from __future__ import annotations

import logging

import typer
from dotenv import load_dotenv

from carousel_studio.config import EditorSettings
from carousel_studio.constants.paths import LOG_FILENAME

# Load environment variables from .env file
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="carousel",
    help="Multi-slide carousel editor: inspect, render and export drafts",
    add_completion=False,
)

# Library loggers that write to the log file
EDITOR_LOGGERS = ["editor", "export", "assets", "storage"]


def register_commands() -> None:
    """Register all commands from feature modules."""
    # Import and register deck commands
    from .deck.commands import info, new, templates, thumbnails

    app.command(name="info")(info)
    app.command(name="new")(new)
    app.command(name="templates")(templates)
    app.command(name="thumbnails")(thumbnails)

    # Import and register export command
    from .export.commands import export

    app.command(name="export")(export)


def setup_logging() -> None:
    """Configure logging for CLI.

    - Suppresses console output from libraries
    - Sends editor, export, asset and storage events to logs/carousel.log
    """
    log_dir = EditorSettings().get_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)

    # Remove any default console handlers from root logger
    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(logging.CRITICAL)

    # Suppress loggers that might print to console
    for logger_name in ["httpx", "httpcore", "PIL", "asyncio"]:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.WARNING)
        logger.propagate = False

    file_handler = logging.FileHandler(log_dir / LOG_FILENAME, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    )

    for logger_name in EDITOR_LOGGERS:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        logger.handlers = [file_handler]


# Initialize logging on module import
setup_logging()

# Register all commands
register_commands()


def main() -> None:
    """CLI entry point."""
    app()
