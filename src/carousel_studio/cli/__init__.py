"""Command line interface - feature-based, stateless command modules.

- core/: Shared types, validators and console
- deck/: Draft inspection, creation and thumbnails
- export/: PDF / PNG export

Usage:
    python -m carousel_studio.cli --help
    python -m carousel_studio.cli new drafts/launch.json --template minimal-dark
    python -m carousel_studio.cli export drafts/launch.json --format pdf
"""

from .app import app, main

__all__ = ["app", "main"]
