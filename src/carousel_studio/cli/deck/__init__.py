"""Deck commands: info, new, templates, thumbnails."""

from .commands import info, new, templates, thumbnails

__all__ = ["info", "new", "templates", "thumbnails"]
