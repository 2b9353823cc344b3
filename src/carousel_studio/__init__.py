"""Carousel Studio - multi-slide canvas editor for carousel documents."""

__version__ = "0.1.0"
