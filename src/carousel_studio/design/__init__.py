"""Slide rendering: visual tree primitives, renderer and Pillow compositor."""

from .compositor import SlideCompositor
from .primitives import (
    EllipsePrimitive,
    ImagePrimitive,
    LinePrimitive,
    Primitive,
    RectPrimitive,
    TextLayout,
    TextPrimitive,
    VisualTree,
)
from .renderer import render, render_element

__all__ = [
    "render",
    "render_element",
    "SlideCompositor",
    "VisualTree",
    "Primitive",
    "RectPrimitive",
    "EllipsePrimitive",
    "LinePrimitive",
    "TextPrimitive",
    "TextLayout",
    "ImagePrimitive",
]
