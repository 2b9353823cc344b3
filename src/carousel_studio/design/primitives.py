"""Drawable primitives produced by the renderer.

A visual tree is a flat, paint-ordered tuple of primitives in canvas pixels
at some scale. Primitives carry everything a 2D backend needs to paint them;
nothing here refers back to the editor models.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..elements import TextAlignment, TextDecoration


@dataclass(frozen=True, kw_only=True)
class Primitive:
    """Geometry shared by every primitive.

    ``x``/``y`` is the top-left corner before rotation; rotation is clockwise
    in degrees about that corner.
    """

    element_id: str
    x: float
    y: float
    width: float
    height: float
    rotation: float = 0.0
    opacity: float = 1.0
    visible: bool = True


@dataclass(frozen=True, kw_only=True)
class RectPrimitive(Primitive):
    fill: str
    stroke: str | None = None
    stroke_width: float = 0.0
    corner_radius: float = 0.0


@dataclass(frozen=True, kw_only=True)
class EllipsePrimitive(Primitive):
    """Circle inscribed in the box: diameter is the shorter side, centered."""

    fill: str
    stroke: str | None = None
    stroke_width: float = 0.0


@dataclass(frozen=True, kw_only=True)
class LinePrimitive(Primitive):
    """Segment from the box's top-left to its bottom-right corner."""

    stroke: str
    stroke_width: float


@dataclass(frozen=True)
class TextLayout:
    """Parameters for laying out wrapped glyphs.

    ``line_height_px`` is the distance between baselines and ``wrap_width``
    the width at which lines break, both already scaled.
    """

    text: str
    font_size: float
    font_family: str
    bold: bool
    italic: bool
    align: TextAlignment
    line_height_px: float
    letter_spacing: float
    decoration: TextDecoration
    wrap_width: float


@dataclass(frozen=True, kw_only=True)
class TextPrimitive(Primitive):
    fill: str
    layout: TextLayout


@dataclass(frozen=True, kw_only=True)
class ImagePrimitive(Primitive):
    """Bitmap stretched to the box."""

    src: str


@dataclass(frozen=True)
class VisualTree:
    """Everything needed to paint one slide."""

    width: float
    height: float
    scale: float
    background: str
    primitives: tuple[Primitive, ...]
    background_image: str | None = None

    def __len__(self) -> int:
        return len(self.primitives)

    @property
    def image_sources(self) -> list[str]:
        """Image sources the tree paints, background first."""
        sources = [self.background_image] if self.background_image else []
        sources.extend(p.src for p in self.primitives if isinstance(p, ImagePrimitive))
        return sources
