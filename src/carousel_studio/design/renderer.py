"""Slide renderer.

``render(slide, scale)`` maps a slide to a visual tree. The live canvas
(scale 1) and thumbnails (scale ~0.24) both go through it, so the two views
cannot drift: geometry, stroke widths, font sizes, corner radii and letter
spacing are multiplied by ``scale``; rotation and opacity are not. Values are
never rounded here.

Rendering is pure: the slide is only read.
"""

from __future__ import annotations

from typing import AbstractSet, Callable, assert_never

from ..constants import CANVAS_HEIGHT, CANVAS_WIDTH
from ..elements import (
    ElementBase,
    FontStyle,
    ImageElement,
    ShapeElement,
    ShapeType,
    TextElement,
)
from ..slides import Slide
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

# Lines without a stroke width draw at this width
DEFAULT_LINE_WIDTH = 2.0

ElementView = Callable[[ElementBase], ElementBase]


def render_element(element: ElementBase, scale: float, visible: bool = True) -> Primitive:
    """Map one element to its primitive."""
    common = dict(
        element_id=element.id,
        x=element.x * scale,
        y=element.y * scale,
        width=element.width * scale,
        height=element.height * scale,
        rotation=element.rotation,
        opacity=element.opacity,
        visible=visible and element.visible,
    )

    match element:
        case TextElement():
            return TextPrimitive(
                **common,
                fill=element.fill,
                layout=TextLayout(
                    text=element.text,
                    font_size=element.font_size * scale,
                    font_family=element.font_family,
                    bold=element.is_bold,
                    italic=element.font_style == FontStyle.ITALIC,
                    align=element.align,
                    line_height_px=element.font_size * element.line_height * scale,
                    letter_spacing=element.letter_spacing * scale,
                    decoration=element.text_decoration,
                    wrap_width=element.width * scale,
                ),
            )
        case ShapeElement(shape_type=ShapeType.RECT):
            return RectPrimitive(
                **common,
                fill=element.fill,
                stroke=element.stroke,
                stroke_width=element.stroke_width * scale,
                corner_radius=element.corner_radius * scale,
            )
        case ShapeElement(shape_type=ShapeType.CIRCLE):
            return EllipsePrimitive(
                **common,
                fill=element.fill,
                stroke=element.stroke,
                stroke_width=element.stroke_width * scale,
            )
        case ShapeElement(shape_type=ShapeType.LINE):
            return LinePrimitive(
                **common,
                stroke=element.fill,
                stroke_width=(element.stroke_width or DEFAULT_LINE_WIDTH) * scale,
            )
        case ImageElement():
            return ImagePrimitive(**common, src=element.src)
        case _:
            assert_never(element)


def render(
    slide: Slide,
    scale: float = 1.0,
    hidden: AbstractSet[str] = frozenset(),
    view: ElementView | None = None,
    canvas_width: int = CANVAS_WIDTH,
    canvas_height: int = CANVAS_HEIGHT,
) -> VisualTree:
    """Render a slide at a scale factor.

    Args:
        slide: Slide to render. It is not modified.
        scale: Multiplier for all geometry.
        hidden: Element ids emitted with ``visible=False`` (text under edit).
        view: Optional per-element substitution, used by the live canvas to
            show in-flight gestures.
        canvas_width: Canvas width at scale 1.
        canvas_height: Canvas height at scale 1.

    Returns:
        VisualTree with one primitive per element, in paint order.
    """
    primitives = []
    for element in slide.elements:
        if view is not None:
            element = view(element)
        primitives.append(render_element(element, scale, visible=element.id not in hidden))

    return VisualTree(
        width=canvas_width * scale,
        height=canvas_height * scale,
        scale=scale,
        background=slide.background_color,
        primitives=tuple(primitives),
        background_image=slide.background_image,
    )
