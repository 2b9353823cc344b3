"""Carousel templates.

A template is a ready-made slide list (hook, content, call-to-action) plus
its brand colors and fonts. Applying a template copies its slides with fresh
ids so the registry entries are never edited in place.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field, field_validator

from ..constants import CANVAS_WIDTH, DEFAULT_FONTS, MAX_SLIDES, MIN_SLIDES
from ..elements import (
    CanvasModel,
    TextAlignment,
    create_shape_element,
    create_text_element,
)
from .models import Slide


class TemplateCategory(str, Enum):
    """Template categories for filtering."""

    PROFESSIONAL = "professional"
    CREATIVE = "creative"
    MINIMAL = "minimal"
    BOLD = "bold"


class CanvasTemplate(CanvasModel):
    """Named starting point for a carousel."""

    id: str
    name: str
    description: str | None = None
    category: TemplateCategory
    default_slides: list[Slide]
    brand_colors: list[str] = Field(default_factory=list)
    fonts: list[str] = Field(default_factory=list)
    is_favorite: bool = False

    @field_validator("default_slides")
    @classmethod
    def _slide_count(cls, slides: list[Slide]) -> list[Slide]:
        if not MIN_SLIDES <= len(slides) <= MAX_SLIDES:
            raise ValueError(f"templates need {MIN_SLIDES}-{MAX_SLIDES} slides")
        return slides

    @field_validator("fonts")
    @classmethod
    def _offered_fonts(cls, fonts: list[str]) -> list[str]:
        unknown = [font for font in fonts if font not in DEFAULT_FONTS]
        if unknown:
            raise ValueError(f"fonts not offered by the editor: {', '.join(unknown)}")
        return fonts

    def instantiate(self) -> list[Slide]:
        """Copies of the template slides with fresh slide and element ids."""
        return [slide.clone() for slide in self.default_slides]


# =============================================================================
# Built-in templates
# =============================================================================
# Layout follows the hook / content / CTA structure: large centered hook,
# numbered content slide with a faded background number, centered CTA.


def _hook_slide(background: str, text: str, subtext: str, font: str, padding_x: int = 140) -> Slide:
    width = CANVAS_WIDTH - padding_x * 2
    return Slide(
        background_color=background,
        elements=[
            create_text_element(
                text="Your big idea, in one line",
                x=padding_x,
                y=380,
                width=width,
                height=200,
                font_size=78,
                font_family=font,
                font_weight="bold",
                fill=text,
                align=TextAlignment.CENTER,
                line_height=1.3,
            ),
            create_text_element(
                text="Swipe to learn how",
                x=padding_x,
                y=620,
                width=width,
                height=60,
                font_size=36,
                font_family=font,
                fill=subtext,
                align=TextAlignment.CENTER,
            ),
        ],
    )


def _content_slide(background: str, text: str, body: str, accent: str, font: str, padding_x: int = 80) -> Slide:
    width = CANVAS_WIDTH - padding_x * 2
    return Slide(
        background_color=background,
        elements=[
            create_text_element(
                text="1",
                x=padding_x,
                y=100,
                width=200,
                height=180,
                font_size=140,
                font_family=font,
                font_weight="bold",
                fill=accent,
                opacity=0.3,
            ),
            create_text_element(
                text="Make one point per slide",
                x=padding_x,
                y=330,
                width=width,
                height=160,
                font_size=58,
                font_family=font,
                font_weight="bold",
                fill=text,
                line_height=1.3,
            ),
            create_text_element(
                text="Explain it in two or three short sentences your reader can act on.",
                x=padding_x,
                y=530,
                width=width,
                height=220,
                font_size=40,
                font_family=font,
                fill=body,
                line_height=1.3,
            ),
        ],
    )


def _cta_slide(background: str, text: str, accent: str, font: str, padding_x: int = 80) -> Slide:
    width = CANVAS_WIDTH - padding_x * 2
    return Slide(
        background_color=background,
        elements=[
            create_text_element(
                text="Found this useful?",
                x=padding_x,
                y=380,
                width=width,
                height=90,
                font_size=64,
                font_family=font,
                font_weight="bold",
                fill=text,
                align=TextAlignment.CENTER,
            ),
            create_shape_element(
                shape_type="rect",
                x=CANVAS_WIDTH / 2 - 220,
                y=520,
                width=440,
                height=96,
                fill=accent,
                corner_radius=48,
            ),
            create_text_element(
                text="Follow for more",
                x=CANVAS_WIDTH / 2 - 220,
                y=540,
                width=440,
                height=60,
                font_size=42,
                font_family=font,
                fill="#ffffff",
                align=TextAlignment.CENTER,
            ),
        ],
    )


def _build_template(
    template_id: str,
    name: str,
    category: TemplateCategory,
    description: str,
    background: str,
    text: str,
    secondary: str,
    accent: str,
    font: str = "Inter",
) -> CanvasTemplate:
    return CanvasTemplate(
        id=template_id,
        name=name,
        description=description,
        category=category,
        default_slides=[
            _hook_slide(background, text, secondary, font),
            _content_slide(background, text, secondary, accent, font),
            _cta_slide(background, text, accent, font),
        ],
        brand_colors=[background, text, secondary, accent],
        fonts=[font],
    )


def _builtin_templates() -> list[CanvasTemplate]:
    return [
        _build_template(
            "minimal-dark", "Minimal Dark", TemplateCategory.MINIMAL,
            "Near-black background with indigo accents",
            background="#0a0a0f", text="#ffffff", secondary="#a1a1aa", accent="#6366f1",
        ),
        _build_template(
            "minimal-light", "Minimal Light", TemplateCategory.MINIMAL,
            "White background with dark text",
            background="#ffffff", text="#18181b", secondary="#71717a", accent="#6366f1",
        ),
        _build_template(
            "professional", "Professional", TemplateCategory.PROFESSIONAL,
            "Navy and white for corporate updates",
            background="#1e3a5f", text="#ffffff", secondary="#cbd5e1", accent="#3b82f6",
            font="Roboto",
        ),
        _build_template(
            "bold-impact", "Bold Impact", TemplateCategory.BOLD,
            "High-contrast amber on black",
            background="#000000", text="#ffffff", secondary="#d4d4d8", accent="#f59e0b",
            font="Montserrat",
        ),
        _build_template(
            "creative-purple", "Creative Purple", TemplateCategory.CREATIVE,
            "Purple and pink for playful topics",
            background="#8b5cf6", text="#ffffff", secondary="#ede9fe", accent="#ec4899",
            font="Poppins",
        ),
    ]


_REGISTRY: dict[str, CanvasTemplate] | None = None


def _registry() -> dict[str, CanvasTemplate]:
    global _REGISTRY
    if _REGISTRY is None:
        _REGISTRY = {template.id: template for template in _builtin_templates()}
    return _REGISTRY


def list_templates() -> list[CanvasTemplate]:
    """All built-in templates."""
    return list(_registry().values())


def get_template(template_id: str) -> CanvasTemplate | None:
    """Get a template by its id."""
    return _registry().get(template_id)


def templates_by_category(category: TemplateCategory | str) -> list[CanvasTemplate]:
    """Templates filtered by category."""
    category = TemplateCategory(category)
    return [template for template in _registry().values() if template.category == category]
