"""Data models for canvas elements.

Elements are a closed tagged union on the ``type`` field. Python attributes
are snake_case; the serialized form uses the camelCase keys of saved drafts
(``fontSize``, ``shapeType``...). Either spelling is accepted on input.
"""

from __future__ import annotations

import math
import uuid
from enum import Enum
from typing import Annotated, Literal, Union

from PIL import ImageColor
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..constants import DEFAULT_FONT_FAMILY, DEFAULT_LINE_HEIGHT, TRANSPARENT


def generate_id() -> str:
    """Generate an id for a slide or element."""
    return uuid.uuid4().hex[:12]


def is_valid_color(value: str) -> bool:
    """Check a color string against what the compositor can paint."""
    if value == TRANSPARENT:
        return True
    try:
        ImageColor.getrgb(value)
    except ValueError:
        return False
    return True


class ElementType(str, Enum):
    """Element variants."""

    TEXT = "text"
    SHAPE = "shape"
    IMAGE = "image"


class TextAlignment(str, Enum):
    """Text alignment options."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class FontStyle(str, Enum):
    """Font slant."""

    NORMAL = "normal"
    ITALIC = "italic"


class TextDecoration(str, Enum):
    """Line drawn through or under text."""

    NONE = "none"
    UNDERLINE = "underline"
    LINE_THROUGH = "line-through"


class ShapeType(str, Enum):
    """Supported shape types."""

    RECT = "rect"
    CIRCLE = "circle"
    LINE = "line"


FontWeight = Literal[
    "normal", "bold", "100", "200", "300", "400", "500", "600", "700", "800", "900"
]


class CanvasModel(BaseModel):
    """Base model serializing with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_payload(self) -> dict:
        """Plain JSON-safe dict in the saved-draft shape."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


class ElementBase(CanvasModel):
    """Geometry shared by every element variant."""

    id: str = Field(default_factory=generate_id)
    x: float = 0.0
    y: float = 0.0
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    rotation: float = 0.0
    opacity: float = Field(default=1.0, ge=0.0, le=1.0)
    visible: bool = True
    locked: bool = False

    @field_validator("x", "y", "width", "height", "rotation")
    @classmethod
    def _require_finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("must be a finite number")
        return value

    @property
    def element_type(self) -> ElementType:
        return ElementType(self.type)  # type: ignore[attr-defined]


class TextElement(ElementBase):
    """Positioned block of wrapped text."""

    type: Literal["text"] = "text"
    text: str = "Double-click to edit"
    font_size: float = Field(default=32.0, gt=0)
    font_family: str = DEFAULT_FONT_FAMILY
    font_weight: FontWeight = "normal"
    font_style: FontStyle = FontStyle.NORMAL
    fill: str = "#000000"
    align: TextAlignment = TextAlignment.LEFT
    line_height: float = Field(default=DEFAULT_LINE_HEIGHT, gt=0)
    letter_spacing: float = 0.0
    text_decoration: TextDecoration = TextDecoration.NONE

    @field_validator("font_weight", mode="before")
    @classmethod
    def _weight_from_number(cls, value):
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("fill")
    @classmethod
    def _check_fill(cls, value: str) -> str:
        if not is_valid_color(value):
            raise ValueError(f"unsupported color: {value!r}")
        return value

    @property
    def is_bold(self) -> bool:
        """Whether the weight paints with a bold face."""
        if self.font_weight == "bold":
            return True
        return self.font_weight.isdigit() and int(self.font_weight) >= 600


class ShapeElement(ElementBase):
    """Rectangle, circle or line."""

    type: Literal["shape"] = "shape"
    shape_type: ShapeType = ShapeType.RECT
    fill: str = "#3b82f6"
    stroke: str | None = None
    stroke_width: float = Field(default=0.0, ge=0)
    corner_radius: float = Field(default=0.0, ge=0)

    @field_validator("fill", "stroke")
    @classmethod
    def _check_colors(cls, value: str | None) -> str | None:
        if value is not None and not is_valid_color(value):
            raise ValueError(f"unsupported color: {value!r}")
        return value


class ImageElement(ElementBase):
    """Bitmap placed from a URL, data URL or local path."""

    type: Literal["image"] = "image"
    src: str = Field(min_length=1)
    alt: str | None = None
    natural_width: float | None = Field(default=None, gt=0)
    natural_height: float | None = Field(default=None, gt=0)


Element = Annotated[
    Union[TextElement, ShapeElement, ImageElement],
    Field(discriminator="type"),
]
"""Any element variant, discriminated by ``type``."""

ELEMENT_CLASSES: dict[ElementType, type[ElementBase]] = {
    ElementType.TEXT: TextElement,
    ElementType.SHAPE: ShapeElement,
    ElementType.IMAGE: ImageElement,
}
