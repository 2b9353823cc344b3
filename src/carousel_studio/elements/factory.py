"""Element creation and state transitions.

Factories validate caller input strictly. Patches applied through
``update_element`` are clamped instead: rotation is normalized into
[0, 360), width and height are floored to the element minimums and opacity is
clamped into [0, 1], matching how interactive transform handlers behave.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..constants import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    FULL_TURN_DEGREES,
    MIN_ELEMENT_HEIGHT,
    MIN_ELEMENT_WIDTH,
    ElementPatch,
)
from ..errors import ValidationError
from .models import (
    ELEMENT_CLASSES,
    ElementBase,
    ElementType,
    ImageElement,
    ShapeElement,
    ShapeType,
    TextElement,
    generate_id,
)

_logger = logging.getLogger("editor")

# Rough glyph advance as a fraction of the font size, used to size new text
# boxes before any font is loaded.
AVERAGE_CHAR_WIDTH = 0.55
MAX_DEFAULT_TEXT_WIDTH = 800

# Fields a patch may never change
IMMUTABLE_FIELDS = frozenset({"id", "type"})

# Numeric fields a patch may carry; non-finite values are dropped
CLAMPED_FIELDS = ("x", "y", "width", "height", "rotation", "opacity")


# =============================================================================
# Helpers
# =============================================================================


def normalize_rotation(rotation: float) -> float:
    """Normalize an angle in degrees into [0, 360)."""
    normalized = rotation % FULL_TURN_DEGREES
    # Tiny negative inputs round up to exactly 360.0
    if normalized >= FULL_TURN_DEGREES:
        return 0.0
    return normalized + 0.0


def clamp_size(width: float, height: float) -> tuple[float, float]:
    """Floor a size to the element minimums."""
    return max(float(MIN_ELEMENT_WIDTH), width), max(float(MIN_ELEMENT_HEIGHT), height)


def text_bounding_box(
    text: str,
    font_size: float,
    line_height: float,
    max_width: float = MAX_DEFAULT_TEXT_WIDTH,
) -> tuple[float, float]:
    """Estimate the smallest box holding ``text`` without clipping.

    Args:
        text: Text content, paragraphs separated by newlines.
        font_size: Font size in pixels.
        line_height: Line height multiplier.
        max_width: Width at which lines are assumed to wrap.

    Returns:
        Tuple of (width, height), already floored to the element minimums.
    """
    char_width = font_size * AVERAGE_CHAR_WIDTH
    paragraphs = text.split("\n") or [""]
    longest = max(len(p) for p in paragraphs)
    width = min(max_width, math.ceil(longest * char_width))

    line_count = 0
    for paragraph in paragraphs:
        paragraph_width = len(paragraph) * char_width
        line_count += max(1, math.ceil(paragraph_width / max(width, 1)))

    height = math.ceil(line_count * font_size * line_height)
    return clamp_size(width, height)


def _field_names(cls: type[ElementBase]) -> dict[str, str]:
    """Map every accepted key (field name or alias) to its field name."""
    names: dict[str, str] = {}
    for name, info in cls.model_fields.items():
        names[name] = name
        if info.alias:
            names[info.alias] = name
    return names


def _normalize_keys(cls: type[ElementBase], data: ElementPatch) -> dict[str, Any]:
    """Translate aliases to field names, dropping unknown keys."""
    names = _field_names(cls)
    normalized: dict[str, Any] = {}
    for key, value in data.items():
        field = names.get(key)
        if field is None:
            _logger.debug(f"Ignoring unknown {cls.__name__} field: {key}")
            continue
        normalized[field] = value
    return normalized


def _build(cls: type[ElementBase], data: dict[str, Any]) -> Any:
    """Validate ``data`` into ``cls``, translating pydantic errors."""
    try:
        return cls.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or None
        raise ValidationError(
            f"Invalid {cls.__name__} field {field}: {first.get('msg')}",
            field=field,
        ) from e


def _check_minimums(data: dict[str, Any]) -> None:
    """Reject caller-supplied geometry below the element minimums."""
    width = data.get("width")
    height = data.get("height")
    if isinstance(width, (int, float)) and width < MIN_ELEMENT_WIDTH:
        raise ValidationError(
            f"width {width} is below the minimum of {MIN_ELEMENT_WIDTH}",
            field="width",
        )
    if isinstance(height, (int, float)) and height < MIN_ELEMENT_HEIGHT:
        raise ValidationError(
            f"height {height} is below the minimum of {MIN_ELEMENT_HEIGHT}",
            field="height",
        )


def _drop_corner_radius(data: dict[str, Any]) -> dict[str, Any]:
    """Corner radius only applies to rectangles."""
    if data.get("shape_type", ShapeType.RECT) not in (ShapeType.RECT, ShapeType.RECT.value):
        data["corner_radius"] = 0.0
    return data


# =============================================================================
# Factories
# =============================================================================


def create_text_element(initial: ElementPatch | None = None, **fields: Any) -> TextElement:
    """Create a text element.

    Width and height default to the minimum bounding box of the text.

    Args:
        initial: Field values keyed by name or serialized alias.
        **fields: Additional field values, overriding ``initial``.

    Returns:
        The new TextElement.

    Raises:
        ValidationError: Input is malformed or geometry is below the minimums.
    """
    data = _normalize_keys(TextElement, {**(initial or {}), **fields})
    data.pop("type", None)
    _check_minimums(data)

    if "width" not in data or "height" not in data:
        defaults = TextElement.model_fields
        width, height = text_bounding_box(
            str(data.get("text", defaults["text"].default)),
            float(data.get("font_size", defaults["font_size"].default)),
            float(data.get("line_height", defaults["line_height"].default)),
        )
        data.setdefault("width", width)
        data.setdefault("height", height)

    return _build(TextElement, data)


def create_shape_element(config: ElementPatch | None = None, **fields: Any) -> ShapeElement:
    """Create a shape element.

    ``shape_type`` must be one of rect, circle or line. ``corner_radius`` is
    ignored for anything but rectangles.

    Raises:
        ValidationError: Unknown shape type, bad color or geometry below minimums.
    """
    data = _normalize_keys(ShapeElement, {**(config or {}), **fields})
    data.pop("type", None)
    _check_minimums(data)
    data.setdefault("width", 200.0)
    data.setdefault("height", 200.0)
    return _build(ShapeElement, _drop_corner_radius(data))


def create_image_element(
    src: str,
    natural_width: float,
    natural_height: float,
    **fields: Any,
) -> ImageElement:
    """Create an image element sized to the image's natural dimensions.

    Natural sizes below the element minimums are floored to them.

    Raises:
        ValidationError: Empty source or non-positive natural size.
    """
    if not src:
        raise ValidationError("Image source is empty", field="src")
    if natural_width <= 0 or natural_height <= 0:
        raise ValidationError(
            f"Natural size must be positive, got {natural_width}x{natural_height}",
            field="natural_width",
        )

    data = _normalize_keys(ImageElement, fields)
    data.pop("type", None)
    _check_minimums(data)

    width, height = clamp_size(float(natural_width), float(natural_height))
    data.setdefault("width", width)
    data.setdefault("height", height)
    data.update(src=src, natural_width=natural_width, natural_height=natural_height)
    return _build(ImageElement, data)


def create_default_element(
    element_type: ElementType | str,
    canvas_width: int = CANVAS_WIDTH,
    canvas_height: int = CANVAS_HEIGHT,
) -> TextElement | ShapeElement:
    """Create the starter element the editor inserts for a toolbar click.

    Images are not covered here: an image always needs a source.
    """
    element_type = ElementType(element_type)
    center_x = canvas_width / 2
    center_y = canvas_height / 2

    if element_type == ElementType.TEXT:
        return create_text_element(
            x=center_x - 200,
            y=center_y - 30,
            width=400,
            height=60,
        )
    if element_type == ElementType.SHAPE:
        return create_shape_element(
            x=center_x - 100,
            y=center_y - 100,
            width=200,
            height=200,
        )
    raise ValidationError("Image elements need a source; use insert_image", field="type")


# =============================================================================
# Transitions
# =============================================================================


def clamp_patch(data: dict[str, Any]) -> dict[str, Any]:
    """Clamp geometry fields in a normalized patch.

    NaN and infinite geometry values are removed from the patch, leaving the
    current value in place.
    """
    for key in CLAMPED_FIELDS:
        value = data.get(key)
        if isinstance(value, (int, float)) and not math.isfinite(value):
            del data[key]
    if isinstance(data.get("width"), (int, float)):
        data["width"] = max(float(MIN_ELEMENT_WIDTH), float(data["width"]))
    if isinstance(data.get("height"), (int, float)):
        data["height"] = max(float(MIN_ELEMENT_HEIGHT), float(data["height"]))
    rotation = data.get("rotation")
    if isinstance(rotation, (int, float)):
        data["rotation"] = normalize_rotation(float(rotation))
    if isinstance(data.get("opacity"), (int, float)):
        data["opacity"] = min(1.0, max(0.0, float(data["opacity"])))
    return data


def update_element(element: ElementBase, patch: ElementPatch) -> ElementBase:
    """Merge a patch into an element, clamping out-of-range geometry.

    ``id`` and ``type`` cannot be patched; unknown keys are ignored.

    Args:
        element: Element to update. It is not modified.
        patch: Partial update keyed by field name or serialized alias.

    Returns:
        A new element of the same variant.

    Raises:
        ValidationError: A patched value has the wrong type or an invalid color.
    """
    cls = type(element)
    changes = {
        key: value
        for key, value in _normalize_keys(cls, patch).items()
        if key not in IMMUTABLE_FIELDS
    }
    if not changes:
        return element

    data = element.model_dump()
    data.update(clamp_patch(changes))
    if isinstance(element, ShapeElement):
        data = _drop_corner_radius(data)
    return _build(cls, data)


def clamp_element(element: ElementBase) -> ElementBase:
    """Bring an element loaded from elsewhere back within the invariants."""
    data = clamp_patch(element.model_dump())
    if data == element.model_dump():
        return element
    return _build(type(element), data)


def clone_element(element: ElementBase) -> ElementBase:
    """Deep copy an element under a fresh id."""
    return element.model_copy(deep=True, update={"id": generate_id()})


def element_class_for(element_type: ElementType | str) -> type[ElementBase]:
    """Model class for an element type."""
    return ELEMENT_CLASSES[ElementType(element_type)]
