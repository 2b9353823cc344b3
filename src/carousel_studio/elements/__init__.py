"""Element model: text, shape and image variants and their transitions."""

from .factory import (
    clamp_element,
    clamp_patch,
    clamp_size,
    clone_element,
    create_default_element,
    create_image_element,
    create_shape_element,
    create_text_element,
    element_class_for,
    normalize_rotation,
    text_bounding_box,
    update_element,
)
from .models import (
    ELEMENT_CLASSES,
    CanvasModel,
    Element,
    ElementBase,
    ElementType,
    FontStyle,
    ImageElement,
    ShapeElement,
    ShapeType,
    TextAlignment,
    TextDecoration,
    TextElement,
    generate_id,
    is_valid_color,
)

__all__ = [
    # Models
    "CanvasModel",
    "Element",
    "ElementBase",
    "ElementType",
    "ELEMENT_CLASSES",
    "TextElement",
    "ShapeElement",
    "ImageElement",
    "TextAlignment",
    "FontStyle",
    "TextDecoration",
    "ShapeType",
    "generate_id",
    "is_valid_color",
    # Factories and transitions
    "create_text_element",
    "create_shape_element",
    "create_image_element",
    "create_default_element",
    "update_element",
    "clone_element",
    "clamp_element",
    "clamp_patch",
    "clamp_size",
    "normalize_rotation",
    "text_bounding_box",
    "element_class_for",
]
