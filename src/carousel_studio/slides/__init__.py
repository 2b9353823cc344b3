"""Slide collection manager, slide model and templates."""

from .collection import SlideCollection
from .models import Slide
from .templates import (
    CanvasTemplate,
    TemplateCategory,
    get_template,
    list_templates,
    templates_by_category,
)

__all__ = [
    "Slide",
    "SlideCollection",
    "CanvasTemplate",
    "TemplateCategory",
    "get_template",
    "list_templates",
    "templates_by_category",
]
