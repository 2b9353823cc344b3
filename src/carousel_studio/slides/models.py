"""Slide data model."""

from __future__ import annotations

from pydantic import Field, field_validator, model_validator

from ..constants import DEFAULT_BACKGROUND
from ..elements import (
    CanvasModel,
    Element,
    ElementBase,
    clone_element,
    generate_id,
    is_valid_color,
)


class Slide(CanvasModel):
    """One page of the carousel.

    ``elements`` is the paint order: later entries render on top.
    """

    id: str = Field(default_factory=generate_id)
    background_color: str = DEFAULT_BACKGROUND
    background_image: str | None = None
    elements: list[Element] = Field(default_factory=list)

    @field_validator("background_color")
    @classmethod
    def _check_background(cls, value: str) -> str:
        if not is_valid_color(value):
            raise ValueError(f"unsupported color: {value!r}")
        return value

    @model_validator(mode="after")
    def _unique_element_ids(self) -> "Slide":
        seen: set[str] = set()
        for element in self.elements:
            if element.id in seen:
                raise ValueError(f"duplicate element id {element.id!r}")
            seen.add(element.id)
        return self

    def find_element(self, element_id: str | None) -> ElementBase | None:
        """Get an element by id, or None."""
        index = self.index_of(element_id)
        return None if index is None else self.elements[index]

    def index_of(self, element_id: str | None) -> int | None:
        """Paint-order index of an element, or None."""
        if element_id is None:
            return None
        for index, element in enumerate(self.elements):
            if element.id == element_id:
                return index
        return None

    def add_element(self, element: ElementBase) -> ElementBase:
        """Append an element on top of the paint order.

        An element whose id already exists on this slide is re-keyed.
        """
        while self.index_of(element.id) is not None:
            element = element.model_copy(update={"id": generate_id()})
        self.elements.append(element)
        return element

    def replace_element(self, element: ElementBase) -> bool:
        """Swap in a new version of an element with the same id."""
        index = self.index_of(element.id)
        if index is None:
            return False
        self.elements[index] = element
        return True

    def remove_element(self, element_id: str) -> ElementBase | None:
        """Remove an element, returning it, or None when absent."""
        index = self.index_of(element_id)
        if index is None:
            return None
        return self.elements.pop(index)

    def clone(self) -> "Slide":
        """Deep copy with a new slide id and new element ids."""
        return Slide(
            background_color=self.background_color,
            background_image=self.background_image,
            elements=[clone_element(element) for element in self.elements],
        )

    @property
    def image_sources(self) -> list[str]:
        """Every image source painted on this slide, background first."""
        sources = [self.background_image] if self.background_image else []
        sources.extend(
            element.src for element in self.elements if element.type == "image"
        )
        return sources
