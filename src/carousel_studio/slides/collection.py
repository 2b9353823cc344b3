"""Ordered slide collection.

The collection is the single owner of the slide count invariant
(``1 <= len <= MAX_SLIDES``) and of the current slide index. Guard
violations raise ``SlideLimitExceeded`` / ``MinimumSlideCount`` before any
state changes; indices that do not reference an existing slide are ignored.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, Sequence

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..constants import MAX_SLIDES, MIN_SLIDES, JSON
from ..elements import clamp_element, generate_id, is_valid_color
from ..errors import MinimumSlideCount, SlideLimitExceeded, ValidationError
from .models import Slide

_logger = logging.getLogger("editor")

_slides_adapter = TypeAdapter(list[Slide])


class SlideCollection:
    """Authoritative ordered list of slides.

    Usage:
        deck = SlideCollection()
        deck.add_slide()
        deck.duplicate_slide(0)
        deck.reorder_slide(2, 0)
        payload = deck.to_payload()
    """

    def __init__(
        self,
        slides: Sequence[Slide] | None = None,
        current_index: int = 0,
        max_slides: int = MAX_SLIDES,
    ):
        """Initialize the collection.

        Args:
            slides: Initial slides. Defaults to one empty slide.
            current_index: Index of the slide shown in the editor.
            max_slides: Upper bound on the slide count.

        Raises:
            ValidationError: Slide count out of bounds or duplicate slide ids.
        """
        self.max_slides = max_slides
        self._slides: list[Slide] = []
        self._current_index = 0
        self.replace_all(list(slides) if slides else [Slide()], current_index)

    # =========================================================================
    # Read access
    # =========================================================================

    def __len__(self) -> int:
        return len(self._slides)

    def __iter__(self) -> Iterator[Slide]:
        return iter(self._slides)

    def __getitem__(self, index: int) -> Slide:
        return self._slides[index]

    @property
    def slides(self) -> tuple[Slide, ...]:
        """Slides in document order."""
        return tuple(self._slides)

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current_slide(self) -> Slide:
        return self._slides[self._current_index]

    @property
    def can_add(self) -> bool:
        return len(self._slides) < self.max_slides

    @property
    def can_delete(self) -> bool:
        return len(self._slides) > MIN_SLIDES

    def in_range(self, index: int) -> bool:
        """Whether ``index`` references an existing slide."""
        return isinstance(index, int) and 0 <= index < len(self._slides)

    def find_slide(self, slide_id: str) -> int | None:
        """Index of a slide by id, or None."""
        for index, slide in enumerate(self._slides):
            if slide.id == slide_id:
                return index
        return None

    # =========================================================================
    # Structural operations
    # =========================================================================

    def set_current(self, index: int) -> bool:
        """Point the editor at another slide. Out-of-range indices are ignored."""
        if not self.in_range(index):
            return False
        self._current_index = index
        return True

    def add_slide(self, slide: Slide | None = None) -> Slide:
        """Append a slide and make it current.

        Args:
            slide: Slide to append. Defaults to an empty slide.

        Returns:
            The appended slide.

        Raises:
            SlideLimitExceeded: The collection is full.
        """
        if not self.can_add:
            raise SlideLimitExceeded(self.max_slides)

        slide = self._with_unique_id(slide or Slide())
        self._slides.append(slide)
        self._current_index = len(self._slides) - 1
        _logger.info(f"SLIDE_ADD | id:{slide.id} | count:{len(self._slides)}")
        return slide

    def duplicate_slide(self, index: int) -> Slide | None:
        """Insert a deep copy of a slide right after it and make it current.

        Every element of the copy gets a new id; geometry and styling are
        unchanged.

        Returns:
            The new slide, or None when ``index`` is out of range.

        Raises:
            SlideLimitExceeded: The collection is full.
        """
        if not self.in_range(index):
            return None
        if not self.can_add:
            raise SlideLimitExceeded(self.max_slides)

        copy = self._slides[index].clone()
        self._slides.insert(index + 1, copy)
        self._current_index = index + 1
        _logger.info(
            f"SLIDE_DUPLICATE | source:{self._slides[index].id} | id:{copy.id} | "
            f"count:{len(self._slides)}"
        )
        return copy

    def delete_slide(self, index: int) -> Slide | None:
        """Remove a slide and re-clamp the current index.

        The current index stays where it is unless it ran off the end, in
        which case it moves to the new last slide.

        Returns:
            The removed slide, or None when ``index`` is out of range.

        Raises:
            MinimumSlideCount: Only one slide is left.
        """
        if not self.in_range(index):
            return None
        if not self.can_delete:
            raise MinimumSlideCount(MIN_SLIDES)

        removed = self._slides.pop(index)
        self._current_index = min(self._current_index, len(self._slides) - 1)
        _logger.info(f"SLIDE_DELETE | id:{removed.id} | count:{len(self._slides)}")
        return removed

    def reorder_slide(self, from_index: int, to_index: int) -> bool:
        """Move one slide, shifting the slides in between.

        The moved slide becomes current. Equal indices and out-of-range
        indices leave the collection untouched.

        Returns:
            True when the order changed.
        """
        if not (self.in_range(from_index) and self.in_range(to_index)):
            _logger.debug(f"SLIDE_REORDER ignored | from:{from_index} | to:{to_index}")
            return False
        if from_index == to_index:
            return False

        moved = self._slides.pop(from_index)
        self._slides.insert(to_index, moved)
        self._current_index = to_index
        _logger.info(f"SLIDE_REORDER | id:{moved.id} | from:{from_index} | to:{to_index}")
        return True

    def update_background(self, index: int, color: str) -> bool:
        """Change the background color of a slide.

        Raises:
            ValidationError: The color cannot be painted.
        """
        if not self.in_range(index):
            return False
        if not is_valid_color(color):
            raise ValidationError(f"Unsupported color: {color!r}", field="background_color")
        self._slides[index].background_color = color
        return True

    def replace_all(self, slides: Sequence[Slide], current_index: int = 0) -> None:
        """Replace every slide at once.

        Raises:
            ValidationError: Slide count out of bounds or duplicate slide ids.
        """
        slides = list(slides)
        if not MIN_SLIDES <= len(slides) <= self.max_slides:
            raise ValidationError(
                f"A carousel needs between {MIN_SLIDES} and {self.max_slides} slides, "
                f"got {len(slides)}",
                field="slides",
            )
        ids = [slide.id for slide in slides]
        if len(set(ids)) != len(ids):
            raise ValidationError("Slide ids must be unique", field="slides")

        for slide in slides:
            slide.elements = [clamp_element(element) for element in slide.elements]

        self._slides = slides
        self._current_index = min(max(current_index, 0), len(slides) - 1)

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_payload(self) -> list[JSON]:
        """Plain ``Slide[]`` form for persistence."""
        return [slide.to_payload() for slide in self._slides]

    @staticmethod
    def parse_payload(payload: Any) -> list[Slide]:
        """Validate a plain ``Slide[]`` payload.

        Raises:
            ValidationError: The payload is not a valid slide list.
        """
        try:
            return _slides_adapter.validate_python(payload)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid slide payload: {e.errors()[0].get('msg')}") from e

    @classmethod
    def from_payload(
        cls,
        payload: Any,
        current_index: int = 0,
        max_slides: int = MAX_SLIDES,
    ) -> "SlideCollection":
        """Build a collection from a plain ``Slide[]`` payload."""
        return cls(cls.parse_payload(payload), current_index, max_slides)

    def snapshot(self) -> list[Slide]:
        """Deep copy of the slides, safe to hand to a background task."""
        return [slide.model_copy(deep=True) for slide in self._slides]

    def _with_unique_id(self, slide: Slide) -> Slide:
        while self.find_slide(slide.id) is not None:
            slide = slide.model_copy(update={"id": generate_id()})
        return slide
