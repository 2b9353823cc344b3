"""Selection and transform engine.

Tracks the selected element of the current slide and drives drag, resize and
rotate gestures plus the inline text edit lifecycle:

    IDLE -> SELECTED -> (DRAGGING | TRANSFORMING | EDITING) -> SELECTED -> IDLE

While a gesture is running the slide is left untouched; the in-flight values
live in a ``GestureState`` and are shown through ``preview_element``. The
slide is written once, when the gesture ends. Operations on ids that are not
on the current slide are no-ops and nothing here raises.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, assert_never

from ..constants import MIN_ELEMENT_HEIGHT, MIN_ELEMENT_WIDTH, EditMode
from ..elements import (
    ElementBase,
    ImageElement,
    ShapeElement,
    ShapeType,
    TextElement,
    normalize_rotation,
    update_element,
)
from ..slides import SlideCollection

_logger = logging.getLogger("editor")

Checkpoint = Callable[[str], None]
"""Called with a description right before the engine writes to a slide."""


def round_px(value: float) -> int:
    """Round half up to whole pixels."""
    return int(math.floor(value + 0.5))


def _finite(*values: float | None) -> bool:
    return all(value is None or math.isfinite(value) for value in values)


@dataclass
class GestureState:
    """In-flight values of a drag or transform gesture."""

    element_id: str
    x: float
    y: float
    scale_x: float = 1.0
    scale_y: float = 1.0
    rotation: float = 0.0


def bake_transform(element: ElementBase, gesture: GestureState) -> dict[str, float]:
    """Final geometry of a transform gesture.

    Scale is folded into width and height, the result is floored to the
    element minimums and rounded to whole pixels, and rotation is rounded to
    whole degrees in [0, 360). Circles stay round: both sides take the mean of
    the scaled sides.
    """
    width = element.width * abs(gesture.scale_x)
    height = element.height * abs(gesture.scale_y)

    match element:
        case ShapeElement(shape_type=ShapeType.CIRCLE):
            side = round_px(max(MIN_ELEMENT_WIDTH, MIN_ELEMENT_HEIGHT, (width + height) / 2))
            width = height = side
        case TextElement() | ShapeElement() | ImageElement():
            width = round_px(max(MIN_ELEMENT_WIDTH, width))
            height = round_px(max(MIN_ELEMENT_HEIGHT, height))
        case _:
            assert_never(element)

    return {
        "x": round_px(gesture.x),
        "y": round_px(gesture.y),
        "width": width,
        "height": height,
        "rotation": normalize_rotation(round_px(gesture.rotation)),
    }


class TransformEngine:
    """Selection state machine over the current slide of a collection.

    Usage:
        engine = TransformEngine(deck)
        engine.select(element_id)
        engine.begin_drag()
        engine.update_drag(120.4, 80.6)
        engine.end_drag()          # element now at (120, 81)
    """

    def __init__(self, deck: SlideCollection, checkpoint: Checkpoint | None = None):
        self.deck = deck
        self._checkpoint = checkpoint
        self.selected_id: str | None = None
        self.mode = EditMode.IDLE
        self.editing_element_id: str | None = None
        self.text_draft: str | None = None
        self.gesture: GestureState | None = None
        self._slide_id: str | None = None

    # =========================================================================
    # Lookups
    # =========================================================================

    def _element(self, element_id: str | None) -> ElementBase | None:
        return self.deck.current_slide.find_element(element_id)

    @property
    def selected_element(self) -> ElementBase | None:
        return self._element(self.selected_id)

    @property
    def hidden_ids(self) -> frozenset[str]:
        """Elements the live canvas must not paint (text under edit)."""
        if self.editing_element_id is None:
            return frozenset()
        return frozenset({self.editing_element_id})

    def is_draggable(self, element_id: str) -> bool:
        element = self._element(element_id)
        return (
            element is not None
            and not element.locked
            and element_id != self.editing_element_id
        )

    def preview_element(self, element: ElementBase) -> ElementBase:
        """The element as the live canvas shows it mid-gesture."""
        gesture = self.gesture
        if gesture is None or gesture.element_id != element.id:
            return element
        if self.mode == EditMode.DRAGGING:
            return element.model_copy(update={"x": gesture.x, "y": gesture.y})
        return element.model_copy(
            update={
                "x": gesture.x,
                "y": gesture.y,
                "width": element.width * abs(gesture.scale_x),
                "height": element.height * abs(gesture.scale_y),
                "rotation": gesture.rotation,
            }
        )

    # =========================================================================
    # Selection
    # =========================================================================

    def select(self, element_id: str) -> bool:
        """Select one element of the current slide, deselecting any other."""
        if self._element(element_id) is None:
            return False
        if element_id != self.selected_id:
            self.settle()
        self.selected_id = element_id
        self._slide_id = self.deck.current_slide.id
        if self.mode == EditMode.IDLE:
            self.mode = EditMode.SELECTED
        return True

    def clear_selection(self) -> None:
        """Finish anything in progress and deselect."""
        self.settle()
        self._reset()

    def settle(self) -> None:
        """Commit a running gesture or text edit, keeping the selection."""
        if self.mode == EditMode.DRAGGING:
            self.end_drag()
        elif self.mode == EditMode.TRANSFORMING:
            self.end_transform()
        elif self.mode == EditMode.EDITING:
            self.commit_text_edit()

    def sync(self) -> None:
        """Drop state that no longer points at the current slide.

        Called after structural changes. Switching slides always clears the
        selection.
        """
        if self.selected_id is None:
            return
        if self._slide_id != self.deck.current_slide.id or self.selected_element is None:
            _logger.debug(f"SELECTION_CLEARED | element:{self.selected_id}")
            self._reset()

    def _reset(self) -> None:
        self.selected_id = None
        self.mode = EditMode.IDLE
        self.editing_element_id = None
        self.text_draft = None
        self.gesture = None
        self._slide_id = None

    def _write(self, element: ElementBase, patch: dict, description: str) -> ElementBase:
        updated = update_element(element, patch)
        if updated.model_dump() == element.model_dump():
            return element
        if self._checkpoint is not None:
            self._checkpoint(description)
        self.deck.current_slide.replace_element(updated)
        return updated

    # =========================================================================
    # Drag
    # =========================================================================

    def begin_drag(self, element_id: str | None = None) -> bool:
        """Start moving an element. Locked and text-edited elements stay put."""
        element_id = element_id or self.selected_id
        if element_id is None or not self.is_draggable(element_id):
            return False
        if not self.select(element_id):
            return False
        self.settle()
        element = self.selected_element
        self.gesture = GestureState(element.id, element.x, element.y, rotation=element.rotation)
        self.mode = EditMode.DRAGGING
        return True

    def update_drag(self, x: float, y: float) -> bool:
        """Move the dragged element to an absolute position."""
        if self.mode != EditMode.DRAGGING or not _finite(x, y):
            return False
        self.gesture.x = x
        self.gesture.y = y
        return True

    def end_drag(self) -> ElementBase | None:
        """Finish a drag, writing the position rounded to whole pixels."""
        if self.mode != EditMode.DRAGGING:
            return None
        gesture = self.gesture
        self.gesture = None
        self.mode = EditMode.SELECTED
        element = self._element(gesture.element_id)
        if element is None:
            return None
        return self._write(
            element,
            {"x": round_px(gesture.x), "y": round_px(gesture.y)},
            "Move element",
        )

    # =========================================================================
    # Resize / rotate
    # =========================================================================

    def begin_transform(self, element_id: str | None = None) -> bool:
        """Start a resize or rotate gesture."""
        element_id = element_id or self.selected_id
        if element_id is None or not self.is_draggable(element_id):
            return False
        if not self.select(element_id):
            return False
        self.settle()
        element = self.selected_element
        self.gesture = GestureState(element.id, element.x, element.y, rotation=element.rotation)
        self.mode = EditMode.TRANSFORMING
        return True

    def update_transform(
        self,
        scale_x: float | None = None,
        scale_y: float | None = None,
        rotation: float | None = None,
        x: float | None = None,
        y: float | None = None,
    ) -> bool:
        """Update the in-flight scale, rotation or position.

        Scale factors are relative to the size at gesture start.
        """
        if self.mode != EditMode.TRANSFORMING or not _finite(scale_x, scale_y, rotation, x, y):
            return False
        gesture = self.gesture
        if scale_x is not None:
            gesture.scale_x = scale_x
        if scale_y is not None:
            gesture.scale_y = scale_y
        if rotation is not None:
            gesture.rotation = rotation
        if x is not None:
            gesture.x = x
        if y is not None:
            gesture.y = y
        return True

    def end_transform(self) -> ElementBase | None:
        """Finish a transform, baking scale into the size."""
        if self.mode != EditMode.TRANSFORMING:
            return None
        gesture = self.gesture
        self.gesture = None
        self.mode = EditMode.SELECTED
        element = self._element(gesture.element_id)
        if element is None:
            return None
        return self._write(element, bake_transform(element, gesture), "Transform element")

    # =========================================================================
    # Text edit
    # =========================================================================

    def begin_text_edit(self, element_id: str) -> bool:
        """Hide a text element behind an inline editor.

        Only one element edits at a time; an edit already running on another
        element is committed first.
        """
        element = self._element(element_id)
        if not isinstance(element, TextElement) or element.locked:
            return False
        if self.editing_element_id == element_id:
            return True
        self.settle()
        self.select(element_id)
        self.editing_element_id = element_id
        self.text_draft = element.text
        self.mode = EditMode.EDITING
        _logger.debug(f"TEXT_EDIT_START | element:{element_id}")
        return True

    def update_text_draft(self, text: str) -> bool:
        if self.mode != EditMode.EDITING:
            return False
        self.text_draft = text
        return True

    def commit_text_edit(self, new_text: str | None = None) -> ElementBase | None:
        """Write the edited text and return to the selected state."""
        if self.mode != EditMode.EDITING:
            return None
        text = self.text_draft if new_text is None else new_text
        element = self._element(self.editing_element_id)
        self._end_text_edit()
        if element is None or text is None:
            return None
        return self._write(element, {"text": text}, "Edit text")

    def cancel_text_edit(self) -> None:
        """Discard the edit and return to the selected state."""
        if self.mode == EditMode.EDITING:
            self._end_text_edit()

    def _end_text_edit(self) -> None:
        self.editing_element_id = None
        self.text_draft = None
        self.mode = EditMode.SELECTED
