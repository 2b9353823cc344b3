"""Undo/redo history.

Every change is recorded as a snapshot of the whole editor document taken
*before* the change: the slide list, the current slide index and the
selected element. Snapshots are JSON strings so later mutations of the live
slides can never leak into history.
"""

from __future__ import annotations

import json
import logging

from pydantic import BaseModel

from ..constants import HISTORY_MAX_ENTRIES
from ..slides import Slide, SlideCollection

_logger = logging.getLogger("editor")


class HistoryEntry(BaseModel):
    """A snapshot of the editor document."""

    description: str
    slides_json: str
    current_index: int = 0
    selected_id: str | None = None

    @classmethod
    def capture(
        cls,
        deck: SlideCollection,
        selected_id: str | None = None,
        description: str = "",
    ) -> "HistoryEntry":
        """Snapshot a slide collection."""
        return cls(
            description=description,
            slides_json=json.dumps(deck.to_payload()),
            current_index=deck.current_index,
            selected_id=selected_id,
        )

    def slides(self) -> list[Slide]:
        """Rebuild the slides held by this snapshot."""
        return SlideCollection.parse_payload(json.loads(self.slides_json))


class EditorHistory:
    """Bounded undo and redo stacks of document snapshots.

    Usage:
        history = EditorHistory()
        history.push(HistoryEntry.capture(deck, description="Add slide"))
        deck.add_slide()
        previous = history.undo(HistoryEntry.capture(deck))
    """

    def __init__(self, max_entries: int = HISTORY_MAX_ENTRIES):
        self.max_entries = max_entries
        self._undo: list[HistoryEntry] = []
        self._redo: list[HistoryEntry] = []

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def push(self, entry: HistoryEntry) -> None:
        """Record the state before a new change. Clears the redo stack."""
        self._undo.append(entry)
        if len(self._undo) > self.max_entries:
            self._undo = self._undo[-self.max_entries:]
        self._redo.clear()
        _logger.debug(f"HISTORY_PUSH | {entry.description} | depth:{len(self._undo)}")

    def undo(self, current: HistoryEntry) -> HistoryEntry | None:
        """Step back one change.

        Args:
            current: Snapshot of the live state, kept for redo.

        Returns:
            The snapshot to restore, or None when there is nothing to undo.
        """
        if not self._undo:
            return None
        entry = self._undo.pop()
        current.description = entry.description
        self._redo.append(current)
        _logger.debug(f"HISTORY_UNDO | {entry.description} | depth:{len(self._undo)}")
        return entry

    def redo(self, current: HistoryEntry) -> HistoryEntry | None:
        """Re-apply the last undone change.

        Returns:
            The snapshot to restore, or None when there is nothing to redo.
        """
        if not self._redo:
            return None
        entry = self._redo.pop()
        current.description = entry.description
        self._undo.append(current)
        _logger.debug(f"HISTORY_REDO | {entry.description} | depth:{len(self._undo)}")
        return entry

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()
