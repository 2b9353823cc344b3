"""Draft storage service.

Saves the slide list as a JSON draft file so an editing session can be
resumed. The file holds the plain serializable ``Slide[]`` form plus the
current slide index; a bare ``Slide[]`` list is accepted on load too.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic import ValidationError as PydanticValidationError

from ..constants import MAX_SLIDES, MIN_SLIDES, get_draft_path
from ..elements import CanvasModel
from ..errors import ValidationError
from ..slides import Slide

_logger = logging.getLogger("storage")


class Draft(CanvasModel):
    """A saved editing session."""

    slides: list[Slide] = Field(min_length=MIN_SLIDES, max_length=MAX_SLIDES)
    current_slide_index: int = 0
    template_id: str | None = None
    saved_at: datetime | None = None


class DraftStore:
    """Reads and writes draft files.

    Usage:
        store = DraftStore(Path("drafts/carousel-draft.json"))
        store.save(Draft(slides=deck.snapshot()))
        draft = store.load()
        store.clear()
    """

    def __init__(self, path: Path | None = None):
        """Initialize the store.

        Args:
            path: Draft file. Defaults to drafts/carousel-draft.json under the
                project root.
        """
        self.path = Path(path) if path else get_draft_path()

    def exists(self) -> bool:
        return self.path.exists()

    def save(self, draft: Draft) -> Path:
        """Write a draft, stamping ``saved_at``.

        Returns:
            Path to the draft file.
        """
        draft = draft.model_copy(update={"saved_at": datetime.now()})
        self.path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(draft.to_payload(), f, indent=2, ensure_ascii=False)

        _logger.info(f"DRAFT_SAVED | slides:{len(draft.slides)} | path:{self.path}")
        return self.path

    def load(self) -> Draft | None:
        """Read the draft.

        Returns:
            The draft, or None when no draft file exists.

        Raises:
            ValidationError: The file is not a valid draft.
        """
        if not self.path.exists():
            return None

        try:
            with open(self.path, encoding="utf-8") as f:
                data: Any = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Draft is not valid JSON: {e}", field="draft") from e

        if isinstance(data, list):
            data = {"slides": data}

        try:
            draft = Draft.model_validate(data)
        except PydanticValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first.get("loc", ()))
            raise ValidationError(f"Invalid draft at {location}: {first.get('msg')}", field=location) from e

        _logger.info(f"DRAFT_LOADED | slides:{len(draft.slides)} | path:{self.path}")
        return draft

    def clear(self) -> bool:
        """Delete the draft file. Returns False when there was none."""
        if not self.path.exists():
            return False
        self.path.unlink()
        _logger.info(f"DRAFT_CLEARED | path:{self.path}")
        return True
