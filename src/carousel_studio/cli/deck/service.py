"""Stateless service for draft inspection, creation and thumbnails."""

from __future__ import annotations

import time
from collections import Counter
from pathlib import Path
from typing import Optional

from carousel_studio.config import load_editor_config
from carousel_studio.constants import THUMBNAIL_PATTERN
from carousel_studio.editor import EditorSession
from carousel_studio.errors import EditorError
from carousel_studio.services import DraftStore

from ..core.types import DeckSummary, ExportResult, Failure, Result, SlideSummary, Success


def open_session(draft_path: Path) -> Result[EditorSession]:
    """Load a draft into a new editing session."""
    session = EditorSession(config=load_editor_config(), store=DraftStore(draft_path))
    if not session.load_draft():
        notices = session.pop_notices()
        reason = notices[0].message if notices else "no draft found"
        return Failure(f"Cannot open draft: {draft_path}", {"reason": reason})
    return Success(session)


class DeckService:
    """Stateless service for draft files.

    All state is passed via params - no instance state.
    """

    def describe(self, draft_path: Path) -> Result[DeckSummary]:
        """Summarize the slides of a draft."""
        opened = open_session(draft_path)
        if isinstance(opened, Failure):
            return opened
        session = opened.value

        rows = []
        for number, slide in enumerate(session.slides, 1):
            counts = Counter(element.type for element in slide.elements)
            rows.append(
                SlideSummary(
                    number=number,
                    slide_id=slide.id,
                    background=slide.background_color,
                    element_counts=dict(counts),
                    has_background_image=bool(slide.background_image),
                )
            )

        return Success(
            DeckSummary(
                path=draft_path,
                slides=tuple(rows),
                current_index=session.current_index,
                template_id=session.template_id,
            )
        )

    def create(self, draft_path: Path, template_id: Optional[str] = None) -> Result[Path]:
        """Write a new draft with one empty slide or a template's slides."""
        session = EditorSession(config=load_editor_config(), store=DraftStore(draft_path))
        if template_id and not session.apply_template(template_id):
            return Failure(f"Unknown template: {template_id}")

        try:
            session.save_draft()
        except OSError as e:
            return Failure(f"Cannot write draft: {draft_path}", {"reason": str(e)})
        return Success(draft_path)

    async def thumbnails(self, draft_path: Path, output_dir: Path, scale: float) -> Result[ExportResult]:
        """Render every slide of a draft to PNG thumbnails."""
        opened = open_session(draft_path)
        if isinstance(opened, Failure):
            return opened
        session = opened.value

        start = time.time()
        try:
            pages = await session.paint_thumbnails(scale)
        except EditorError as e:
            return Failure("Thumbnail rendering failed", {"reason": str(e)})
        finally:
            await session.loader.close()

        output_dir.mkdir(parents=True, exist_ok=True)
        paths = []
        for number, page in enumerate(pages, 1):
            path = output_dir / THUMBNAIL_PATTERN.format(number=number)
            path.write_bytes(page)
            paths.append(path)

        return Success(
            ExportResult(
                paths=tuple(paths),
                page_count=len(paths),
                format="png",
                duration_seconds=time.time() - start,
            )
        )
