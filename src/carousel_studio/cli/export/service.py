"""Stateless service for carousel export."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Optional

from carousel_studio.constants import ExportFormat, ExportQuality
from carousel_studio.errors import AssetLoadError, ExportError
from carousel_studio.services import ProgressCallback

from ..core.types import ExportResult, Failure, Result, Success
from ..deck.service import open_session


class ExportService:
    """Stateless service for exporting drafts.

    All state is passed via params - no instance state.
    """

    async def export(
        self,
        draft_path: Path,
        format: Optional[str] = None,
        quality: Optional[str] = None,
        output: Optional[Path] = None,
        progress: ProgressCallback | None = None,
    ) -> Result[ExportResult]:
        """Export a draft to PDF or PNG pages.

        Returns:
            Result containing ExportResult or Failure
        """
        opened = open_session(draft_path)
        if isinstance(opened, Failure):
            return opened
        session = opened.value

        options = session.default_export_options()
        updates = {}
        if format:
            updates["format"] = ExportFormat(format)
        if quality:
            updates["quality"] = ExportQuality(quality)
        options = options.model_copy(update=updates)

        start = time.time()
        try:
            document = await session.export(options, progress)
        except AssetLoadError as e:
            details = {"reason": e.reason, "source": e.src}
            if e.slide_index is not None:
                details["slide"] = e.slide_index + 1
            if e.element_id:
                details["element"] = e.element_id
            return Failure("Export aborted: an image could not be loaded", details)
        except ExportError as e:
            return Failure("Export failed", {"reason": str(e)})
        finally:
            await session.loader.close()

        target = output or Path.cwd()
        if document.format == ExportFormat.PNG and output is None:
            target = Path.cwd() / Path(document.file_name).stem
        try:
            paths = document.save(target)
        except OSError as e:
            return Failure(f"Cannot write export: {target}", {"reason": str(e)})

        return Success(
            ExportResult(
                paths=tuple(paths),
                page_count=document.page_count,
                format=document.format.value,
                duration_seconds=time.time() - start,
            )
        )
