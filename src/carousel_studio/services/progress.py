"""Export progress tracking.

Keeps the progress state of one export run and reports it through an
optional async callback.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, Field

from ..constants import ExportStatus

# Logger for export events
_logger = logging.getLogger("export")


class ExportProgress(BaseModel):
    """Progress of an export run."""

    export_id: str
    status: ExportStatus = ExportStatus.PENDING
    total_slides: int = 0
    completed_slides: int = 0
    current_slide: int | None = None
    message: str = ""
    error: str | None = None

    progress: float = Field(default=0.0, ge=0.0, le=1.0)
    """Fraction of slides composited."""

    @property
    def is_finished(self) -> bool:
        return self.status in (
            ExportStatus.COMPLETED,
            ExportStatus.FAILED,
            ExportStatus.CANCELLED,
        )


# Type for progress callback
ProgressCallback = Callable[[ExportProgress], Awaitable[None]]


class ProgressTracker:
    """Tracks and reports the progress of one export.

    Usage:
        tracker = ProgressTracker("exp-1", total_slides=4, callback=show)
        await tracker.start_phase(ExportStatus.LOADING_ASSETS, "Loading images")
        await tracker.slide_done(0)
        await tracker.complete()
    """

    def __init__(
        self,
        export_id: str,
        total_slides: int,
        callback: ProgressCallback | None = None,
    ):
        """Initialize the tracker.

        Args:
            export_id: Id used in log lines.
            total_slides: Number of pages the export produces.
            callback: Optional callback for progress updates.
        """
        self.export_id = export_id
        self.callback = callback
        self._progress = ExportProgress(export_id=export_id, total_slides=total_slides)

    @property
    def progress(self) -> ExportProgress:
        """Get the current progress state."""
        return self._progress

    async def emit(self) -> None:
        """Emit a progress update."""
        if self.callback:
            await self.callback(self._progress)

    async def update(self, **kwargs: Any) -> None:
        """Update progress state and emit.

        Args:
            **kwargs: Fields to update on the progress model.
        """
        self._progress = self._progress.model_copy(update=kwargs)
        await self.emit()

    async def start_phase(self, status: ExportStatus, message: str = "") -> None:
        _logger.info(f"EXPORT:{self.export_id} | PHASE_START | {status.value}")
        await self.update(status=status, message=message)

    async def slide_done(self, index: int) -> None:
        """Record one composited slide (0-based index)."""
        completed = self._progress.completed_slides + 1
        total = max(self._progress.total_slides, 1)
        _logger.info(f"EXPORT:{self.export_id} | SLIDE_DONE | slide:{index + 1}/{total}")
        await self.update(
            completed_slides=completed,
            current_slide=index,
            progress=min(1.0, completed / total),
            message=f"Slide {index + 1} of {total}",
        )

    async def complete(self, message: str = "Export complete") -> None:
        _logger.info(f"EXPORT:{self.export_id} | COMPLETE | pages:{self._progress.completed_slides}")
        await self.update(status=ExportStatus.COMPLETED, progress=1.0, message=message)

    async def fail(self, error: str) -> None:
        _logger.error(f"EXPORT:{self.export_id} | FAILED | {error}")
        await self.update(status=ExportStatus.FAILED, error=error, message="Export failed")

    async def cancel(self) -> None:
        _logger.info(f"EXPORT:{self.export_id} | CANCELLED")
        self._progress = self._progress.model_copy(
            update={"status": ExportStatus.CANCELLED, "message": "Export cancelled"}
        )
