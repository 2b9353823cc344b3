"""Background export runner.

Runs exports as asyncio tasks. Starting an export cancels the one still in
flight, so at most one export runs per runner.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from ..services.progress import ProgressCallback
from ..slides import Slide
from .options import ExportOptions
from .pipeline import ExportDocument, ExportPipeline

_logger = logging.getLogger("export")


class ExportRunner:
    """Single-flight export scheduler.

    Usage:
        runner = ExportRunner(pipeline)
        task = runner.start(deck.snapshot(), options)
        document = await task
    """

    def __init__(self, pipeline: ExportPipeline):
        self.pipeline = pipeline
        self._task: asyncio.Task[ExportDocument] | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(
        self,
        slides: Sequence[Slide],
        options: ExportOptions | None = None,
        progress: ProgressCallback | None = None,
    ) -> asyncio.Task[ExportDocument]:
        """Start an export, cancelling any export still running.

        The slides are copied before this returns.
        """
        snapshot = [slide.model_copy(deep=True) for slide in slides]
        if self.is_running:
            _logger.info("EXPORT_SUPERSEDED | cancelling previous export")
            self._task.cancel()
        self._task = asyncio.create_task(self.pipeline.export(snapshot, options, progress))
        return self._task

    async def cancel(self) -> bool:
        """Cancel the running export. Returns False when none was running."""
        if not self.is_running:
            return False
        task = self._task
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        return True
