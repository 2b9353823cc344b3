"""Export pipeline.

Turns a slide list into a paginated document, one page per slide:

1. Snapshot the slides so later edits cannot tear the export
2. Load and decode every image any slide references (abort on failure)
3. Render each slide at the pixel ratio and composite it in a worker thread
4. Assemble a PDF, or keep one PNG per slide
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path
from typing import Sequence

from PIL import Image

from ..constants import CANVAS_HEIGHT, CANVAS_WIDTH, THUMBNAIL_PATTERN, ExportFormat, ExportStatus
from ..design import SlideCompositor, render
from ..elements import generate_id
from ..errors import AssetLoadError, ExportError
from ..services.progress import ProgressCallback, ProgressTracker
from ..slides import Slide
from .assets import AssetLoader
from .options import ExportOptions

_logger = logging.getLogger("export")

PDF_POINTS_PER_INCH = 72


@dataclass
class ExportDocument:
    """Result of an export.

    ``pages`` always holds one PNG per slide. ``data`` is the PDF for PDF
    exports and None for PNG exports.
    """

    format: ExportFormat
    file_name: str
    pages: list[bytes] = field(default_factory=list)
    page_size: tuple[int, int] = (CANVAS_WIDTH, CANVAS_HEIGHT)
    data: bytes | None = None

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def save(self, output: Path) -> list[Path]:
        """Write the export to disk.

        Args:
            output: For PDF, a file path or a directory to place
                ``file_name`` in. For PNG, a directory for the pages.

        Returns:
            Paths written.
        """
        output = Path(output)
        if self.format == ExportFormat.PDF:
            path = output / self.file_name if output.is_dir() else output
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(self.data or b"")
            return [path]

        output.mkdir(parents=True, exist_ok=True)
        paths = []
        for number, page in enumerate(self.pages, 1):
            path = output / THUMBNAIL_PATTERN.format(number=number)
            path.write_bytes(page)
            paths.append(path)
        return paths


class ExportPipeline:
    """Export slides through the renderer and compositor.

    Usage:
        pipeline = ExportPipeline(AssetLoader())
        document = await pipeline.export(deck.slides, ExportOptions(quality="medium"))
        document.save(Path("out/carousel.pdf"))
    """

    def __init__(
        self,
        loader: AssetLoader | None = None,
        compositor: SlideCompositor | None = None,
        canvas_width: int = CANVAS_WIDTH,
        canvas_height: int = CANVAS_HEIGHT,
    ):
        self.loader = loader or AssetLoader()
        self.compositor = compositor or SlideCompositor()
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height

    def _composite_page(self, slide: Slide, scale: float, images: dict[str, Image.Image]) -> Image.Image:
        tree = render(
            slide,
            scale,
            canvas_width=self.canvas_width,
            canvas_height=self.canvas_height,
        )
        page = self.compositor.paint(tree, images)
        return self.compositor.flatten(page)

    @staticmethod
    def _assemble_pdf(pages: list[Image.Image], pixel_ratio: int) -> bytes:
        output = BytesIO()
        first, *rest = pages
        first.save(
            output,
            format="PDF",
            save_all=True,
            append_images=rest,
            resolution=float(PDF_POINTS_PER_INCH * pixel_ratio),
        )
        return output.getvalue()

    async def export(
        self,
        slides: Sequence[Slide],
        options: ExportOptions | None = None,
        progress: ProgressCallback | None = None,
    ) -> ExportDocument:
        """Export slides to a document.

        Args:
            slides: Slides in page order. Copied before anything is awaited.
            options: Format, quality and file name.
            progress: Optional async callback receiving ExportProgress.

        Returns:
            ExportDocument with exactly one page per slide.

        Raises:
            AssetLoadError: An image failed to load; names the slide.
            ExportError: Compositing or document assembly failed.
        """
        snapshot = [slide.model_copy(deep=True) for slide in slides]
        options = options or ExportOptions()
        if not snapshot:
            raise ExportError("Nothing to export: the carousel has no slides")

        export_id = generate_id()
        tracker = ProgressTracker(export_id, len(snapshot), progress)
        ratio = options.pixel_ratio
        _logger.info(
            f"EXPORT:{export_id} | START | slides:{len(snapshot)} | "
            f"format:{options.format.value} | ratio:{ratio}"
        )

        try:
            await tracker.start_phase(ExportStatus.LOADING_ASSETS, "Loading images")
            images = await self.loader.preload(snapshot)

            await tracker.start_phase(ExportStatus.COMPOSITING, "Rendering slides")
            pages: list[Image.Image] = []
            for index, slide in enumerate(snapshot):
                try:
                    page = await asyncio.to_thread(self._composite_page, slide, ratio, images)
                except AssetLoadError as e:
                    raise e.locate(index, e.element_id) from e
                except (OSError, ValueError) as e:
                    raise ExportError(f"Failed to render slide {index + 1}: {e}", slide_index=index) from e
                pages.append(page)
                await tracker.slide_done(index)

            await tracker.start_phase(ExportStatus.ASSEMBLING, "Building document")
            png_pages = [
                await asyncio.to_thread(self.compositor.to_png_bytes, page) for page in pages
            ]
            data = None
            if options.format == ExportFormat.PDF:
                try:
                    data = await asyncio.to_thread(self._assemble_pdf, pages, ratio)
                except (OSError, ValueError) as e:
                    raise ExportError(f"Failed to assemble PDF: {e}") from e

        except asyncio.CancelledError:
            await tracker.cancel()
            raise
        except (AssetLoadError, ExportError) as e:
            await tracker.fail(str(e))
            raise

        document = ExportDocument(
            format=options.format,
            file_name=options.get_file_name(),
            pages=png_pages,
            page_size=pages[0].size,
            data=data,
        )
        await tracker.complete()
        return document
