"""Editor session.

One session owns one slide collection and everything that edits it: the
transform engine, undo history, view state, draft storage and exports.
Structural guard violations (too many or too few slides) are turned into
warning notices here and leave the document untouched.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Sequence, TypeVar

from ..config import EditorConfig
from ..constants import ZOOM_MAX, ZOOM_MIN, EditMode, ElementPatch, NoticeLevel
from ..design import SlideCompositor, VisualTree, render
from ..elements import (
    ElementBase,
    ElementType,
    ImageElement,
    ShapeElement,
    TextElement,
    clamp_patch,
    create_default_element,
    create_image_element,
    create_shape_element,
    create_text_element,
    update_element,
)
from ..errors import AssetLoadError, MinimumSlideCount, SlideLimitExceeded, ValidationError
from ..export import AssetLoader, ExportDocument, ExportOptions, ExportPipeline, ExportRunner
from ..services import Draft, DraftStore, ProgressCallback
from ..slides import CanvasTemplate, Slide, SlideCollection, get_template
from .history import EditorHistory, HistoryEntry
from .transform import TransformEngine

_logger = logging.getLogger("editor")

T = TypeVar("T")


@dataclass(frozen=True)
class Notice:
    """User-visible message raised by the session."""

    level: NoticeLevel
    message: str


class EditorSession:
    """Carousel editing session.

    Usage:
        session = EditorSession()
        session.add_slide()
        text = session.insert_text(text="Hello", x=100, y=100)
        session.engine.begin_drag(text.id)
        session.engine.update_drag(140, 120)
        session.engine.end_drag()
        session.undo()
        document = await session.export(ExportOptions(format="pdf"))
    """

    def __init__(
        self,
        slides: Sequence[Slide] | None = None,
        config: EditorConfig | None = None,
        store: DraftStore | None = None,
        loader: AssetLoader | None = None,
        compositor: SlideCompositor | None = None,
    ):
        """Initialize the session.

        Args:
            slides: Initial slides. Defaults to one empty slide.
            config: Editor configuration.
            store: Draft storage. Defaults to the configured draft path.
            loader: Asset loader shared by insertion and export.
            compositor: Compositor used for thumbnails and export.
        """
        self.config = config or EditorConfig()
        canvas = self.config.canvas

        self.deck = SlideCollection(
            list(slides) if slides else [self._new_slide()],
            max_slides=canvas.max_slides,
        )
        self.history = EditorHistory(self.config.history.max_entries)
        self.engine = TransformEngine(self.deck, checkpoint=self._checkpoint)
        self.store = store or DraftStore(self.config.storage.get_draft_path())
        self.loader = loader or AssetLoader(
            timeout=self.config.export.asset_timeout_seconds,
            max_retries=self.config.export.asset_max_retries,
        )
        self.compositor = compositor or SlideCompositor(fonts_dir=self.config.fonts.fonts_dir)
        self.runner = ExportRunner(
            ExportPipeline(self.loader, self.compositor, canvas.width, canvas.height)
        )

        self.zoom = 1.0
        self.show_grid = False
        self.is_exporting = False
        self.template_id: str | None = None
        self.notices: list[Notice] = []

    # =========================================================================
    # State access
    # =========================================================================

    @property
    def slides(self) -> tuple[Slide, ...]:
        return self.deck.slides

    @property
    def current_index(self) -> int:
        return self.deck.current_index

    @property
    def current_slide(self) -> Slide:
        return self.deck.current_slide

    @property
    def selected_id(self) -> str | None:
        return self.engine.selected_id

    @property
    def selected_element(self) -> ElementBase | None:
        return self.engine.selected_element

    @property
    def mode(self) -> EditMode:
        return self.engine.mode

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    def pop_notices(self) -> list[Notice]:
        """Return and forget pending notices."""
        notices, self.notices = self.notices, []
        return notices

    # =========================================================================
    # Internals
    # =========================================================================

    def _new_slide(self) -> Slide:
        return Slide(background_color=self.config.canvas.default_background)

    def _notify(self, level: NoticeLevel, message: str) -> None:
        self.notices.append(Notice(level, message))

    def _capture(self, description: str = "") -> HistoryEntry:
        return HistoryEntry.capture(self.deck, self.engine.selected_id, description)

    def _checkpoint(self, description: str) -> None:
        self.history.push(self._capture(description))

    def _structural(self, description: str, operation: Callable[[], T]) -> T | None:
        """Run a slide collection operation with history and guard recovery.

        History records the change only when the operation did something.
        """
        self.engine.settle()
        before = self._capture(description)
        try:
            result = operation()
        except (SlideLimitExceeded, MinimumSlideCount) as e:
            _logger.warning(f"{description.upper().replace(' ', '_')} rejected | {e}")
            self._notify(NoticeLevel.WARNING, str(e))
            return None

        if result is not None and result is not False:
            self.history.push(before)
        self.engine.sync()
        return result

    def _centered(self, fields: dict[str, Any], width: float, height: float) -> dict[str, Any]:
        canvas = self.config.canvas
        fields.setdefault("x", round((canvas.width - width) / 2))
        fields.setdefault("y", round((canvas.height - height) / 2))
        return fields

    def _place(self, element: ElementBase, description: str) -> ElementBase:
        self.engine.settle()
        self._checkpoint(description)
        element = self.deck.current_slide.add_element(element)
        self.engine.select(element.id)
        _logger.info(
            f"ELEMENT_ADD | slide:{self.deck.current_index + 1} | "
            f"type:{element.type} | id:{element.id}"
        )
        return element

    # =========================================================================
    # Element operations
    # =========================================================================

    def add_element(self, element_type: ElementType | str) -> ElementBase:
        """Insert the starter text or shape in the middle of the canvas.

        Raises:
            ValidationError: ``element_type`` is image or unknown.
        """
        canvas = self.config.canvas
        element = create_default_element(element_type, canvas.width, canvas.height)
        return self._place(element, f"Add {element.type}")

    def insert_text(self, initial: ElementPatch | None = None, **fields: Any) -> TextElement:
        """Insert a text element; geometry below the minimums is clamped."""
        data = clamp_patch({**(initial or {}), **fields})
        element = create_text_element(data)
        if "x" not in data or "y" not in data:
            element = element.model_copy(
                update=self._centered({k: data[k] for k in ("x", "y") if k in data}, element.width, element.height)
            )
        return self._place(element, "Add text")

    def insert_shape(self, config: ElementPatch | None = None, **fields: Any) -> ShapeElement:
        """Insert a shape from the asset catalog, clamped like ``insert_text``."""
        data = clamp_patch({**(config or {}), **fields})
        element = create_shape_element(data)
        if "x" not in data or "y" not in data:
            element = element.model_copy(
                update=self._centered({k: data[k] for k in ("x", "y") if k in data}, element.width, element.height)
            )
        return self._place(element, "Add shape")

    def insert_image(
        self,
        src: str,
        natural_width: float,
        natural_height: float,
        **fields: Any,
    ) -> ImageElement:
        """Insert an image at its natural size, centered on the canvas.

        Raises:
            ValidationError: Empty source or non-positive natural size.
        """
        fields = clamp_patch(dict(fields))
        element = create_image_element(src, natural_width, natural_height, **fields)
        if "x" not in fields or "y" not in fields:
            element = element.model_copy(
                update=self._centered({k: fields[k] for k in ("x", "y") if k in fields}, element.width, element.height)
            )
        return self._place(element, "Add image")

    async def insert_image_from_source(self, src: str, **fields: Any) -> ImageElement:
        """Load an image to learn its natural size, then insert it.

        Raises:
            AssetLoadError: The image could not be loaded.
        """
        try:
            width, height = await self.loader.natural_size(src)
        except AssetLoadError as e:
            self._notify(NoticeLevel.ERROR, str(e))
            raise
        return self.insert_image(src, width, height, **fields)

    def select_element(self, element_id: str) -> bool:
        return self.engine.select(element_id)

    def clear_selection(self) -> None:
        self.engine.clear_selection()

    def update_element(self, element_id: str, patch: ElementPatch) -> ElementBase | None:
        """Patch an element of the current slide, clamping geometry.

        Returns:
            The updated element, or None when the id is not on the slide.
        """
        element = self.deck.current_slide.find_element(element_id)
        if element is None:
            return None
        updated = update_element(element, patch)
        if updated is element or updated.model_dump() == element.model_dump():
            return element
        self._checkpoint("Update element")
        self.deck.current_slide.replace_element(updated)
        return updated

    def delete_element(self, element_id: str | None = None) -> ElementBase | None:
        """Remove an element from the current slide (the selection by default)."""
        self.engine.settle()
        element_id = element_id or self.engine.selected_id
        if element_id is None or self.deck.current_slide.find_element(element_id) is None:
            return None
        self._checkpoint("Delete element")
        removed = self.deck.current_slide.remove_element(element_id)
        self.engine.sync()
        _logger.info(f"ELEMENT_DELETE | slide:{self.deck.current_index + 1} | id:{element_id}")
        return removed

    # =========================================================================
    # Slide operations
    # =========================================================================

    def set_current_slide(self, index: int) -> bool:
        """Switch slides, clearing the selection. Out-of-range is ignored."""
        if not self.deck.in_range(index):
            return False
        self.engine.clear_selection()
        return self.deck.set_current(index)

    def add_slide(self) -> Slide | None:
        return self._structural("Add slide", lambda: self.deck.add_slide(self._new_slide()))

    def duplicate_slide(self, index: int | None = None) -> Slide | None:
        index = self.deck.current_index if index is None else index
        return self._structural("Duplicate slide", lambda: self.deck.duplicate_slide(index))

    def delete_slide(self, index: int | None = None) -> Slide | None:
        index = self.deck.current_index if index is None else index
        return self._structural("Delete slide", lambda: self.deck.delete_slide(index))

    def reorder_slide(self, from_index: int, to_index: int) -> bool:
        return bool(
            self._structural("Reorder slides", lambda: self.deck.reorder_slide(from_index, to_index))
        )

    def update_slide_background(self, color: str, index: int | None = None) -> bool:
        """Change a slide's background color (current slide by default).

        Raises:
            ValidationError: The color cannot be painted.
        """
        index = self.deck.current_index if index is None else index
        if not self.deck.in_range(index) or self.deck[index].background_color == color:
            return False
        return bool(
            self._structural("Change background", lambda: self.deck.update_background(index, color))
        )

    def set_background_image(self, src: str | None, index: int | None = None) -> bool:
        """Set or clear a slide's cover background image."""
        index = self.deck.current_index if index is None else index
        if not self.deck.in_range(index) or self.deck[index].background_image == src:
            return False

        def apply() -> bool:
            self.deck[index].background_image = src or None
            return True

        return bool(self._structural("Change background image", apply))

    def set_slides(self, slides: Sequence[Slide]) -> bool:
        """Replace every slide and go to the first one.

        Raises:
            ValidationError: Slide count out of bounds or duplicate ids.
        """
        self.engine.clear_selection()
        return bool(self._structural("Replace slides", lambda: self.deck.replace_all(slides, 0) or True))

    def apply_template(self, template: CanvasTemplate | str) -> bool:
        """Replace every slide with fresh copies of a template's slides."""
        if isinstance(template, str):
            found = get_template(template)
            if found is None:
                _logger.warning(f"TEMPLATE_NOT_FOUND | id:{template}")
                self._notify(NoticeLevel.WARNING, f"Unknown template: {template}")
                return False
            template = found

        applied = self.set_slides(template.instantiate())
        if applied:
            self.template_id = template.id
            _logger.info(f"TEMPLATE_APPLIED | id:{template.id} | slides:{len(self.deck)}")
        return applied

    # =========================================================================
    # History
    # =========================================================================

    def _restore(self, entry: HistoryEntry) -> None:
        self.engine.clear_selection()
        self.deck.replace_all(entry.slides(), entry.current_index)
        if entry.selected_id:
            self.engine.select(entry.selected_id)

    def undo(self) -> bool:
        """Step back one change. Returns False when there is nothing to undo."""
        self.engine.settle()
        entry = self.history.undo(self._capture())
        if entry is None:
            return False
        self._restore(entry)
        return True

    def redo(self) -> bool:
        """Re-apply the last undone change."""
        self.engine.settle()
        entry = self.history.redo(self._capture())
        if entry is None:
            return False
        self._restore(entry)
        return True

    # =========================================================================
    # View
    # =========================================================================

    def set_zoom(self, zoom: float) -> float:
        """Set the canvas zoom, clamped to the supported range."""
        self.zoom = min(ZOOM_MAX, max(ZOOM_MIN, float(zoom)))
        return self.zoom

    def toggle_grid(self) -> bool:
        self.show_grid = not self.show_grid
        return self.show_grid

    def render_live(self) -> VisualTree:
        """Visual tree of the current slide as the editor canvas shows it.

        In-flight gestures are applied and text under edit is hidden.
        """
        canvas = self.config.canvas
        return render(
            self.deck.current_slide,
            self.zoom,
            hidden=self.engine.hidden_ids,
            view=self.engine.preview_element,
            canvas_width=canvas.width,
            canvas_height=canvas.height,
        )

    def render_thumbnails(self, scale: float | None = None) -> list[VisualTree]:
        """Visual trees of every slide at thumbnail scale."""
        canvas = self.config.canvas
        scale = scale or canvas.thumbnail_scale
        return [
            render(slide, scale, canvas_width=canvas.width, canvas_height=canvas.height)
            for slide in self.deck
        ]

    async def paint_thumbnails(self, scale: float | None = None) -> list[bytes]:
        """PNG thumbnails of every slide, images included.

        Raises:
            AssetLoadError: An image could not be loaded.
        """
        trees = self.render_thumbnails(scale)
        images = await self.loader.preload(self.deck.snapshot())
        pages = []
        for tree in trees:
            page = await asyncio.to_thread(self.compositor.paint, tree, images)
            pages.append(await asyncio.to_thread(self.compositor.to_png_bytes, page))
        return pages

    # =========================================================================
    # Export
    # =========================================================================

    def default_export_options(self) -> ExportOptions:
        export = self.config.export
        return ExportOptions(
            format=export.default_format,
            quality=export.default_quality,
            file_prefix=export.file_prefix,
        )

    def start_export(
        self,
        options: ExportOptions | None = None,
        progress: ProgressCallback | None = None,
    ) -> asyncio.Task[ExportDocument]:
        """Start an export in the background, cancelling any running one."""
        self.engine.settle()
        self.is_exporting = True
        task = self.runner.start(self.deck.snapshot(), options or self.default_export_options(), progress)
        task.add_done_callback(self._export_finished)
        return task

    def _export_finished(self, task: asyncio.Task) -> None:
        self.is_exporting = self.runner.is_running
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self._notify(NoticeLevel.ERROR, str(error))

    async def export(
        self,
        options: ExportOptions | None = None,
        progress: ProgressCallback | None = None,
    ) -> ExportDocument:
        """Export every slide and wait for the document.

        Raises:
            AssetLoadError: An image failed to load; names the slide.
            ExportError: Compositing or assembly failed.
        """
        return await self.start_export(options, progress)

    # =========================================================================
    # Drafts
    # =========================================================================

    def save_draft(self) -> None:
        self.engine.settle()
        self.store.save(
            Draft(
                slides=self.deck.snapshot(),
                current_slide_index=self.deck.current_index,
                template_id=self.template_id,
            )
        )

    def load_draft(self) -> bool:
        """Replace the document with the saved draft.

        Returns:
            False when there is no draft or it is unreadable.
        """
        try:
            draft = self.store.load()
            if draft is None:
                return False
            self.engine.clear_selection()
            self.deck.replace_all(draft.slides, draft.current_slide_index)
        except ValidationError as e:
            _logger.warning(f"DRAFT_LOAD_FAILED | {e}")
            self._notify(NoticeLevel.WARNING, "Failed to load carousel draft")
            return False

        self.template_id = draft.template_id
        self.history.clear()
        return True

    def clear_draft(self) -> bool:
        return self.store.clear()

    def reset(self) -> None:
        """Back to a single empty slide; the saved draft is removed."""
        self.engine.clear_selection()
        self._checkpoint("Reset")
        self.deck.replace_all([self._new_slide()], 0)
        self.template_id = None
        self.clear_draft()
