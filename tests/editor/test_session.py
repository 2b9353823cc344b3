"""Unit tests for the editor session.

Tests element insertion, slide operations with guard notices, undo/redo,
view state and drafts.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from carousel_studio.config import CanvasSettings, EditorConfig, StorageSettings
from carousel_studio.constants import MAX_SLIDES, EditMode, NoticeLevel, ZOOM_MAX, ZOOM_MIN
from carousel_studio.design import TextPrimitive
from carousel_studio.editor import EditorSession
from carousel_studio.elements import ImageElement, ShapeType, TextElement
from carousel_studio.errors import AssetLoadError, ValidationError
from carousel_studio.services import DraftStore
from carousel_studio.slides import Slide


class TestElementOperations:
    """Tests for inserting, updating and deleting elements."""

    def test_insert_text_clamps_small_geometry(self, session: EditorSession):
        """Test a 10x5 text request becomes a 50x20 element."""
        element = session.insert_text(text="Hi", width=10, height=5)

        assert isinstance(element, TextElement)
        assert (element.width, element.height) == (50, 20)
        assert session.current_slide.find_element(element.id) is not None

    def test_insert_selects_new_element(self, session: EditorSession):
        element = session.insert_shape(shapeType="circle")

        assert session.selected_id == element.id
        assert session.mode == EditMode.SELECTED
        assert element.shape_type == ShapeType.CIRCLE

    def test_insert_centers_without_position(self, session: EditorSession):
        element = session.insert_shape(width=200, height=100)

        assert (element.x, element.y) == (440, 490)

    def test_insert_keeps_explicit_position(self, session: EditorSession):
        element = session.insert_text(text="Hi", x=12, y=34)

        assert (element.x, element.y) == (12, 34)

    def test_add_element_image_needs_source(self, session: EditorSession):
        with pytest.raises(ValidationError):
            session.add_element("image")

    def test_insert_image(self, session: EditorSession, png_data_url):
        element = session.insert_image(png_data_url(), 400, 300)

        assert isinstance(element, ImageElement)
        assert (element.x, element.y) == (340, 390)

    @pytest.mark.asyncio
    async def test_insert_image_from_source_reads_natural_size(self, session: EditorSession, png_data_url):
        element = await session.insert_image_from_source(png_data_url("#00ff00", (120, 80)))

        assert (element.natural_width, element.natural_height) == (120, 80)
        assert (element.width, element.height) == (120, 80)

    @pytest.mark.asyncio
    async def test_insert_image_from_bad_source_notifies(self, session: EditorSession):
        with pytest.raises(AssetLoadError):
            await session.insert_image_from_source("data:image/png;base64,bm90IGFuIGltYWdl")

        notices = session.pop_notices()
        assert notices[0].level == NoticeLevel.ERROR
        assert session.current_slide.elements == []

    def test_update_element(self, session: EditorSession):
        element = session.insert_text(text="Hi")

        updated = session.update_element(element.id, {"rotation": -30, "width": 1})

        assert updated.rotation == 330
        assert updated.width == 50

    def test_update_ignores_infinite_rotation(self, session: EditorSession):
        element = session.insert_text(text="Hi")
        session.update_element(element.id, {"rotation": 45})
        undo_before = session.can_undo

        updated = session.update_element(element.id, {"rotation": float("inf")})

        assert updated.rotation == 45
        assert session.can_undo == undo_before

    def test_update_unknown_element(self, session: EditorSession):
        assert session.update_element("missing", {"x": 1}) is None
        assert not session.can_undo

    def test_delete_selected_element(self, session: EditorSession):
        element = session.insert_text(text="Hi")

        removed = session.delete_element()

        assert removed.id == element.id
        assert session.current_slide.elements == []
        assert session.selected_id is None

    def test_select_element(self, session: EditorSession):
        first = session.insert_text(text="First")
        session.insert_text(text="Second")

        assert session.select_element(first.id)
        assert session.selected_id == first.id
        assert not session.select_element("missing")

        session.clear_selection()
        assert session.selected_id is None


class TestSlideOperations:
    """Tests for slide operations through the session."""

    def test_add_four_slides(self, session: EditorSession):
        for _ in range(4):
            session.add_slide()

        assert len(session.slides) == 5
        assert session.current_index == 4

    def test_delete_last_slide_is_rejected_with_notice(self, session: EditorSession):
        assert session.delete_slide(0) is None

        assert len(session.slides) == 1
        notices = session.pop_notices()
        assert notices[0].level == NoticeLevel.WARNING
        assert not session.can_undo

    def test_add_at_limit_is_rejected_with_notice(self, session: EditorSession):
        for _ in range(MAX_SLIDES - 1):
            session.add_slide()
        session.pop_notices()

        assert session.add_slide() is None

        assert len(session.slides) == MAX_SLIDES
        assert len(session.pop_notices()) == 1

    def test_slide_change_clears_selection(self, session: EditorSession):
        session.add_slide()
        session.set_current_slide(0)
        session.insert_text(text="Hi")

        session.set_current_slide(1)

        assert session.selected_id is None
        assert session.mode == EditMode.IDLE

    def test_out_of_range_slide_change_is_ignored(self, session: EditorSession):
        assert not session.set_current_slide(3)
        assert session.current_index == 0

    def test_duplicate_current_slide(self, session: EditorSession):
        session.insert_text(text="Hi")

        copy = session.duplicate_slide()

        assert len(session.slides) == 2
        assert session.current_index == 1
        assert copy.elements[0].text == "Hi"

    def test_reorder(self, session: EditorSession):
        session.add_slide()
        session.add_slide()
        ids = [slide.id for slide in session.slides]

        assert session.reorder_slide(2, 0)
        assert [slide.id for slide in session.slides] == [ids[2], ids[0], ids[1]]

    def test_background(self, session: EditorSession, png_data_url):
        assert session.update_slide_background("#000000")
        assert session.set_background_image(png_data_url())

        assert session.current_slide.background_color == "#000000"
        assert session.current_slide.background_image.startswith("data:")

    def test_apply_template(self, session: EditorSession):
        assert session.apply_template("minimal-dark")

        assert len(session.slides) == 3
        assert session.template_id == "minimal-dark"
        assert session.current_index == 0

    def test_apply_unknown_template_notifies(self, session: EditorSession):
        assert not session.apply_template("nope")

        assert len(session.slides) == 1
        assert "nope" in session.pop_notices()[0].message


class TestUndoRedo:
    """Tests for session history."""

    def test_undo_add_slide(self, session: EditorSession):
        session.add_slide()

        assert session.undo()

        assert len(session.slides) == 1
        assert session.can_redo

    def test_redo_add_slide(self, session: EditorSession):
        session.add_slide()
        session.undo()

        assert session.redo()

        assert len(session.slides) == 2

    def test_undo_drag(self, session: EditorSession):
        element = session.insert_shape(x=100, y=100)
        session.engine.begin_drag(element.id)
        session.engine.update_drag(300, 300)
        session.engine.end_drag()

        session.undo()

        assert session.current_slide.find_element(element.id).x == 100

    def test_undo_commits_running_edit_first(self, session: EditorSession):
        element = session.insert_text(text="Before")
        session.engine.begin_text_edit(element.id)
        session.engine.update_text_draft("After")

        session.undo()

        assert session.current_slide.find_element(element.id).text == "Before"
        assert session.mode != EditMode.EDITING

    def test_undo_insert(self, session: EditorSession):
        session.insert_text(text="Hi")

        session.undo()

        assert session.current_slide.elements == []

    def test_nothing_to_undo(self, session: EditorSession):
        assert not session.undo()
        assert not session.redo()


class TestView:
    """Tests for zoom, grid and live rendering."""

    @pytest.mark.parametrize("requested, expected", [(0.1, ZOOM_MIN), (1.5, 1.5), (5, ZOOM_MAX)])
    def test_zoom_is_clamped(self, session: EditorSession, requested: float, expected: float):
        assert session.set_zoom(requested) == expected

    def test_toggle_grid(self, session: EditorSession):
        assert session.toggle_grid()
        assert not session.toggle_grid()

    def test_live_render_hides_text_under_edit(self, session: EditorSession):
        element = session.insert_text(text="Hi")
        session.engine.begin_text_edit(element.id)

        tree = session.render_live()

        primitive = tree.primitives[0]
        assert isinstance(primitive, TextPrimitive)
        assert not primitive.visible

    def test_live_render_shows_drag(self, session: EditorSession):
        element = session.insert_shape(x=0, y=0)
        session.set_zoom(0.5)
        session.engine.begin_drag(element.id)
        session.engine.update_drag(100, 200)

        primitive = session.render_live().primitives[0]

        assert (primitive.x, primitive.y) == (50, 100)
        assert session.current_slide.find_element(element.id).x == 0

    def test_thumbnails_cover_every_slide(self, session: EditorSession):
        session.add_slide()

        trees = session.render_thumbnails()

        assert len(trees) == 2
        assert trees[0].scale == session.config.canvas.thumbnail_scale


class TestDrafts:
    """Tests for saving and loading drafts."""

    def test_save_and_load(self, session: EditorSession, editor_config, draft_path: Path):
        session.apply_template("professional")
        session.set_current_slide(2)
        session.save_draft()

        restored = EditorSession(config=editor_config)
        assert restored.load_draft()

        assert [s.to_payload() for s in restored.slides] == [s.to_payload() for s in session.slides]
        assert restored.current_index == 2
        assert restored.template_id == "professional"
        assert not restored.can_undo

    def test_load_without_draft(self, session: EditorSession):
        assert not session.load_draft()
        assert session.pop_notices() == []

    def test_corrupt_draft_notifies(self, session: EditorSession, draft_path: Path):
        draft_path.parent.mkdir(parents=True)
        draft_path.write_text("{not json")

        assert not session.load_draft()

        assert session.pop_notices()[0].message == "Failed to load carousel draft"
        assert len(session.slides) == 1

    def test_duplicate_slide_ids_notify(self, session: EditorSession, draft_path: Path):
        """Test a draft whose slides share an id is refused without raising."""
        draft_path.parent.mkdir(parents=True)
        draft_path.write_text(json.dumps([{"id": "a"}, {"id": "a"}]))
        before = [s.id for s in session.slides]

        assert not session.load_draft()

        notices = session.pop_notices()
        assert notices[0].level == NoticeLevel.WARNING
        assert notices[0].message == "Failed to load carousel draft"
        assert [s.id for s in session.slides] == before

    def test_draft_over_configured_limit_notifies(self, draft_path: Path, asset_loader):
        draft_path.parent.mkdir(parents=True)
        draft_path.write_text(json.dumps([Slide().to_payload() for _ in range(4)]))
        config = EditorConfig(
            canvas=CanvasSettings(max_slides=3),
            storage=StorageSettings(draft_path=draft_path),
        )
        session = EditorSession(config=config, store=DraftStore(draft_path), loader=asset_loader)

        assert not session.load_draft()

        assert len(session.slides) == 1
        assert session.pop_notices()[0].level == NoticeLevel.WARNING

    def test_bare_slide_list_loads(self, session: EditorSession, draft_path: Path):
        draft_path.parent.mkdir(parents=True)
        slides = [Slide().to_payload(), Slide(background_color="#000000").to_payload()]
        draft_path.write_text(json.dumps(slides))

        assert session.load_draft()
        assert session.slides[1].background_color == "#000000"

    def test_reset_clears_draft(self, session: EditorSession, draft_path: Path):
        session.add_slide()
        session.save_draft()

        session.reset()

        assert len(session.slides) == 1
        assert not draft_path.exists()
        assert session.can_undo
