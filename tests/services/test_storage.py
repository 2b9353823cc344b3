"""Unit tests for draft storage and export progress tracking."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from carousel_studio.constants import ExportStatus
from carousel_studio.errors import ValidationError
from carousel_studio.services import Draft, DraftStore, ProgressTracker
from carousel_studio.slides import Slide


class TestDraftStore:
    """Tests for DraftStore."""

    def test_save_creates_parent_dirs(self, draft_path: Path, sample_slides):
        store = DraftStore(draft_path)

        path = store.save(Draft(slides=sample_slides, current_slide_index=1))

        assert path == draft_path
        assert store.exists()

    def test_saved_file_uses_camel_case(self, draft_path: Path, sample_slides):
        DraftStore(draft_path).save(Draft(slides=sample_slides, template_id="minimal-dark"))

        data = json.loads(draft_path.read_text(encoding="utf-8"))

        assert data["templateId"] == "minimal-dark"
        assert data["currentSlideIndex"] == 0
        assert "savedAt" in data
        assert data["slides"][0]["backgroundColor"] == "#0a0a0f"

    def test_round_trip(self, draft_path: Path, sample_slides):
        store = DraftStore(draft_path)
        store.save(Draft(slides=sample_slides, current_slide_index=2))

        draft = store.load()

        assert draft.current_slide_index == 2
        assert draft.saved_at is not None
        assert [s.to_payload() for s in draft.slides] == [s.to_payload() for s in sample_slides]

    def test_load_missing(self, draft_path: Path):
        assert DraftStore(draft_path).load() is None

    def test_load_bare_slide_list(self, draft_path: Path):
        draft_path.parent.mkdir(parents=True)
        draft_path.write_text(json.dumps([Slide().to_payload()]))

        draft = DraftStore(draft_path).load()

        assert len(draft.slides) == 1
        assert draft.current_slide_index == 0

    def test_invalid_json(self, draft_path: Path):
        draft_path.parent.mkdir(parents=True)
        draft_path.write_text("not json")

        with pytest.raises(ValidationError):
            DraftStore(draft_path).load()

    def test_invalid_content_names_location(self, draft_path: Path):
        draft_path.parent.mkdir(parents=True)
        draft_path.write_text(json.dumps({"slides": [{"elements": [{"type": "shape", "fill": "nope"}]}]}))

        with pytest.raises(ValidationError) as exc_info:
            DraftStore(draft_path).load()

        assert exc_info.value.field.startswith("slides")

    def test_empty_slide_list_is_invalid(self, draft_path: Path):
        draft_path.parent.mkdir(parents=True)
        draft_path.write_text("[]")

        with pytest.raises(ValidationError):
            DraftStore(draft_path).load()

    def test_clear(self, draft_path: Path):
        store = DraftStore(draft_path)
        store.save(Draft(slides=[Slide()]))

        assert store.clear()
        assert not store.exists()
        assert not store.clear()


class TestProgressTracker:
    """Tests for ProgressTracker."""

    @pytest.fixture
    def tracker(self, mock_progress_callback: AsyncMock) -> ProgressTracker:
        return ProgressTracker("exp-1", total_slides=4, callback=mock_progress_callback)

    def test_initial_state(self, tracker: ProgressTracker):
        assert tracker.progress.status == ExportStatus.PENDING
        assert tracker.progress.total_slides == 4
        assert tracker.progress.progress == 0

    @pytest.mark.asyncio
    async def test_emit_without_callback(self):
        tracker = ProgressTracker("exp-1", total_slides=1)

        # Should not raise
        await tracker.emit()

    @pytest.mark.asyncio
    async def test_slide_done_advances_progress(self, tracker: ProgressTracker, mock_progress_callback: AsyncMock):
        await tracker.start_phase(ExportStatus.COMPOSITING)
        await tracker.slide_done(0)
        await tracker.slide_done(1)

        progress = tracker.progress
        assert progress.completed_slides == 2
        assert progress.current_slide == 1
        assert progress.progress == 0.5
        assert progress.message == "Slide 2 of 4"
        assert mock_progress_callback.await_count == 3

    @pytest.mark.asyncio
    async def test_complete(self, tracker: ProgressTracker):
        await tracker.complete()

        assert tracker.progress.status == ExportStatus.COMPLETED
        assert tracker.progress.is_finished

    @pytest.mark.asyncio
    async def test_fail_records_error(self, tracker: ProgressTracker):
        await tracker.fail("boom")

        assert tracker.progress.status == ExportStatus.FAILED
        assert tracker.progress.error == "boom"

    @pytest.mark.asyncio
    async def test_cancel_does_not_emit(self, tracker: ProgressTracker, mock_progress_callback: AsyncMock):
        await tracker.cancel()

        assert tracker.progress.status == ExportStatus.CANCELLED
        mock_progress_callback.assert_not_called()
