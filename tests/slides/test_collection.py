"""Unit tests for the slide collection.

Tests slide count guards, current index handling, duplication, reordering
and the plain payload form.
"""

from __future__ import annotations

from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from carousel_studio.constants import MAX_SLIDES
from carousel_studio.elements import create_shape_element, create_text_element
from carousel_studio.errors import MinimumSlideCount, SlideLimitExceeded, ValidationError
from carousel_studio.slides import Slide, SlideCollection


def _deck(count: int) -> SlideCollection:
    return SlideCollection([Slide() for _ in range(count)])


class TestConstruction:
    """Tests for SlideCollection construction."""

    def test_defaults_to_one_empty_slide(self):
        deck = SlideCollection()

        assert len(deck) == 1
        assert deck.current_index == 0
        assert deck.current_slide.elements == []

    def test_rejects_too_many_slides(self):
        with pytest.raises(ValidationError):
            _deck(MAX_SLIDES + 1)

    def test_rejects_duplicate_slide_ids(self):
        with pytest.raises(ValidationError):
            SlideCollection([Slide(id="same"), Slide(id="same")])

    def test_clamps_current_index(self):
        deck = SlideCollection([Slide(), Slide()], current_index=7)
        assert deck.current_index == 1

    def test_clamps_loaded_elements(self):
        """Test out-of-range geometry from a payload is repaired on load."""
        deck = SlideCollection.from_payload(
            [{"elements": [{"type": "shape", "width": 4, "height": 4, "rotation": 370}]}]
        )

        element = deck[0].elements[0]
        assert (element.width, element.height, element.rotation) == (50, 20, 10)


class TestAddSlide:
    """Tests for add_slide."""

    def test_add_four_slides(self):
        """Test adding four slides to one makes five, current on the last."""
        deck = SlideCollection()

        for _ in range(4):
            deck.add_slide()

        assert len(deck) == 5
        assert deck.current_index == 4

    def test_add_at_limit_is_rejected(self):
        """Test a full collection refuses another slide and is unchanged."""
        deck = _deck(MAX_SLIDES)
        before = [slide.id for slide in deck]

        with pytest.raises(SlideLimitExceeded):
            deck.add_slide()

        assert len(deck) == MAX_SLIDES
        assert [slide.id for slide in deck] == before

    def test_added_slide_gets_unique_id(self):
        deck = SlideCollection([Slide(id="taken")])

        added = deck.add_slide(Slide(id="taken"))

        assert added.id != "taken"
        assert len({slide.id for slide in deck}) == 2


class TestDeleteSlide:
    """Tests for delete_slide."""

    def test_delete_last_remaining_is_rejected(self):
        deck = SlideCollection()

        with pytest.raises(MinimumSlideCount):
            deck.delete_slide(0)

        assert len(deck) == 1

    def test_out_of_range_is_ignored(self):
        deck = _deck(3)

        assert deck.delete_slide(5) is None
        assert deck.delete_slide(-1) is None
        assert len(deck) == 3

    def test_current_index_stays_when_in_range(self):
        deck = _deck(4)
        deck.set_current(1)

        deck.delete_slide(3)

        assert deck.current_index == 1

    def test_current_index_clamps_when_past_end(self):
        deck = _deck(3)
        deck.set_current(2)

        deck.delete_slide(2)

        assert deck.current_index == 1


class TestDuplicateSlide:
    """Tests for duplicate_slide."""

    def test_duplicate_copies_elements_with_new_ids(self):
        """Test the copy matches geometry and styling under fresh ids."""
        source = Slide(
            background_color="#1e3a5f",
            elements=[
                create_text_element(text="A", x=10, y=20, width=200, height=40),
                create_shape_element(shape_type="circle", x=300, y=300, width=100, height=100),
                create_shape_element(x=50, y=600, width=400, height=80, corner_radius=16),
            ],
        )
        deck = SlideCollection([source])

        copy = deck.duplicate_slide(0)

        assert len(deck) == 2
        assert deck[1] is copy
        assert deck.current_index == 1
        assert copy.id != source.id
        assert copy.background_color == source.background_color
        assert len(copy.elements) == 3

        original_ids = {e.id for e in source.elements}
        copy_ids = {e.id for e in copy.elements}
        assert len(copy_ids) == 3
        assert original_ids.isdisjoint(copy_ids)

        for original, duplicate in zip(source.elements, copy.elements):
            assert original.model_dump(exclude={"id"}) == duplicate.model_dump(exclude={"id"})

    def test_duplicate_is_independent(self):
        deck = SlideCollection([Slide(elements=[create_text_element(text="A")])])

        copy = deck.duplicate_slide(0)
        copy.elements.clear()

        assert len(deck[0].elements) == 1

    def test_duplicate_at_limit_is_rejected(self):
        deck = _deck(MAX_SLIDES)

        with pytest.raises(SlideLimitExceeded):
            deck.duplicate_slide(0)

        assert len(deck) == MAX_SLIDES

    def test_duplicate_out_of_range_is_ignored(self):
        deck = SlideCollection()
        assert deck.duplicate_slide(3) is None
        assert len(deck) == 1


class TestReorderSlide:
    """Tests for reorder_slide."""

    def test_moves_slide_and_shifts_others(self):
        deck = _deck(4)
        ids = [slide.id for slide in deck]

        assert deck.reorder_slide(0, 2)

        assert [slide.id for slide in deck] == [ids[1], ids[2], ids[0], ids[3]]
        assert deck.current_index == 2

    def test_move_backwards(self):
        deck = _deck(4)
        ids = [slide.id for slide in deck]

        deck.reorder_slide(3, 1)

        assert [slide.id for slide in deck] == [ids[0], ids[3], ids[1], ids[2]]

    def test_same_index_is_no_op(self):
        deck = _deck(3)
        ids = [slide.id for slide in deck]

        assert not deck.reorder_slide(1, 1)
        assert [slide.id for slide in deck] == ids

    def test_out_of_range_is_no_op(self):
        deck = _deck(3)
        ids = [slide.id for slide in deck]

        assert not deck.reorder_slide(0, 3)
        assert not deck.reorder_slide(-1, 0)
        assert [slide.id for slide in deck] == ids

    def test_reorder_is_a_permutation(self):
        """Test every move keeps the same set of slides."""
        deck = _deck(6)
        ids = {slide.id for slide in deck}

        for from_index, to_index in [(0, 5), (5, 0), (2, 3), (4, 1)]:
            deck.reorder_slide(from_index, to_index)
            assert {slide.id for slide in deck} == ids
            assert len(deck) == 6

    def test_move_and_move_back_restores_order(self):
        deck = _deck(5)
        ids = [slide.id for slide in deck]

        deck.reorder_slide(1, 4)
        deck.reorder_slide(4, 1)

        assert [slide.id for slide in deck] == ids


class TestCurrentAndBackground:
    """Tests for set_current and update_background."""

    def test_set_current_ignores_out_of_range(self):
        deck = _deck(2)

        assert not deck.set_current(2)
        assert deck.current_index == 0

    def test_update_background(self):
        deck = _deck(2)

        assert deck.update_background(1, "#ff0000")
        assert deck[1].background_color == "#ff0000"

    def test_update_background_rejects_bad_color(self):
        deck = SlideCollection()
        with pytest.raises(ValidationError):
            deck.update_background(0, "bogus")


class TestPayload:
    """Tests for to_payload / from_payload."""

    def test_round_trip_preserves_slides(self, sample_slides):
        deck = SlideCollection(sample_slides, current_index=2)

        restored = SlideCollection.from_payload(deck.to_payload(), current_index=2)

        assert restored.to_payload() == deck.to_payload()
        assert restored.current_index == 2

    def test_payload_is_plain_json(self, sample_slides):
        payload = SlideCollection(sample_slides).to_payload()

        assert payload[0]["backgroundColor"] == "#0a0a0f"
        assert payload[2]["elements"][0]["type"] == "image"

    def test_invalid_payload_raises(self):
        with pytest.raises(ValidationError):
            SlideCollection.parse_payload([{"elements": [{"type": "video"}]}])

    def test_snapshot_is_deep_copy(self, sample_slides):
        deck = SlideCollection(sample_slides)

        snapshot = deck.snapshot()
        snapshot[0].elements.clear()

        assert len(deck[0].elements) == 1
