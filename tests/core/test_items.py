"""
Unit tests for the Item model.
"""

import pytest

from folio_layout.core.models import ALLOWED_PERCENTAGES, Item, ItemKind


class TestItemValidation:
    """Tests for Item construction."""

    def test_init_when_defaults_then_image_on_first_page(self):
        item = Item(id="img-1", x=0, y=0, width=150, height=150)

        assert item.page == 1
        assert item.kind is ItemKind.IMAGE
        assert item.percentages == ()

    @pytest.mark.parametrize("kwargs,message", [
        ({"width": 0}, "width must be positive"),
        ({"height": -3}, "height must be positive"),
        ({"page": 0}, "page must be >= 1"),
        ({"id": ""}, "id must not be empty"),
        ({"percentages": (25,)}, "Unsupported percentage badges"),
    ])
    def test_init_when_invalid_then_raises_error(self, kwargs, message):
        base = {"id": "a", "x": 0, "y": 0, "width": 10, "height": 10}
        base.update(kwargs)

        with pytest.raises(ValueError, match=message):
            Item(**base)


class TestItemCopies:
    """Tests for copy helpers (items are immutable)."""

    def test_moved_to_when_page_omitted_then_page_kept(self, item_factory):
        item = item_factory(page=2)

        moved = item.moved_to(30, 40)

        assert (moved.x, moved.y, moved.page) == (30, 40, 2)
        assert (item.x, item.y) == (0, 0)

    def test_with_percentage_toggled_when_twice_then_removed(self, item_factory):
        item = item_factory()

        on = item.with_percentage_toggled(40).with_percentage_toggled(10)
        off = on.with_percentage_toggled(40)

        assert on.percentages == (10, 40)
        assert off.percentages == (10,)

    def test_with_percentage_toggled_when_unknown_then_raises_error(self, item_factory):
        with pytest.raises(ValueError):
            item_factory().with_percentage_toggled(33)

    def test_bounds_when_positioned_then_right_and_bottom(self, item_factory):
        item = item_factory(x=10, y=20, width=100, height=50)

        assert item.bounds == (10, 20, 110, 70)

    def test_allowed_percentages_are_original_badges(self):
        assert ALLOWED_PERCENTAGES == (10, 15, 20, 40, 50)


class TestItemSerialization:
    """Tests for to_dict / from_dict."""

    def test_to_dict_when_minimal_then_omits_optional_fields(self, item_factory):
        data = item_factory(item_id="a", width=10, height=20).to_dict()

        assert data == {
            "id": "a", "kind": "image", "x": 0, "y": 0,
            "width": 10, "height": 20, "page": 1,
        }

    def test_from_dict_restores_all_fields(self):
        item = Item(
            id="shape-1", x=12.5, y=30, width=80, height=40, page=3,
            kind=ItemKind.SHAPE, text="Offer", has_border=True,
            percentages=(15, 50),
        )

        assert Item.from_dict(item.to_dict()) == item

    def test_from_dict_when_page_missing_then_first_page(self):
        item = Item.from_dict({"id": "a", "width": 10, "height": 10})

        assert item.page == 1
        assert (item.x, item.y) == (0, 0)
