"""
Unit tests for layout config and models.
"""

import pytest

from folio_layout.layout import LayoutConfig, LayoutMode, Shelf


class TestLayoutConfig:
    """Tests for LayoutConfig dataclass."""

    def test_init_when_defaults_then_creates_valid_config(self):
        """Default parameters should create valid config."""
        # Act
        config = LayoutConfig()

        # Assert
        assert config.page_width == 600
        assert config.page_height == 849
        assert config.total_pages == 3
        assert config.content_width == 580

    def test_overflow_width_when_defaults_then_margin_minus_page_and_offset(self):
        config = LayoutConfig()

        # 600 + 600 - 600 - 20
        assert config.overflow_width() == 580

    def test_overflow_width_when_live_page_narrower_then_wider_area(self):
        config = LayoutConfig()

        # 1200 - 480 - 20
        assert config.overflow_width(480) == 700

    def test_init_when_padding_exceeds_width_then_raises_error(self):
        with pytest.raises(ValueError, match="Padding exceeds page width"):
            LayoutConfig(page_width=100, page_padding=50)

    @pytest.mark.parametrize("field,value", [
        ("page_width", 0),
        ("total_pages", 0),
        ("page_gap", -1),
        ("item_gap", -5),
    ])
    def test_init_when_invalid_value_then_raises_error(self, field, value):
        with pytest.raises(ValueError):
            LayoutConfig(**{field: value})

    def test_from_dict_when_unknown_keys_then_ignored(self):
        config = LayoutConfig.from_dict({"page_width": 400, "zoom": 0.8})

        assert config.page_width == 400
        assert config.total_pages == 3

    def test_to_dict_then_from_dict_restores_config(self):
        config = LayoutConfig(page_width=500, total_pages=5, row_gap=8)

        assert LayoutConfig.from_dict(config.to_dict()) == config

    def test_with_changes_when_invalid_then_raises_error(self):
        with pytest.raises(ValueError):
            LayoutConfig().with_changes(total_pages=0)


class TestLayoutMode:
    """Tests for the sort-mode cycle."""

    def test_next_when_cycled_three_times_then_back_to_start(self):
        mode = LayoutMode.INSERTION

        for _ in range(3):
            mode = mode.next()

        assert mode is LayoutMode.INSERTION

    def test_next_follows_fixed_order(self):
        assert LayoutMode.INSERTION.next() is LayoutMode.HEIGHT_DESC
        assert LayoutMode.HEIGHT_DESC.next() is LayoutMode.WIDTH_DESC
        assert LayoutMode.WIDTH_DESC.next() is LayoutMode.INSERTION

    def test_sort_when_insertion_then_order_kept(self, item_factory):
        items = [item_factory(height=h) for h in (10, 30, 20)]

        assert LayoutMode.INSERTION.sort(items) == items

    def test_sort_when_height_desc_then_tallest_first(self, item_factory):
        items = [item_factory(height=h) for h in (10, 30, 20)]

        assert [i.height for i in LayoutMode.HEIGHT_DESC.sort(items)] == [30, 20, 10]

    def test_sort_when_width_ties_then_stable(self, item_factory):
        a = item_factory(width=50)
        b = item_factory(width=80)
        c = item_factory(width=50)

        assert LayoutMode.WIDTH_DESC.sort([a, b, c]) == [b, a, c]


class TestShelf:
    """Tests for Shelf dataclass."""

    def test_width_when_three_items_then_two_gaps(self, item_factory):
        shelf = Shelf(items=tuple(item_factory(width=100) for _ in range(3)), gap=5)

        assert shelf.width == 310

    def test_height_when_mixed_items_then_tallest(self, item_factory):
        shelf = Shelf(items=(item_factory(height=40), item_factory(height=90)), gap=5)

        assert shelf.height == 90

    def test_empty_shelf_has_no_extent(self):
        shelf = Shelf(items=(), gap=5)

        assert shelf.width == 0
        assert shelf.height == 0
