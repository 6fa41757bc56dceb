"""
Tests for image-backed item creation.
"""

import pytest
from pathlib import Path

from folio_layout.core.models import ItemKind
from folio_layout.images import ImageNotFoundError, fit_within, image_size, item_from_image


class TestFitWithin:

    def test_fit_within_when_larger_then_scaled_keeping_ratio(self):
        assert fit_within((400, 200), (200, 200)) == (200, 100)

    def test_fit_within_when_smaller_then_unchanged(self):
        assert fit_within((50, 80), (200, 200)) == (50, 80)

    def test_fit_within_when_tall_then_height_bound(self):
        assert fit_within((100, 1000), (200, 200)) == (20, 200)


class TestItemFromImage:

    def test_image_size_reads_pixels(self, sample_image: Path):
        assert image_size(sample_image) == (400, 200)

    def test_item_from_image_when_defaults_then_named_after_file(self, sample_image: Path):
        item = item_from_image(sample_image, page=2)

        assert item.id == "sample"
        assert item.kind is ItemKind.IMAGE
        assert (item.width, item.height, item.page) == (200, 100, 2)
        assert item.image_url.startswith("file://")

    def test_item_from_image_when_missing_then_raises_error(self, tmp_path: Path):
        with pytest.raises(ImageNotFoundError):
            item_from_image(tmp_path / "missing.png")

    def test_item_from_image_when_not_an_image_then_raises_error(self, tmp_path: Path):
        path = tmp_path / "notes.png"
        path.write_text("not an image", encoding="utf-8")

        with pytest.raises(ImageNotFoundError):
            item_from_image(path)
