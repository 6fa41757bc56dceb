"""
Module: images.provider

Purpose:
    Create image items from files on disk.
    Pillow reads the pixel size; the item is scaled down to fit a box
    while keeping its aspect ratio.

Key Functions:
    - image_size(): Pixel size of an image file
    - fit_within(): Scale a size into a bounding box
    - item_from_image(): Image-backed Item

Key Classes:
    - ImageNotFoundError: Exception for missing/unreadable images

Dependencies:
    - PIL: Image header reading
    - core.models: Item

Used By:
    - cli: add-image command
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from folio_layout.core.models import Item, ItemKind

logger = logging.getLogger(__name__)

# Largest box a freshly inserted image may occupy
DEFAULT_MAX_SIZE: Tuple[int, int] = (200, 200)


class ImageNotFoundError(Exception):
    """Image file missing or not readable as an image."""
    pass


def image_size(path: Path) -> Tuple[int, int]:
    """
    Read the pixel size of an image file.

    Only the header is decoded.

    Raises:
        ImageNotFoundError: If the file is missing or not an image
    """
    if not path.exists():
        raise ImageNotFoundError(f"Image not found: {path}")
    try:
        with Image.open(path) as img:
            return img.size
    except (UnidentifiedImageError, OSError) as e:
        raise ImageNotFoundError(f"Cannot read image {path}: {e}") from e


def fit_within(size: Tuple[int, int], max_size: Tuple[int, int]) -> Tuple[int, int]:
    """
    Scale a size down to fit a box, keeping aspect ratio.

    Sizes that already fit are returned unchanged (never upscaled).

    Example:
        >>> fit_within((400, 200), (200, 200))
        (200, 100)
    """
    width, height = size
    max_width, max_height = max_size
    scale = min(max_width / width, max_height / height, 1.0)
    return max(1, round(width * scale)), max(1, round(height * scale))


def item_from_image(
    path: Path,
    item_id: Optional[str] = None,
    page: int = 1,
    max_size: Tuple[int, int] = DEFAULT_MAX_SIZE,
    title: Optional[str] = None,
) -> Item:
    """
    Build an image item for a file.

    Args:
        path: Image file
        item_id: Item id (defaults to the file stem)
        page: Page to put the item on
        max_size: Bounding box for the item size
        title: Display title (defaults to the file stem)

    Returns:
        Item at (0, 0) on `page`

    Raises:
        ImageNotFoundError: If the file is missing or not an image
    """
    path = Path(path)
    width, height = fit_within(image_size(path), max_size)
    logger.debug(f"Image {path.name} sized {width}x{height}")
    return Item(
        id=item_id or path.stem,
        x=0,
        y=0,
        width=width,
        height=height,
        page=page,
        kind=ItemKind.IMAGE,
        image_url=path.resolve().as_uri(),
        title=title or path.stem,
    )
