"""
Module: images

Purpose:
    Image-backed item creation.
"""

from .provider import (
    DEFAULT_MAX_SIZE,
    ImageNotFoundError,
    fit_within,
    image_size,
    item_from_image,
)

__all__ = [
    "DEFAULT_MAX_SIZE",
    "ImageNotFoundError",
    "fit_within",
    "image_size",
    "item_from_image",
]
