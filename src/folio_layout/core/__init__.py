"""Core data models and serialization for the layout editor."""

from .models import ALLOWED_PERCENTAGES, Item, ItemKind

__all__ = [
    "ALLOWED_PERCENTAGES",
    "Item",
    "ItemKind",
]
