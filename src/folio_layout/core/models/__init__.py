"""
Core Models Package

Immutable, validated data models shared by the layout engine and the
document store.

All models in this package are frozen dataclasses. Layout passes and
store mutations build new instances instead of patching fields, so a
snapshot handed to a caller never changes underneath it.
"""

from .items import ALLOWED_PERCENTAGES, Item, ItemKind

__all__ = [
    "ALLOWED_PERCENTAGES",
    "Item",
    "ItemKind",
]
