"""
Module: layout.collision

Purpose:
    Overlap detection between items on the same page.
    Detection only; nothing is moved.

Key Functions:
    - has_collision(): Do two items touch or overlap
    - colliding_items(): Items that touch or overlap a given item
"""

from __future__ import annotations

from typing import Iterable, List

from folio_layout.core.models import Item


def has_collision(first: Item, second: Item) -> bool:
    """
    Check whether two items touch or overlap.

    Shared edges count as a collision. Items on different pages never
    collide.
    """
    if first.page != second.page:
        return False
    return not (
        first.right < second.x
        or second.right < first.x
        or first.bottom < second.y
        or second.bottom < first.y
    )


def colliding_items(item: Item, items: Iterable[Item]) -> List[Item]:
    """All other items colliding with `item`, in collection order."""
    return [
        other for other in items
        if other.id != item.id and has_collision(item, other)
    ]
