"""
Module: layout.reconciler

Purpose:
    Reconcile a manual drag with the page stack.
    A drag is reported in the coordinates of the item's pre-drag page; the
    drop point may lie on another page, in which case the item is
    retargeted to that page and its y made local to it.

Key Functions:
    - reconcile_drag(): Position and page for a dropped item

Dependencies:
    - layout.geometry: CanvasGeometry

Used By:
    - store.document_store: Drag-end handling
"""

from __future__ import annotations

import logging

from folio_layout.core.models import Item

from .geometry import CanvasGeometry

logger = logging.getLogger(__name__)


def reconcile_drag(item: Item, x: float, y_local: float, geometry: CanvasGeometry) -> Item:
    """
    Commit a drop at (x, y_local) relative to the item's current page.

    Steps:
    1. y_global = y_local + origin of the item's current page
    2. new page = page containing y_global (clamped to the document)
    3. new local y = y_global relative to the new page

    Negative coordinates are clamped to 0 so the item keeps x, y >= 0.
    Size and flags are untouched, and there is no collision handling.

    Args:
        item: Item as it was before the drag
        x: Dropped x, page-local
        y_local: Dropped y relative to item.page
        geometry: Current canvas geometry

    Returns:
        New Item with reconciled x, y and page

    Example:
        >>> geom = CanvasGeometry(page_width=600, page_height=700, gap=50, page_count=3)
        >>> reconcile_drag(item_on_p1, 40, 720, geom).page
        1
        >>> reconcile_drag(item_on_p1, 40, 760, geom).y
        10
    """
    y_global = max(geometry.to_global(y_local, item.page), 0)
    new_page = geometry.page_at(y_global)
    new_y = geometry.to_local(y_global, new_page)

    if new_page != item.page:
        logger.debug(f"Item {item.id} dragged from page {item.page} to page {new_page}")

    return item.moved_to(max(x, 0), new_y, new_page)
