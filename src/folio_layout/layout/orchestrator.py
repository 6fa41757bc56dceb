"""
Module: layout.orchestrator

Purpose:
    Automatic placement of items for one page or for every page.
    Runs shelving -> page fitting -> overflow packing per page and folds
    the new coordinates back into a fresh item collection.

Key Functions:
    - auto_layout_page(): Re-pack the items of a single page
    - auto_layout_all_pages(): Re-pack every page in page order
    - items_for_page(): Items a layout pass considers on a page

Dependencies:
    - layout.config: LayoutConfig
    - layout.models: LayoutMode, LayoutResult, PageOutcome
    - layout.shelving: shelve, fit_shelves, pack_overflow

Used By:
    - store.document_store: Auto-layout triggers
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence

from folio_layout.core.models import Item

from .config import LayoutConfig
from .models import LayoutMode, LayoutResult, PageOutcome
from .shelving import fit_shelves, pack_overflow, shelf_positions, shelve

logger = logging.getLogger(__name__)


def items_for_page(items: Iterable[Item], page: int, page_height: float) -> List[Item]:
    """
    Items an auto-layout pass considers on a page.

    Only items assigned to the page whose top edge lies within
    [0, page_height). Items parked below the page (y at or past the page
    height) are left where they are.
    """
    return [
        item for item in items
        if item.page == page and 0 <= item.y < page_height
    ]


def auto_layout_page(
    items: Sequence[Item],
    page: int,
    page_width: float,
    page_height: float,
    *,
    mode: LayoutMode = LayoutMode.INSERTION,
    config: LayoutConfig | None = None,
) -> LayoutResult:
    """
    Re-pack the items of one page.

    Args:
        items: Full item collection (not modified)
        page: Target page index (1-based)
        page_width: Live page width in pixels
        page_height: Live page height in pixels
        mode: Ordering applied before shelving
        config: Padding and gap settings

    Returns:
        LayoutResult with the full updated collection. Items on other
        pages are returned unchanged.
    """
    config = config or LayoutConfig()
    updates, outcome, warnings = _layout_page(items, page, page_width, page_height, mode, config)
    new_items = _apply(items, updates)

    logger.info(
        f"Auto-layout page {page} ({mode.label}): "
        f"{len(outcome.placed)} placed, {len(outcome.overflowed)} overflowed, "
        f"{len(outcome.unplaced)} unplaced"
    )
    return LayoutResult(items=new_items, mode=mode, pages=(outcome,), warnings=warnings)


def auto_layout_all_pages(
    items: Sequence[Item],
    page_width: float,
    page_height: float,
    *,
    mode: LayoutMode = LayoutMode.INSERTION,
    config: LayoutConfig | None = None,
) -> LayoutResult:
    """
    Re-pack every page from 1 to config.total_pages, in page order.

    Each page is handled exactly like auto_layout_page(); results are
    folded into a single collection.
    """
    config = config or LayoutConfig()
    updates: Dict[str, Item] = {}
    outcomes: List[PageOutcome] = []
    warnings: List[str] = []

    for page in range(1, config.total_pages + 1):
        page_updates, outcome, page_warnings = _layout_page(
            items, page, page_width, page_height, mode, config
        )
        updates.update(page_updates)
        outcomes.append(outcome)
        warnings.extend(page_warnings)

    new_items = _apply(items, updates)
    result = LayoutResult(items=new_items, mode=mode, pages=tuple(outcomes), warnings=warnings)

    logger.info(
        f"Auto-layout {config.total_pages} pages ({mode.label}): "
        f"{len(result.placed)} placed, {len(result.overflowed)} overflowed, "
        f"{len(result.unplaced)} unplaced"
    )
    return result


def _layout_page(
    items: Sequence[Item],
    page: int,
    page_width: float,
    page_height: float,
    mode: LayoutMode,
    config: LayoutConfig,
) -> tuple[Dict[str, Item], PageOutcome, List[str]]:
    """Compute new positions for one page's items."""
    candidates = mode.sort(items_for_page(items, page, page_height))
    if not candidates:
        return {}, PageOutcome(page=page), []

    content_width = page_width - 2 * config.page_padding
    shelves = shelve(candidates, content_width, config.item_gap)
    fit = fit_shelves(shelves, page_height, config.page_padding, config.row_gap)

    updates: Dict[str, Item] = {}
    placed: List[str] = []
    for row in fit.accepted:
        for item, x, y in shelf_positions(row):
            updates[item.id] = item.moved_to(x, y, page)
            placed.append(item.id)

    overflow = pack_overflow(
        fit.rejected_items,
        overflow_width=config.overflow_width(page_width),
        origin_x=page_width + config.overflow_offset,
        page_height=page_height,
        padding=config.page_padding,
        gap=config.item_gap,
        row_gap=config.row_gap,
    )
    overflowed: List[str] = []
    for row in overflow.accepted:
        for item, x, y in shelf_positions(row):
            updates[item.id] = item.moved_to(x, y, page)
            overflowed.append(item.id)

    unplaced = [item.id for item in overflow.rejected_items]
    warnings: List[str] = []
    if overflowed:
        logger.debug(f"Page {page}: {len(overflowed)} items moved to overflow area")
    if unplaced:
        message = (
            f"Page {page}: {len(unplaced)} items fit neither the page nor the "
            f"overflow area and keep their previous position: {', '.join(unplaced)}"
        )
        logger.warning(message)
        warnings.append(message)

    outcome = PageOutcome(
        page=page,
        placed=tuple(placed),
        overflowed=tuple(overflowed),
        unplaced=tuple(unplaced),
    )
    return updates, outcome, warnings


def _apply(items: Sequence[Item], updates: Dict[str, Item]) -> tuple[Item, ...]:
    """New collection with updated items swapped in, order preserved."""
    return tuple(updates.get(item.id, item) for item in items)
