"""
Module: layout.shelving

Purpose:
    Row ("shelf") packing of items into a width budget, and vertical
    fitting of those rows onto a page or into the overflow area.

Key Functions:
    - shelve(): Group items into rows that fit a content width
    - fit_shelves(): Accept leading rows that fit a page's height
    - pack_overflow(): Re-shelve rejected items beside the page
    - shelf_positions(): Item coordinates for a placed row

Algorithm:
    1. Feed items in order; an item joins the current row while the row
       still fits the width budget, otherwise it opens a new row
    2. Stack rows top-down from the padding; the first row that crosses
       the bottom padding is rejected along with every row after it
    3. Rejected items are shelved again against the auxiliary width and
       stacked the same way; rows that still do not fit stay unplaced

Dependencies:
    - layout.models: Shelf

Used By:
    - layout.orchestrator: Auto-layout passes
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

from .models import Shelf, Sized, flatten

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacedShelf:
    """
    A shelf positioned in page-local pixels.

    Attributes:
        shelf: The row of items
        x: Left edge of the first item
        y: Top edge shared by every item in the row
    """

    shelf: Shelf
    x: float
    y: float

    @property
    def bottom(self) -> float:
        return self.y + self.shelf.height


@dataclass(frozen=True)
class FitResult:
    """
    Outcome of stacking rows into a vertical budget.

    Attributes:
        accepted: Rows that fit, in order, with positions
        rejected: First row that did not fit and every row after it
    """

    accepted: tuple[PlacedShelf, ...]
    rejected: tuple[Shelf, ...]

    @property
    def rejected_items(self) -> list:
        """Items of rejected rows in their pre-rejection order."""
        return flatten(self.rejected)


def shelve(items: Sequence[Sized], content_width: float, gap: float) -> List[Shelf]:
    """
    Group items into rows that fit a width budget.

    Rules:
    1. An item joins the current row if the row is empty, or if the row
       width plus gap plus the item's width stays within content_width.
    2. Otherwise the current row is closed and the item starts a new one.
    3. An item wider than content_width still gets a row of its own; it is
       never split or resized.

    Item order within and across rows equals feed order.

    Args:
        items: Items in the order they should be packed
        content_width: Horizontal budget for one row
        gap: Horizontal gap between neighbouring items

    Returns:
        List of Shelves (empty for empty input)

    Example:
        >>> [len(s) for s in shelve(items_300x3, content_width=580, gap=5)]
        [1, 1, 1]
    """
    shelves: List[Shelf] = []
    current_row: list = []
    current_width: float = 0

    for item in items:
        if not current_row or current_width + item.width + gap <= content_width:
            if current_row:
                current_width += gap
            current_row.append(item)
            current_width += item.width
            continue

        shelves.append(Shelf(items=tuple(current_row), gap=gap))
        current_row = [item]
        current_width = item.width

    if current_row:
        shelves.append(Shelf(items=tuple(current_row), gap=gap))

    for shelf in shelves:
        if len(shelf) == 1 and shelf.width > content_width:
            logger.debug(
                f"Item wider than row budget placed alone: "
                f"{shelf.width}px > {content_width}px"
            )

    return shelves


def fit_shelves(
    shelves: Sequence[Shelf],
    page_height: float,
    padding: float,
    row_gap: float,
    x: float | None = None,
) -> FitResult:
    """
    Stack rows top-down and accept those that fit vertically.

    Rows start at y=padding. A row fits when its top plus its height stays
    within page_height - padding. The first row that fails is rejected
    together with every following row, even a shorter one that would have
    fit; there is no backfilling.

    Args:
        shelves: Rows in order
        page_height: Height of the page (or overflow area)
        padding: Top and bottom inset
        row_gap: Vertical gap between rows
        x: Left edge for accepted rows (defaults to padding)

    Returns:
        FitResult with accepted (positioned) and rejected rows

    Example:
        >>> fit = fit_shelves([row400, row450], page_height=800, padding=10, row_gap=5)
        >>> [p.y for p in fit.accepted]
        [10]
    """
    left = padding if x is None else x
    bottom_limit = page_height - padding
    current_y = padding
    accepted: List[PlacedShelf] = []

    for index, shelf in enumerate(shelves):
        if current_y + shelf.height > bottom_limit:
            logger.debug(
                f"Row {index} rejected: {current_y}+{shelf.height}px "
                f"exceeds {bottom_limit}px"
            )
            return FitResult(accepted=tuple(accepted), rejected=tuple(shelves[index:]))

        accepted.append(PlacedShelf(shelf=shelf, x=left, y=current_y))
        current_y += shelf.height + row_gap

    return FitResult(accepted=tuple(accepted), rejected=())


def pack_overflow(
    items: Sequence[Sized],
    overflow_width: float,
    origin_x: float,
    page_height: float,
    padding: float,
    gap: float,
    row_gap: float,
) -> FitResult:
    """
    Shelve page-rejected items into the auxiliary area beside the page.

    Same shelving as shelve() against overflow_width, stacked with the
    same vertical rule as fit_shelves(). Packing stops at the first row
    that does not fit; its items and all later ones are left unplaced.

    Args:
        items: Rejected items in their pre-rejection order
        overflow_width: Horizontal budget of the auxiliary area
        origin_x: Page-local x of the auxiliary area's left edge
        page_height: Vertical budget (same as the page)
        padding: Top and bottom inset
        gap: Horizontal gap between items
        row_gap: Vertical gap between rows

    Returns:
        FitResult; rejected rows hold the items that stay unplaced
    """
    if not items:
        return FitResult(accepted=(), rejected=())

    shelves = shelve(items, overflow_width, gap)
    return fit_shelves(shelves, page_height, padding, row_gap, x=origin_x)


def shelf_positions(placed: PlacedShelf) -> list[tuple[Sized, float, float]]:
    """
    (item, x, y) for every item in a placed row.

    Items run left to right from placed.x, separated by the shelf gap,
    all top-aligned at placed.y.
    """
    positions = []
    x = placed.x
    for item in placed.shelf.items:
        positions.append((item, x, placed.y))
        x += item.width + placed.shelf.gap
    return positions
