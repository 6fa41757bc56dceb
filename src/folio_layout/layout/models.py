"""
Module: layout.models

Purpose:
    Data models for automatic layout.
    Sort modes, transient shelves and the result of a layout pass.

Key Classes:
    - LayoutMode: Ordering heuristic applied before shelving
    - Shelf: Items packed side by side in one row
    - PageOutcome: What happened to one page's items
    - LayoutResult: Final layout output

Dependencies:
    - core.models: Item
    - dataclasses (std)

Used By:
    - layout.shelving: Creates Shelves
    - layout.orchestrator: Creates LayoutResults
    - store.document_store: Mode cycling
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Protocol, Sequence, TypeVar

from folio_layout.core.models import Item


class Sized(Protocol):
    """Anything with a pixel width and height."""

    @property
    def width(self) -> float: ...

    @property
    def height(self) -> float: ...


T = TypeVar("T", bound=Sized)


class LayoutMode(str, Enum):
    """
    Ordering applied to a page's items before shelving.

    Repeated auto-layout cycles through the modes in declaration order:
    INSERTION -> HEIGHT_DESC -> WIDTH_DESC -> INSERTION.
    """
    INSERTION = "insertion"
    HEIGHT_DESC = "height_desc"
    WIDTH_DESC = "width_desc"

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return _MODE_LABELS[self]

    def next(self) -> LayoutMode:
        """Next mode in the fixed cycle (wraps around)."""
        modes = list(LayoutMode)
        return modes[(modes.index(self) + 1) % len(modes)]

    def sort(self, items: Iterable[T]) -> list[T]:
        """
        Order items for shelving.

        Sorting is stable, so equal keys keep insertion order.
        """
        if self is LayoutMode.HEIGHT_DESC:
            return sorted(items, key=lambda item: item.height, reverse=True)
        if self is LayoutMode.WIDTH_DESC:
            return sorted(items, key=lambda item: item.width, reverse=True)
        return list(items)


_MODE_LABELS = {
    LayoutMode.INSERTION: "Normal",
    LayoutMode.HEIGHT_DESC: "By height",
    LayoutMode.WIDTH_DESC: "By width",
}


@dataclass(frozen=True)
class Shelf:
    """
    A row of items packed side by side (transient).

    Exists only during a layout pass.

    Attributes:
        items: Items in feed order
        gap: Horizontal gap between neighbours

    Example:
        >>> shelf = Shelf(items=(a, b), gap=5)
        >>> shelf.width
        205  # 100 + 5 + 100
    """

    items: tuple[Sized, ...]
    gap: float = 0

    @property
    def width(self) -> float:
        """Item widths plus one gap between each neighbour."""
        if not self.items:
            return 0
        return sum(item.width for item in self.items) + self.gap * (len(self.items) - 1)

    @property
    def height(self) -> float:
        """Tallest item in the row."""
        return max((item.height for item in self.items), default=0)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class PageOutcome:
    """
    Result of laying out one page.

    Attributes:
        page: Page index (1-based)
        placed: Ids placed on the page
        overflowed: Ids placed in the auxiliary region beside the page
        unplaced: Ids that fit neither and kept their coordinates
    """

    page: int
    placed: tuple[str, ...] = ()
    overflowed: tuple[str, ...] = ()
    unplaced: tuple[str, ...] = ()

    @property
    def considered(self) -> int:
        return len(self.placed) + len(self.overflowed) + len(self.unplaced)


@dataclass(frozen=True)
class LayoutResult:
    """
    Final layout output with diagnostics.

    Attributes:
        items: Full updated item collection, original order preserved
        mode: Sort mode the pass ran with
        pages: Per-page outcomes in page order
        warnings: Human-readable warnings

    Example:
        >>> result.placed
        ('img-1', 'img-2')
        >>> result.is_complete
        True
    """

    items: tuple[Item, ...]
    mode: LayoutMode
    pages: tuple[PageOutcome, ...] = ()
    warnings: list[str] = field(default_factory=list)

    @property
    def placed(self) -> tuple[str, ...]:
        return tuple(i for p in self.pages for i in p.placed)

    @property
    def overflowed(self) -> tuple[str, ...]:
        return tuple(i for p in self.pages for i in p.overflowed)

    @property
    def unplaced(self) -> tuple[str, ...]:
        return tuple(i for p in self.pages for i in p.unplaced)

    @property
    def is_complete(self) -> bool:
        """True when every considered item received a position."""
        return not self.unplaced

    def item_map(self) -> dict[str, Item]:
        return {item.id: item for item in self.items}


def flatten(shelves: Sequence[Shelf]) -> list:
    """All items of the shelves in row order."""
    return [item for shelf in shelves for item in shelf.items]
