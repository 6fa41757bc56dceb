"""
Module: store.document_store

Purpose:
    The single shared item collection behind the editor.
    Every mutation reads the current snapshot, builds a new tuple,
    swaps it in, persists the full collection and notifies listeners.

Key Classes:
    - DocumentStore: QObject-based store with change signals
    - ItemNotFoundError: Unknown item id

Dependencies:
    - PySide6.QtCore: QObject / Signal change notification
    - layout: Auto-layout, drag reconciliation, collisions
    - store.repository: ItemRepository

Used By:
    - cli: Document commands
    - Editor front ends (drag events, auto-layout buttons)
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Iterable, List, Optional

from PySide6.QtCore import QObject, Signal

from folio_layout.core.models import Item
from folio_layout.layout import (
    CanvasGeometry,
    LayoutConfig,
    LayoutMode,
    LayoutResult,
    auto_layout_all_pages,
    auto_layout_page,
    colliding_items,
    reconcile_drag,
)

from .repository import InMemoryRepository, ItemRepository

logger = logging.getLogger(__name__)


class ItemNotFoundError(KeyError):
    """No item with the given id in the document."""

    def __init__(self, item_id: str):
        super().__init__(item_id)
        self.item_id = item_id

    def __str__(self) -> str:
        return f"Item not found: {self.item_id}"


def _check_pages_in_use(items: Iterable[Item], config: LayoutConfig) -> None:
    highest = max((item.page for item in items), default=1)
    if config.total_pages < highest:
        raise ValueError(
            f"Cannot reduce to {config.total_pages} pages: page {highest} still has items"
        )


class DocumentStore(QObject):
    """
    Copy-on-write store for the document's items.

    The collection is an immutable tuple replaced wholesale on every
    change; a snapshot obtained from `items` never changes afterwards.
    All operations are synchronous and run to completion.

    Signals:
        itemsChanged: Emitted after every committed mutation
        layoutModeChanged(str): New LayoutMode value after cycling
        selectionChanged(object): Selected id, or None
        configChanged: Emitted after reconfigure()
    """

    itemsChanged = Signal()
    layoutModeChanged = Signal(str)
    selectionChanged = Signal(object)
    configChanged = Signal()

    def __init__(
        self,
        repository: Optional[ItemRepository] = None,
        config: Optional[LayoutConfig] = None,
        mode: LayoutMode = LayoutMode.INSERTION,
        items: Optional[Iterable[Item]] = None,
    ) -> None:
        """
        Args:
            repository: Persistence target; in-memory when omitted
            config: Page geometry; defaults when omitted
            mode: Initial layout mode
            items: Already loaded items; read from the repository when None

        Raises:
            ValueError: If an item sits on a page outside the configuration
        """
        super().__init__()
        self.repository = repository or InMemoryRepository()
        self._config = config or LayoutConfig()
        if items is None:
            items = self.repository.load_all()
        self._items: tuple[Item, ...] = tuple(items)
        _check_pages_in_use(self._items, self._config)
        self._mode = mode
        self._selected_id: Optional[str] = None
        self.last_result: Optional[LayoutResult] = None

    # ─────────────────────────────────────────────────────────────────────────
    # Read model
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def items(self) -> tuple[Item, ...]:
        return self._items

    @property
    def config(self) -> LayoutConfig:
        return self._config

    @property
    def geometry(self) -> CanvasGeometry:
        return self._config.geometry

    @property
    def layout_mode(self) -> LayoutMode:
        return self._mode

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def selected_item(self) -> Optional[Item]:
        if self._selected_id is None:
            return None
        return self.find(self._selected_id)

    def find(self, item_id: str) -> Optional[Item]:
        return next((item for item in self._items if item.id == item_id), None)

    def get(self, item_id: str) -> Item:
        """
        Item by id.

        Raises:
            ItemNotFoundError: If no such item exists
        """
        item = self.find(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)
        return item

    def items_on_page(self, page: int) -> List[Item]:
        return [item for item in self._items if item.page == page]

    def visible_count(self, page: int, page_width: float, page_height: float) -> int:
        """Items of a page whose top-left corner lies inside the page."""
        return sum(
            1 for item in self._items
            if item.page == page
            and 0 <= item.x < page_width
            and 0 <= item.y < page_height
        )

    def collisions(self, item_id: str) -> List[Item]:
        """Items touching or overlapping the given item."""
        return colliding_items(self.get(item_id), self._items)

    # ─────────────────────────────────────────────────────────────────────────
    # Auto-layout
    # ─────────────────────────────────────────────────────────────────────────

    def auto_layout_page(
        self,
        page: int,
        page_width: Optional[float] = None,
        page_height: Optional[float] = None,
    ) -> LayoutResult:
        """
        Re-pack one page with the active mode, persist, then cycle the mode.

        Args:
            page: Target page (1-based)
            page_width: Live page width; defaults to the configured width
            page_height: Live page height; defaults to the configured height

        Raises:
            ValueError: If page is outside the document
        """
        self._check_page(page)
        result = auto_layout_page(
            self._items,
            page,
            self._config.page_width if page_width is None else page_width,
            self._config.page_height if page_height is None else page_height,
            mode=self._mode,
            config=self._config,
        )
        return self._finish_layout(result)

    def auto_layout_all_pages(
        self,
        page_width: Optional[float] = None,
        page_height: Optional[float] = None,
    ) -> LayoutResult:
        """Re-pack every page with the active mode, persist once, cycle the mode."""
        result = auto_layout_all_pages(
            self._items,
            self._config.page_width if page_width is None else page_width,
            self._config.page_height if page_height is None else page_height,
            mode=self._mode,
            config=self._config,
        )
        return self._finish_layout(result)

    def cycle_layout_mode(self) -> LayoutMode:
        """Advance to the next sort mode and return it."""
        self._mode = self._mode.next()
        logger.debug(f"Layout mode -> {self._mode.label}")
        self.layoutModeChanged.emit(self._mode.value)
        return self._mode

    def _finish_layout(self, result: LayoutResult) -> LayoutResult:
        # Persist and cycle even when nothing moved.
        self.last_result = result
        self._commit(result.items)
        self.cycle_layout_mode()
        return result

    # ─────────────────────────────────────────────────────────────────────────
    # Manual edits
    # ─────────────────────────────────────────────────────────────────────────

    def drag_item(self, item_id: str, x: float, y_local: float) -> Item:
        """
        Handle a drag release at (x, y_local) relative to the item's page.

        The item moves to whichever page the drop point falls on.
        """
        moved = reconcile_drag(self.get(item_id), x, y_local, self.geometry)
        self._replace(item_id, lambda _: moved)
        return moved

    def move_item(self, item_id: str, x: float, y: float) -> Item:
        """Set page-local coordinates without touching the page."""
        return self._replace(item_id, lambda item: item.moved_to(x, y))

    def toggle_border(self, item_id: str) -> Item:
        return self._replace(item_id, lambda item: item.with_border(not item.has_border))

    def toggle_percentage(self, item_id: str, percentage: int) -> Item:
        """
        Switch one percentage badge on or off.

        Raises:
            ValueError: If percentage is not an allowed badge
        """
        return self._replace(item_id, lambda item: item.with_percentage_toggled(percentage))

    def set_text(self, item_id: str, text: str) -> Item:
        """
        Change the label of a shape.

        Raises:
            ValueError: If the item is not a shape
        """
        item = self.get(item_id)
        if not item.is_shape:
            raise ValueError(f"Only shapes carry text: {item_id}")
        return self._replace(item_id, lambda current: current.with_text(text))

    def add_item(self, item: Item) -> Item:
        """
        Append an item to the document.

        Raises:
            ValueError: If the id already exists or the page is invalid
        """
        self._check_page(item.page)
        if self.find(item.id) is not None:
            raise ValueError(f"Duplicate item id: {item.id}")
        self._commit(self._items + (item,))
        return item

    def insert_on_page(self, item: Item, page: int) -> Item:
        """
        Insert a copy of `item` at the top-left of `page`.

        The copy gets a fresh id derived from the original one.
        """
        self._check_page(page)
        inset = self._config.page_padding
        new_id = self._unique_id(item.id)
        placed = replace(item, id=new_id).moved_to(inset, inset, page)
        return self.add_item(placed)

    def delete_item(self, item_id: str) -> None:
        self.get(item_id)
        self._commit(tuple(item for item in self._items if item.id != item_id))
        if self._selected_id == item_id:
            self.select_item(None)

    def clear_shapes(self) -> int:
        """Remove every shape; returns how many were removed."""
        kept = tuple(item for item in self._items if not item.is_shape)
        removed = len(self._items) - len(kept)
        self._commit(kept)
        return removed

    def clear_everything(self) -> None:
        self._commit(())
        self.select_item(None)

    def reload(self, items: Iterable[Item]) -> None:
        """Replace the whole document, e.g. with seed data."""
        items = tuple(items)
        for item in items:
            self._check_page(item.page)
        self._commit(items)
        self.select_item(None)

    def select_item(self, item_id: Optional[str]) -> None:
        if item_id is not None:
            self.get(item_id)
        if item_id != self._selected_id:
            self._selected_id = item_id
            self.selectionChanged.emit(item_id)

    # ─────────────────────────────────────────────────────────────────────────
    # Configuration
    # ─────────────────────────────────────────────────────────────────────────

    def reconfigure(self, config: LayoutConfig) -> None:
        """
        Change page geometry. Items keep their coordinates.

        Raises:
            ValueError: If pages still holding items would be removed
        """
        _check_pages_in_use(self._items, config)
        self._config = config
        self.configChanged.emit()

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    def _commit(self, items: tuple[Item, ...]) -> None:
        """Swap in a new snapshot, persist it and notify listeners."""
        self._items = items
        self.repository.save_all(items)
        self.itemsChanged.emit()

    def _replace(self, item_id: str, change: Callable[[Item], Item]) -> Item:
        updated = change(self.get(item_id))
        self._commit(tuple(updated if item.id == item_id else item for item in self._items))
        return updated

    def _check_page(self, page: int) -> None:
        if not 1 <= page <= self._config.total_pages:
            raise ValueError(f"Page {page} outside 1..{self._config.total_pages}")

    def _unique_id(self, base: str) -> str:
        existing = {item.id for item in self._items}
        n = 1
        candidate = f"{base}-{n}"
        while candidate in existing:
            n += 1
            candidate = f"{base}-{n}"
        return candidate
