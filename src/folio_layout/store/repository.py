"""
Module: store.repository

Purpose:
    Persistence boundary for the item collection.
    Load-all / save-all only: callers always submit the full collection.

Key Classes:
    - ItemRepository: Abstract load-all / save-all interface
    - InMemoryRepository: Keeps the last saved collection in memory
    - JsonFileRepository: JSON document on disk

Dependencies:
    - core.utils.serialization: Document (de)serialization

Used By:
    - store.document_store: Persists after every mutation
    - cli: Document files
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Iterable, List, Optional

from folio_layout.core.models import Item
from folio_layout.core.schemas import ValidationError
from folio_layout.core.utils import load_document_json, save_document_json

logger = logging.getLogger(__name__)


class ItemRepository(ABC):
    """
    Abstract load-all / save-all store for items.

    Implementations never patch individual items; save_all always
    replaces the whole collection.
    """

    @abstractmethod
    def load_all(self) -> List[Item]:
        """
        Load the full collection.

        Returns:
            Items in document order (empty if nothing stored)
        """

    @abstractmethod
    def save_all(self, items: Iterable[Item]) -> None:
        """
        Replace the stored collection.

        Args:
            items: Full collection in document order
        """


class InMemoryRepository(ItemRepository):
    """Repository holding the collection in memory."""

    def __init__(self, items: Iterable[Item] = ()) -> None:
        self._items: List[Item] = list(items)
        self.save_count = 0

    def load_all(self) -> List[Item]:
        return list(self._items)

    def save_all(self, items: Iterable[Item]) -> None:
        self._items = list(items)
        self.save_count += 1


class JsonFileRepository(ItemRepository):
    """
    Repository backed by a JSON document on disk.

    A missing file loads as an empty collection. A corrupted or invalid
    file is logged and also loads as empty, so a bad document never
    prevents the editor from starting. Write errors propagate.

    Attributes:
        path: Document location
        config: Geometry settings stored alongside the items
    """

    def __init__(self, path: Path, config: Optional[dict[str, Any]] = None) -> None:
        self.path = Path(path)
        self.config = config
        self.load_error: Optional[str] = None

    def load_all(self) -> List[Item]:
        self.load_error = None
        if not self.path.exists():
            logger.debug(f"No document at {self.path}; starting empty")
            return []

        try:
            items, config = load_document_json(self.path)
        except ValidationError as e:
            self.load_error = f"Document is invalid: {e}"
        except (OSError, ValueError) as e:
            self.load_error = f"Failed to read document: {e}"
        else:
            if config is not None:
                self.config = config
            logger.info(f"Loaded {len(items)} items from {self.path}")
            return items

        logger.warning(f"{self.load_error} ({self.path}); starting empty")
        return []

    def save_all(self, items: Iterable[Item]) -> None:
        items = list(items)
        save_document_json(self.path, items, self.config)
        logger.debug(f"Saved {len(items)} items to {self.path}")
