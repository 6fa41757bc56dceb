"""
Module: store

Purpose:
    Shared document state and its persistence boundary.

Key Classes:
    - DocumentStore: Copy-on-write item collection with Qt signals
    - ItemRepository: Load-all / save-all interface
    - InMemoryRepository, JsonFileRepository: Implementations
"""

from .repository import InMemoryRepository, ItemRepository, JsonFileRepository
from .document_store import DocumentStore, ItemNotFoundError

__all__ = [
    "DocumentStore",
    "ItemNotFoundError",
    "ItemRepository",
    "InMemoryRepository",
    "JsonFileRepository",
]
