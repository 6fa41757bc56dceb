"""
Serialization Utilities

Provides to/from JSON utilities for layout documents.

A document is the full item collection (replace-all semantics) plus the
optional page geometry it was laid out with:

    {"schema_version": 1, "config": {...}, "items": [{...}, ...]}
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Optional

from ..models.items import Item
from ..schemas.validator import DOCUMENT_SCHEMA_VERSION, ValidationError, validate_document


# ─────────────────────────────────────────────────────────────────────────────
# Document Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_document(
    items: Iterable[Item],
    config: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """
    Serialize an item collection to a dictionary.

    Args:
        items: Items in document order
        config: Optional geometry settings (LayoutConfig.to_dict())

    Returns:
        Dictionary suitable for JSON serialization
    """
    data: dict[str, Any] = {
        "schema_version": DOCUMENT_SCHEMA_VERSION,
        "items": [item.to_dict() for item in items],
    }
    if config is not None:
        data["config"] = dict(config)
    return data


def deserialize_document(
    data: dict[str, Any],
    *,
    validate: bool = True,
) -> tuple[list[Item], Optional[dict[str, Any]]]:
    """
    Deserialize a document from a dictionary.

    Args:
        data: Dictionary from JSON
        validate: Whether to validate against the schema first

    Returns:
        Tuple of (items in document order, geometry settings or None)

    Raises:
        ValidationError: If validate=True and data is invalid
        ValueError: If an item cannot be constructed
    """
    if validate:
        validate_document(data, strict=True)

    items = [Item.from_dict(entry) for entry in data.get("items", [])]
    config = data.get("config")
    return items, (dict(config) if config is not None else None)


# ─────────────────────────────────────────────────────────────────────────────
# File I/O
# ─────────────────────────────────────────────────────────────────────────────

def load_document_json(
    path: Path,
    *,
    validate: bool = True,
) -> tuple[list[Item], Optional[dict[str, Any]]]:
    """
    Load a document from a JSON file.

    Raises:
        FileNotFoundError: If path does not exist
        ValidationError: If the content is not a valid document
    """
    if not path.exists():
        raise FileNotFoundError(f"Document not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Document is not valid JSON: {e}", path=str(path)) from e

    return deserialize_document(data, validate=validate)


def save_document_json(
    path: Path,
    items: Iterable[Item],
    config: Optional[dict[str, Any]] = None,
) -> None:
    """
    Save a document to a JSON file, creating parent directories.

    The file is written to a sibling temp file first and then renamed,
    so readers never see a half-written document. On failure the temp
    file is removed and the error propagates.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    data = serialize_document(items, config)

    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        tmp_path.replace(path)
    except Exception:
        if tmp_path.exists():
            tmp_path.unlink()
        raise
