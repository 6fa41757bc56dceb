"""
Schema Validation Utilities

Validates persisted document JSON before it is turned into Items.

Two levels:
- Basic checks (always): top-level shape, schema version, duplicate ids
- Strict checks: full JSON Schema validation via jsonschema
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema


# Schema version constants
DOCUMENT_SCHEMA_VERSION = 1

# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_document(data: Any, *, strict: bool = True) -> None:
    """
    Validate a persisted document.

    Args:
        data: Parsed JSON payload
        strict: If True, also validate against document.schema.json

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(
            f"Document must be an object, got {type(data).__name__}",
            path="",
        )

    missing = [f for f in ("schema_version", "items") if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing],
        )

    version = data.get("schema_version")
    if version != DOCUMENT_SCHEMA_VERSION:
        raise ValidationError(
            f"Unsupported document schema version: {version} (expected {DOCUMENT_SCHEMA_VERSION})",
            path="schema_version",
        )

    items = data.get("items")
    if not isinstance(items, list):
        raise ValidationError("items must be a list", path="items")

    if strict:
        schema = _load_schema("document")
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise ValidationError(
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                errors=[e.message],
            ) from e

    _validate_unique_ids(items)


def _validate_unique_ids(items: list[Any]) -> None:
    """Item ids must be unique across the document."""
    seen: set[str] = set()
    duplicates: list[str] = []
    for i, entry in enumerate(items):
        if not isinstance(entry, dict) or "id" not in entry:
            raise ValidationError("Item missing id", path=f"items[{i}]")
        item_id = entry["id"]
        if item_id in seen:
            duplicates.append(item_id)
        seen.add(item_id)
    if duplicates:
        raise ValidationError(
            f"Duplicate item ids: {duplicates}",
            path="items",
            errors=[f"Duplicate id: {d}" for d in duplicates],
        )
