"""
Schemas Package

JSON schema definitions and validation utilities for persisted documents.
"""

from .validator import (
    validate_document,
    ValidationError,
    DOCUMENT_SCHEMA_VERSION,
)

__all__ = [
    "validate_document",
    "ValidationError",
    "DOCUMENT_SCHEMA_VERSION",
]
