"""Domain model for catalog translations."""

from __future__ import annotations

from .catalog import CatalogItem, Channel, new_id
from .enums import ScalarField, StructuredField, TranslationStatus
from .translation import (
    StructuredValue,
    TranslationRecord,
    is_blank_scalar,
    is_blank_structured,
)

__all__ = [
    "CatalogItem",
    "Channel",
    "ScalarField",
    "StructuredField",
    "StructuredValue",
    "TranslationRecord",
    "TranslationStatus",
    "is_blank_scalar",
    "is_blank_structured",
    "new_id",
]
