"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class TranslationStatus(StrEnum):
    DRAFT = "draft"
    SYNCED = "synced"


class ScalarField(StrEnum):
    """Plain-text content attributes of a translation record."""

    TITLE = "title"
    SHORT_SUMMARY = "short_summary"
    BODY = "body"


class StructuredField(StrEnum):
    """Map/array-shaped content attributes of a translation record."""

    ATTRIBUTES = "attributes"
    SEARCH_METADATA = "search_metadata"
