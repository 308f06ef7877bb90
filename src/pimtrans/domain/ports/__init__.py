"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import CatalogRepository, TranslationCursor, TranslationRepository
from .unit_of_work import (
    RepositoryCollection,
    TranslationRepositories,
    TranslationUnitOfWork,
    UnitOfWork,
)

__all__ = [
    "CatalogRepository",
    "RepositoryCollection",
    "TranslationCursor",
    "TranslationRepositories",
    "TranslationRepository",
    "TranslationUnitOfWork",
    "UnitOfWork",
]
