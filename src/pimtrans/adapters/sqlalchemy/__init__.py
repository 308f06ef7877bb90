"""SQLAlchemy adapter package for pimtrans."""

from __future__ import annotations

from .mappings import mapper_registry, start_mappers
from .repositories import SqlAlchemyCatalogRepository, SqlAlchemyTranslationRepository
from .unit_of_work import (
    SqlAlchemyTranslationUnitOfWork,
    StartupError,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyCatalogRepository",
    "SqlAlchemyTranslationRepository",
    "SqlAlchemyTranslationUnitOfWork",
    "StartupError",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
