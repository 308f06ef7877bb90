"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_positive_int
from .errors import ConfigurationError
from .logging import configure_logging
from .reconciliation import (
    DEFAULT_PAGE_SIZE,
    ReconciliationConfig,
    get_reconciliation_config,
)
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "ConfigurationError",
    "DatabaseConfig",
    "ReconciliationConfig",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_reconciliation_config",
    "get_storage_config",
    "optional_positive_int",
]
