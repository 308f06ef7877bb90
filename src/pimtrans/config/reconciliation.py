"""Defaults for the translation reconciliation run."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .env import optional_positive_int
from .errors import ConfigurationError

DEFAULT_PAGE_SIZE = 100

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"", "0", "false", "no", "off"})


@dataclass(frozen=True, slots=True)
class ReconciliationConfig:
    page_size: int = DEFAULT_PAGE_SIZE
    fail_fast: bool = False


def get_reconciliation_config() -> ReconciliationConfig:
    raw_fail_fast = (os.getenv("PIMTRANS_FAIL_FAST") or "").strip().lower()
    if raw_fail_fast in _TRUTHY:
        fail_fast = True
    elif raw_fail_fast in _FALSY:
        fail_fast = False
    else:
        raise ConfigurationError(f"PIMTRANS_FAIL_FAST must be a boolean, got {raw_fail_fast!r}")
    return ReconciliationConfig(
        page_size=optional_positive_int("PIMTRANS_PAGE_SIZE", DEFAULT_PAGE_SIZE),
        fail_fast=fail_fast,
    )
