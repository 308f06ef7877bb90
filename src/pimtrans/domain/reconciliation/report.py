"""Counters, per-record outcomes and the reporter port."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pimtrans.domain.model import TranslationRecord
    from pimtrans.domain.reconciliation.plan import ChangePlan

log = logging.getLogger(__name__)


class OutcomeKind(StrEnum):
    """What happened to one visited record."""

    SKIP = "skip"
    ASSIGN = "assign"
    MERGE = "merge"
    PROMOTE = "promote"
    DEMOTE = "demote"
    NO_OP = "no_op"


@dataclass(frozen=True, slots=True)
class ReconciliationCounters:
    updated: int = 0
    merged: int = 0
    deleted: int = 0
    failed: int = 0

    def __add__(self, other: ReconciliationCounters) -> ReconciliationCounters:
        return ReconciliationCounters(
            updated=self.updated + other.updated,
            merged=self.merged + other.merged,
            deleted=self.deleted + other.deleted,
            failed=self.failed + other.failed,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class RecordOutcome:
    kind: OutcomeKind
    plan: ChangePlan | None = None

    @property
    def counters(self) -> ReconciliationCounters:
        if self.plan is None:
            return ReconciliationCounters()
        return self.plan.counters


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconciliationResult:
    """Outcome of a reconciliation run."""

    counters: ReconciliationCounters
    dry_run: bool = False

    @property
    def updated(self) -> int:
        return self.counters.updated

    @property
    def merged(self) -> int:
        return self.counters.merged

    @property
    def deleted(self) -> int:
        return self.counters.deleted

    @property
    def failed(self) -> int:
        return self.counters.failed

    def summary_line(self) -> str:
        suffix = " (dry-run)" if self.dry_run else ""
        line = f"Done. updated={self.updated}, merged={self.merged}, removed={self.deleted}"
        if self.failed:
            line += f", failed={self.failed}"
        return line + suffix


class ReconciliationReporter(Protocol):
    """Consumer of per-record traces and the final summary."""

    def planned(self, plan: ChangePlan) -> None: ...

    def failed(self, record: TranslationRecord, error: BaseException) -> None: ...

    def finished(self, result: ReconciliationResult) -> None: ...


class LoggingReporter:
    """Report through ``logging``; traces are INFO in dry runs and DEBUG otherwise."""

    def __init__(self, *, dry_run: bool = False, logger: logging.Logger | None = None) -> None:
        self._dry_run = dry_run
        self._log = logger or log

    def planned(self, plan: ChangePlan) -> None:
        level = logging.INFO if self._dry_run else logging.DEBUG
        self._log.log(level, plan.describe())

    def failed(self, record: TranslationRecord, error: BaseException) -> None:
        self._log.warning(
            "[failed] item=%s language=%s record=%s: %s",
            record.item_id,
            record.language,
            record.id,
            error,
        )

    def finished(self, result: ReconciliationResult) -> None:
        self._log.info(result.summary_line())
