"""Traverse translation records and reconcile them one unit of work at a time."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, assert_never

from pimtrans.domain.model import TranslationStatus
from pimtrans.domain.ports import TranslationCursor
from pimtrans.domain.reconciliation.changes import PersistedChanges, SimulatedChanges
from pimtrans.domain.reconciliation.classify import (
    AssignChannel,
    DemoteToDraft,
    NoOp,
    PromoteToSynced,
    Skip,
    classify,
    resolve_context,
)
from pimtrans.domain.reconciliation.plan import plan_assign, plan_merge, plan_transition
from pimtrans.domain.reconciliation.policy import FailurePolicy, ReconciliationAborted
from pimtrans.domain.reconciliation.report import (
    LoggingReporter,
    OutcomeKind,
    ReconciliationCounters,
    ReconciliationResult,
    RecordOutcome,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from uuid import UUID

    from pimtrans.domain.model import TranslationRecord
    from pimtrans.domain.ports import TranslationUnitOfWork
    from pimtrans.domain.reconciliation.changes import ChangeSet
    from pimtrans.domain.reconciliation.classify import Action
    from pimtrans.domain.reconciliation.plan import ChangePlan
    from pimtrans.domain.reconciliation.report import ReconciliationReporter

DEFAULT_PAGE_SIZE = 100

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconciliationRequest:
    """Filters and switches for one run. Filters only narrow which records are visited."""

    item_id: UUID | None = None
    language: str | None = None
    dry_run: bool = False
    page_size: int = DEFAULT_PAGE_SIZE
    failure_policy: FailurePolicy = FailurePolicy.CONTINUE

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise ValueError("page_size must be positive")


def _utcnow() -> datetime:
    return datetime.now(UTC)


def reconcile_translations(
    *,
    unit_of_work_factory: Callable[[], TranslationUnitOfWork],
    request: ReconciliationRequest | None = None,
    reporter: ReconciliationReporter | None = None,
    clock: Callable[[], datetime] = _utcnow,
) -> ReconciliationResult:
    """Reconcile every matching translation record and return the run's counters."""

    effective_request = request or ReconciliationRequest()
    effective_reporter = reporter or LoggingReporter(dry_run=effective_request.dry_run)
    changes: ChangeSet = SimulatedChanges() if effective_request.dry_run else PersistedChanges()

    log.info(
        "Reconciling translations: item_id=%s, language=%s, dry_run=%s, page_size=%s",
        effective_request.item_id,
        effective_request.language,
        effective_request.dry_run,
        effective_request.page_size,
    )

    counters = ReconciliationCounters()
    for record in _iter_translations(unit_of_work_factory, effective_request):
        counters += _reconcile_in_unit_of_work(
            record,
            unit_of_work_factory=unit_of_work_factory,
            changes=changes,
            reporter=effective_reporter,
            clock=clock,
            failure_policy=effective_request.failure_policy,
        )

    result = ReconciliationResult(counters=counters, dry_run=effective_request.dry_run)
    effective_reporter.finished(result)
    return result


def _iter_translations(
    unit_of_work_factory: Callable[[], TranslationUnitOfWork],
    request: ReconciliationRequest,
) -> Iterator[TranslationRecord]:
    cursor: TranslationCursor | None = None
    while True:
        with unit_of_work_factory() as uow:
            page = list(
                uow.repositories.translations.find_translations(
                    item_id=request.item_id,
                    language=request.language,
                    after=cursor,
                    page_size=request.page_size,
                )
            )
        if not page:
            return
        log.debug("Fetched page of %s translations after %s", len(page), cursor)
        yield from page
        if len(page) < request.page_size:
            return
        cursor = TranslationCursor.after(page[-1])


def _reconcile_in_unit_of_work(
    record: TranslationRecord,
    *,
    unit_of_work_factory: Callable[[], TranslationUnitOfWork],
    changes: ChangeSet,
    reporter: ReconciliationReporter,
    clock: Callable[[], datetime],
    failure_policy: FailurePolicy,
) -> ReconciliationCounters:
    try:
        with unit_of_work_factory() as uow:
            outcome = reconcile_record(record, uow=uow, changes=changes, now=clock())
    except Exception as exc:
        log.exception(
            "Failed to reconcile translation %s (item=%s, language=%s)",
            record.id,
            record.item_id,
            record.language,
        )
        reporter.failed(record, exc)
        if failure_policy is FailurePolicy.ABORT:
            raise ReconciliationAborted(record.id) from exc
        return ReconciliationCounters(failed=1)

    if outcome.plan is not None:
        reporter.planned(outcome.plan)
    return outcome.counters


def reconcile_record(
    record: TranslationRecord,
    *,
    uow: TranslationUnitOfWork,
    changes: ChangeSet,
    now: datetime,
) -> RecordOutcome:
    """Classify one record and apply its plan through ``changes``.

    The record is re-read first: a merge earlier in the run may have updated or
    removed it since its page was fetched.
    """

    repositories = uow.repositories
    current = changes.current(repositories.translations, record)
    if current is None:
        log.debug("Translation %s vanished before it was reconciled", record.id)
        return RecordOutcome(kind=OutcomeKind.SKIP)

    context = resolve_context(repositories.catalog, current)
    action = classify(current, context)
    if isinstance(action, Skip):
        log.debug("Skipping translation %s: %s", current.id, action.reason)
        return RecordOutcome(kind=OutcomeKind.SKIP)

    plan = _plan_action(action, current, changes=changes, uow=uow)
    if plan is None:
        return RecordOutcome(kind=OutcomeKind.NO_OP)

    changes.apply(uow, plan, now=now)
    return RecordOutcome(kind=plan.outcome, plan=plan)


def _plan_action(
    action: Action,
    record: TranslationRecord,
    *,
    changes: ChangeSet,
    uow: TranslationUnitOfWork,
) -> ChangePlan | None:
    match action:
        case AssignChannel(channel=channel, item=item):
            canonical = changes.find_canonical(
                uow.repositories.translations,
                item_id=record.item_id,
                channel_id=channel.id,
                language=record.language,
                exclude_id=record.id,
            )
            if canonical is not None:
                return plan_merge(canonical, record, channel=channel, item=item)
            return plan_assign(record, channel=channel, item=item)
        case PromoteToSynced():
            return plan_transition(record, TranslationStatus.SYNCED)
        case DemoteToDraft():
            return plan_transition(record, TranslationStatus.DRAFT)
        case NoOp() | Skip():
            return None
        case _:
            assert_never(action)
