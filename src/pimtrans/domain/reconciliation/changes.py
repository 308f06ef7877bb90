"""Where change plans land: the store, or an in-memory overlay for dry runs.

Both change sets execute plans through :func:`execute_plan`; they differ only in
how records are loaded, saved and deleted. The simulated change set keeps the
planned state of touched records so later lookups see it, which keeps dry-run
counters equal to those of a real run. Plans never reach outside the record's
catalog item and traversal is ordered by item, so the overlay only holds the
item currently being visited.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from pimtrans.domain.reconciliation.plan import AssignPlan, MergePlan, TransitionPlan

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime
    from uuid import UUID

    from pimtrans.domain.model import TranslationRecord
    from pimtrans.domain.ports import TranslationRepository, TranslationUnitOfWork
    from pimtrans.domain.reconciliation.plan import ChangePlan


class StaleRecordError(RuntimeError):
    """Raised when a planned record vanished before the plan was executed."""


def execute_plan(
    plan: ChangePlan,
    *,
    load: Callable[[UUID], TranslationRecord | None],
    save: Callable[[TranslationRecord], None],
    delete: Callable[[TranslationRecord], None],
    now: datetime,
) -> None:
    match plan:
        case AssignPlan() | TransitionPlan():
            record = _require(load, plan.record_id)
            plan.apply_to(record, now=now)
            save(record)
        case MergePlan():
            canonical = _require(load, plan.canonical_id)
            duplicate = _require(load, plan.duplicate_id)
            plan.apply_to(canonical, now=now)
            save(canonical)
            delete(duplicate)


def _require(
    load: Callable[[UUID], TranslationRecord | None],
    record_id: UUID,
) -> TranslationRecord:
    record = load(record_id)
    if record is None:
        raise StaleRecordError(f"Translation {record_id} no longer exists")
    return record


class ChangeSet(Protocol):
    """Read-your-writes view over the translation store for one run."""

    @property
    def dry_run(self) -> bool: ...

    def current(
        self,
        repository: TranslationRepository,
        record: TranslationRecord,
    ) -> TranslationRecord | None: ...

    def find_canonical(
        self,
        repository: TranslationRepository,
        *,
        item_id: UUID,
        channel_id: UUID,
        language: str,
        exclude_id: UUID,
    ) -> TranslationRecord | None: ...

    def apply(self, uow: TranslationUnitOfWork, plan: ChangePlan, *, now: datetime) -> None: ...


class PersistedChanges:
    """Apply plans to the store, committing each plan as one transaction."""

    @property
    def dry_run(self) -> bool:
        return False

    def current(
        self,
        repository: TranslationRepository,
        record: TranslationRecord,
    ) -> TranslationRecord | None:
        return repository.get(record.id)

    def find_canonical(
        self,
        repository: TranslationRepository,
        *,
        item_id: UUID,
        channel_id: UUID,
        language: str,
        exclude_id: UUID,
    ) -> TranslationRecord | None:
        return repository.find_record(
            item_id=item_id,
            channel_id=channel_id,
            language=language,
            exclude_ids=(exclude_id,),
        )

    def apply(self, uow: TranslationUnitOfWork, plan: ChangePlan, *, now: datetime) -> None:
        repository = uow.repositories.translations
        execute_plan(
            plan,
            load=repository.get,
            save=repository.save,
            delete=repository.delete,
            now=now,
        )
        uow.commit()


class SimulatedChanges:
    """Apply plans to detached copies; the store is only ever read."""

    def __init__(self) -> None:
        # record id -> planned state; None marks a planned deletion
        self._staged: dict[UUID, TranslationRecord | None] = {}
        self._item_id: UUID | None = None

    @property
    def dry_run(self) -> bool:
        return True

    @property
    def staged_count(self) -> int:
        return len(self._staged)

    def _enter_item(self, item_id: UUID) -> None:
        if item_id != self._item_id:
            self._staged.clear()
            self._item_id = item_id

    def current(
        self,
        repository: TranslationRepository,
        record: TranslationRecord,
    ) -> TranslationRecord | None:
        self._enter_item(record.item_id)
        if record.id in self._staged:
            return self._staged[record.id]
        return repository.get(record.id)

    def find_canonical(
        self,
        repository: TranslationRepository,
        *,
        item_id: UUID,
        channel_id: UUID,
        language: str,
        exclude_id: UUID,
    ) -> TranslationRecord | None:
        self._enter_item(item_id)
        candidates = [
            staged
            for staged in self._staged.values()
            if staged is not None
            and staged.id != exclude_id
            and staged.item_id == item_id
            and staged.channel_id == channel_id
            and staged.language == language
        ]
        stored = repository.find_record(
            item_id=item_id,
            channel_id=channel_id,
            language=language,
            exclude_ids=(exclude_id, *self._staged),
        )
        if stored is not None:
            candidates.append(stored)
        if not candidates:
            return None
        return min(candidates, key=lambda candidate: candidate.id)

    def apply(self, uow: TranslationUnitOfWork, plan: ChangePlan, *, now: datetime) -> None:
        self._enter_item(plan.item_id)
        repository = uow.repositories.translations

        def load(record_id: UUID) -> TranslationRecord | None:
            if record_id in self._staged:
                return self._staged[record_id]
            stored = repository.get(record_id)
            return stored.detached_copy() if stored is not None else None

        def save(record: TranslationRecord) -> None:
            self._staged[record.id] = record

        def delete(record: TranslationRecord) -> None:
            self._staged[record.id] = None

        execute_plan(plan, load=load, save=save, delete=delete, now=now)


if TYPE_CHECKING:
    _persisted_check: ChangeSet = PersistedChanges()
    _simulated_check: ChangeSet = SimulatedChanges()
