"""Change plans computed from read-only record snapshots.

A plan captures everything one unit of work will change: which record, which
fields, and the status before and after. Plans are pure values; the same plan
is applied to the stored records in a real run and to detached copies in a dry
run, so both modes share one planning path.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pimtrans.domain.model import (
    ScalarField,
    StructuredField,
    TranslationStatus,
    is_blank_scalar,
    is_blank_structured,
)
from pimtrans.domain.reconciliation.report import OutcomeKind, ReconciliationCounters
from pimtrans.domain.reconciliation.status import required_status

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID

    from pimtrans.domain.model import CatalogItem, Channel, StructuredValue, TranslationRecord


@dataclass(frozen=True, slots=True, kw_only=True)
class ContentFill:
    """Values copied from a duplicate into empty fields of the canonical record."""

    scalars: tuple[tuple[ScalarField, str], ...] = ()
    structured: tuple[tuple[StructuredField, StructuredValue], ...] = ()

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(name.value for name, _ in self.scalars) + tuple(
            name.value for name, _ in self.structured
        )

    def apply_to(self, record: TranslationRecord) -> None:
        for scalar_name, text in self.scalars:
            record.set_scalar(scalar_name, text)
        for structured_name, value in self.structured:
            record.set_structured(structured_name, value)


@dataclass(frozen=True, slots=True, kw_only=True)
class AssignPlan:
    """Give a legacy record its channel and the status that channel requires."""

    record_id: UUID
    item_id: UUID
    language: str
    channel_id: UUID
    status_before: TranslationStatus
    status_after: TranslationStatus

    @property
    def outcome(self) -> OutcomeKind:
        return OutcomeKind.ASSIGN

    @property
    def counters(self) -> ReconciliationCounters:
        return ReconciliationCounters(updated=1)

    def apply_to(self, record: TranslationRecord, *, now: datetime) -> None:
        record.channel_id = self.channel_id
        record.status = self.status_after
        record.updated_at = now

    def describe(self) -> str:
        return (
            f"[assign] item={self.item_id} language={self.language} "
            f"set channel_id={self.channel_id} (was null) "
            f"status {self.status_before} -> {self.status_after}"
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class MergePlan:
    """Fold a legacy duplicate into the canonical record and remove it."""

    canonical_id: UUID
    duplicate_id: UUID
    item_id: UUID
    language: str
    fill: ContentFill
    status_before: TranslationStatus
    status_after: TranslationStatus

    @property
    def outcome(self) -> OutcomeKind:
        return OutcomeKind.MERGE

    @property
    def counters(self) -> ReconciliationCounters:
        return ReconciliationCounters(merged=1, deleted=1)

    def apply_to(self, canonical: TranslationRecord, *, now: datetime) -> None:
        self.fill.apply_to(canonical)
        canonical.status = self.status_after
        canonical.updated_at = now

    def describe(self) -> str:
        filled = ",".join(self.fill.field_names) or "-"
        return (
            f"[merge] item={self.item_id} language={self.language} "
            f"target={self.canonical_id} duplicate={self.duplicate_id} filled={filled} "
            f"status {self.status_before} -> {self.status_after}"
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class TransitionPlan:
    """Flip the status of a record that already sits on its channel."""

    record_id: UUID
    item_id: UUID
    language: str
    status_before: TranslationStatus
    status_after: TranslationStatus

    @property
    def outcome(self) -> OutcomeKind:
        if self.status_after == TranslationStatus.SYNCED:
            return OutcomeKind.PROMOTE
        return OutcomeKind.DEMOTE

    @property
    def counters(self) -> ReconciliationCounters:
        return ReconciliationCounters(updated=1)

    def apply_to(self, record: TranslationRecord, *, now: datetime) -> None:
        record.status = self.status_after
        record.updated_at = now

    def describe(self) -> str:
        return (
            f"[status] item={self.item_id} language={self.language} "
            f"status {self.status_before} -> {self.status_after}"
        )


type ChangePlan = AssignPlan | MergePlan | TransitionPlan


def plan_assign(
    record: TranslationRecord,
    *,
    channel: Channel,
    item: CatalogItem,
) -> AssignPlan:
    return AssignPlan(
        record_id=record.id,
        item_id=record.item_id,
        language=record.language,
        channel_id=channel.id,
        status_before=record.status,
        status_after=required_status(
            is_primary=channel.is_primary,
            language=record.language,
            reference_language=item.reference_language,
            current_status=record.status,
        ),
    )


def merge_content(canonical: TranslationRecord, duplicate: TranslationRecord) -> ContentFill:
    """Pick duplicate values for every canonical field that is empty.

    Non-empty canonical values always win; empty duplicate values never fill.
    """

    scalars: list[tuple[ScalarField, str]] = []
    for scalar_name in ScalarField:
        incoming = duplicate.scalar(scalar_name)
        if incoming is None or is_blank_scalar(incoming):
            continue
        if is_blank_scalar(canonical.scalar(scalar_name)):
            scalars.append((scalar_name, incoming))

    structured: list[tuple[StructuredField, StructuredValue]] = []
    for structured_name in StructuredField:
        incoming_value = duplicate.structured(structured_name)
        if incoming_value is None or is_blank_structured(incoming_value):
            continue
        if is_blank_structured(canonical.structured(structured_name)):
            structured.append((structured_name, incoming_value))

    return ContentFill(scalars=tuple(scalars), structured=tuple(structured))


def plan_merge(
    canonical: TranslationRecord,
    duplicate: TranslationRecord,
    *,
    channel: Channel,
    item: CatalogItem,
) -> MergePlan:
    """Plan the merge of ``duplicate`` into ``canonical`` on ``channel``.

    The status is recomputed from the canonical record's channel and language, so
    the channel status rule holds whichever of the two records satisfied it.
    """

    return MergePlan(
        canonical_id=canonical.id,
        duplicate_id=duplicate.id,
        item_id=canonical.item_id,
        language=canonical.language,
        fill=merge_content(canonical, duplicate),
        status_before=canonical.status,
        status_after=required_status(
            is_primary=channel.is_primary,
            language=canonical.language,
            reference_language=item.reference_language,
            current_status=canonical.status,
        ),
    )


def plan_transition(
    record: TranslationRecord,
    target: TranslationStatus,
) -> TransitionPlan | None:
    if record.status == target:
        return None
    return TransitionPlan(
        record_id=record.id,
        item_id=record.item_id,
        language=record.language,
        status_before=record.status,
        status_after=target,
    )
