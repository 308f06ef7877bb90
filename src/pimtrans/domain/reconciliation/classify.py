"""Classification of one translation record into a reconciliation action."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Literal

from pimtrans.domain.model import TranslationStatus

if TYPE_CHECKING:
    from pimtrans.domain.model import CatalogItem, Channel, TranslationRecord
    from pimtrans.domain.ports import CatalogRepository


class ActionKind(StrEnum):
    SKIP = "skip"
    ASSIGN_CHANNEL = "assign_channel"
    PROMOTE_TO_SYNCED = "promote_to_synced"
    DEMOTE_TO_DRAFT = "demote_to_draft"
    NO_OP = "no_op"


@dataclass(frozen=True, slots=True, kw_only=True)
class RecordContext:
    """Catalog context resolved for one translation record.

    ``owning_channel`` is the channel the catalog item itself is registered under;
    ``record_channel`` is the channel the record already points at, if any.
    """

    item: CatalogItem | None
    owning_channel: Channel | None
    record_channel: Channel | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Skip:
    reason: str
    kind: Literal[ActionKind.SKIP] = ActionKind.SKIP


@dataclass(frozen=True, slots=True, kw_only=True)
class AssignChannel:
    channel: Channel
    item: CatalogItem
    kind: Literal[ActionKind.ASSIGN_CHANNEL] = ActionKind.ASSIGN_CHANNEL


@dataclass(frozen=True, slots=True, kw_only=True)
class PromoteToSynced:
    kind: Literal[ActionKind.PROMOTE_TO_SYNCED] = ActionKind.PROMOTE_TO_SYNCED


@dataclass(frozen=True, slots=True, kw_only=True)
class DemoteToDraft:
    kind: Literal[ActionKind.DEMOTE_TO_DRAFT] = ActionKind.DEMOTE_TO_DRAFT


@dataclass(frozen=True, slots=True, kw_only=True)
class NoOp:
    kind: Literal[ActionKind.NO_OP] = ActionKind.NO_OP


type Action = Skip | AssignChannel | PromoteToSynced | DemoteToDraft | NoOp


def resolve_context(catalog: CatalogRepository, record: TranslationRecord) -> RecordContext:
    item = catalog.resolve_item(record.item_id)
    if item is None:
        return RecordContext(item=None, owning_channel=None)
    owning_channel = catalog.resolve_owning_channel(item.id)
    record_channel = None
    if record.channel_id is not None:
        record_channel = catalog.resolve_channel(record.channel_id)
    return RecordContext(
        item=item,
        owning_channel=owning_channel,
        record_channel=record_channel,
    )


def classify(record: TranslationRecord, context: RecordContext) -> Action:
    """Decide which single action reconciles ``record``.

    Unassigned records are checked first: assigning a channel already applies the
    status rule, so promotion and demotion only concern records that carry a
    channel. Orphaned records are skipped rather than reported as errors.
    """

    item = context.item
    owning_channel = context.owning_channel
    if item is None:
        return Skip(reason="catalog item not found")
    if owning_channel is None:
        return Skip(reason="owning channel not found")

    if record.channel_id is None:
        return AssignChannel(channel=owning_channel, item=item)

    channel = context.record_channel
    if channel is None or channel.id != record.channel_id:
        return Skip(reason="record channel not found")

    if (
        channel.is_primary
        and item.reference_language is not None
        and record.language == item.reference_language
        and record.status != TranslationStatus.SYNCED
    ):
        return PromoteToSynced()

    if not channel.is_primary and record.status == TranslationStatus.SYNCED:
        return DemoteToDraft()

    return NoOp()
