"""Reusable fakes and builders for translation reconciliation tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal
from uuid import UUID, uuid4

from pimtrans.domain.model import CatalogItem, Channel, TranslationRecord, TranslationStatus
from pimtrans.domain.ports import TranslationRepositories

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence

    from pimtrans.domain.model import StructuredValue
    from pimtrans.domain.ports import TranslationCursor
    from pimtrans.domain.reconciliation import ChangePlan, ReconciliationResult


def ordered_ids(count: int) -> list[UUID]:
    """Return ``count`` fresh UUIDs in ascending order."""

    return sorted(uuid4() for _ in range(count))


def make_translation(
    item: CatalogItem,
    *,
    language: str,
    channel: Channel | None = None,
    status: TranslationStatus = TranslationStatus.DRAFT,
    title: str | None = None,
    short_summary: str | None = None,
    body: str | None = None,
    attributes: StructuredValue | None = None,
    search_metadata: StructuredValue | None = None,
    record_id: UUID | None = None,
) -> TranslationRecord:
    return TranslationRecord(
        id=record_id or uuid4(),
        item_id=item.id,
        channel_id=channel.id if channel is not None else None,
        language=language,
        status=status,
        title=title,
        short_summary=short_summary,
        body=body,
        attributes=attributes,
        search_metadata=search_metadata,
    )


@dataclass
class InMemoryCatalog:
    """Committed state shared by every fake unit of work."""

    channels: dict[UUID, Channel] = field(default_factory=dict[UUID, Channel])
    items: dict[UUID, CatalogItem] = field(default_factory=dict[UUID, CatalogItem])
    translations: dict[UUID, TranslationRecord] = field(
        default_factory=dict[UUID, TranslationRecord]
    )
    failing_record_ids: set[UUID] = field(default_factory=set[UUID])
    failing_delete_ids: set[UUID] = field(default_factory=set[UUID])
    largest_exclusion: int = 0
    commits: int = 0

    def add_channel(self, *, name: str, is_primary: bool) -> Channel:
        channel = Channel(name=name, is_primary=is_primary)
        self.channels[channel.id] = channel
        return channel

    def add_item(self, *, channel: Channel | None, reference_language: str | None) -> CatalogItem:
        item = CatalogItem(
            channel_id=channel.id if channel is not None else None,
            reference_language=reference_language,
        )
        self.items[item.id] = item
        return item

    def add_translation(self, record: TranslationRecord) -> TranslationRecord:
        self.translations[record.id] = record
        return record

    def snapshot(self) -> dict[UUID, tuple[object, ...]]:
        return {
            record.id: (
                record.item_id,
                record.channel_id,
                record.language,
                record.status,
                record.title,
                record.short_summary,
                record.body,
                record.attributes,
                record.search_metadata,
                record.updated_at,
            )
            for record in self.translations.values()
        }


class FakeTranslationRepository:
    """Repository that hands out copies and stages writes until commit."""

    def __init__(self, catalog: InMemoryCatalog) -> None:
        self._catalog = catalog
        self.pending: dict[UUID, TranslationRecord | None] = {}

    def _visible(self) -> list[TranslationRecord]:
        merged: dict[UUID, TranslationRecord | None] = dict(self._catalog.translations)
        merged.update(self.pending)
        return [record for record in merged.values() if record is not None]

    def find_translations(
        self,
        *,
        item_id: UUID | None = None,
        language: str | None = None,
        after: TranslationCursor | None = None,
        page_size: int,
    ) -> Sequence[TranslationRecord]:
        rows = sorted(self._visible(), key=lambda record: (record.item_id, record.id))
        if item_id is not None:
            rows = [record for record in rows if record.item_id == item_id]
        if language is not None:
            rows = [record for record in rows if record.language == language]
        if after is not None:
            rows = [
                record
                for record in rows
                if (record.item_id, record.id) > (after.item_id, after.record_id)
            ]
        return [record.detached_copy() for record in rows[:page_size]]

    def find_record(
        self,
        *,
        item_id: UUID,
        channel_id: UUID,
        language: str,
        exclude_ids: Collection[UUID] = (),
    ) -> TranslationRecord | None:
        self._catalog.largest_exclusion = max(self._catalog.largest_exclusion, len(exclude_ids))
        matches = sorted(
            (
                record
                for record in self._visible()
                if record.item_id == item_id
                and record.channel_id == channel_id
                and record.language == language
                and record.id not in exclude_ids
            ),
            key=lambda record: record.id,
        )
        return matches[0].detached_copy() if matches else None

    def get(self, record_id: UUID) -> TranslationRecord | None:
        if record_id in self.pending:
            return self.pending[record_id]
        record = self._catalog.translations.get(record_id)
        return record.detached_copy() if record is not None else None

    def save(self, record: TranslationRecord) -> None:
        if record.id in self._catalog.failing_record_ids:
            raise RuntimeError(f"simulated write failure for {record.id}")
        self.pending[record.id] = record

    def delete(self, record: TranslationRecord) -> None:
        if record.id in self._catalog.failing_delete_ids:
            raise RuntimeError(f"simulated delete failure for {record.id}")
        self.pending[record.id] = None


class FakeCatalogRepository:
    def __init__(self, catalog: InMemoryCatalog) -> None:
        self._catalog = catalog

    def resolve_item(self, item_id: UUID) -> CatalogItem | None:
        return self._catalog.items.get(item_id)

    def resolve_channel(self, channel_id: UUID) -> Channel | None:
        return self._catalog.channels.get(channel_id)

    def resolve_owning_channel(self, item_id: UUID) -> Channel | None:
        item = self.resolve_item(item_id)
        if item is None or item.channel_id is None:
            return None
        return self.resolve_channel(item.channel_id)


class FakeTranslationUnitOfWork:
    """Unit of work applying staged writes to the in-memory catalog on commit."""

    def __init__(self, catalog: InMemoryCatalog) -> None:
        self._catalog = catalog
        self._translations = FakeTranslationRepository(catalog)
        self.repositories = TranslationRepositories(
            translations=self._translations,
            catalog=FakeCatalogRepository(catalog),
        )
        self.committed = False
        self.rollback_called = False

    def __enter__(self) -> FakeTranslationUnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: object | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        return False

    def commit(self) -> None:
        for record_id, record in self._translations.pending.items():
            if record is None:
                self._catalog.translations.pop(record_id, None)
            else:
                self._catalog.translations[record_id] = record.detached_copy()
        self._translations.pending.clear()
        self._catalog.commits += 1
        self.committed = True

    def rollback(self) -> None:
        self._translations.pending.clear()
        self.rollback_called = True


class RecordingReporter:
    """Reporter capturing everything the driver emits."""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.plans: list[ChangePlan] = []
        self.failures: list[tuple[UUID, str]] = []
        self.results: list[ReconciliationResult] = []

    def planned(self, plan: ChangePlan) -> None:
        self.plans.append(plan)
        self.lines.append(plan.describe())

    def failed(self, record: TranslationRecord, error: BaseException) -> None:
        self.failures.append((record.id, str(error)))

    def finished(self, result: ReconciliationResult) -> None:
        self.results.append(result)


if TYPE_CHECKING:
    from pimtrans.domain.ports import (
        CatalogRepository,
        TranslationRepository,
        TranslationUnitOfWork,
    )
    from pimtrans.domain.reconciliation import ReconciliationReporter

    _catalog_check = InMemoryCatalog()
    _translation_repo_check: TranslationRepository = FakeTranslationRepository(_catalog_check)
    _catalog_repo_check: CatalogRepository = FakeCatalogRepository(_catalog_check)
    _uow_check: TranslationUnitOfWork = FakeTranslationUnitOfWork(_catalog_check)
    _reporter_check: ReconciliationReporter = RecordingReporter()
