"""Ports for reading catalog context and persisting translation records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence
    from uuid import UUID

    from pimtrans.domain.model import CatalogItem, Channel, TranslationRecord


@dataclass(frozen=True, slots=True)
class TranslationCursor:
    """Keyset position in the ``(item_id, id)`` ordering of translation records."""

    item_id: UUID
    record_id: UUID

    @classmethod
    def after(cls, record: TranslationRecord) -> TranslationCursor:
        return cls(item_id=record.item_id, record_id=record.id)


@runtime_checkable
class TranslationRepository(Protocol):
    """Persistence contract for translation records."""

    def find_translations(
        self,
        *,
        item_id: UUID | None = None,
        language: str | None = None,
        after: TranslationCursor | None = None,
        page_size: int,
    ) -> Sequence[TranslationRecord]:
        """Return the next page ordered by ``(item_id, id)`` strictly after ``after``."""
        ...

    def find_record(
        self,
        *,
        item_id: UUID,
        channel_id: UUID,
        language: str,
        exclude_ids: Collection[UUID] = (),
    ) -> TranslationRecord | None:
        """Return the lowest-id record for the triple, ignoring ``exclude_ids``."""
        ...

    def get(self, record_id: UUID) -> TranslationRecord | None: ...

    def save(self, record: TranslationRecord) -> None: ...

    def delete(self, record: TranslationRecord) -> None: ...


@runtime_checkable
class CatalogRepository(Protocol):
    """Read-only lookups of catalog items and channels."""

    def resolve_item(self, item_id: UUID) -> CatalogItem | None: ...

    def resolve_channel(self, channel_id: UUID) -> Channel | None: ...

    def resolve_owning_channel(self, item_id: UUID) -> Channel | None: ...
