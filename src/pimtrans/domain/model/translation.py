"""Translation records scoped to (catalog item, channel, language)."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, assert_never

from pimtrans.domain.model.catalog import new_id
from pimtrans.domain.model.enums import ScalarField, StructuredField, TranslationStatus

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID

type StructuredValue = dict[str, object] | list[object]


def is_blank_scalar(value: str | None) -> bool:
    return value is None or value == ""


def is_blank_structured(value: StructuredValue | None) -> bool:
    return value is None or len(value) == 0


@dataclass(eq=False, kw_only=True)
class TranslationRecord:
    """Localized content of one catalog item for one channel and language.

    ``channel_id`` is ``None`` for legacy records created before translations
    were scoped per channel.
    """

    id: UUID = field(default_factory=new_id)
    item_id: UUID
    channel_id: UUID | None = None
    language: str
    status: TranslationStatus = TranslationStatus.DRAFT

    title: str | None = None
    short_summary: str | None = None
    body: str | None = None

    attributes: StructuredValue | None = None
    search_metadata: StructuredValue | None = None

    updated_at: datetime | None = None

    def scalar(self, name: ScalarField) -> str | None:
        match name:
            case ScalarField.TITLE:
                return self.title
            case ScalarField.SHORT_SUMMARY:
                return self.short_summary
            case ScalarField.BODY:
                return self.body
            case _:
                assert_never(name)

    def set_scalar(self, name: ScalarField, value: str | None) -> None:
        match name:
            case ScalarField.TITLE:
                self.title = value
            case ScalarField.SHORT_SUMMARY:
                self.short_summary = value
            case ScalarField.BODY:
                self.body = value
            case _:
                assert_never(name)

    def structured(self, name: StructuredField) -> StructuredValue | None:
        match name:
            case StructuredField.ATTRIBUTES:
                return self.attributes
            case StructuredField.SEARCH_METADATA:
                return self.search_metadata
            case _:
                assert_never(name)

    def set_structured(self, name: StructuredField, value: StructuredValue | None) -> None:
        # Always assign a fresh object so ORM change tracking sees the write.
        fresh = copy.deepcopy(value)
        match name:
            case StructuredField.ATTRIBUTES:
                self.attributes = fresh
            case StructuredField.SEARCH_METADATA:
                self.search_metadata = fresh
            case _:
                assert_never(name)

    def detached_copy(self) -> TranslationRecord:
        """Return an unattached copy suitable for planning without touching storage."""

        return TranslationRecord(
            id=self.id,
            item_id=self.item_id,
            channel_id=self.channel_id,
            language=self.language,
            status=TranslationStatus(self.status),
            title=self.title,
            short_summary=self.short_summary,
            body=self.body,
            attributes=copy.deepcopy(self.attributes),
            search_metadata=copy.deepcopy(self.search_metadata),
            updated_at=self.updated_at,
        )
