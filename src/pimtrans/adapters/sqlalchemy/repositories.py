"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from sqlalchemy import and_, or_, select

from pimtrans.adapters.sqlalchemy.mappings import translation_table
from pimtrans.domain.model import CatalogItem, Channel, TranslationRecord

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence
    from uuid import UUID

    from sqlalchemy.orm import Session

    from pimtrans.domain.ports import TranslationCursor


class SqlAlchemyTranslationRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def find_translations(
        self,
        *,
        item_id: UUID | None = None,
        language: str | None = None,
        after: TranslationCursor | None = None,
        page_size: int,
    ) -> Sequence[TranslationRecord]:
        columns = translation_table.c
        stmt = select(TranslationRecord).order_by(columns.item_id, columns.id).limit(page_size)
        if item_id is not None:
            stmt = stmt.where(columns.item_id == item_id)
        if language is not None:
            stmt = stmt.where(columns.language == language)
        if after is not None:
            stmt = stmt.where(
                or_(
                    columns.item_id > after.item_id,
                    and_(columns.item_id == after.item_id, columns.id > after.record_id),
                )
            )
        return self.session.execute(stmt).scalars().all()

    def find_record(
        self,
        *,
        item_id: UUID,
        channel_id: UUID,
        language: str,
        exclude_ids: Collection[UUID] = (),
    ) -> TranslationRecord | None:
        columns = translation_table.c
        stmt = (
            select(TranslationRecord)
            .where(columns.item_id == item_id)
            .where(columns.channel_id == channel_id)
            .where(columns.language == language)
            .order_by(columns.id)
            .limit(1)
        )
        if exclude_ids:
            stmt = stmt.where(columns.id.not_in(list(exclude_ids)))
        return self.session.execute(stmt).scalar_one_or_none()

    def get(self, record_id: UUID) -> TranslationRecord | None:
        return self.session.get(TranslationRecord, record_id)

    def save(self, record: TranslationRecord) -> None:
        self.session.add(record)

    def delete(self, record: TranslationRecord) -> None:
        self.session.delete(record)


class SqlAlchemyCatalogRepository:
    """Read-only access to catalog items and channels."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def resolve_item(self, item_id: UUID) -> CatalogItem | None:
        return self.session.get(CatalogItem, item_id)

    def resolve_channel(self, channel_id: UUID) -> Channel | None:
        return self.session.get(Channel, channel_id)

    def resolve_owning_channel(self, item_id: UUID) -> Channel | None:
        item = self.resolve_item(item_id)
        if item is None or item.channel_id is None:
            return None
        return self.resolve_channel(item.channel_id)


if TYPE_CHECKING:
    from pimtrans.domain.ports import CatalogRepository, TranslationRepository

    _session_stub = cast("Session", object())
    _translation_repo: TranslationRepository = SqlAlchemyTranslationRepository(_session_stub)
    _catalog_repo: CatalogRepository = SqlAlchemyCatalogRepository(_session_stub)
