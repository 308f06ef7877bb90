"""SQLAlchemy mapping metadata for the pimtrans domain model."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from functools import cache

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    Index,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers

from pimtrans.domain.model import CatalogItem, Channel, TranslationRecord, TranslationStatus

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Catalog tables (read-only for reconciliation) ------------------------------

channel_table = Table(
    "channel",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False),
    Column("is_primary", Boolean, nullable=False, default=False),
)

catalog_item_table = Table(
    "catalog_item",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("channel_id", UUIDColumnType, nullable=True),
    Column("reference_language", String(16), nullable=True),
    Column("sku", String, nullable=True),
)

# Translation records ---------------------------------------------------------

translation_table = Table(
    "translation",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("item_id", UUIDColumnType, nullable=False),
    Column("channel_id", UUIDColumnType, nullable=True),
    Column("language", String(16), nullable=False),
    Column(
        "status",
        Enum(
            TranslationStatus,
            name="translation_status",
            native_enum=False,
            values_callable=lambda members: [member.value for member in members],
        ),
        nullable=False,
        default=TranslationStatus.DRAFT,
    ),
    Column("title", String, nullable=True),
    Column("short_summary", Text, nullable=True),
    Column("body", Text, nullable=True),
    Column("attributes", JSON(none_as_null=True), nullable=True),
    Column("search_metadata", JSON(none_as_null=True), nullable=True),
    Column("updated_at", UTCDateTime(), nullable=True),
    # NULL channel ids never collide, so legacy rows are unaffected
    UniqueConstraint("item_id", "channel_id", "language", name="uq_translation_owner"),
    Index("ix_translation_item_id_id", "item_id", "id"),
)


@cache
def start_mappers() -> orm.registry:
    """Map the domain dataclasses imperatively. Safe to call repeatedly."""

    mapper_registry.map_imperatively(Channel, channel_table)
    mapper_registry.map_imperatively(CatalogItem, catalog_item_table)
    mapper_registry.map_imperatively(TranslationRecord, translation_table)

    configure_mappers()
    return mapper_registry

