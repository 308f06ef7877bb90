"""create catalog and translation tables

Revision ID: 0001_catalog_translations
Revises:
Create Date: 2026-10-19 09:00:00
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001_catalog_translations"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "channel",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("is_primary", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_channel"),
    )
    op.create_table(
        "catalog_item",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("channel_id", sa.Uuid(), nullable=True),
        sa.Column("reference_language", sa.String(length=16), nullable=True),
        sa.Column("sku", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_catalog_item"),
    )
    op.create_table(
        "translation",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("item_id", sa.Uuid(), nullable=False),
        sa.Column("channel_id", sa.Uuid(), nullable=True),
        sa.Column("language", sa.String(length=16), nullable=False),
        sa.Column(
            "status",
            sa.Enum("draft", "synced", name="translation_status", native_enum=False),
            nullable=False,
        ),
        sa.Column("title", sa.String(), nullable=True),
        sa.Column("short_summary", sa.Text(), nullable=True),
        sa.Column("body", sa.Text(), nullable=True),
        sa.Column("attributes", sa.JSON(), nullable=True),
        sa.Column("search_metadata", sa.JSON(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_translation"),
        sa.UniqueConstraint("item_id", "channel_id", "language", name="uq_translation_owner"),
    )
    op.create_index("ix_translation_item_id_id", "translation", ["item_id", "id"])


def downgrade() -> None:
    op.drop_index("ix_translation_item_id_id", table_name="translation")
    op.drop_table("translation")
    op.drop_table("catalog_item")
    op.drop_table("channel")
