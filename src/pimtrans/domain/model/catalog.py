"""Catalog entities the reconciliation reads but never mutates."""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID, uuid4


def new_id() -> UUID:
    return uuid4()


@dataclass(eq=False, kw_only=True)
class Channel:
    """A selling channel. Exactly one channel per catalog is primary."""

    id: UUID = field(default_factory=new_id)
    name: str
    is_primary: bool = False


@dataclass(eq=False, kw_only=True)
class CatalogItem:
    """A catalog item registered under its owning channel.

    ``reference_language`` is the language canonical content is authored in.
    """

    id: UUID = field(default_factory=new_id)
    channel_id: UUID | None = None
    reference_language: str | None = None
    sku: str | None = None
