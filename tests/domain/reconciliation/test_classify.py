from __future__ import annotations

from pimtrans.domain.model import CatalogItem, Channel, TranslationStatus
from pimtrans.domain.reconciliation import ActionKind, RecordContext, classify, resolve_context
from pimtrans.domain.reconciliation.classify import AssignChannel, Skip
from tests.helpers.translations import FakeCatalogRepository, InMemoryCatalog, make_translation


def _setup() -> tuple[Channel, Channel, CatalogItem]:
    primary = Channel(name="main", is_primary=True)
    secondary = Channel(name="outlet", is_primary=False)
    item = CatalogItem(channel_id=primary.id, reference_language="cs")
    return primary, secondary, item


def test_classify_skips_when_item_is_missing() -> None:
    _, _, item = _setup()
    record = make_translation(item, language="en")

    action = classify(record, RecordContext(item=None, owning_channel=None))

    assert action.kind is ActionKind.SKIP


def test_classify_skips_when_owning_channel_is_missing() -> None:
    _, _, item = _setup()
    record = make_translation(item, language="en")

    action = classify(record, RecordContext(item=item, owning_channel=None))

    assert isinstance(action, Skip)
    assert action.reason == "owning channel not found"


def test_classify_assigns_owning_channel_to_legacy_record() -> None:
    primary, _, item = _setup()
    record = make_translation(item, language="cs", status=TranslationStatus.SYNCED)

    action = classify(record, RecordContext(item=item, owning_channel=primary))

    assert isinstance(action, AssignChannel)
    assert action.channel is primary
    assert action.item is item


def test_classify_promotes_primary_reference_language_record() -> None:
    primary, _, item = _setup()
    record = make_translation(item, language="cs", channel=primary)

    action = classify(
        record,
        RecordContext(item=item, owning_channel=primary, record_channel=primary),
    )

    assert action.kind is ActionKind.PROMOTE_TO_SYNCED


def test_classify_leaves_synced_primary_reference_record_alone() -> None:
    primary, _, item = _setup()
    record = make_translation(
        item,
        language="cs",
        channel=primary,
        status=TranslationStatus.SYNCED,
    )

    action = classify(
        record,
        RecordContext(item=item, owning_channel=primary, record_channel=primary),
    )

    assert action.kind is ActionKind.NO_OP


def test_classify_does_not_constrain_primary_non_reference_language() -> None:
    primary, _, item = _setup()
    draft = make_translation(item, language="en", channel=primary)
    synced = make_translation(
        item,
        language="de",
        channel=primary,
        status=TranslationStatus.SYNCED,
    )
    context = RecordContext(item=item, owning_channel=primary, record_channel=primary)

    assert classify(draft, context).kind is ActionKind.NO_OP
    assert classify(synced, context).kind is ActionKind.NO_OP


def test_classify_demotes_synced_record_on_non_primary_channel() -> None:
    primary, secondary, item = _setup()
    record = make_translation(
        item,
        language="de",
        channel=secondary,
        status=TranslationStatus.SYNCED,
    )

    action = classify(
        record,
        RecordContext(item=item, owning_channel=primary, record_channel=secondary),
    )

    assert action.kind is ActionKind.DEMOTE_TO_DRAFT


def test_classify_keeps_draft_record_on_non_primary_channel() -> None:
    primary, secondary, item = _setup()
    record = make_translation(item, language="cs", channel=secondary)

    action = classify(
        record,
        RecordContext(item=item, owning_channel=primary, record_channel=secondary),
    )

    assert action.kind is ActionKind.NO_OP


def test_classify_skips_record_pointing_at_unknown_channel() -> None:
    primary, secondary, item = _setup()
    record = make_translation(item, language="cs", channel=secondary)

    action = classify(record, RecordContext(item=item, owning_channel=primary))

    assert isinstance(action, Skip)
    assert action.reason == "record channel not found"


def test_resolve_context_reads_item_owning_and_record_channel() -> None:
    catalog = InMemoryCatalog()
    primary = catalog.add_channel(name="main", is_primary=True)
    secondary = catalog.add_channel(name="outlet", is_primary=False)
    item = catalog.add_item(channel=primary, reference_language="cs")
    record = make_translation(item, language="de", channel=secondary)

    context = resolve_context(FakeCatalogRepository(catalog), record)

    assert context.item is item
    assert context.owning_channel is primary
    assert context.record_channel is secondary


def test_resolve_context_without_item_resolves_nothing() -> None:
    catalog = InMemoryCatalog()
    orphan = CatalogItem(reference_language="en")
    record = make_translation(orphan, language="en")

    context = resolve_context(FakeCatalogRepository(catalog), record)

    assert context == RecordContext(item=None, owning_channel=None, record_channel=None)
