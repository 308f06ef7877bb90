"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from pimtrans.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyTranslationUnitOfWork,
    is_started,
    startup,
)
from pimtrans.config import get_reconciliation_config
from pimtrans.domain.ports import TranslationUnitOfWork
from pimtrans.domain.reconciliation import (
    FailurePolicy,
    ReconciliationRequest,
    ReconciliationResult,
    reconcile_translations,
)

if TYPE_CHECKING:
    from uuid import UUID

    from pimtrans.domain.reconciliation import ReconciliationReporter

UnitOfWorkFactory = Callable[[], TranslationUnitOfWork]


log = getLogger(__name__)


def normalize_translations(
    *,
    item_id: UUID | None = None,
    language: str | None = None,
    dry_run: bool = False,
    page_size: int | None = None,
    fail_fast: bool | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    reporter: ReconciliationReporter | None = None,
) -> ReconciliationResult:
    """Assign channels to legacy translations, merge duplicates and fix sync status."""

    config = get_reconciliation_config()
    effective_uow = unit_of_work_factory
    if effective_uow is None:
        if not is_started():
            startup()
        effective_uow = SqlAlchemyTranslationUnitOfWork

    effective_fail_fast = config.fail_fast if fail_fast is None else fail_fast
    request = ReconciliationRequest(
        item_id=item_id,
        language=language,
        dry_run=dry_run,
        page_size=page_size or config.page_size,
        failure_policy=FailurePolicy.ABORT if effective_fail_fast else FailurePolicy.CONTINUE,
    )

    result = reconcile_translations(
        unit_of_work_factory=effective_uow,
        request=request,
        reporter=reporter,
    )

    log.debug(
        "Finished translation normalization: updated=%s, merged=%s, deleted=%s, failed=%s%s",
        result.updated,
        result.merged,
        result.deleted,
        result.failed,
        " (dry-run)" if result.dry_run else "",
    )
    return result
