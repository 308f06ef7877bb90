"""Status rule shared by every path that lands a record on a channel."""

from __future__ import annotations

from pimtrans.domain.model import TranslationStatus


def required_status(
    *,
    is_primary: bool,
    language: str,
    reference_language: str | None,
    current_status: TranslationStatus,
) -> TranslationStatus:
    """Return the status a record must carry on a channel.

    Non-primary channels never keep ``synced`` content, and the primary channel's
    reference-language record is always ``synced``. Everything else keeps its
    current status. Applying the rule to its own output is a no-op.
    """

    if not is_primary and current_status == TranslationStatus.SYNCED:
        return TranslationStatus.DRAFT
    if is_primary and reference_language is not None and language == reference_language:
        return TranslationStatus.SYNCED
    return current_status
