"""Per-record failure policy for the reconciliation driver."""

from __future__ import annotations

from enum import StrEnum


class FailurePolicy(StrEnum):
    """What the driver does after one record's unit of work fails.

    ``CONTINUE`` keeps traversing so a run makes maximal forward progress; the
    failed record is left for the next run. ``ABORT`` stops at the first failure.
    Work committed before the failure is kept either way.
    """

    CONTINUE = "continue"
    ABORT = "abort"


class ReconciliationAborted(RuntimeError):
    """Raised when a record fails under ``FailurePolicy.ABORT``."""

    def __init__(self, record_id: object) -> None:
        super().__init__(f"Reconciliation aborted at translation {record_id}")
        self.record_id = record_id
