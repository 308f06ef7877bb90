"""Reconciliation of translation ownership after the per-channel split.

Flow per visited record:
1) re-read the record inside its own unit of work
2) resolve the catalog item, its owning channel and the record's channel
3) classify into skip / assign channel / promote / demote / no-op
4) plan the change (assign, merge into a canonical duplicate, or transition)
5) apply the plan to the store, or to an in-memory overlay in dry runs
"""

from __future__ import annotations

from .changes import PersistedChanges, SimulatedChanges, StaleRecordError
from .classify import ActionKind, RecordContext, classify, resolve_context
from .driver import (
    DEFAULT_PAGE_SIZE,
    ReconciliationRequest,
    reconcile_record,
    reconcile_translations,
)
from .plan import (
    AssignPlan,
    ChangePlan,
    ContentFill,
    MergePlan,
    TransitionPlan,
    merge_content,
    plan_assign,
    plan_merge,
    plan_transition,
)
from .policy import FailurePolicy, ReconciliationAborted
from .report import (
    LoggingReporter,
    OutcomeKind,
    ReconciliationCounters,
    ReconciliationReporter,
    ReconciliationResult,
    RecordOutcome,
)
from .status import required_status

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "ActionKind",
    "AssignPlan",
    "ChangePlan",
    "ContentFill",
    "FailurePolicy",
    "LoggingReporter",
    "MergePlan",
    "OutcomeKind",
    "PersistedChanges",
    "ReconciliationAborted",
    "ReconciliationCounters",
    "ReconciliationReporter",
    "ReconciliationRequest",
    "ReconciliationResult",
    "RecordContext",
    "RecordOutcome",
    "SimulatedChanges",
    "StaleRecordError",
    "TransitionPlan",
    "classify",
    "merge_content",
    "plan_assign",
    "plan_merge",
    "plan_transition",
    "reconcile_record",
    "reconcile_translations",
    "required_status",
    "resolve_context",
]
