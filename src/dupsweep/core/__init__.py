"""
Core sweep engine: fingerprint source, grouping, retention selection, actions and reporting.

- FileScannerImpl: recursive directory traversal producing sorted fingerprints
- HasherImpl + algorithm registry: xxHash64 by default, hashlib digests on request
- group_duplicates: streaming grouping of a hash-sorted fingerprint stream
- select_keep_index / select_retention: first/last/oldest/newest policies
- ActionExecutor: report-only, dry-run and delete modes with failure isolation
- Reporter: run transcript and exit status
- Models: Fingerprint, DuplicateGroup, RetentionDecision, ActionOutcome, RunSummary

All components are pure Python with no GUI dependencies.
"""

from .models import (
    Fingerprint, DuplicateGroup, RetentionDecision, ActionOutcome, RunSummary,
    Action, ActionMode, KeepStrategy, DeduplicationParams)
from .hasher import HasherImpl, XXHashAlgorithmImpl, resolve_algorithm, available_algorithms
from .scanner import FileScannerImpl
from .grouper import group_duplicates
from .selector import select_keep_index, select_retention
from .executor import ActionExecutor
from .reporter import Reporter

__all__ = [
    "Fingerprint",
    "DuplicateGroup",
    "RetentionDecision",
    "ActionOutcome",
    "RunSummary",
    "Action",
    "ActionMode",
    "KeepStrategy",
    "DeduplicationParams",
    "HasherImpl",
    "XXHashAlgorithmImpl",
    "resolve_algorithm",
    "available_algorithms",
    "FileScannerImpl",
    "group_duplicates",
    "select_keep_index",
    "select_retention",
    "ActionExecutor",
    "Reporter",
]
