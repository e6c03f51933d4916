"""
dupsweep: find duplicate files by content and keep exactly one copy.

Core features:
- Content fingerprints with pluggable hash algorithms (xxHash64 by default)
- Four keep strategies: first, last, oldest, newest
- Report-only, dry-run and delete modes; optional move to system trash (via send2trash)
- Per-file failure isolation with a distinct exit status
"""

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("dupsweep")
except Exception:
    __version__ = "0.0.0"

# Public API: only what users should import directly
from dupsweep.commands import DeduplicationCommand
from dupsweep.core import (
    DeduplicationParams, KeepStrategy, ActionMode, Fingerprint, DuplicateGroup, RunSummary,
    group_duplicates, select_keep_index)
from dupsweep.utils.convert_utils import ConvertUtils
from dupsweep.services import FileService

__all__ = [
    "DeduplicationCommand",
    "DeduplicationParams",
    "KeepStrategy",
    "ActionMode",
    "Fingerprint",
    "DuplicateGroup",
    "RunSummary",
    "group_duplicates",
    "select_keep_index",
    "ConvertUtils",
    "FileService",
    "__version__",
]
