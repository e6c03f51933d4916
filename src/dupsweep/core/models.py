"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for the duplicate sweep pipeline: fingerprints, duplicate groups,
retention decisions, per-file outcomes and the run summary.
"""

from dataclasses import dataclass, field
from typing import List, Optional
from enum import Enum


# Process exit statuses
EXIT_OK = 0
EXIT_PARTIAL_FAILURE = 1
EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130

DEFAULT_MAX_SIZE = 100 * 1024 * 1024  # exclusive upper bound
DEFAULT_HASH_ALGORITHM = "xxh64"


# =============================
# Enums
# =============================

class KeepStrategy(Enum):
    """
    Policy selecting which member of a duplicate group survives.
    """
    FIRST = "first"
    LAST = "last"
    OLDEST = "oldest"
    NEWEST = "newest"

    @property
    def display_name(self) -> str:
        """Human-readable name for UI display."""
        mapping = {
            KeepStrategy.FIRST: "First",
            KeepStrategy.LAST: "Last",
            KeepStrategy.OLDEST: "Oldest",
            KeepStrategy.NEWEST: "Newest",
        }
        return mapping.get(self, self.value)

    @property
    def description(self) -> str:
        """Detailed description for help text."""
        mapping = {
            KeepStrategy.FIRST: "first file in path order",
            KeepStrategy.LAST: "last file in path order",
            KeepStrategy.OLDEST: "file with the oldest modification time",
            KeepStrategy.NEWEST: "file with the newest modification time",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class ActionMode(Enum):
    REPORT_ONLY = "report-only"
    DRY_RUN = "dry-run"
    DELETE = "delete"

    def __repr__(self) -> str:
        return self.value


class Action(str, Enum):
    KEPT = "kept"
    WOULD_REMOVE = "would_remove"
    REMOVED = "removed"
    REMOVE_FAILED = "remove_failed"


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class Fingerprint:
    """
    Content-equality key and metadata of one eligible file.
    """
    hash: str
    mtime: int  # whole seconds since epoch
    path: str

    def __repr__(self):
        return f"<Fingerprint path={self.path}, hash={self.hash}>"


@dataclass
class DuplicateGroup:
    """
    A run of fingerprints sharing one hash, in arrival order.
    """
    hash: str
    members: List[Fingerprint] = field(default_factory=list)

    @property
    def duplicate_count(self) -> int:
        """How many files are in this group."""
        return len(self.members)

    def add_member(self, fingerprint: Fingerprint) -> None:
        if fingerprint.hash != self.hash:
            raise ValueError("Cannot add fingerprint with different hash to a group.")
        self.members.append(fingerprint)

    def is_duplicate(self) -> bool:
        """True if this group contains at least two files."""
        return self.duplicate_count >= 2

    def __repr__(self):
        return f"<DuplicateGroup hash={self.hash}, count={len(self.members)}>"


@dataclass(frozen=True)
class RetentionDecision:
    group: DuplicateGroup
    keep_index: int

    def __post_init__(self):
        if not 0 <= self.keep_index < len(self.group.members):
            raise ValueError(
                f"keep_index {self.keep_index} out of range for group of {len(self.group.members)}"
            )

    @property
    def kept(self) -> Fingerprint:
        return self.group.members[self.keep_index]

    @property
    def others(self) -> List[Fingerprint]:
        return [m for i, m in enumerate(self.group.members) if i != self.keep_index]


@dataclass(frozen=True)
class ActionOutcome:
    path: str
    action: Action
    error_detail: Optional[str] = None


@dataclass
class RunSummary:
    """
    Run-scoped accumulator. Drives the process exit status.
    """
    groups_processed: int = 0
    failures: int = 0
    removed: int = 0
    skipped_files: int = 0
    cancelled: bool = False

    @property
    def exit_code(self) -> int:
        return EXIT_PARTIAL_FAILURE if self.failures else EXIT_OK

    def print_summary(self) -> str:
        lines = [f"Duplicate groups processed: {self.groups_processed}"]
        if self.removed:
            lines.append(f"Files removed: {self.removed}")
        if self.failures:
            lines.append(f"Failed removals: {self.failures}")
        if self.skipped_files:
            lines.append(f"Files skipped (unreadable): {self.skipped_files}")
        if self.cancelled:
            lines.append("Run cancelled before all groups were processed")
        return "\n".join(lines)


# ======================
#  Run parameters
# ======================

@dataclass
class DeduplicationParams:
    """Parameters for one sweep with validation."""
    root_dir: str
    max_size_bytes: int = DEFAULT_MAX_SIZE
    keep: KeepStrategy = KeepStrategy.FIRST
    mode: ActionMode = ActionMode.REPORT_ONLY
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM
    verbose: bool = False
    use_trash: bool = False
    excluded_dirs: List[str] = field(default_factory=list)
    log_file: Optional[str] = None

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dir:
            raise ValueError("Root directory cannot be empty")

        if self.max_size_bytes <= 0:
            raise ValueError("Maximum size must be positive")

        if not isinstance(self.keep, KeepStrategy):
            self.keep = KeepStrategy(self.keep)

        if not isinstance(self.mode, ActionMode):
            self.mode = ActionMode(self.mode)

        if self.use_trash and self.mode != ActionMode.DELETE:
            raise ValueError("Trash can only be used in delete mode")
