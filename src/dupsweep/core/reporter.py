"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/reporter.py
Accumulates the human-readable transcript of a run and writes it to a sink.

Sink selection:
  • --log-file given  → transcript written to that file
  • verbose, no file  → transcript written to the console
  • otherwise         → transcript discarded
Dry-run previews ("Would remove: ...") always go to the console.
"""

import logging
import os
import sys
from typing import List, Optional, TextIO

from dupsweep.core.models import Action, ActionMode, ActionOutcome, RetentionDecision, RunSummary

logger = logging.getLogger(__name__)

_MARKERS = {
    Action.KEPT: "[KEEP]",
    Action.WOULD_REMOVE: "[WOULD DEL]",
    Action.REMOVED: "[DEL]",
    Action.REMOVE_FAILED: "[FAILED]",
}


def printable(path: str) -> str:
    """Undecodable filename bytes are shown as \\xNN escapes."""
    return os.fsencode(path).decode("utf-8", "backslashreplace")


class Reporter:
    """Run transcript. Use as a context manager so the sink is always released."""

    def __init__(self, verbose: bool = False, console: Optional[TextIO] = None, log_file: Optional[str] = None):
        self.verbose = verbose
        self.console = console or sys.stdout
        self.log_file = log_file
        self.lines: List[str] = []
        self._sink: Optional[TextIO] = None
        self._owns_sink = False

    def __enter__(self) -> "Reporter":
        if self.log_file:
            self._sink = open(self.log_file, "w", encoding="utf-8", errors="backslashreplace")
            self._owns_sink = True
        elif self.verbose:
            self._sink = self.console
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.flush()
        finally:
            if self._owns_sink and self._sink is not None:
                self._sink.close()
            self._sink = None
            self.lines = []

    @property
    def transcript(self) -> str:
        return "\n".join(self.lines)

    def report_group(self, decision: RetentionDecision, outcomes: List[ActionOutcome], mode: ActionMode) -> None:
        """Record one group's decisions."""
        if self.verbose:
            self.lines.append("")
            self.lines.append(f"Duplicate group (Hash: {decision.group.hash}):")
            for outcome in outcomes:
                self.lines.append(f"  {_MARKERS[outcome.action]} {printable(outcome.path)}")

        for outcome in outcomes:
            if outcome.action == Action.WOULD_REMOVE and mode == ActionMode.DRY_RUN:
                print(f'Would remove: "{printable(outcome.path)}"', file=self.console)
            elif outcome.action == Action.REMOVE_FAILED:
                self.lines.append(f'Error: Failed to remove "{printable(outcome.path)}": {outcome.error_detail}')

    def finalize(self, summary: RunSummary) -> int:
        """Append the run summary and return the exit status."""
        self.lines.append("")
        self.lines.append(summary.print_summary())

        if summary.failures and not self.verbose:
            print(f"Warning: {summary.failures} file(s) could not be removed", file=sys.stderr)
        return summary.exit_code

    def flush(self) -> None:
        if self._sink is None or not self.lines:
            return
        self._sink.write(self.transcript + "\n")
        self._sink.flush()
        if self._owns_sink and self.verbose:
            print(f"Detailed log available at: {self.log_file}", file=self.console)
