"""
Unified command orchestrator for a duplicate sweep.
This is the single source of truth for the run workflow; the CLI is a thin layer on top.
"""
import logging
import sys
from typing import Callable, Optional, TextIO

from dupsweep.core.executor import ActionExecutor
from dupsweep.core.grouper import group_duplicates
from dupsweep.core.hasher import HasherImpl, resolve_algorithm
from dupsweep.core.models import DeduplicationParams, RunSummary
from dupsweep.core.reporter import Reporter
from dupsweep.core.scanner import FileScannerImpl
from dupsweep.core.selector import select_retention
from dupsweep.services.file_service import FileService

logger = logging.getLogger(__name__)


class DeduplicationCommand:
    """
    Orchestrates one sweep:
    1. Scan and fingerprint eligible files (sorted by hash, then path)
    2. Group runs of equal hashes
    3. Select the member to keep per group
    4. Report / preview / remove the others
    5. Flush the transcript and return the run summary

    Usage:
        command = DeduplicationCommand()
        summary = command.execute(params, stopped_flag=signal_handler_check)
        sys.exit(command.exit_code)
    """

    def __init__(self, console: Optional[TextIO] = None):
        self.console = console or sys.stdout
        self.summary: Optional[RunSummary] = None
        self.exit_code: Optional[int] = None

    def execute(
            self,
            params: DeduplicationParams,
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> RunSummary:
        """
        Run the sweep with given parameters.

        Args:
            params: Validated parameters
            stopped_flag: () -> bool, checked before each group's actions

        Returns:
            RunSummary of the run. Deletions applied before a stop stay applied.
        """
        hasher = HasherImpl(resolve_algorithm(params.hash_algorithm))
        scanner = FileScannerImpl(
            root_dir=params.root_dir,
            max_size=params.max_size_bytes,
            hasher=hasher,
            excluded_dirs=params.excluded_dirs,
            excluded_files=[params.log_file] if params.log_file else None,
        )
        remover = FileService.move_to_trash if params.use_trash else FileService.remove
        executor = ActionExecutor(mode=params.mode, remover=remover)
        summary = RunSummary()

        with Reporter(verbose=params.verbose, console=self.console, log_file=params.log_file) as reporter:
            fingerprints = scanner.fingerprints(stopped_flag=stopped_flag)
            summary.skipped_files = scanner.skipped_files
            logger.info(f"Fingerprinted {len(fingerprints)} candidate files")
            if stopped_flag and stopped_flag():
                logger.warning("Stop requested during scan, nothing was changed")
                summary.cancelled = True
                fingerprints = []

            for group in group_duplicates(fingerprints):
                if stopped_flag and stopped_flag():
                    logger.warning("Stop requested, remaining groups left untouched")
                    summary.cancelled = True
                    break

                decision = select_retention(group, params.keep)
                outcomes = executor.execute(decision)
                reporter.report_group(decision, outcomes, params.mode)
                summary.groups_processed += 1

            summary.failures = executor.failures
            summary.removed = executor.removed
            self.exit_code = reporter.finalize(summary)

        self.summary = summary
        return summary
