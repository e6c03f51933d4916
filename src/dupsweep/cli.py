#!/usr/bin/env python3
"""
dupsweep CLI: find duplicate files by content and optionally remove them.
Nothing is removed unless --delete is given; --dry-run previews what --delete would do.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import logging
import os
import signal
import sys
import time
from pathlib import Path
from typing import List, Optional, NoReturn

from dupsweep.aliases import EPILOG_TEXT, HASH_HELP_TEXT, KEEP_ALIASES, KEEP_CHOICES, KEEP_HELP_TEXT
from dupsweep.commands import DeduplicationCommand
from dupsweep.core.hasher import resolve_algorithm
from dupsweep.core.models import (
    ActionMode, DeduplicationParams, DEFAULT_HASH_ALGORITHM, DEFAULT_MAX_SIZE,
    EXIT_CONFIG_ERROR, EXIT_INTERRUPTED, EXIT_PARTIAL_FAILURE,
)
from dupsweep.utils.convert_utils import ConvertUtils

LOG_FORMAT = "%(levelname)-8s | %(name)-25s | %(message)s"

# Never swept, even when explicitly requested
PROTECTED_DIRS = {
    "/", "/bin", "/boot", "/dev", "/etc", "/home", "/lib", "/lib64", "/opt",
    "/proc", "/root", "/sbin", "/sys", "/usr", "/var",
    "/private", "/private/etc", "/private/var", "/private/tmp", "/tmp",
}


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self._stop_requested: bool = False

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments. Validation happens in validate_args()."""
        parser = argparse.ArgumentParser(
            prog="dupsweep",
            description="dupsweep: find and remove duplicate files by content",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "--directory", "-d",
            default=None,
            type=str,
            help="Target directory to scan for duplicates (required)"
        )

        # Actions
        parser.add_argument(
            "--dry-run",
            action="store_true",
            dest="dry_run",
            help="Show which files would be removed without removing anything"
        )
        parser.add_argument(
            "--delete",
            action="store_true",
            help="Remove duplicate files (cannot be combined with --dry-run)"
        )
        parser.add_argument(
            "--trash",
            action="store_true",
            help="With --delete: move files to the system trash instead of removing them"
        )

        # Selection and filtering
        parser.add_argument(
            "--keep",
            default=KEEP_CHOICES[0],
            type=str,
            metavar='STRATEGY',
            help=KEEP_HELP_TEXT
        )
        parser.add_argument(
            "--max-size",
            default=str(DEFAULT_MAX_SIZE),
            type=str,
            metavar='SIZE',
            dest="max_size",
            help="Only files smaller than SIZE are compared (e.g., 104857600, 500KB, 2GB).\n"
                 "Default: 100MB"
        )
        parser.add_argument(
            "--hash",
            default=DEFAULT_HASH_ALGORITHM,
            type=str,
            metavar='ALGORITHM',
            dest="hash_algorithm",
            help=HASH_HELP_TEXT
        )
        parser.add_argument(
            "--exclude", '-e',
            nargs="+",
            default=[],
            type=str,
            metavar='DIR',
            dest="excluded_dirs",
            help="Excluded/ignored directories (space separated)"
        )

        # Output options
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Print every group and decision"
        )
        parser.add_argument(
            "--log-file",
            default=None,
            type=str,
            metavar='PATH',
            dest="log_file",
            help="Write the run transcript to PATH"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Fail fast, in a fixed order, before anything is scanned."""
        if args.delete and args.dry_run:
            self.error_exit("Cannot use both --delete and --dry-run")

        if args.keep not in KEEP_ALIASES:
            self.error_exit(
                f"Invalid keep strategy: '{args.keep}'. Choose from: {', '.join(KEEP_CHOICES)}"
            )

        if not args.directory:
            self.error_exit("Directory not specified. Use -d to provide a directory.")

        root_path = Path(os.path.realpath(args.directory))
        if not root_path.exists():
            self.error_exit(f"Directory '{args.directory}' does not exist.")
        if not root_path.is_dir():
            self.error_exit(f"Path is not a directory: {args.directory}")

        if self.is_protected(root_path) or self.is_protected(Path(os.path.abspath(args.directory))):
            self.error_exit(f"Cannot process files in system-critical directory '{root_path}'.")

        if not os.access(root_path, os.R_OK | os.X_OK):
            self.error_exit(f"No read permissions for directory '{root_path}'.")

        try:
            resolve_algorithm(args.hash_algorithm)
        except ValueError as e:
            self.error_exit(str(e))

        if not ConvertUtils.is_valid_size_format(args.max_size):
            self.error_exit(f"Invalid --max-size format: {args.max_size}")

        if args.trash and not args.delete:
            self.error_exit("--trash can only be used with --delete")

        if args.log_file:
            log_path = Path(os.path.abspath(args.log_file))
            if log_path.is_dir():
                self.error_exit(f"Log file path is a directory: {args.log_file}")
            if not log_path.parent.is_dir():
                self.error_exit(f"Log file directory does not exist: {log_path.parent}")
            if not os.access(log_path.parent, os.W_OK):
                self.error_exit(f"No write permissions for log file directory '{log_path.parent}'.")

        for excl_dir in args.excluded_dirs:
            if not Path(excl_dir).is_dir():
                self.warning(f"Excluded directory not found: {excl_dir}")

    @staticmethod
    def is_protected(path: Path) -> bool:
        """Filesystem roots and well-known system directories."""
        return path.parent == path or path.as_posix() in PROTECTED_DIRS

    def create_params(self, args: argparse.Namespace) -> DeduplicationParams:
        """Create DeduplicationParams from CLI arguments."""
        if args.delete:
            mode = ActionMode.DELETE
        elif args.dry_run:
            mode = ActionMode.DRY_RUN
        else:
            mode = ActionMode.REPORT_ONLY

        try:
            return DeduplicationParams(
                root_dir=os.path.realpath(args.directory),
                max_size_bytes=ConvertUtils.human_to_bytes(args.max_size),
                keep=KEEP_ALIASES[args.keep],
                mode=mode,
                hash_algorithm=args.hash_algorithm,
                verbose=args.verbose,
                use_trash=args.trash,
                excluded_dirs=[str(Path(d.strip()).resolve()) for d in args.excluded_dirs],
                log_file=args.log_file,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def stopped_flag(self) -> bool:
        """True once SIGTERM was received; the current group finishes, the rest are skipped."""
        return self._stop_requested

    def _request_stop(self, signum, frame) -> None:
        self._stop_requested = True

    def configure_logging(self) -> None:
        logging.basicConfig(
            level=logging.INFO if self.verbose else logging.WARNING,
            format=LOG_FORMAT
        )

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        print(f"Warning: {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = EXIT_CONFIG_ERROR) -> NoReturn:
        """Print error and exit."""
        print(f"Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Main entry point. Returns the process exit status."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.configure_logging()

        self.validate_args(args)
        params = self.create_params(args)

        if self.verbose:
            print(f"Scanning directory: {params.root_dir}")
            print(f"Keep strategy: {params.keep.display_name} ({params.keep.description})")
            print(f"Max file size: below {ConvertUtils.bytes_to_human(params.max_size_bytes)}")

        previous_handler = signal.signal(signal.SIGTERM, self._request_stop)
        try:
            command = DeduplicationCommand()
            summary = command.execute(params, stopped_flag=self.stopped_flag)
        finally:
            signal.signal(signal.SIGTERM, previous_handler)

        if self.verbose:
            elapsed = time.time() - self.start_time
            print(f"\nCompleted in {elapsed:.2f} seconds")

        if summary.cancelled:
            return EXIT_INTERRUPTED
        return command.exit_code


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        sys.exit(app.run())
    except KeyboardInterrupt:
        print("\nOperation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(EXIT_INTERRUPTED)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"Unexpected error: {e}", file=sys.stderr)
        sys.exit(EXIT_PARTIAL_FAILURE)


if __name__ == "__main__":
    main()
