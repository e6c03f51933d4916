"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Fingerprint source: walks a directory tree and hashes eligible files.
Features:
- Deterministic discovery order (directories and files visited in sorted order)
- Skips symlinks, excluded directories and the system trash
- Exclusive upper size bound
- Hashes only files whose size is shared with another candidate
- Returns fingerprints sorted by (hash, path)
"""

import os
import stat
import sys
from collections import Counter
from typing import List, Optional, Callable, NamedTuple
from pathlib import Path
import time
import logging

from dupsweep.core.models import Fingerprint, DEFAULT_MAX_SIZE
from dupsweep.core.interfaces import FileScanner, Hasher
from dupsweep.core.hasher import HasherImpl

logger = logging.getLogger(__name__)


class _Candidate(NamedTuple):
    path: str
    size: int
    mtime: int


class FileScannerImpl(FileScanner):
    """
    Scans directories recursively and produces content fingerprints.

    Attributes:
        root_dir: Root directory to scan
        max_size: Exclusive maximum file size in bytes
        hasher: Hasher used for file contents
        excluded_dirs: Directories that are never entered
        excluded_files: Files that are never fingerprinted (e.g. the run log)
        skipped_files: Number of files dropped because they could not be read
    """

    def __init__(
        self,
        root_dir: str,
        max_size: int = DEFAULT_MAX_SIZE,
        hasher: Optional[Hasher] = None,
        excluded_dirs: Optional[List[str]] = None,
        excluded_files: Optional[List[str]] = None
    ):
        self.root_dir = root_dir
        self.max_size = max_size
        self.hasher = hasher or HasherImpl()
        self.excluded_dirs = [str(Path(d).resolve()) for d in excluded_dirs] if excluded_dirs else []
        self.excluded_files = {os.path.realpath(f) for f in excluded_files} if excluded_files else set()
        self.skipped_files = 0

    def fingerprints(self, stopped_flag: Optional[Callable[[], bool]] = None) -> List[Fingerprint]:
        """
        Scan, hash and sort. Files whose size is unique among candidates are not hashed.
        """
        candidates = self.scan(stopped_flag=stopped_flag)
        size_counts = Counter(c.size for c in candidates)

        result = []
        start_time = time.time()
        for candidate in candidates:
            if stopped_flag and stopped_flag():
                logger.debug("Hashing interrupted")
                return []
            if size_counts[candidate.size] < 2:
                continue
            fingerprint = self._fingerprint(candidate)
            if fingerprint:
                result.append(fingerprint)

        logger.debug(f"Hashed {len(result)} files in {time.time() - start_time:.2f} seconds")

        # Stable path tiebreak defines the order used by first/last strategies
        result.sort(key=lambda fp: (fp.hash, fp.path))
        return result

    def scan(self, stopped_flag: Optional[Callable[[], bool]] = None) -> List[_Candidate]:
        """
        Single-pass walk. Returns eligible files in lexicographic path order.
        """
        logger.debug(f"Root directory: {self.root_dir}")
        logger.debug(f"Filters: max_size={self.max_size}, excluded={self.excluded_dirs}")

        root_path = Path(self.root_dir)
        if not root_path.is_dir():
            error_msg = f"Not a directory: {self.root_dir}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)

        found = []
        for root, dirs, files in os.walk(str(root_path), onerror=self._walk_error):
            if stopped_flag and stopped_flag():
                logger.debug("Scan interrupted")
                return []

            # Pre-filter subdirectories BEFORE os.walk enters them
            dirs[:] = sorted(d for d in dirs if self._prefilter_dirs(Path(root) / d))

            for filename in sorted(files):
                candidate = self._process_file(Path(root) / filename)
                if candidate:
                    found.append(candidate)

        logger.debug(f"Scan completed. Found {len(found)} eligible files.")
        return found

    def _walk_error(self, error: OSError) -> None:
        logger.warning(f"Cannot read directory: {error}")

    @staticmethod
    def _is_system_trash(path: Path) -> bool:
        """
        Check if path belongs to OS trash/recycle bin (cross-platform).
        Returns False on any error.
        """
        try:
            path_str = str(path.resolve(strict=False))

            if sys.platform == "win32":
                if "$Recycle.Bin" in path_str or "\\Recycler\\" in path_str:
                    return True
            elif sys.platform == "darwin":
                if "/.Trash/" in path_str or path_str.endswith("/.Trash"):
                    return True
            else:
                if ".local/share/Trash" in path_str or "/.trash/" in path_str:
                    return True

            return False
        except (OSError, ValueError):
            return False

    @staticmethod
    def _is_excluded_directory(path: Path, excluded_dirs: List[str]) -> bool:
        """Check if path is within an excluded directory."""
        try:
            path_str = str(path.resolve(strict=False))
            for excluded_dir in excluded_dirs:
                normalized_excluded = os.path.normpath(excluded_dir)
                if path_str.startswith(normalized_excluded + os.sep) or \
                        path_str == normalized_excluded:
                    return True
            return False
        except (OSError, ValueError):
            return False

    def _prefilter_dirs(self, path: Path) -> bool:
        """Skip symlinked dirs, system trash and excluded directories."""
        if path.is_symlink():
            logger.debug(f"Skipping symlinked directory: {path}")
            return False

        if FileScannerImpl._is_system_trash(path):
            logger.debug(f"Skipping system trash directory: {path}")
            return False

        if self.excluded_dirs and self._is_excluded_directory(path, self.excluded_dirs):
            logger.debug(f"Skipping excluded directory: {path}")
            return False

        return True

    def _process_file(self, path: Path) -> Optional[_Candidate]:
        """
        Stat a single path and return a candidate if it passes all filters.
        """
        try:
            if path.is_symlink():
                logger.debug(f"Skipping symbolic link: {path}")
                return None
            stat_result = path.stat()
        except OSError as e:
            self._skip(path, e)
            return None

        if not stat.S_ISREG(stat_result.st_mode):
            return None

        if self.excluded_files and os.path.realpath(path) in self.excluded_files:
            logger.debug(f"Skipping excluded file: {path}")
            return None

        size = stat_result.st_size
        if not self._size_passes(size):
            logger.debug(f"Skipping {path} (size {size} bytes not below {self.max_size})")
            return None

        return _Candidate(path=str(path), size=size, mtime=int(stat_result.st_mtime))

    def _fingerprint(self, candidate: _Candidate) -> Optional[Fingerprint]:
        try:
            digest = self.hasher.compute_full_hash(candidate.path)
        except OSError as e:
            self._skip(candidate.path, e)
            return None
        return Fingerprint(hash=digest, mtime=candidate.mtime, path=candidate.path)

    def _skip(self, path, error: Exception) -> None:
        self.skipped_files += 1
        logger.warning(f"Skipping unreadable file {path}: {error}")

    def _size_passes(self, size: int) -> bool:
        """Upper bound is exclusive."""
        return self.max_size is None or size < self.max_size
