"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the sweep pipeline.

Key Components:
---------------
- HashAlgorithm: Streaming digest factory (xxHash, MD5, SHA-256, ...).
- Hasher: Computes the content hash of a file on disk.
- FileScanner: Produces the sorted fingerprint stream for a directory.
- Remover: Callable that removes (or trashes) a single file.
"""

from typing import Protocol, List, Optional, Callable
from dupsweep.core.models import Fingerprint


class Digest(Protocol):
    def update(self, data: bytes) -> None: ...
    def hexdigest(self) -> str: ...


class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions like SHA-256, MD5, or xxHash
    without affecting the rest of the pipeline.
    """
    name: str

    def new(self) -> Digest:
        """Returns a fresh incremental digest object."""
        ...


class Hasher(Protocol):
    """Interface for hashing whole files."""
    def compute_full_hash(self, path: str) -> str: ...


class FileScanner(Protocol):
    def fingerprints(
        self,
        stopped_flag: Optional[Callable[[], bool]] = None
    ) -> List[Fingerprint]:
        """
        Scan the configured directory.

        Returns:
            Fingerprints of every eligible file, sorted by (hash, path).
        """
        ...


class Remover(Protocol):
    def __call__(self, path: str) -> None: ...
