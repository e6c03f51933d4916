"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements file hashing utilities with pluggable hash algorithms.

Algorithms are looked up by name. xxHash64 is the default because it is the
fastest; hashlib digests are available for users who want MD5/SHA output
comparable to coreutils (md5sum, sha256sum, ...).
"""

import hashlib
from typing import Callable, Dict, List
import xxhash
from dupsweep.core.interfaces import Digest, HashAlgorithm, Hasher


# Use the same way to implement and use any other hashing algorithm
class XXHashAlgorithmImpl(HashAlgorithm):
    name = "xxh64"

    def new(self) -> Digest:
        return xxhash.xxh64()


class FactoryAlgorithmImpl(HashAlgorithm):
    """Wraps any zero-argument digest constructor."""

    def __init__(self, name: str, factory: Callable[[], Digest]):
        self.name = name
        self._factory = factory

    def new(self) -> Digest:
        return self._factory()

    def __repr__(self):
        return f"<HashAlgorithm {self.name}>"


_ALGORITHMS: Dict[str, Callable[[], HashAlgorithm]] = {
    "xxh64": XXHashAlgorithmImpl,
    "xxh3_64": lambda: FactoryAlgorithmImpl("xxh3_64", xxhash.xxh3_64),
    "xxh128": lambda: FactoryAlgorithmImpl("xxh128", xxhash.xxh3_128),
    "md5": lambda: FactoryAlgorithmImpl("md5", hashlib.md5),
    "sha1": lambda: FactoryAlgorithmImpl("sha1", hashlib.sha1),
    "sha256": lambda: FactoryAlgorithmImpl("sha256", hashlib.sha256),
    "sha512": lambda: FactoryAlgorithmImpl("sha512", hashlib.sha512),
    "blake2b": lambda: FactoryAlgorithmImpl("blake2b", hashlib.blake2b),
}

# coreutils command names
HASH_ALIASES = {
    "md5sum": "md5",
    "sha1sum": "sha1",
    "sha256sum": "sha256",
    "sha512sum": "sha512",
    "b2sum": "blake2b",
    "xxhsum": "xxh64",
    "xxh64sum": "xxh64",
}


def available_algorithms() -> List[str]:
    return list(_ALGORITHMS.keys())


def resolve_algorithm(name: str) -> HashAlgorithm:
    """
    Look up a hash algorithm by name or coreutils alias.
    Raises ValueError for unknown names.
    """
    key = (name or "").strip().lower()
    key = HASH_ALIASES.get(key, key)
    try:
        return _ALGORITHMS[key]()
    except KeyError:
        raise ValueError(
            f"Unknown hash algorithm: '{name}'. "
            f"Available: {', '.join(available_algorithms())}"
        ) from None


class HasherImpl(Hasher):
    """
    Computes whole-file digests with the injected algorithm.
    Reads in fixed-size chunks so large files never load fully into memory.
    """
    CHUNK_SIZE = 1024 * 1024

    def __init__(self, algorithm: HashAlgorithm = None):
        self.algorithm = algorithm or XXHashAlgorithmImpl()

    def compute_full_hash(self, path: str) -> str:
        """Returns the lowercase hex digest of the file content. Raises OSError on read failure."""
        digest = self.algorithm.new()
        with open(path, 'rb') as f:
            for chunk in iter(lambda: f.read(self.CHUNK_SIZE), b''):
                digest.update(chunk)
        return digest.hexdigest()
