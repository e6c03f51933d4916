"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Turns a hash-sorted fingerprint stream into duplicate groups.
"""

from typing import Iterable, Iterator, Optional
from dupsweep.core.models import Fingerprint, DuplicateGroup


def group_duplicates(fingerprints: Iterable[Fingerprint]) -> Iterator[DuplicateGroup]:
    """
    Yield one DuplicateGroup per maximal run of equal hashes with 2+ members.

    The input must be sorted by hash; this is not re-validated. Groups are
    yielded in the order their runs appear and keep arrival order inside.
    """
    current: Optional[DuplicateGroup] = None

    for fingerprint in fingerprints:
        if current is not None and fingerprint.hash == current.hash:
            current.add_member(fingerprint)
            continue

        if current is not None and current.is_duplicate():
            yield current
        current = DuplicateGroup(hash=fingerprint.hash, members=[fingerprint])

    if current is not None and current.is_duplicate():
        yield current
