"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/selector.py
Retention selection: which member of a duplicate group is kept.
"""

from typing import Union
from dupsweep.core.models import DuplicateGroup, KeepStrategy, RetentionDecision


def select_keep_index(group: DuplicateGroup, strategy: Union[KeepStrategy, str]) -> int:
    """
    Returns the index of the member to keep.

    first/last pick by position. oldest/newest pick by mtime; on ties the
    earliest index wins.
    """
    strategy = KeepStrategy(strategy)
    members = group.members
    if not members:
        raise ValueError("Cannot select from an empty group")

    if strategy == KeepStrategy.FIRST:
        return 0
    if strategy == KeepStrategy.LAST:
        return len(members) - 1

    keep_index = 0
    for i, member in enumerate(members[1:], start=1):
        keep_time = members[keep_index].mtime
        if strategy == KeepStrategy.OLDEST and member.mtime < keep_time:
            keep_index = i
        elif strategy == KeepStrategy.NEWEST and member.mtime > keep_time:
            keep_index = i
    return keep_index


def select_retention(group: DuplicateGroup, strategy: Union[KeepStrategy, str]) -> RetentionDecision:
    return RetentionDecision(group=group, keep_index=select_keep_index(group, strategy))
