"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/executor.py
Applies a retention decision: keeps one member and reports, previews or
removes the others. A failed removal is recorded and never stops the run.
"""

import logging
from typing import List, Optional, Union

from dupsweep.core.interfaces import Remover
from dupsweep.core.models import Action, ActionMode, ActionOutcome, RetentionDecision
from dupsweep.services.file_service import FileService

logger = logging.getLogger(__name__)


class ActionExecutor:
    """
    Produces one ActionOutcome per group member.

    Attributes:
        mode: report-only, dry-run or delete
        remover: callable used in delete mode (defaults to permanent removal)
        failures: number of failed removals so far
        removed: number of successful removals so far
    """

    def __init__(self, mode: Union[ActionMode, str] = ActionMode.REPORT_ONLY, remover: Optional[Remover] = None):
        self.mode = ActionMode(mode)
        self.remover = remover or FileService.remove
        self.failures = 0
        self.removed = 0

    def execute(self, decision: RetentionDecision) -> List[ActionOutcome]:
        outcomes = []
        for index, member in enumerate(decision.group.members):
            if index == decision.keep_index:
                outcomes.append(ActionOutcome(path=member.path, action=Action.KEPT))
            else:
                outcomes.append(self._act_on(member.path))
        return outcomes

    def _act_on(self, path: str) -> ActionOutcome:
        if self.mode != ActionMode.DELETE:
            return ActionOutcome(path=path, action=Action.WOULD_REMOVE)

        try:
            self.remover(path)
        except (OSError, RuntimeError) as e:
            self.failures += 1
            logger.warning(f"Failed to remove {path}: {e}")
            return ActionOutcome(path=path, action=Action.REMOVE_FAILED, error_detail=str(e))

        self.removed += 1
        logger.info(f"Removed {path}")
        return ActionOutcome(path=path, action=Action.REMOVED)
