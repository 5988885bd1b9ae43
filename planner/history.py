from __future__ import annotations

import copy
import logging
from typing import Any, Callable, TypeVar

from planner.state import PlannerState

logger = logging.getLogger(__name__)

Snapshot = dict[str, Any]
T = TypeVar("T")


def snapshot_state(state: PlannerState) -> Snapshot:
    """Plans of every year plus the navigation cursor, as plain data."""
    years = [year.get_data() or {} for year in state.years] or [{}]
    return copy.deepcopy(
        {
            "years": years,
            "mode": state.mode,
            "year_index": state.year_index,
            "season_index": state.season_index,
        }
    )


class History:
    """
    Undo/redo stacks of state snapshots. A snapshot is pushed only when an
    action actually changed the state; any new action drops the redo stack.
    """

    def __init__(self, snapshot: Callable[[], Snapshot], restore: Callable[[Snapshot], bool]) -> None:
        self._snapshot = snapshot
        self._restore = restore
        self.undo_stack: list[Snapshot] = []
        self.redo_stack: list[Snapshot] = []

    def can_undo(self) -> bool:
        return bool(self.undo_stack)

    def can_redo(self) -> bool:
        return bool(self.redo_stack)

    def clear(self) -> None:
        self.undo_stack.clear()
        self.redo_stack.clear()

    def run(self, action: Callable[[], T]) -> T:
        before = self._snapshot()
        result = action()
        if self._snapshot() != before:
            self.undo_stack.append(before)
            self.redo_stack.clear()
        return result

    def undo(self) -> bool:
        if not self.undo_stack:
            return False
        current = self._snapshot()
        previous = self.undo_stack.pop()
        if not self._restore(previous):
            return False
        self.redo_stack.append(current)
        logger.debug("Undo (%d left)", len(self.undo_stack))
        return True

    def redo(self) -> bool:
        if not self.redo_stack:
            return False
        current = self._snapshot()
        following = self.redo_stack.pop()
        if not self._restore(following):
            return False
        self.undo_stack.append(current)
        logger.debug("Redo (%d left)", len(self.redo_stack))
        return True
