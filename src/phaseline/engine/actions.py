# src/phaseline/engine/actions.py

"""
Task store mutations.

This module contains *all* state-changing operations on the task list:
field updates, adding and deleting tasks.

Design principles:
- Every mutation is a function from (old list, args) to a new list.
- Mutations never raise for malformed input: unknown ids are no-ops,
  bad durations become 1, bad dates become today.
- The chain rule is restored before a mutation returns (delete excepted).
"""

import logging
import math
import re
from dataclasses import replace
from typing import Any, Iterable, Optional, Sequence

from .chain import cascade, reorder_by_phase
from .dates import DateLike, format_for_storage, parse_date
from .model import (
    DEFAULT_PHASE,
    DEFAULT_STATUS,
    EDITABLE_FIELDS,
    NEW_TASK_LABEL,
    PHASES,
    Task,
    TimelineWindow,
)
from .stats import timeline_window

logger = logging.getLogger(__name__)

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


# ---------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------

def _index_of(tasks: Sequence[Task], task_id: int) -> int:
    for i, t in enumerate(tasks):
        if t.id == task_id:
            return i
    return -1


def coerce_duration(value: Any) -> int:
    """
    Coerce user input to a duration of at least one day.

    Reads a leading integer the way a form field would ("12 days" -> 12);
    anything non-numeric or below 1 becomes 1.
    """
    if isinstance(value, bool):
        n = 0
    elif isinstance(value, float):
        n = int(value) if math.isfinite(value) else 0
    elif isinstance(value, int):
        n = value
    else:
        m = _LEADING_INT_RE.match(str(value or ""))
        n = int(m.group(1)) if m else 0

    if n < 1:
        logger.debug("Duration %r coerced to 1", value)
        return 1
    return n


def coerce_start(value: DateLike) -> str:
    """Normalise a start date to `YYYY-MM-DD`; unparseable input becomes today."""
    return format_for_storage(parse_date(value))


# ---------------------------------------------------------------------
# Public actions
# ---------------------------------------------------------------------

def update_field(
    tasks: Sequence[Task],
    task_id: int,
    field: str,
    value: Any,
    *,
    phases: Sequence[str] = PHASES,
) -> list[Task]:
    """
    Set one field of one task and restore the chain.

    - phase: the whole list is re-sorted by phase and re-chained.
    - start / duration: tasks after the edited one are re-chained.
    - task / status: no recalculation.
    """
    index = _index_of(tasks, task_id)
    if index == -1:
        logger.debug("update_field: no task with id %s", task_id)
        return list(tasks)

    if field not in EDITABLE_FIELDS:
        logger.debug("update_field: field %r is not editable", field)
        return list(tasks)

    if field == "duration":
        value = coerce_duration(value)
    elif field == "start":
        value = coerce_start(value)
    else:
        value = "" if value is None else str(value)

    out = list(tasks)
    out[index] = replace(out[index], **{field: value})

    if field == "phase":
        return reorder_by_phase(out, phases)

    if field in ("start", "duration"):
        return cascade(out, index)

    return out


def add_task(
    tasks: Sequence[Task],
    *,
    today: DateLike = None,
    default_phase: str = DEFAULT_PHASE,
) -> list[Task]:
    """
    Append a new one-day task at the end of the chain.

    It inherits the last task's phase and starts where the last task ends;
    on an empty list it starts today in `default_phase`.
    """
    if tasks:
        last = tasks[-1]
        new_id = max(t.id for t in tasks) + 1
        phase = last.phase
        start = last.end
    else:
        new_id = 1
        phase = default_phase
        start = coerce_start(today)

    task = Task(
        id=new_id,
        phase=phase,
        task=NEW_TASK_LABEL,
        duration=1,
        start=start,
        status=DEFAULT_STATUS,
    )
    return [*tasks, task]


def delete_task(tasks: Sequence[Task], task_id: int) -> list[Task]:
    """
    Remove a task, leaving every other task's dates untouched.

    The chain is NOT rebuilt: the following task keeps its old start,
    which may leave a gap until the next start/duration edit.
    """
    out = [t for t in tasks if t.id != task_id]
    if len(out) == len(tasks):
        logger.debug("delete_task: no task with id %s", task_id)
    return out


# ---------------------------------------------------------------------
# Store container
# ---------------------------------------------------------------------

class TaskStore:
    """
    Explicit holder for the current task list.

    Thin wrapper over the mutation functions above: each call replaces
    the held list and returns it, so callers re-derive their views from
    the return value.
    """

    def __init__(
        self,
        tasks: Iterable[Task] = (),
        *,
        phases: Sequence[str] = PHASES,
        default_phase: str = DEFAULT_PHASE,
    ) -> None:
        self._tasks: tuple[Task, ...] = tuple(tasks)
        self.phases: tuple[str, ...] = tuple(phases)
        self.default_phase = default_phase

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._tasks

    def __len__(self) -> int:
        return len(self._tasks)

    def get(self, task_id: int) -> Optional[Task]:
        i = _index_of(self._tasks, task_id)
        return self._tasks[i] if i != -1 else None

    def update_field(self, task_id: int, field: str, value: Any) -> tuple[Task, ...]:
        self._tasks = tuple(update_field(self._tasks, task_id, field, value, phases=self.phases))
        return self._tasks

    def add_task(self, *, today: DateLike = None) -> tuple[Task, ...]:
        self._tasks = tuple(add_task(self._tasks, today=today, default_phase=self.default_phase))
        return self._tasks

    def delete_task(self, task_id: int) -> tuple[Task, ...]:
        self._tasks = tuple(delete_task(self._tasks, task_id))
        return self._tasks

    def window(self, *, today: DateLike = None) -> TimelineWindow:
        return timeline_window(self._tasks, today=today)
