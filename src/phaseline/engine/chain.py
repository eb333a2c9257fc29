# src/phaseline/engine/chain.py

"""
Chain recalculation.

List order is chain order: every task starts the day its predecessor
ends. This module restores that rule after an edit, either for the
suffix behind an edited task or, after a phase change, for the whole
re-sorted list.

Functions here never mutate their input; they return new lists.
"""

from dataclasses import replace
from typing import Sequence

from .dates import add_days, format_for_storage
from .model import PHASES, Task


def cascade(tasks: Sequence[Task], index: int) -> list[Task]:
    """
    Recompute starts for every task after `index`.

    Task `index` keeps its own start; each later task is placed at its
    predecessor's start + duration. Idempotent.
    """
    out = list(tasks)
    for i in range(max(index, 0) + 1, len(out)):
        prev = out[i - 1]
        start = format_for_storage(add_days(prev.start, prev.duration))
        if out[i].start != start:
            out[i] = replace(out[i], start=start)
    return out


def phase_rank(phase: str, phases: Sequence[str] = PHASES) -> int:
    """Position of `phase` in `phases`; unknown phases rank after all known ones."""
    try:
        return list(phases).index(phase)
    except ValueError:
        return len(phases)


def sort_by_phase(tasks: Sequence[Task], phases: Sequence[str] = PHASES) -> list[Task]:
    """
    Order tasks by:

    1. phase position in `phases` (unknown phases last)
    2. id (stable tie-breaker)
    """
    return sorted(tasks, key=lambda t: (phase_rank(t.phase, phases), t.id))


def reorder_by_phase(tasks: Sequence[Task], phases: Sequence[str] = PHASES) -> list[Task]:
    """
    Re-sort by phase and rebuild the whole chain from the first task.

    The first task after sorting keeps its stored start.
    """
    return cascade(sort_by_phase(tasks, phases), 0)
