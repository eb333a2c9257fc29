"""Tests for chain cascading and phase reordering."""

from phaseline.engine.chain import cascade, phase_rank, reorder_by_phase, sort_by_phase
from phaseline.engine.model import Task

PHASES = ("Pre", "Post")


def _starts(tasks) -> list[str]:
    return [t.start for t in tasks]


def _chain() -> list[Task]:
    return [
        Task(1, "Pre", "a", 5, "2026-01-01"),
        Task(2, "Pre", "b", 3, "2026-03-03"),
        Task(3, "Post", "c", 2, "2026-12-12"),
    ]


class TestCascade:
    def test_rebuilds_suffix_from_index(self) -> None:
        out = cascade(_chain(), 0)
        assert _starts(out) == ["2026-01-01", "2026-01-06", "2026-01-09"]

    def test_task_at_index_keeps_its_start(self) -> None:
        out = cascade(_chain(), 1)
        assert _starts(out) == ["2026-01-01", "2026-03-03", "2026-03-06"]

    def test_last_index_is_a_no_op(self) -> None:
        tasks = _chain()
        assert cascade(tasks, 2) == tasks

    def test_idempotent(self) -> None:
        once = cascade(_chain(), 0)
        assert cascade(once, 0) == once

    def test_input_is_not_mutated(self) -> None:
        tasks = _chain()
        cascade(tasks, 0)
        assert tasks == _chain()

    def test_empty(self) -> None:
        assert cascade([], 0) == []


class TestPhaseOrdering:
    def test_phase_rank_unknown_is_last(self) -> None:
        assert phase_rank("Pre", PHASES) == 0
        assert phase_rank("Post", PHASES) == 1
        assert phase_rank("Someday", PHASES) == 2

    def test_sort_by_phase_then_id(self) -> None:
        tasks = [
            Task(4, "Post", "d", 1, "2026-01-01"),
            Task(2, "Someday", "x", 1, "2026-01-01"),
            Task(3, "Pre", "c", 1, "2026-01-01"),
            Task(1, "Someday", "y", 1, "2026-01-01"),
            Task(5, "Pre", "e", 1, "2026-01-01"),
        ]
        assert [t.id for t in sort_by_phase(tasks, PHASES)] == [3, 5, 4, 1, 2]

    def test_reorder_rechains_from_first_task(self) -> None:
        tasks = [
            Task(2, "Pre", "b", 2, "2026-01-04"),
            Task(1, "Post", "a", 3, "2026-01-01"),
            Task(3, "Pre", "c", 4, "2026-01-06"),
        ]
        out = reorder_by_phase(tasks, PHASES)
        assert [t.id for t in out] == [2, 3, 1]
        assert _starts(out) == ["2026-01-04", "2026-01-06", "2026-01-10"]
