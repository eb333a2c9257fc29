"""Tests for the task model and status vocabulary."""

import pytest

from phaseline.engine.model import STATUSES, Status, Task


class TestStatusBucket:
    @pytest.mark.parametrize("raw", STATUSES)
    def test_known_statuses_map_to_themselves(self, raw: str) -> None:
        assert Status.bucket(raw).value == raw

    @pytest.mark.parametrize("raw", ["Blocked", "", "completed", "On Hold"])
    def test_unknown_status_falls_back_to_not_started(self, raw: str) -> None:
        assert Status.bucket(raw) is Status.NOT_STARTED


class TestTask:
    def test_end_is_start_plus_duration(self) -> None:
        assert Task(1, "Pre-Project", "x", 7, "2026-04-15").end == "2026-04-22"

    def test_unknown_status_is_kept_verbatim(self) -> None:
        task = Task(1, "Pre-Project", "x", 1, "2026-04-15", status="Blocked")
        assert task.status == "Blocked"
        assert task.status_bucket is Status.NOT_STARTED

    def test_end_clamps_at_last_day(self) -> None:
        assert Task(1, "Pre-Project", "x", 3, "9999-12-30").end == "9999-12-31"
