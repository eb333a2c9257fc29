# src/phaseline/engine/model.py

"""
Core domain models.

This module defines the in-memory task record, the derived timeline
window, and the phase/status vocabularies the editor works with.

No filesystem access should happen here.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Final

from .dates import add_days, format_for_storage


# ---------------------------------------------------------------------
# Vocabularies
# ---------------------------------------------------------------------

PHASES: Final[tuple[str, ...]] = ("Pre-Project", "During Project", "Post-Project")

DEFAULT_PHASE: Final[str] = "Post-Project"
NEW_TASK_LABEL: Final[str] = "New Task"


class Status(str, Enum):
    """
    Known task statuses.

    Stored task status is a free string; anything not listed here is
    accepted verbatim and displayed in the NOT_STARTED bucket.
    """

    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    DELAYED = "Delayed"

    @classmethod
    def bucket(cls, raw: str) -> "Status":
        """Return the display bucket for a stored status string."""
        try:
            return cls(raw)
        except ValueError:
            return cls.NOT_STARTED


STATUSES: Final[tuple[str, ...]] = tuple(s.value for s in Status)
DEFAULT_STATUS: Final[str] = Status.NOT_STARTED.value


# ---------------------------------------------------------------------
# Task
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Task:
    """
    A single link in the project chain.

    Notes:
    - `id` is assigned once and never reused within a store.
    - `start` is kept as an ISO `YYYY-MM-DD` string.
    - `end` is start + duration: the day *after* the task completes.
    """

    id: int
    phase: str
    task: str
    duration: int
    start: str
    status: str = DEFAULT_STATUS

    @property
    def end(self) -> str:
        return format_for_storage(add_days(self.start, self.duration))

    @property
    def status_bucket(self) -> Status:
        return Status.bucket(self.status)


# Fields a caller may edit through the store; `id` is immutable.
EDITABLE_FIELDS: Final[frozenset[str]] = frozenset({"phase", "task", "duration", "start", "status"})


# ---------------------------------------------------------------------
# Timeline window
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class TimelineWindow:
    """
    Date range used to scale the visual timeline.

    Always recomputed from the task list; carries no state of its own.
    """

    min_date: datetime
    max_date: datetime
    total_days: int


# ---------------------------------------------------------------------
# Sample plan
# ---------------------------------------------------------------------

SAMPLE_TASKS: Final[tuple[Task, ...]] = (
    Task(1, "Pre-Project", "Make contact with client", 7, "2026-04-15", "Completed"),
    Task(2, "Pre-Project", "Culture Kick-off", 5, "2026-04-22"),
    Task(3, "Pre-Project", "Make Top Leadership Appointment", 5, "2026-04-27"),
    Task(4, "Pre-Project", "Meeting with Top Leadership", 1, "2026-05-02"),
    Task(5, "Pre-Project", "Organogram (Template & Reporting Lines)", 14, "2026-05-03"),
    Task(6, "Pre-Project", "Schedule Project Launch", 7, "2026-05-17"),
    Task(7, "During Project", "Quant Data: Send Survey Links", 10, "2026-05-24"),
    Task(8, "During Project", "Follow-up on Responses", 5, "2026-06-03"),
    Task(9, "During Project", "Data Analysis", 14, "2026-06-08"),
    Task(10, "During Project", "Qual Data: Interviews/Focus Groups", 14, "2026-06-22"),
    Task(11, "Post-Project", "Report Writing", 14, "2026-07-06"),
    Task(12, "Post-Project", "Top-Leadership Feedback Sessions", 1, "2026-07-20"),
    Task(13, "Post-Project", "Suggested Interventions", 7, "2026-07-21"),
)
