# src/phaseline/engine/validate.py

"""
Chain checking.

This module inspects a task list against the editor's conventions and
reports problems without changing anything.

Responsibilities:
- id uniqueness and duration sanity,
- back-to-back chain continuity (e.g. the gap a delete leaves behind),
- vocabulary membership for phase and status.
"""

from dataclasses import dataclass
from typing import Sequence

from .dates import format_for_storage, parse_date
from .model import PHASES, STATUSES, Task


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

class ValidationError(Exception):
    """
    Fatal validation error used for command flow control.

    Raised when a command must immediately abort
    (e.g. a malformed command line in an edit session).
    """


# ---------------------------------------------------------------------
# Result objects
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """
    A single validation problem.

    `code` is a stable identifier suitable for tests and future filtering.
    """

    code: str
    task_id: int
    message: str


@dataclass(frozen=True, slots=True)
class ValidationResult:
    issues: Sequence[ValidationIssue]

    @property
    def ok(self) -> bool:
        return not self.issues

    def codes(self) -> list[str]:
        return [i.code for i in self.issues]


# ---------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------

def validate_chain(
    tasks: Sequence[Task],
    *,
    phases: Sequence[str] = PHASES,
    statuses: Sequence[str] = STATUSES,
) -> ValidationResult:
    """
    Check a task list. Unknown phases/statuses are reported but are
    legal; they never block editing.
    """
    issues: list[ValidationIssue] = []
    seen: set[int] = set()

    for i, task in enumerate(tasks):
        if task.id in seen:
            issues.append(ValidationIssue("duplicate_id", task.id, f"Duplicate task id {task.id}"))
        seen.add(task.id)

        if task.duration < 1:
            issues.append(
                ValidationIssue(
                    "duration_invalid",
                    task.id,
                    f"Task {task.id}: duration must be >= 1 (got {task.duration})",
                )
            )

        if task.phase not in phases:
            issues.append(ValidationIssue("phase_unknown", task.id, f"Task {task.id}: unknown phase '{task.phase}'"))

        if task.status not in statuses:
            issues.append(
                ValidationIssue("status_unknown", task.id, f"Task {task.id}: unknown status '{task.status}'")
            )

        if i > 0:
            expected = tasks[i - 1].end
            actual = format_for_storage(parse_date(task.start))
            if actual != expected:
                issues.append(
                    ValidationIssue(
                        "chain_gap",
                        task.id,
                        f"Task {task.id}: starts {actual}, previous task ends {expected}",
                    )
                )

    return ValidationResult(issues=tuple(issues))
