# src/phaseline/engine/stats.py

"""
Derived timeline statistics.

Pure projections of the task list used to scale the visual timeline.
Nothing is cached: callers recompute after every mutation.
"""

from datetime import datetime
from typing import Final, Optional, Sequence

from .dates import DateLike, add_days, diff_in_days, parse_date
from .model import Task, TimelineWindow

PAD_BEFORE_DAYS: Final[int] = 5
PAD_AFTER_DAYS: Final[int] = 10
MIN_BAR_PCT: Final[float] = 1.0


def timeline_window(tasks: Sequence[Task], *, today: DateLike = None) -> TimelineWindow:
    """
    Return the padded window bounding every task.

    An empty list yields a one-day window anchored at `today`
    (defaults to now).
    """
    if not tasks:
        now = parse_date(today)
        return TimelineWindow(min_date=now, max_date=now, total_days=1)

    min_date = add_days(min(parse_date(t.start) for t in tasks), -PAD_BEFORE_DAYS)
    max_date = add_days(max(add_days(t.start, t.duration) for t in tasks), PAD_AFTER_DAYS)

    return TimelineWindow(
        min_date=min_date,
        max_date=max_date,
        total_days=diff_in_days(min_date, max_date),
    )


def bar_geometry(task: Task, window: TimelineWindow) -> tuple[float, float]:
    """
    Horizontal placement of a task bar as (left %, width %).

    Width never drops below MIN_BAR_PCT so one-day tasks stay visible.
    """
    total = max(window.total_days, 1)
    offset = diff_in_days(window.min_date, task.start)
    left = offset / total * 100
    width = max(task.duration / total * 100, MIN_BAR_PCT)
    return left, width


def today_offset(window: TimelineWindow, today: DateLike = None) -> Optional[float]:
    """Percentage position of `today` in the window, or None if outside it."""
    now: datetime = parse_date(today)
    if now < window.min_date or now > window.max_date:
        return None
    return diff_in_days(window.min_date, now) / max(window.total_days, 1) * 100
