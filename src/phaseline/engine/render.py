# src/phaseline/engine/render.py

"""
Rendering helpers for terminal output.

This module is responsible for:
- the task table (show / edit sessions),
- the Gantt-style timeline grouped by phase,
- colour themes and per-status styles.

It is presentation-only: it reads the task list and the timeline
window, and never mutates task state.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from datetime import date
from typing import Final, Sequence

from .dates import DateLike, format_display
from .model import PHASES, Status, Task, TimelineWindow
from .stats import bar_geometry, today_offset


# ---------------------------------------------------------------------
# ANSI / terminal helpers
# ---------------------------------------------------------------------

_RESET = "\033[0m"
_BOLD = "\033[1m"

_STATUS_COLOR: Final[dict[Status, str]] = {
    Status.NOT_STARTED: "\033[90m",  # grey
    Status.IN_PROGRESS: "\033[34m",  # blue
    Status.COMPLETED: "\033[32m",    # green
    Status.DELAYED: "\033[31m",      # red
}

_TODAY_COLOR = "\033[91m"

BAR_CHAR = "█"
TODAY_CHAR = "|"
LINK_MARK = "↳"


def _supports_color() -> bool:
    """Return True if stdout is a TTY."""
    import sys

    return sys.stdout.isatty()


def _fit(s: str, width: int) -> str:
    """Truncate or pad plain text to exactly `width` columns."""
    if len(s) > width:
        return s[: max(width - 1, 0)] + "…"
    return s + " " * (width - len(s))


# ---------------------------------------------------------------------
# Themes
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Theme:
    """
    ANSI palette for one look.

    `gradient_header` mirrors a banner-style header: the title line is
    drawn with a filled rule above and below it.
    """

    name: str
    text: str
    muted: str
    accent: str
    border: str
    gradient_header: bool = False


THEMES: Final[dict[str, Theme]] = {
    "light": Theme(name="Standard", text="\033[30m", muted="\033[90m", accent="\033[35m", border="\033[37m"),
    "dark": Theme(name="GitHub Dark", text="\033[97m", muted="\033[37m", accent="\033[94m", border="\033[90m"),
    "cayman": Theme(
        name="Cayman",
        text="\033[30m",
        muted="\033[90m",
        accent="\033[36m",
        border="\033[32m",
        gradient_header=True,
    ),
}

DEFAULT_THEME: Final[str] = "light"


def get_theme(key: str) -> Theme:
    """Return the named theme, falling back to the default for unknown keys."""
    return THEMES.get(key, THEMES[DEFAULT_THEME])


class _Painter:
    """Applies a theme when colour is enabled, passes text through otherwise."""

    def __init__(self, theme: Theme, color: bool) -> None:
        self.theme = theme
        self.on = color and _supports_color()

    def paint(self, code: str, s: str) -> str:
        return f"{code}{s}{_RESET}" if self.on and code else s

    def status(self, task: Task, s: str) -> str:
        return self.paint(_STATUS_COLOR[task.status_bucket], s)


# ---------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------

def render_header(title: str, *, theme: Theme, color: bool = True, width: int | None = None) -> None:
    width = width or min(100, shutil.get_terminal_size(fallback=(100, 24)).columns)
    p = _Painter(theme, color)

    if theme.gradient_header:
        rule = p.paint(theme.border, "▀" * width)
        print(rule)
        print(p.paint(_BOLD + theme.accent, title.center(width)))
        print(p.paint(theme.border, "▄" * width))
    else:
        print(p.paint(_BOLD + theme.text, title))
        print(p.paint(theme.border, "=" * width))


# ---------------------------------------------------------------------
# Task table
# ---------------------------------------------------------------------

_COLUMNS: Final[tuple[tuple[str, int], ...]] = (
    ("ID", 4),
    ("Phase", 16),
    ("Task Name", 36),
    ("Start Date", 12),
    ("Days", 5),
    ("End Date", 12),
    ("Status", 12),
)


def render_table(tasks: Sequence[Task], *, theme: Theme, color: bool = True) -> None:
    """
    Render the editable-table view.

    Every row after the first carries a link marker: its start is
    derived from the row above.
    """
    p = _Painter(theme, color)

    head = " ".join(_fit(name, w) for name, w in _COLUMNS)
    print(p.paint(_BOLD + theme.muted, head))
    print(p.paint(theme.border, "-" * len(head)))

    for i, task in enumerate(tasks):
        mark = LINK_MARK if i > 0 else " "
        cells = [
            _fit(str(task.id), 4),
            _fit(task.phase, 16),
            _fit(task.task, 36),
            _fit(f"{mark} {task.start}", 12),
            _fit(str(task.duration), 5),
            p.paint(theme.muted, _fit(task.end, 12)),
            p.status(task, _fit(task.status, 12)),
        ]
        print(" ".join(cells).rstrip())

    if not tasks:
        print(p.paint(theme.muted, "(no tasks)"))


# ---------------------------------------------------------------------
# Timeline
# ---------------------------------------------------------------------

def _bar_line(task: Task, window: TimelineWindow, area: int, today_col: int | None, p: _Painter) -> str:
    left_pct, width_pct = bar_geometry(task, window)
    start = min(max(int(round(left_pct / 100 * area)), 0), area - 1)
    length = max(1, int(round(width_pct / 100 * area)))
    end = min(start + length, area)

    cells: list[str] = []
    for col in range(area):
        if start <= col < end:
            cells.append(p.status(task, BAR_CHAR))
        elif col == today_col:
            cells.append(p.paint(_TODAY_COLOR, TODAY_CHAR))
        else:
            cells.append(" ")
    return "".join(cells).rstrip()


def render_timeline(
    tasks: Sequence[Task],
    window: TimelineWindow,
    *,
    theme: Theme,
    phases: Sequence[str] = PHASES,
    color: bool = True,
    width: int | None = None,
    today: DateLike = None,
) -> None:
    """
    Render the Gantt-style timeline.

    Tasks are grouped under their phase in vocabulary order; tasks whose
    phase is not in the vocabulary are listed in the table only.
    """
    width = width or min(120, shutil.get_terminal_size(fallback=(100, 24)).columns)
    label_w = 28
    area = max(10, width - label_w - 1)
    p = _Painter(theme, color)

    offset = today_offset(window, today)
    today_col = None if offset is None else min(int(round(offset / 100 * area)), area - 1)

    left = format_display(window.min_date)
    right = format_display(window.max_date)
    span = f"{left} .. {right} ({window.total_days} days)"
    print(p.paint(theme.muted, " " * (label_w + 1) + span))

    for phase in phases:
        group = [t for t in tasks if t.phase == phase]
        if not group:
            continue

        print(p.paint(_BOLD + theme.accent, phase.upper()))
        for task in group:
            label = _fit(f"  {task.task}", label_w)
            print(f"{label} {_bar_line(task, window, area, today_col, p)}".rstrip())

    legend = "  ".join(p.paint(_STATUS_COLOR[s], f"{BAR_CHAR} {s.value}") for s in Status)
    print()
    print(legend)
    if today_col is not None:
        marker = p.paint(_TODAY_COLOR, TODAY_CHAR)
        today_s = format_display(today or date.today())
        print(f"{marker} Today ({today_s})")
