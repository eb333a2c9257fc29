# src/phaseline/engine/dates.py

"""
Calendar date arithmetic.

Every value is a naive datetime pinned to midday, so adding days or
differencing two dates never lands on the wrong side of a DST or
timezone boundary.

All functions are pure and total: malformed input degrades to "now".
"""

import math
import re
from datetime import date, datetime, timedelta
from typing import Final, Optional

DateLike = str | date | datetime | None

MIDDAY: Final[int] = 12
SECONDS_PER_DAY: Final[int] = 24 * 60 * 60

FIRST_DAY: Final[datetime] = datetime.min.replace(hour=MIDDAY)
LAST_DAY: Final[datetime] = datetime.max.replace(hour=MIDDAY, minute=0, second=0, microsecond=0)

# `YYYY-MM-DD`, also accepting unpadded parts such as `2026-1-5`.
_DATE_RE = re.compile(r"^(\d{1,4})-(\d{1,2})-(\d{1,2})(?!\d)")


def _at_midday(d: datetime) -> datetime:
    return d.replace(hour=MIDDAY, minute=0, second=0, microsecond=0)


def parse_date(value: DateLike = None) -> datetime:
    """
    Parse an ISO `YYYY-MM-DD` string (or a date/datetime) into a
    midday-normalised datetime.

    Empty, missing or unparseable input yields the current day.
    """
    if isinstance(value, datetime):
        return _at_midday(value)

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, MIDDAY)

    s = str(value).strip() if value else ""
    m = _DATE_RE.match(s)
    if m:
        try:
            return datetime(int(m.group(1)), int(m.group(2)), int(m.group(3)), MIDDAY)
        except ValueError:
            pass

    return _at_midday(datetime.now())


def add_days(value: DateLike, days: int) -> datetime:
    """
    Return a new date `days` calendar days after `value` (may be negative).

    Results beyond the representable range clamp to the first/last
    supported day.
    """
    d = parse_date(value)
    try:
        return d + timedelta(days=int(days))
    except OverflowError:
        return LAST_DAY if days > 0 else FIRST_DAY


def diff_in_days(start: DateLike, end: DateLike) -> int:
    """
    Whole calendar days from `start` to `end`.

    Rounded up so residual sub-day drift still yields a stable integer.
    """
    delta = parse_date(end) - parse_date(start)
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def format_for_storage(value: Optional[date | datetime]) -> str:
    """Render a date as `YYYY-MM-DD`; empty string for None."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.date().isoformat()
    return value.isoformat()


def format_display(value: DateLike) -> str:
    """Human-facing form, e.g. `15 Apr 2026`."""
    if value is None or value == "":
        return ""
    d = parse_date(value)
    return f"{d.day} {d.strftime('%b %Y')}"
