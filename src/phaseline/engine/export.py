# src/phaseline/engine/export.py

"""
Spreadsheet export.

Read-only consumers of the task list:
- CSV text (and a BOM-prefixed file for spreadsheet apps),
- tab-separated text for pasting straight into a sheet,
- a best-effort clipboard copy through whatever tool the OS provides.
"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Final, Sequence

from .model import Task

logger = logging.getLogger(__name__)

HEADERS: Final[tuple[str, ...]] = ("Phase", "Task", "Start Date", "Duration (Days)", "End Date", "Status")
DEFAULT_CSV_NAME: Final[str] = "project_timeline.csv"
BOM: Final[str] = "\ufeff"

# Tried in order; first one found on PATH wins.
_CLIPBOARD_COMMANDS: Final[tuple[tuple[str, ...], ...]] = (
    ("pbcopy",),
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
)


def _csv_quote(s: str) -> str:
    return '"' + (s or "").replace('"', '""') + '"'


def _tsv_clean(s: str) -> str:
    return (s or "").replace("\t", " ")


def to_csv(tasks: Sequence[Task]) -> str:
    """
    Render tasks as CSV.

    Text columns are always quoted; dates and durations are bare.
    """
    rows = [",".join(HEADERS)]
    for t in tasks:
        rows.append(
            ",".join(
                [_csv_quote(t.phase), _csv_quote(t.task), t.start, str(t.duration), t.end, _csv_quote(t.status)]
            )
        )
    return "\n".join(rows)


def to_tsv(tasks: Sequence[Task]) -> str:
    """Render tasks as tab-separated text; tabs inside fields become spaces."""
    rows = ["\t".join(HEADERS)]
    for t in tasks:
        rows.append(
            "\t".join(
                [_tsv_clean(t.phase), _tsv_clean(t.task), t.start, str(t.duration), t.end, _tsv_clean(t.status)]
            )
        )
    return "\n".join(rows)


def write_csv(path: str | Path, tasks: Sequence[Task]) -> Path:
    """
    Write CSV with a UTF-8 BOM so spreadsheet apps detect the encoding.

    Returns the written path.
    """
    p = Path(path)
    p.write_text(BOM + to_csv(tasks), encoding="utf-8")
    return p


def copy_to_clipboard(text: str) -> bool:
    """
    Copy text with the first available clipboard tool.

    Returns False when no tool is available or all of them fail; the
    caller is expected to fall back to printing the text.
    """
    for cmd in _CLIPBOARD_COMMANDS:
        if not shutil.which(cmd[0]):
            continue

        try:
            p = subprocess.run(list(cmd), input=text, text=True, capture_output=True, timeout=5)
        except (OSError, subprocess.SubprocessError) as e:
            logger.warning("Clipboard tool %s failed, trying fallback: %s", cmd[0], e)
            continue

        if p.returncode == 0:
            return True

        logger.warning("Clipboard tool %s exited with %d, trying fallback", cmd[0], p.returncode)

    return False
