"""Tests for CSV / TSV export and the clipboard helper."""

import subprocess

from phaseline.engine import export
from phaseline.engine.export import HEADERS, copy_to_clipboard, to_csv, to_tsv, write_csv
from phaseline.engine.model import Task

TASKS = [
    Task(1, "Pre-Project", 'Say "hello"', 7, "2026-04-15", "Completed"),
    Task(2, "Pre-Project", "Tab\there", 1, "2026-04-22"),
]


def test_csv_quotes_text_columns_only() -> None:
    lines = to_csv(TASKS).split("\n")
    assert lines[0] == ",".join(HEADERS)
    assert lines[1] == '"Pre-Project","Say ""hello""",2026-04-15,7,2026-04-22,"Completed"'
    assert lines[2] == '"Pre-Project","Tab\there",2026-04-22,1,2026-04-23,"Not Started"'


def test_tsv_strips_tabs_from_fields() -> None:
    lines = to_tsv(TASKS).split("\n")
    assert lines[0] == "Phase\tTask\tStart Date\tDuration (Days)\tEnd Date\tStatus"
    assert lines[2].split("\t") == ["Pre-Project", "Tab here", "2026-04-22", "1", "2026-04-23", "Not Started"]


def test_empty_list_is_header_only() -> None:
    assert to_csv([]) == ",".join(HEADERS)


def test_write_csv_has_bom(tmp_path) -> None:
    p = write_csv(tmp_path / "out.csv", TASKS)
    raw = p.read_bytes()
    assert raw.startswith(b"\xef\xbb\xbf")
    assert raw.decode("utf-8-sig") == to_csv(TASKS)


def test_clipboard_without_tools(monkeypatch) -> None:
    monkeypatch.setattr(export.shutil, "which", lambda name: None)
    assert copy_to_clipboard("x") is False


def test_clipboard_falls_through_failing_tool(monkeypatch) -> None:
    calls: list[list[str]] = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        code = 1 if cmd[0] == "pbcopy" else 0
        return subprocess.CompletedProcess(cmd, code, "", "")

    monkeypatch.setattr(export.shutil, "which", lambda name: f"/usr/bin/{name}")
    monkeypatch.setattr(export.subprocess, "run", fake_run)

    assert copy_to_clipboard("rows") is True
    assert [c[0] for c in calls] == ["pbcopy", "wl-copy"]
