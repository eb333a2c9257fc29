# src/phaseline/cli.py

"""
Command-line interface for phaseline.

This module:
- defines argument parsing and subcommands,
- delegates chain logic and rendering to engine modules,
- keeps user interaction (the edit session prompt) here.

Plans are read, never written back: an edit session lives in memory
and ends with an optional export.
"""

import argparse
import logging
import shlex
from dataclasses import dataclass
from pathlib import Path

from phaseline.engine.actions import TaskStore
from phaseline.engine.export import DEFAULT_CSV_NAME, copy_to_clipboard, to_csv, to_tsv, write_csv
from phaseline.engine.model import EDITABLE_FIELDS, SAMPLE_TASKS
from phaseline.engine.parse import ParseError, Plan, PlanConfig, load_plan
from phaseline.engine.render import DEFAULT_THEME, THEMES, get_theme, render_header, render_table, render_timeline
from phaseline.engine.validate import ValidationError, validate_chain

logger = logging.getLogger(__name__)

TITLE = "Project Timeline"


# ---------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------

def _add_plan_arg(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "plan",
        nargs="?",
        default="",
        help="Plan file (YAML). Uses the built-in sample plan when omitted",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="phaseline")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # ------------------------------------------------------------------
    # Read-only commands
    # ------------------------------------------------------------------

    p_show = sub.add_parser(
        "show",
        help="Show the task table and timeline",
    )
    _add_plan_arg(p_show)
    p_show.add_argument(
        "--theme",
        choices=sorted(THEMES),
        default=DEFAULT_THEME,
        help="Colour theme",
    )
    p_show.add_argument(
        "--no-color",
        action="store_true",
        help="Disable coloured output",
    )
    p_show.set_defaults(func=cmd_show)

    p_export = sub.add_parser(
        "export",
        help="Export tasks as CSV or tab-separated text",
    )
    _add_plan_arg(p_export)
    p_export.add_argument(
        "--format",
        choices=["csv", "tsv"],
        default="csv",
        help="Output format",
    )
    p_export.add_argument(
        "-o",
        "--output",
        type=str,
        default="",
        help="Write to this file (CSV gets a UTF-8 BOM); stdout when omitted",
    )
    p_export.set_defaults(func=cmd_export)

    p_check = sub.add_parser(
        "check",
        help="Check chain continuity and vocabularies",
    )
    _add_plan_arg(p_check)
    p_check.set_defaults(func=cmd_check)

    # ------------------------------------------------------------------
    # Interactive session
    # ------------------------------------------------------------------

    p_edit = sub.add_parser(
        "edit",
        help="Edit a plan interactively (in memory only)",
    )
    _add_plan_arg(p_edit)
    p_edit.add_argument(
        "--theme",
        choices=sorted(THEMES),
        default=DEFAULT_THEME,
        help="Initial colour theme",
    )
    p_edit.add_argument(
        "--no-color",
        action="store_true",
        help="Disable coloured output",
    )
    p_edit.set_defaults(func=cmd_edit)

    return parser


# ---------------------------------------------------------------------
# Plan loading
# ---------------------------------------------------------------------

def _load(args: argparse.Namespace) -> Plan:
    path = (args.plan or "").strip()
    if not path:
        return Plan(tasks=SAMPLE_TASKS, config=PlanConfig())
    return load_plan(Path(path))


def _show(store: TaskStore, *, theme_key: str, color: bool) -> None:
    theme = get_theme(theme_key)
    render_header(TITLE, theme=theme, color=color)
    render_table(store.tasks, theme=theme, color=color)
    print()
    render_timeline(store.tasks, store.window(), theme=theme, phases=store.phases, color=color)


# ---------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------

def cmd_show(args: argparse.Namespace) -> int:
    plan = _load(args)
    store = TaskStore(plan.tasks, phases=plan.config.phases, default_phase=plan.config.default_phase)
    _show(store, theme_key=args.theme, color=not bool(args.no_color))
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    plan = _load(args)
    output = (args.output or "").strip()

    if args.format == "csv" and output:
        print(write_csv(output, plan.tasks))
        return 0

    text = to_csv(plan.tasks) if args.format == "csv" else to_tsv(plan.tasks)
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        print(output)
    else:
        print(text)
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    plan = _load(args)
    res = validate_chain(plan.tasks, phases=plan.config.phases, statuses=plan.config.statuses)

    if res.ok:
        print(f"OK ({len(plan.tasks)} tasks)")
        return 0

    for issue in res.issues:
        print(f"  - {issue.code}: {issue.message}")
    return 1


def cmd_edit(args: argparse.Namespace) -> int:
    plan = _load(args)
    session = EditSession(
        store=TaskStore(plan.tasks, phases=plan.config.phases, default_phase=plan.config.default_phase),
        theme=args.theme,
        color=not bool(args.no_color),
    )

    _show(session.store, theme_key=session.theme, color=session.color)
    print("Type 'help' for commands.")

    while True:
        try:
            line = input("phaseline> ")
        except EOFError:
            print()
            break

        try:
            if not session.handle(line):
                break
        except ValidationError as e:
            print(f"Error: {e}")

    return 0


# ---------------------------------------------------------------------
# Edit session
# ---------------------------------------------------------------------

SESSION_HELP = """\
Commands:
  set ID FIELD VALUE   edit a field (phase, task, duration, start, status)
  add                  append a task at the end of the chain
  del ID               delete a task (following dates are kept as they are)
  show                 redraw table and timeline
  theme NAME           switch theme (light, dark, cayman)
  export csv [FILE]    write CSV (default: project_timeline.csv)
  copy                 copy tab-separated rows for spreadsheet paste
  help                 this text
  quit                 leave the session"""


@dataclass(slots=True)
class EditSession:
    """
    In-memory edit state: the task store plus view settings.
    """

    store: TaskStore
    theme: str = DEFAULT_THEME
    color: bool = True

    def handle(self, line: str) -> bool:
        """
        Run one session command.

        Returns False when the session should end.
        Raises ValidationError on a malformed command.
        """
        try:
            parts = shlex.split(line)
        except ValueError as e:
            raise ValidationError(f"Cannot parse command: {e}") from e

        if not parts:
            return True

        cmd, rest = parts[0].lower(), parts[1:]

        if cmd in {"quit", "exit", "q"}:
            return False

        if cmd == "help":
            print(SESSION_HELP)
        elif cmd == "show":
            self.redraw()
        elif cmd == "set":
            self._set(rest)
        elif cmd == "add":
            self.store.add_task()
            self.redraw()
        elif cmd in {"del", "delete", "rm"}:
            if len(rest) != 1:
                raise ValidationError("Usage: del ID")
            self.store.delete_task(_parse_id(rest[0]))
            self.redraw()
        elif cmd == "theme":
            if len(rest) != 1 or rest[0] not in THEMES:
                raise ValidationError(f"Usage: theme {{{','.join(sorted(THEMES))}}}")
            self.theme = rest[0]
            self.redraw()
        elif cmd == "export":
            self._export(rest)
        elif cmd == "copy":
            self._copy()
        else:
            raise ValidationError(f"Unknown command: {cmd} (try 'help')")

        return True

    def redraw(self) -> None:
        _show(self.store, theme_key=self.theme, color=self.color)

    def _set(self, rest: list[str]) -> None:
        if len(rest) < 3:
            raise ValidationError("Usage: set ID FIELD VALUE")

        task_id = _parse_id(rest[0])
        field = rest[1].lower()
        if field not in EDITABLE_FIELDS:
            allowed = ", ".join(sorted(EDITABLE_FIELDS))
            raise ValidationError(f"Unknown field '{rest[1]}' (allowed: {allowed})")

        if self.store.get(task_id) is None:
            raise ValidationError(f"Task not found: {task_id}")

        self.store.update_field(task_id, field, " ".join(rest[2:]))
        self.redraw()

    def _export(self, rest: list[str]) -> None:
        if not rest or rest[0].lower() != "csv" or len(rest) > 2:
            raise ValidationError("Usage: export csv [FILE]")

        path = rest[1] if len(rest) == 2 else DEFAULT_CSV_NAME
        print(f"Wrote {write_csv(path, self.store.tasks)}")

    def _copy(self) -> None:
        text = to_tsv(self.store.tasks)
        if copy_to_clipboard(text):
            print("Copied. Paste into a new spreadsheet.")
            return

        logger.warning("No clipboard tool available; printing rows instead")
        print(text)


def _parse_id(raw: str) -> int:
    try:
        return int(raw)
    except ValueError as e:
        raise ValidationError(f"Task id must be an integer: {raw}") from e


# ---------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 2

    try:
        return func(args)
    except (ParseError, ValidationError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
