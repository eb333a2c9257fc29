# src/phaseline/engine/parse.py

"""
Plan file parser.

A plan file is a single YAML mapping:

- tasks          (required) : list of task mappings
- phases         (optional) : ordered phase vocabulary
- statuses       (optional) : status vocabulary
- default_phase  (optional) : phase for the first task added to an empty plan

This module performs *structural* parsing only. Field-level slop (a bad
duration or date) is coerced the same way the store coerces edits.
Nothing is ever written back.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any

import yaml

from .actions import coerce_duration, coerce_start
from .model import DEFAULT_PHASE, DEFAULT_STATUS, PHASES, STATUSES, Task

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ParseError(Exception):
    """
    Raised when a plan file is syntactically or structurally invalid.
    """

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


# ---------------------------------------------------------------------
# Result objects
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class PlanConfig:
    phases: tuple[str, ...] = PHASES
    statuses: tuple[str, ...] = STATUSES
    default_phase: str = DEFAULT_PHASE


@dataclass(frozen=True, slots=True)
class Plan:
    tasks: tuple[Task, ...]
    config: PlanConfig = PlanConfig()


# ---------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------

def load_plan(path: str | Path) -> Plan:
    """
    Parse a plan file into tasks plus its vocabulary config.
    """
    p = Path(path)

    if not p.is_file():
        raise ParseError(str(p), "Plan file does not exist")

    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ParseError(str(p), f"Cannot read file: {e}") from e

    plan = parse_plan_text(text, source=str(p))
    logger.info("Loaded %d task(s) from %s", len(plan.tasks), p)
    return plan


def parse_plan_text(text: str, *, source: str = "<string>") -> Plan:
    try:
        data = yaml.safe_load(text) or {}
    except (yaml.YAMLError, ValueError) as e:
        raise ParseError(source, f"Invalid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ParseError(source, "YAML root must be a mapping/dictionary")

    config = PlanConfig(
        phases=_str_tuple(source, data, "phases", PHASES),
        statuses=_str_tuple(source, data, "statuses", STATUSES),
        default_phase=_optional_str(source, data, "default_phase", DEFAULT_PHASE),
    )

    raw_tasks = data.get("tasks", [])
    if raw_tasks is None:
        raw_tasks = []
    if not isinstance(raw_tasks, list):
        raise ParseError(source, "YAML key 'tasks' must be a list")

    tasks: list[Task] = []
    seen: set[int] = set()
    for i, item in enumerate(raw_tasks, start=1):
        task = _parse_task(source, i, item)
        if task.id in seen:
            raise ParseError(source, f"tasks[{i}]: duplicate id {task.id}")
        seen.add(task.id)
        tasks.append(task)

    return Plan(tasks=tuple(tasks), config=config)


# ---------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------

def _str_tuple(path: str, data: dict[str, Any], key: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = data.get(key)
    if value is None:
        return default

    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ParseError(path, f"YAML key '{key}' must be a list of strings")

    return tuple(v.strip() for v in value if v.strip()) or default


def _optional_str(path: str, data: dict[str, Any], key: str, default: str) -> str:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ParseError(path, f"YAML key '{key}' must be a string")
    return value.strip() or default


def _parse_task(path: str, idx: int, item: Any) -> Task:
    if not isinstance(item, dict):
        raise ParseError(path, f"tasks[{idx}] must be a mapping")

    for key in ("id", "phase", "task"):
        if key not in item:
            raise ParseError(path, f"tasks[{idx}]: missing required key '{key}'")

    task_id = item["id"]
    if not isinstance(task_id, int) or isinstance(task_id, bool):
        raise ParseError(path, f"tasks[{idx}]: 'id' must be an integer")

    # YAML turns unquoted ISO dates into date objects.
    start = item.get("start")
    if isinstance(start, (date, datetime)):
        start = start.isoformat()

    return Task(
        id=task_id,
        phase=str(item["phase"]),
        task=str(item["task"]),
        duration=coerce_duration(item.get("duration", 1)),
        start=coerce_start(start),
        status=str(item.get("status") or DEFAULT_STATUS),
    )
