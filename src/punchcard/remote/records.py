# SPDX-License-Identifier: MIT

from typing import Any

from punchcard import time
from punchcard.model.day_entry import DayEntry
from punchcard.model.task import Task
from punchcard.remote.api import RawRecord


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def tasks_from_project_records(projects: list[RawRecord]) -> list[Task]:
    """Flatten the service's project list into one Task per project task."""
    tasks: list[Task] = []
    for project in projects:
        for task in project.get("tasks") or []:
            tasks.append(
                {
                    "project_id": _text(project["id"]),
                    "task_id": _text(task["id"]),
                    "project_name": _text(project.get("name")),
                    "project_code": _text(project.get("code")),
                    "client": _text(project.get("client")),
                    "task_name": _text(task.get("name")),
                }
            )
    return tasks


def day_entry_from_record(record: RawRecord) -> DayEntry:
    notes = _text(record.get("notes"))
    return {
        "id": _text(record["id"]),
        "date": time.date_from_str(_text(record["spent_at"])),
        "task": {
            "project_id": _text(record.get("project_id")),
            "task_id": _text(record.get("task_id")),
            "project_name": _text(record.get("project")),
            "project_code": _text(record.get("project_code")),
            "client": _text(record.get("client")),
            "task_name": _text(record.get("task")),
        },
        "hours": float(record.get("hours") or 0.0),
        "notes": notes.splitlines(),
        "running": bool(record.get("timer_started_at")),
        "started_at": record.get("started_at") or None,
        "updated_at": time.datetime_from_str_optional(
            record.get("updated_at") or None
        ),
    }
