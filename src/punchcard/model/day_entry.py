# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from punchcard.model.task import Task, task_display_name
from punchcard.time import as_hours


class DayEntry(TypedDict):
    id: str
    date: pendulum.Date
    task: Task
    hours: float
    notes: list[str]  # append-only, one item per line
    running: bool
    started_at: Optional[str]
    updated_at: Optional[pendulum.DateTime]


def day_entry_display_name(entry: DayEntry) -> str:
    return f"{task_display_name(entry['task'])} ({as_hours(entry['hours'])})"
