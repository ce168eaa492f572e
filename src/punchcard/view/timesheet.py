# SPDX-License-Identifier: MIT

from typing import Mapping

import pendulum

from punchcard.configuration import Credentials
from punchcard.model.day_entry import DayEntry, day_entry_display_name
from punchcard.model.task import Task, task_display_name
from punchcard.time import as_hours, datetime_to_display_time_str

SEPARATOR = "\t" + "-" * 13


def tasks_view(tasks: list[Task]) -> str:
    return "\n".join(
        f"{task['project_id']} {task['task_id']}\t{task_display_name(task)}"
        for task in tasks
    )


def settings_view(settings: Mapping[str, str]) -> str:
    return "\n".join(f"{key}: {value}" for key, value in settings.items())


def config_view(credentials: Credentials) -> str:
    masked = credentials.model_dump() | {"password": "***"}
    return "\n".join(f"{key}: {value}" for key, value in masked.items())


def started_view(entry: DayEntry, at: pendulum.DateTime) -> str:
    return (
        f"Started timer for {day_entry_display_name(entry)} "
        f"(at {datetime_to_display_time_str(at)})"
    )


def stopped_view(entry: DayEntry, at: pendulum.DateTime) -> str:
    return f"Stopped {day_entry_display_name(entry)} (at {datetime_to_display_time_str(at)})"


def resumed_view(entry: DayEntry, at: pendulum.DateTime) -> str:
    return f"Resumed {day_entry_display_name(entry)} (at {datetime_to_display_time_str(at)})"


def note_added_view(entry: DayEntry) -> str:
    return f"Added note to {day_entry_display_name(entry)}."


def notes_view(entry: DayEntry) -> str:
    return "\n".join(entry["notes"])


def cancel_prompt_view(entry: DayEntry) -> str:
    return f"{day_entry_display_name(entry)}\nDelete this entry?"


def deleted_view(entry: DayEntry) -> str:
    return f"Deleted entry {day_entry_display_name(entry)}."


def daily_view(
    entries: list[DayEntry],
    at: pendulum.DateTime,
    columns: int = 80,
    decimal: bool = False,
) -> str:
    """
    One line per entry with its hours and last note line, then the total.

    Entry lines are cut to the terminal width.
    """
    lines: list[str] = []
    total_hours = 0.0
    for entry in entries:
        running = "(running) " if entry["running"] else ""
        project = task_display_name(entry["task"])
        last_note = entry["notes"][-1] if entry["notes"] else ""
        line = f"\t{as_hours(entry['hours'], decimal)}\t{running}{project}: {last_note}"
        lines.append(line[:columns])
        total_hours += entry["hours"]

    lines.append(SEPARATOR)
    lines.append(
        f"\t{as_hours(total_hours, decimal)}\ttotal (as of {datetime_to_display_time_str(at)})"
    )
    return "\n".join(lines)
