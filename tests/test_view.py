# SPDX-License-Identifier: MIT

import pendulum

from punchcard.configuration import Credentials
from punchcard.model.day_entry import DayEntry
from punchcard.model.task import Task
from punchcard.time import as_hours
from punchcard.view.timesheet import config_view, daily_view, tasks_view

AT = pendulum.datetime(2024, 5, 6, 17, 45, tz="local")

TASK: Task = {
    "project_id": "2",
    "task_id": "3",
    "project_name": "Website",
    "project_code": "WEB",
    "client": "Acme",
    "task_name": "Development",
}


def _entry(hours: float, notes: list[str], running: bool = False) -> DayEntry:
    return {
        "id": "1",
        "date": AT.date(),
        "task": TASK,
        "hours": hours,
        "notes": notes,
        "running": running,
        "started_at": None,
        "updated_at": None,
    }


def test_as_hours() -> None:
    assert as_hours(0) == "0:00"
    assert as_hours(1.5) == "1:30"
    assert as_hours(0.26) == "0:16"
    assert as_hours(1.5, decimal=True) == "1.50"


def test_empty_day_has_only_total() -> None:
    assert daily_view([], AT) == "\t-------------\n\t0:00\ttotal (as of 17:45)"
    assert daily_view([], AT, decimal=True).endswith("\t0.00\ttotal (as of 17:45)")


def test_daily_lines_and_total() -> None:
    text = daily_view(
        [_entry(1.25, ["a", "last line"]), _entry(0.5, [], running=True)], AT
    )

    assert text.splitlines() == [
        "\t1:15\tAcme - Website - Development: last line",
        "\t0:30\t(running) Acme - Website - Development: ",
        "\t-------------",
        "\t1:45\ttotal (as of 17:45)",
    ]


def test_daily_lines_are_cut_to_width() -> None:
    text = daily_view([_entry(1, ["x" * 200])], AT, columns=40)

    assert len(text.splitlines()[0]) == 40


def test_tasks_view_without_client() -> None:
    task: Task = dict(TASK, client="")  # type: ignore[assignment]

    assert tasks_view([TASK, task]) == (
        "2 3\tAcme - Website - Development\n2 3\tWebsite - Development"
    )


def test_config_view_hides_password() -> None:
    text = config_view(
        Credentials(subdomain="acme", login="me@acme.test", password="hunter2")
    )

    assert "hunter2" not in text
    assert "password: ***" in text
    assert "login: me@acme.test" in text
