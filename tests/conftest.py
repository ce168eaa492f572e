# SPDX-License-Identifier: MIT

from collections import Counter
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional

import pendulum
import pytest

from punchcard import configuration, time
from punchcard.errors import NotFoundError, RemoteError
from punchcard.repository.settings import SettingsRepository
from punchcard.repository.task_catalog import TaskCatalogRepository
from punchcard.service.alias import AliasResolver
from punchcard.service.timesheet import Timesheet
from punchcard.terminal.session import Session

PROJECTS: list[dict[str, Any]] = [
    {
        "id": 2,
        "name": "Website",
        "code": "WEB",
        "client": "Acme",
        "tasks": [{"id": 3, "name": "Development"}, {"id": 4, "name": "Design"}],
    },
    {
        "id": 7,
        "name": "Internal",
        "code": "INT",
        "client": "",
        "tasks": [{"id": 8, "name": "Admin"}],
    },
]


class FakeEntryApi:
    """In-memory stand-in for the time tracking service."""

    def __init__(self) -> None:
        self.projects = deepcopy(PROJECTS)
        self.entries: list[dict[str, Any]] = []
        self.calls: Counter[str] = Counter()
        self.delete_result = True
        self.reject_create: Optional[RemoteError] = None
        self._next_id = 100
        self._clock = pendulum.datetime(2024, 1, 1, tz="UTC")

    def _tick(self) -> str:
        self._clock = self._clock.add(seconds=1)
        return self._clock.isoformat()

    def _find(self, entry_id: str) -> dict[str, Any]:
        for entry in self.entries:
            if str(entry["id"]) == str(entry_id):
                return entry
        raise NotFoundError(404, f"Entry {entry_id} not found")

    def _project(self, project_id: str) -> dict[str, Any]:
        return next(p for p in self.projects if str(p["id"]) == str(project_id))

    def add_entry(
        self,
        project_id: str = "2",
        task_id: str = "3",
        date: Optional[pendulum.Date] = None,
        running: bool = False,
        hours: float = 1.0,
        notes: str = "",
    ) -> dict[str, Any]:
        """Seed an entry as if another client had created it."""
        project = self._project(project_id)
        task = next(t for t in project["tasks"] if str(t["id"]) == str(task_id))
        self._next_id += 1
        entry = {
            "id": self._next_id,
            "spent_at": (date or pendulum.today("local").date()).to_date_string(),
            "project_id": str(project_id),
            "project": project["name"],
            "client": project["client"],
            "task_id": str(task_id),
            "task": task["name"],
            "hours": hours,
            "notes": notes,
            "timer_started_at": self._tick() if running else None,
            "started_at": None,
            "updated_at": self._tick(),
        }
        self.entries.append(entry)
        return entry

    def fetch_today(self) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
        self.calls["fetch_today"] += 1
        today = pendulum.today("local").date().to_date_string()
        return (
            deepcopy([e for e in self.entries if e["spent_at"] == today]),
            deepcopy(self.projects),
        )

    def fetch_daily(self, date: pendulum.Date) -> list[dict[str, Any]]:
        self.calls["fetch_daily"] += 1
        return deepcopy(
            [e for e in self.entries if e["spent_at"] == date.to_date_string()]
        )

    def create_entry(
        self,
        project_id: str,
        task_id: str,
        starting_time: Optional[pendulum.DateTime],
        note: str,
    ) -> dict[str, Any]:
        self.calls["create_entry"] += 1
        if self.reject_create is not None:
            raise self.reject_create
        date = starting_time.date() if starting_time else None
        entry = self.add_entry(project_id, task_id, date, running=False, hours=0.0, notes=note)
        if starting_time is None:
            entry["timer_started_at"] = self._tick()
        else:
            entry["started_at"] = time.datetime_to_wall_clock_str(starting_time)
        return deepcopy(entry)

    def toggle_entry(self, entry_id: str) -> dict[str, Any]:
        self.calls["toggle_entry"] += 1
        entry = self._find(entry_id)
        if entry["timer_started_at"]:
            entry["timer_started_at"] = None
        else:
            entry["timer_started_at"] = self._tick()
        entry["updated_at"] = self._tick()
        return deepcopy(entry)

    def update_entry_notes(self, entry_id: str, notes: str) -> dict[str, Any]:
        self.calls["update_entry_notes"] += 1
        entry = self._find(entry_id)
        entry["notes"] = notes
        entry["updated_at"] = self._tick()
        return deepcopy(entry)

    def delete_entry(self, entry_id: str) -> bool:
        self.calls["delete_entry"] += 1
        if not self.delete_result:
            return False
        entry = self._find(entry_id)
        self.entries.remove(entry)
        return True

    def running(self) -> list[dict[str, Any]]:
        return [e for e in self.entries if e["timer_started_at"]]


@pytest.fixture(autouse=True)
def log_to_tmp(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(configuration, "LOG_FILE_PATH", tmp_path / "log" / "punchcard.log")


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for field in ("SUBDOMAIN", "LOGIN", "PASSWORD", "SSL", "TIMEOUT"):
        monkeypatch.delenv(f"PUNCHCARD_{field}", raising=False)


@pytest.fixture
def api() -> FakeEntryApi:
    return FakeEntryApi()


@pytest.fixture
def settings_path(tmp_path: Path) -> Path:
    return tmp_path / "config" / "settings.yaml"


@pytest.fixture
def settings(settings_path: Path) -> SettingsRepository:
    return SettingsRepository(settings_path)


@pytest.fixture
def catalog(api: FakeEntryApi) -> TaskCatalogRepository:
    return TaskCatalogRepository(api.fetch_today)


@pytest.fixture
def resolver(
    settings: SettingsRepository, catalog: TaskCatalogRepository
) -> AliasResolver:
    return AliasResolver(settings, catalog)


@pytest.fixture
def timesheet(api: FakeEntryApi) -> Timesheet:
    return Timesheet(api)


@pytest.fixture
def answers() -> list[bool]:
    """Answers given to the cancel confirmation, in order."""
    return []


@pytest.fixture
def session(
    settings: SettingsRepository, api: FakeEntryApi, answers: list[bool]
) -> Session:
    return Session(
        settings=settings,
        api_factory=lambda: api,
        confirm=lambda entry: answers.pop(0),
    )
