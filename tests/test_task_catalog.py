# SPDX-License-Identifier: MIT

from pathlib import Path

import pytest

from punchcard.repository.task_catalog import TaskCatalogRepository
from tests.conftest import FakeEntryApi


def test_first_access_fetches_once(
    api: FakeEntryApi, catalog: TaskCatalogRepository
) -> None:
    tasks = catalog.all()
    catalog.all()
    catalog.find("2", "3")

    assert api.calls["fetch_today"] == 1
    assert [(t["project_id"], t["task_id"]) for t in tasks] == [
        ("2", "3"),
        ("2", "4"),
        ("7", "8"),
    ]


def test_clear_cache_always_refreshes(
    api: FakeEntryApi, catalog: TaskCatalogRepository
) -> None:
    catalog.all()
    assert api.calls["fetch_today"] == 1

    catalog.all(clear_cache=True)
    assert api.calls["fetch_today"] == 2


def test_refresh_picks_up_new_tasks(
    api: FakeEntryApi, catalog: TaskCatalogRepository
) -> None:
    catalog.all()
    api.projects[1]["tasks"].append({"id": 9, "name": "Hiring"})

    assert catalog.find("7", "9") is None
    catalog.all(clear_cache=True)
    found = catalog.find("7", "9")
    assert found is not None
    assert found["task_name"] == "Hiring"


def test_find_unknown_returns_none(catalog: TaskCatalogRepository) -> None:
    assert catalog.find("2", "99") is None


def test_select_by_project(catalog: TaskCatalogRepository) -> None:
    assert [t["task_name"] for t in catalog.select_by_project("WEB")] == [
        "Development",
        "Design",
    ]
    assert catalog.select_by_project("NOPE") == []


def test_cache_file_survives_between_processes(
    api: FakeEntryApi, tmp_path: Path
) -> None:
    cache_path = tmp_path / "cache" / "tasks.yaml"
    TaskCatalogRepository(api.fetch_today, cache_path).all()
    assert api.calls["fetch_today"] == 1

    second = TaskCatalogRepository(api.fetch_today, cache_path)
    assert second.find("7", "8") is not None
    assert api.calls["fetch_today"] == 1


def test_unreadable_cache_file_triggers_refresh(
    api: FakeEntryApi, tmp_path: Path
) -> None:
    cache_path = tmp_path / "tasks.yaml"
    cache_path.write_text("tasks: [broken")

    assert len(TaskCatalogRepository(api.fetch_today, cache_path).all()) == 3
    assert api.calls["fetch_today"] == 1


@pytest.mark.parametrize(
    "content",
    [
        "tasks: [1, 2]\n",
        "tasks:\n- project_id: '2'\n  task_id: '3'\n",
        "tasks:\n- [2, 3]\n",
    ],
)
def test_malformed_cache_entries_trigger_refresh(
    api: FakeEntryApi, tmp_path: Path, content: str
) -> None:
    cache_path = tmp_path / "tasks.yaml"
    cache_path.write_text(content)

    found = TaskCatalogRepository(api.fetch_today, cache_path).find("2", "3")

    assert found is not None
    assert found["task_name"] == "Development"
    assert api.calls["fetch_today"] == 1
