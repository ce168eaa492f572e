# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Callable, Optional, cast

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from punchcard.model.task import Task
from punchcard.remote.api import RawRecord
from punchcard.remote.records import tasks_from_project_records

logger = logging.getLogger(__name__)


def _is_task(item: Any) -> bool:
    return isinstance(item, dict) and all(
        isinstance(item.get(key), str) for key in Task.__annotations__
    )


class TaskCatalogRepository:
    """
    Lazily populated list of the tasks visible to the account.

    The catalog is refreshed as a whole by fetching today's timesheet, which
    carries the project and task list. When `cache_path` is given the catalog
    is also kept on disk between invocations.
    """

    def __init__(
        self,
        fetch_today: Callable[[], tuple[list[RawRecord], list[RawRecord]]],
        cache_path: Optional[Path] = None,
    ) -> None:
        self.fetch_today = fetch_today
        self.cache_path = cache_path
        self._tasks: Optional[list[Task]] = None

    @property
    def tasks(self) -> list[Task]:
        if self._tasks is None:
            self._tasks = self.__load_data()
        return self._tasks

    def __load_data(self) -> list[Task]:
        if self.cache_path is None or not self.cache_path.is_file():
            return []
        try:
            raw = load(self.cache_path.read_text(encoding="utf-8"), Loader=Loader)
        except (OSError, YAMLError) as e:
            # The cache is disposable, a bad file only costs a refresh.
            logger.warning("Ignoring unreadable task cache %s: %s", self.cache_path, e)
            return []
        if not isinstance(raw, dict) or not isinstance(raw.get("tasks"), list):
            return []
        if not all(_is_task(item) for item in raw["tasks"]):
            logger.warning("Ignoring malformed task cache %s", self.cache_path)
            return []
        return cast(list[Task], raw["tasks"])

    def __save_data(self, tasks: list[Task]) -> None:
        if self.cache_path is None:
            return
        self.cache_path.parent.mkdir(parents=True, exist_ok=True)
        data: dict[str, Any] = {"tasks": tasks}
        self.cache_path.write_text(dump(data, Dumper=Dumper), encoding="utf-8")

    def replace(self, tasks: list[Task]) -> None:
        self._tasks = deepcopy(tasks)
        self.__save_data(self._tasks)

    def refresh(self) -> None:
        logger.info("Refreshing task catalog")
        _, projects = self.fetch_today()
        self.replace(tasks_from_project_records(projects))

    def all(self, clear_cache: bool = False) -> list[Task]:
        if clear_cache or not self.tasks:
            self.refresh()
        return deepcopy(self.tasks)

    def find(self, project_id: str, task_id: str) -> Optional[Task]:
        for task in self.all():
            if task["project_id"] == str(project_id) and task["task_id"] == str(task_id):
                return task
        return None

    def select_by_project(self, code: str, clear_cache: bool = False) -> list[Task]:
        return [task for task in self.all(clear_cache) if task["project_code"] == code]
