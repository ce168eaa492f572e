# SPDX-License-Identifier: MIT

import logging
import re
from typing import Optional

from punchcard.errors import (
    AmbiguousTaskError,
    InvalidAliasNameError,
    UnknownAliasError,
    UnknownTaskError,
)
from punchcard.model.task import Task
from punchcard.model.task_reference import (
    AliasReference,
    ExplicitReference,
    TaskReference,
)
from punchcard.repository.settings import SettingsRepository
from punchcard.repository.task_catalog import TaskCatalogRepository

logger = logging.getLogger(__name__)

ALIAS_PREFIX = "task."

# Names must survive the "@name" argument form.
_NAME_P = re.compile(r"^[\w-]+$")


class AliasResolver:
    """
    Turns task references into validated tasks.

    Aliases live in the settings as `task.<name>` keys whose value is
    "<project_id> <task_id>", optionally followed by a default note.
    """

    def __init__(
        self, settings: SettingsRepository, catalog: TaskCatalogRepository
    ) -> None:
        self.settings = settings
        self.catalog = catalog

    def __alias_value(self, name: str) -> list[str]:
        value = self.settings.get(ALIAS_PREFIX + name)
        if value is None:
            raise UnknownAliasError(name)
        parts = value.split()
        if len(parts) < 2:
            raise UnknownAliasError(name)
        return parts

    def task_ids(self, reference: TaskReference) -> tuple[str, str]:
        if isinstance(reference, AliasReference):
            parts = self.__alias_value(reference.name)
            return parts[0], parts[1]
        return reference.project_id, reference.task_id

    def default_note(self, reference: TaskReference) -> str:
        if isinstance(reference, AliasReference):
            return " ".join(self.__alias_value(reference.name)[2:])
        return ""

    def resolve(self, reference: Optional[TaskReference]) -> Task:
        if reference is None:
            raise AmbiguousTaskError(self.list_aliases())
        project_id, task_id = self.task_ids(reference)
        task = self.catalog.find(project_id, task_id)
        if task is None:
            raise UnknownTaskError(project_id, task_id)
        return task

    def create_alias(self, name: str, project_id: str, task_id: str) -> Task:
        if not _NAME_P.match(name):
            raise InvalidAliasNameError(name)
        task = self.resolve(ExplicitReference(project_id, task_id))
        self.settings.set(ALIAS_PREFIX + name, f"{project_id} {task_id}")
        logger.info("Added alias @%s for %s %s", name, project_id, task_id)
        return task

    def remove_alias(self, name: str) -> None:
        self.settings.unset(ALIAS_PREFIX + name)
        logger.info("Removed alias @%s", name)

    def list_aliases(self) -> list[str]:
        return [
            "@" + key[len(ALIAS_PREFIX) :]
            for key in self.settings.all()
            if key.startswith(ALIAS_PREFIX)
        ]
