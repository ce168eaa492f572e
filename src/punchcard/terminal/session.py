# SPDX-License-Identifier: MIT

from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, Optional

import typer

from punchcard import configuration
from punchcard.configuration import load_credentials
from punchcard.errors import PunchcardError
from punchcard.model.day_entry import DayEntry
from punchcard.remote.api import EntryApi
from punchcard.remote.harvest import HarvestApi
from punchcard.repository.settings import SettingsRepository
from punchcard.repository.task_catalog import TaskCatalogRepository
from punchcard.service.alias import AliasResolver
from punchcard.service.timesheet import Confirm, Timesheet
from punchcard.view.timesheet import cancel_prompt_view


def confirm_in_terminal(entry: DayEntry) -> bool:
    return typer.confirm(cancel_prompt_view(entry), default=False)


class Session:
    """
    Everything a command needs, owned for the lifetime of one invocation.

    The remote API is only built when a command first needs it, so that
    settings commands work without credentials.
    """

    def __init__(
        self,
        settings: SettingsRepository,
        api_factory: Callable[[], EntryApi],
        task_cache_path: Optional[Path] = None,
        confirm: Confirm = confirm_in_terminal,
    ) -> None:
        self.settings = settings
        self.confirm = confirm
        self._api_factory = api_factory
        self._task_cache_path = task_cache_path
        self._api: Optional[EntryApi] = None
        self._catalog: Optional[TaskCatalogRepository] = None
        self._resolver: Optional[AliasResolver] = None
        self._timesheet: Optional[Timesheet] = None

    @property
    def api(self) -> EntryApi:
        if self._api is None:
            self._api = self._api_factory()
        return self._api

    @property
    def catalog(self) -> TaskCatalogRepository:
        if self._catalog is None:
            self._catalog = TaskCatalogRepository(
                lambda: self.api.fetch_today(), self._task_cache_path
            )
        return self._catalog

    @property
    def resolver(self) -> AliasResolver:
        if self._resolver is None:
            self._resolver = AliasResolver(self.settings, self.catalog)
        return self._resolver

    @property
    def timesheet(self) -> Timesheet:
        if self._timesheet is None:
            self._timesheet = Timesheet(self.api)
        return self._timesheet

    @property
    def decimal_time(self) -> bool:
        return self.settings.get("time_format", "hours_minutes") == "decimal"

    def close(self) -> None:
        if isinstance(self._api, HarvestApi):
            self._api.close()


def build_session() -> Session:
    return Session(
        settings=SettingsRepository(configuration.SETTINGS_PATH),
        api_factory=lambda: HarvestApi(load_credentials()),
        task_cache_path=configuration.TASK_CACHE_PATH,
    )


def get_session(ctx: typer.Context) -> Session:
    return ctx.find_root().obj


@contextmanager
def report_errors() -> Iterator[None]:
    """Print any punchcard error as a single line on stderr and exit 1."""
    try:
        yield
    except PunchcardError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
