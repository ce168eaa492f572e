# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from punchcard.configuration import load_credentials
from punchcard.terminal.session import get_session, report_errors
from punchcard.view.timesheet import config_view, settings_view


def set(
    ctx: typer.Context,
    key: Annotated[Optional[str], typer.Argument(show_default=False)] = None,
    value: Annotated[Optional[list[str]], typer.Argument(show_default=False)] = None,
) -> None:
    """
    Store a setting, or print all settings when no key is given.

    Values are joined with spaces, e.g. "set task.review 12 34 code review".
    """
    session = get_session(ctx)
    with report_errors():
        if key is None:
            settings = session.settings.all()
            if settings:
                typer.echo(settings_view(settings))
            return
        session.settings.set(key, " ".join(value or []))


def unset(ctx: typer.Context, key: str) -> None:
    """Remove a setting."""
    session = get_session(ctx)
    with report_errors():
        session.settings.unset(key)


def config() -> None:
    """Show the service credentials, with the password hidden."""
    with report_errors():
        typer.echo(config_view(load_credentials()))
