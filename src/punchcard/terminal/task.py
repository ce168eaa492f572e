# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from punchcard.errors import NoMatchingTasksError
from punchcard.model.task import task_display_name
from punchcard.terminal.session import get_session, report_errors
from punchcard.view.timesheet import tasks_view


def tasks(
    ctx: typer.Context,
    project_code: Annotated[
        Optional[str],
        typer.Argument(help="Only list tasks of the project with this code"),
    ] = None,
    clearcache: Annotated[
        bool,
        typer.Option("--clearcache", help="Refetch the task list from the service"),
    ] = False,
) -> None:
    """List the available tasks with their project and task IDs."""
    session = get_session(ctx)
    with report_errors():
        if project_code is not None:
            found = session.catalog.select_by_project(project_code, clearcache)
        else:
            found = session.catalog.all(clearcache)
        if len(found) == 0:
            raise NoMatchingTasksError()
        typer.echo(tasks_view(found))


def alias(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Alias name, used as @name")],
    project_id: str,
    task_id: str,
) -> None:
    """Add a short @name for a project and task ID."""
    session = get_session(ctx)
    with report_errors():
        task = session.resolver.create_alias(name, project_id, task_id)
        typer.echo(f"Added alias @{name} for {task_display_name(task)}.")


def unalias(ctx: typer.Context, name: str) -> None:
    """Remove a task alias."""
    session = get_session(ctx)
    with report_errors():
        session.resolver.remove_alias(name)
        typer.echo(f"Removed task alias @{name}.")


def aliases(ctx: typer.Context) -> None:
    """List the task aliases."""
    session = get_session(ctx)
    with report_errors():
        names = session.resolver.list_aliases()
        if names:
            typer.echo(", ".join(names))
