# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console

from punchcard.errors import AmbiguousTaskError
from punchcard.model.task import Task
from punchcard.terminal.parse import (
    parse_date,
    parse_starting_time,
    parse_task_reference,
)
from punchcard.terminal.session import Session, get_session, report_errors
from punchcard.time import now_local
from punchcard.view.timesheet import (
    daily_view,
    deleted_view,
    note_added_view,
    notes_view,
    resumed_view,
    started_view,
    stopped_view,
)

# Free text arguments may start with "-", e.g. "show -1".
FREE_TEXT_SETTINGS = {"ignore_unknown_options": True, "allow_interspersed_args": False}

Words = Annotated[Optional[list[str]], typer.Argument(show_default=False)]


def _task_and_note(
    session: Session, args: list[str]
) -> tuple[Task, Optional[pendulum.DateTime], str]:
    starting_time, rest = parse_starting_time(args)
    reference, rest = parse_task_reference(rest)
    task = session.resolver.resolve(reference)
    note = " ".join(rest)
    if not note and reference is not None:
        note = session.resolver.default_note(reference)
    return task, starting_time, note


def start(ctx: typer.Context, args: Words = None) -> None:
    """
    Start a timer: [time] @alias|PROJECT_ID TASK_ID [note...]

    The time is a clock time like 9am or 14:30, or an offset like +0:15.
    """
    session = get_session(ctx)
    with report_errors():
        task, starting_time, note = _task_and_note(session, args or [])
        entry = session.timesheet.start(task, starting_time, note)
        typer.echo(started_view(entry, now_local()))


def log(ctx: typer.Context, args: Words = None) -> None:
    """Record a finished block of time: same arguments as start."""
    session = get_session(ctx)
    with report_errors():
        task, starting_time, note = _task_and_note(session, args or [])
        entry = session.timesheet.log(task, starting_time, note)
        typer.echo(stopped_view(entry, now_local()))


def stop(ctx: typer.Context, args: Words = None) -> None:
    """Stop the running timer, adding an optional final note."""
    session = get_session(ctx)
    with report_errors():
        entry = session.timesheet.stop(" ".join(args or []))
        typer.echo(stopped_view(entry, now_local()))


def note(ctx: typer.Context, args: Words = None) -> None:
    """Add a note line to the running timer, or print its notes."""
    session = get_session(ctx)
    text = " ".join(args or [])
    with report_errors():
        entry = session.timesheet.note(text)
        if not text:
            typer.echo(notes_view(entry))
        else:
            typer.echo(note_added_view(entry))


def cancel(ctx: typer.Context) -> None:
    """Delete the running timer, or the last entry of today."""
    session = get_session(ctx)
    with report_errors():
        entry = session.timesheet.cancel(session.confirm)
        if entry is not None:
            typer.echo(deleted_view(entry))


def resume(ctx: typer.Context, args: Words = None) -> None:
    """Restart the last timer, or the last one for @alias|PROJECT_ID TASK_ID."""
    session = get_session(ctx)
    with report_errors():
        task_ids = None
        if args:
            reference, _ = parse_task_reference(args)
            if reference is None:
                raise AmbiguousTaskError(session.resolver.list_aliases())
            # No catalog lookup, entries of removed tasks stay resumable.
            task_ids = session.resolver.task_ids(reference)
        entry = session.timesheet.resume(task_ids)
        typer.echo(resumed_view(entry, now_local()))


def show(ctx: typer.Context, args: Words = None) -> None:
    """Summarize a day: today, yesterday, -2, monday, 2024-01-31..."""
    session = get_session(ctx)
    date = parse_date(" ".join(args or []))
    with report_errors():
        entries = session.timesheet.daily(date)
        typer.echo(
            daily_view(
                entries,
                now_local(),
                columns=Console().width,
                decimal=session.decimal_time,
            )
        )
