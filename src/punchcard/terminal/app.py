# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from punchcard.logger import configure_logging
from punchcard.terminal import settings, task, timer
from punchcard.terminal.custom_typer import OrderedAliasedTyperGroup
from punchcard.terminal.session import build_session

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="punchcard - Harvest time tracking in the CLI",
    no_args_is_help=True,
)

app.command(name="start", context_settings=timer.FREE_TEXT_SETTINGS)(timer.start)
app.command(name="stop", context_settings=timer.FREE_TEXT_SETTINGS)(timer.stop)
app.command(name="log", context_settings=timer.FREE_TEXT_SETTINGS)(timer.log)
app.command(name="note", context_settings=timer.FREE_TEXT_SETTINGS)(timer.note)
app.command(name="resume")(timer.resume)
app.command(name="cancel, oops, nvm")(timer.cancel)
app.command(name="show", context_settings=timer.FREE_TEXT_SETTINGS)(timer.show)
app.command(name="tasks")(task.tasks)
app.command(name="alias")(task.alias)
app.command(name="unalias")(task.unalias)
app.command(name="aliases")(task.aliases)
app.command(name="set", context_settings=timer.FREE_TEXT_SETTINGS)(settings.set)
app.command(name="unset")(settings.unset)
app.command(name="config")(settings.config)


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log remote calls to stderr"),
    ] = False,
) -> None:
    """
    punchcard - Harvest time tracking in the CLI

    Global options that apply to all commands.
    """
    configure_logging(verbose)
    if ctx.obj is None:
        session = build_session()
        ctx.obj = session
        ctx.call_on_close(session.close)


def run() -> None:
    app()
