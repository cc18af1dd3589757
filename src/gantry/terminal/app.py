# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from gantry.logger import configure_logging
from gantry.terminal import configuration, gantt, meeting, project, todo
from gantry.terminal.custom_typer import OrderedAliasedTyperGroup
from gantry.terminal.extract import import_tasks
from gantry.terminal.tasks import tasks
from gantry.view import state as view_state

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="Gantry - Project timelines in the CLI",
    no_args_is_help=True,
)
app.add_typer(configuration.app, name="config, c")
app.add_typer(project.app, name="project, p")
app.add_typer(todo.app, name="todo, t")
app.add_typer(meeting.app, name="meeting, m")
app.add_typer(gantt.app, name="gantt, g")
app.command(name="tasks, ts")(tasks)
app.command(name="import, i", no_args_is_help=True)(import_tasks)


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
    no_wrap: Annotated[
        bool,
        typer.Option(
            "--no-wrap",
            "-nw",
            help="Truncate long titles in tables instead of wrapping them",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-vb",
            help="Log debug output to stderr for this invocation",
        ),
    ] = False,
) -> None:
    """
    Gantry - Project timelines in the CLI

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)
    if no_wrap:
        view_state.set_no_wrap(True)
    if verbose:
        configure_logging("DEBUG")


def run() -> None:
    app()
