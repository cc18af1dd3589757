# SPDX-License-Identifier: MIT

from typing import Annotated, Optional, cast

import typer
from rich.console import Console

from gantry.model.todo import Priority
from gantry.repository.project import PROJECT_REPO
from gantry.template.meeting import get_meeting_template, get_meeting_todo_template
from gantry.terminal.custom_typer import AlphabeticalAliasedTyperGroup
from gantry.terminal.error import exit_with_error
from gantry.terminal.parse import parse_date
from gantry.terminal.validate import validate_priority

app = typer.Typer(cls=AlphabeticalAliasedTyperGroup, no_args_is_help=True)

DATE_HELP = (
    "valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1"
)


@app.command("add, a", no_args_is_help=True)
def add(
    project: str,
    title: str,
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-dt", parser=parse_date, help=DATE_HELP),
    ] = None,
    description: Annotated[
        Optional[str], typer.Option("--description", "-d")
    ] = None,
    duration: Annotated[
        int, typer.Option("--duration", help="length in minutes", min=1)
    ] = 60,
) -> None:
    meeting = get_meeting_template()
    meeting["title"] = title
    meeting["description"] = description
    meeting["meeting_date"] = date
    meeting["duration"] = duration

    try:
        project_id = PROJECT_REPO.resolve_project_id(project)
        id = PROJECT_REPO.add_meeting(project_id, meeting)
    except ValueError as e:
        exit_with_error(e)

    Console().print(f"Added meeting {id[:8]}")


@app.command("action, ac", no_args_is_help=True)
def action(
    project: str,
    meeting: str,
    title: str,
    assigned_to: Annotated[
        Optional[str], typer.Option("--assigned-to", "-to")
    ] = None,
    due: Annotated[
        Optional[str],
        typer.Option("--due", "-u", parser=parse_date, help=DATE_HELP),
    ] = None,
    description: Annotated[
        Optional[str], typer.Option("--description", "-d")
    ] = None,
    priority: Annotated[
        Optional[str],
        typer.Option(
            "--priority",
            "-pr",
            callback=validate_priority,
            help="valid input: low, medium, high",
        ),
    ] = None,
) -> None:
    """Add an action item to a meeting. Only items with a due date show on the chart."""
    meeting_todo = get_meeting_todo_template()
    meeting_todo["title"] = title
    meeting_todo["assigned_to"] = assigned_to
    meeting_todo["due_date"] = due
    meeting_todo["description"] = description
    if priority is not None:
        meeting_todo["priority"] = cast(Priority, priority)

    try:
        project_id = PROJECT_REPO.resolve_project_id(project)
        meeting_id = PROJECT_REPO.resolve_meeting_id(project_id, meeting)
        id = PROJECT_REPO.add_meeting_todo(project_id, meeting_id, meeting_todo)
    except ValueError as e:
        exit_with_error(e)

    Console().print(f"Added action item {id[:8]}")


@app.command("complete-action, ca", no_args_is_help=True)
def complete_action(
    project: str,
    meeting: str,
    id: str,
    reopen: Annotated[
        bool, typer.Option("--reopen", help="Mark the action item open again")
    ] = False,
) -> None:
    try:
        project_id = PROJECT_REPO.resolve_project_id(project)
        meeting_id = PROJECT_REPO.resolve_meeting_id(project_id, meeting)
        meeting_todo_id = PROJECT_REPO.resolve_meeting_todo_id(
            project_id, meeting_id, id
        )
        PROJECT_REPO.modify_meeting_todo(
            project_id, meeting_id, meeting_todo_id, completed=not reopen
        )
    except ValueError as e:
        exit_with_error(e)

    Console().print("Reopened action item" if reopen else "Completed action item")
