# SPDX-License-Identifier: MIT

from typing import Annotated, Optional, cast

import typer
from rich.console import Console

from gantry.model.todo import Priority
from gantry.repository.project import PROJECT_REPO
from gantry.template.todo import get_todo_template
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
    description: Annotated[
        Optional[str], typer.Option("--description", "-d")
    ] = None,
    start: Annotated[
        Optional[str],
        typer.Option("--start", "-s", parser=parse_date, help=DATE_HELP),
    ] = None,
    end: Annotated[
        Optional[str],
        typer.Option("--end", "-e", parser=parse_date, help=DATE_HELP),
    ] = None,
    due: Annotated[
        Optional[str],
        typer.Option("--due", "-u", parser=parse_date, help=DATE_HELP),
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
    notes: Annotated[Optional[str], typer.Option("--notes", "-n")] = None,
) -> None:
    """Add a todo to a project. Todos without end or due date stay off the chart."""
    todo = get_todo_template()
    todo["title"] = title
    todo["description"] = description
    todo["start_date"] = start
    todo["end_date"] = end
    todo["due_date"] = due
    todo["notes"] = notes
    if priority is not None:
        todo["priority"] = cast(Priority, priority)

    try:
        project_id = PROJECT_REPO.resolve_project_id(project)
        id = PROJECT_REPO.add_todo(project_id, todo)
    except ValueError as e:
        exit_with_error(e)

    Console().print(f"Added todo {id[:8]}")


@app.command("modify, m", no_args_is_help=True)
def modify(
    project: str,
    id: str,
    title: Annotated[Optional[str], typer.Option("--title", "-t")] = None,
    start: Annotated[
        Optional[str],
        typer.Option("--start", "-s", parser=parse_date, help=DATE_HELP),
    ] = None,
    end: Annotated[
        Optional[str],
        typer.Option("--end", "-e", parser=parse_date, help=DATE_HELP),
    ] = None,
    due: Annotated[
        Optional[str],
        typer.Option("--due", "-u", parser=parse_date, help=DATE_HELP),
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
    notes: Annotated[Optional[str], typer.Option("--notes", "-n")] = None,
) -> None:
    _modify(
        project,
        id,
        title=title,
        start_date=start,
        end_date=end,
        due_date=due,
        priority=cast(Optional[Priority], priority),
        notes=notes,
    )
    Console().print("Modified todo")


@app.command("complete, c", no_args_is_help=True)
def complete(project: str, id: str) -> None:
    _modify(project, id, completed=True)
    Console().print("Completed todo")


@app.command("reopen, r", no_args_is_help=True)
def reopen(project: str, id: str) -> None:
    _modify(project, id, completed=False)
    Console().print("Reopened todo")


def _modify(
    project: str,
    id: str,
    title: Optional[str] = None,
    completed: Optional[bool] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    due_date: Optional[str] = None,
    priority: Optional[Priority] = None,
    notes: Optional[str] = None,
) -> None:
    try:
        project_id = PROJECT_REPO.resolve_project_id(project)
        todo_id = PROJECT_REPO.resolve_todo_id(project_id, id)
        PROJECT_REPO.modify_todo(
            project_id,
            todo_id,
            title=title,
            completed=completed,
            start_date=start_date,
            end_date=end_date,
            due_date=due_date,
            priority=priority,
            notes=notes,
        )
    except ValueError as e:
        exit_with_error(e)
