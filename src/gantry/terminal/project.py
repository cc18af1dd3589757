# SPDX-License-Identifier: MIT

from typing import Annotated, Optional, cast

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gantry.color import get_random_color, terminal_color
from gantry.model.project import ProjectCategory, ProjectStatus
from gantry.repository.configuration import CONFIGURATION_REPO
from gantry.repository.project import PROJECT_REPO
from gantry.template.project import get_project_template
from gantry.terminal.custom_typer import AlphabeticalAliasedTyperGroup
from gantry.terminal.error import exit_with_error
from gantry.terminal.parse import parse_date
from gantry.terminal.validate import validate_color, validate_project_status
from gantry.view.views.header import header

app = typer.Typer(cls=AlphabeticalAliasedTyperGroup, no_args_is_help=True)


@app.command("add, a", no_args_is_help=True)
def add(
    title: str,
    description: Annotated[
        Optional[str], typer.Option("--description", "-d")
    ] = None,
    color: Annotated[
        Optional[str],
        typer.Option(
            "--color", "-col", callback=validate_color, help="rich color or #rrggbb"
        ),
    ] = None,
    mine: Annotated[
        bool,
        typer.Option("--mine", help="File the project under 'mine' instead of 'main'"),
    ] = False,
    status: Annotated[
        Optional[str],
        typer.Option(
            "--status",
            "-s",
            callback=validate_project_status,
            help="valid input: active, hold, completed",
        ),
    ] = None,
    due: Annotated[
        Optional[str],
        typer.Option(
            "--due",
            "-u",
            parser=parse_date,
            help="valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1",
        ),
    ] = None,
) -> None:
    config = CONFIGURATION_REPO.get_config()

    project = get_project_template()
    project["title"] = title
    project["description"] = description
    project["category"] = "mine" if mine else "main"
    project["due_date"] = due
    if status is not None:
        project["status"] = cast(ProjectStatus, status)

    if color is not None:
        project["color"] = color
    elif config["random_color_for_projects"]:
        project["color"] = get_random_color()

    id = PROJECT_REPO.save_new_project(project)

    Console().print(f"Added project {id[:8]}")


@app.command("list, ls")
def list_projects(
    status: Annotated[
        Optional[str],
        typer.Option(
            "--status",
            "-s",
            callback=validate_project_status,
            help="only show projects with this status",
        ),
    ] = None,
) -> None:
    header("Projects")

    projects = PROJECT_REPO.get_all_projects()
    if status is not None:
        projects = [project for project in projects if project["status"] == status]

    table = Table(box=box.SIMPLE)
    table.add_column("id")
    table.add_column("title")
    table.add_column("status")
    table.add_column("category")
    table.add_column("due")
    table.add_column("todos")
    table.add_column("meetings")

    for project in sorted(projects, key=lambda project: project["title"].lower()):
        done_todos = sum(1 for todo in project["todos"] if todo["completed"])
        table.add_row(
            str(project["id"])[:8],
            f"[{terminal_color(project['color'])}]{escape(project['title'])}[/]",
            project["status"],
            project["category"],
            project["due_date"] or "",
            f"{done_todos}/{len(project['todos'])}",
            str(len(project["meetings"])),
        )

    Console().print(table)


@app.command("modify, m", no_args_is_help=True)
def modify(
    id: str,
    title: Annotated[Optional[str], typer.Option("--title", "-t")] = None,
    description: Annotated[
        Optional[str], typer.Option("--description", "-d")
    ] = None,
    color: Annotated[
        Optional[str],
        typer.Option(
            "--color", "-col", callback=validate_color, help="rich color or #rrggbb"
        ),
    ] = None,
    category: Annotated[
        Optional[str],
        typer.Option("--category", "-c", help="valid input: main, mine"),
    ] = None,
    status: Annotated[
        Optional[str],
        typer.Option(
            "--status",
            "-s",
            callback=validate_project_status,
            help="valid input: active, hold, completed",
        ),
    ] = None,
    due: Annotated[
        Optional[str],
        typer.Option(
            "--due",
            "-u",
            parser=parse_date,
            help="valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1",
        ),
    ] = None,
    remove_description: Annotated[
        bool, typer.Option("--remove-description", "-rd")
    ] = False,
    remove_due: Annotated[bool, typer.Option("--remove-due", "-ru")] = False,
) -> None:
    if category is not None and category not in ("main", "mine"):
        raise typer.BadParameter("Category must be main or mine")

    try:
        project_id = PROJECT_REPO.resolve_project_id(id)
        PROJECT_REPO.modify_project(
            project_id,
            title=title,
            description=description,
            color=color,
            category=cast(Optional[ProjectCategory], category),
            status=cast(Optional[ProjectStatus], status),
            due_date=due,
            remove_description=remove_description,
            remove_due_date=remove_due,
        )
    except ValueError as e:
        exit_with_error(e)

    Console().print(f"Modified project {project_id[:8]}")


@app.command("remove, rm", no_args_is_help=True)
def remove(
    id: str,
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Do not ask for confirmation")
    ] = False,
) -> None:
    try:
        project_id = PROJECT_REPO.resolve_project_id(id)
        project = PROJECT_REPO.get_project(project_id)
    except ValueError as e:
        exit_with_error(e)

    if not yes:
        typer.confirm(
            f"Remove project '{project['title']}' with {len(project['todos'])} todos "
            f"and {len(project['meetings'])} meetings?",
            abort=True,
        )

    PROJECT_REPO.delete_project(project_id)
    Console().print(f"Removed project {project_id[:8]}")
