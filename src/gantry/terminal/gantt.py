# SPDX-License-Identifier: MIT

import math
from typing import Annotated, Optional, cast

import typer
from rich.console import Console

from gantry.model.todo import Priority
from gantry.query.filter import (
    filter_tasks,
    project_task_totals,
    source_counts,
    status_summary,
)
from gantry.query.filter_type import ALL_PROJECTS, SourceFilter
from gantry.repository.configuration import CONFIGURATION_REPO
from gantry.repository.navigation import NAVIGATION_REPO
from gantry.repository.project import PROJECT_REPO
from gantry.service.geometry import responsive_day_width
from gantry.service.task import create_timeline_todo
from gantry.service.timeline import materialize_tasks
from gantry.service.window import (
    build_timeline_window,
    next_reference_month,
    previous_reference_month,
    today_reference_month,
)
from gantry.terminal.custom_typer import AlphabeticalAliasedTyperGroup
from gantry.terminal.error import exit_with_error
from gantry.terminal.parse import parse_date, parse_month
from gantry.terminal.validate import (
    validate_priority,
    validate_source,
    validate_width,
)
from gantry.time import LocalDay, now_local
from gantry.view.views.gantt import gantt_view

app = typer.Typer(cls=AlphabeticalAliasedTyperGroup, no_args_is_help=True)

# Room kept right of the chart for the progress and status columns
STATUS_COLUMN_WIDTH = 18

MIN_DAY_WIDTH = 1
MAX_DAY_WIDTH = 4

ProjectOption = Annotated[
    str,
    typer.Option("--project", "-p", help="project id (or id prefix), or 'all'"),
]
SourceOption = Annotated[
    str,
    typer.Option(
        "--source",
        "-src",
        callback=validate_source,
        help="valid input: all, project, meeting",
    ),
]


@app.command("show, s")
def show(
    month: Annotated[
        Optional[LocalDay],
        typer.Option(
            "--month",
            "-mo",
            parser=parse_month,
            help="first month to show, YYYY-MM (defaults to the remembered month)",
        ),
    ] = None,
    project: ProjectOption = ALL_PROJECTS,
    source: SourceOption = SourceFilter.ALL.value,
    day_width: Annotated[
        Optional[int],
        typer.Option(
            "--day-width",
            "-dw",
            callback=validate_width,
            help="characters per day (defaults to config or console width)",
        ),
    ] = None,
    left_width: Annotated[
        Optional[int],
        typer.Option(
            "--left-width",
            "-lw",
            callback=validate_width,
            help="width of the task label column",
        ),
    ] = None,
) -> None:
    """Show the two-month gantt chart."""
    if month is not None:
        NAVIGATION_REPO.set_reference_month(month)
    _render(
        reference=month,
        project=project,
        source=source,
        day_width=day_width,
        left_width=left_width,
    )


@app.command("next, n")
def next(
    project: ProjectOption = ALL_PROJECTS,
    source: SourceOption = SourceFilter.ALL.value,
) -> None:
    """Move the chart one month forward."""
    reference = next_reference_month(_current_reference())
    NAVIGATION_REPO.set_reference_month(reference)
    _render(reference=reference, project=project, source=source)


@app.command("prev, p")
def prev(
    project: ProjectOption = ALL_PROJECTS,
    source: SourceOption = SourceFilter.ALL.value,
) -> None:
    """Move the chart one month back."""
    reference = previous_reference_month(_current_reference())
    NAVIGATION_REPO.set_reference_month(reference)
    _render(reference=reference, project=project, source=source)


@app.command("today, t")
def today(
    project: ProjectOption = ALL_PROJECTS,
    source: SourceOption = SourceFilter.ALL.value,
) -> None:
    """Jump back to the current month."""
    reference = today_reference_month()
    NAVIGATION_REPO.set_reference_month(None)
    _render(reference=reference, project=project, source=source)


@app.command("add, a", no_args_is_help=True)
def add(
    project: str,
    title: str,
    start: Annotated[
        str,
        typer.Option(
            "--start",
            "-s",
            parser=parse_date,
            help="valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1",
        ),
    ],
    end: Annotated[
        str,
        typer.Option(
            "--end",
            "-e",
            parser=parse_date,
            help="valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1",
        ),
    ],
    priority: Annotated[
        str,
        typer.Option(
            "--priority",
            "-pr",
            callback=validate_priority,
            help="valid input: low, medium, high",
        ),
    ] = "medium",
) -> None:
    """Add a dated task to a project straight onto the chart."""
    try:
        project_id = PROJECT_REPO.resolve_project_id(project)
        id = create_timeline_todo(
            project_id, title, start, end, priority=cast(Priority, priority)
        )
    except ValueError as e:
        exit_with_error(e)

    Console().print(f"Added timeline task {id[:8]}")


def _current_reference() -> LocalDay:
    reference = NAVIGATION_REPO.get_reference_month()
    if reference is None:
        return today_reference_month()
    return reference


def _render(
    reference: Optional[LocalDay],
    project: str,
    source: str,
    day_width: Optional[int] = None,
    left_width: Optional[int] = None,
) -> None:
    config = CONFIGURATION_REPO.get_config()
    now = now_local()

    if reference is None:
        reference = _current_reference()

    project_filter = ALL_PROJECTS
    report_name = "Gantt chart"
    if project != ALL_PROJECTS:
        try:
            project_filter = PROJECT_REPO.resolve_project_id(project)
        except ValueError as e:
            exit_with_error(e)
        project_title = PROJECT_REPO.get_project(project_filter)["title"]
        report_name = f"Gantt chart: {project_title}"

    projects = PROJECT_REPO.get_all_projects()
    tasks = materialize_tasks(projects, now=now)
    window = build_timeline_window(reference)

    project_tasks = filter_tasks(tasks, project_filter=project_filter)
    visible_tasks = filter_tasks(project_tasks, source_filter=source)

    if left_width is None:
        left_width = config["left_column_width"]
    if day_width is None:
        day_width = config["day_width"]
    if day_width is None:
        available_width = Console().width - left_width - STATUS_COLUMN_WIDTH
        day_width = math.floor(
            responsive_day_width(
                available_width,
                len(window["days"]),
                minimum=MIN_DAY_WIDTH,
                maximum=MAX_DAY_WIDTH,
                scale=1.0,
            )
        )

    gantt_view(
        report_name,
        visible_tasks,
        window,
        day_width,
        left_column_width=left_width,
        now=now,
        counts=source_counts(project_tasks),
        project_summary=(
            status_summary(project_tasks) if project_filter != ALL_PROJECTS else None
        ),
        project_totals=project_task_totals(projects, tasks),
    )
