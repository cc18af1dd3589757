# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from gantry.query.filter import filter_tasks, project_task_totals, source_counts
from gantry.query.filter_type import ALL_PROJECTS, SourceFilter
from gantry.repository.project import PROJECT_REPO
from gantry.service.timeline import materialize_tasks
from gantry.terminal.error import exit_with_error
from gantry.terminal.validate import validate_source
from gantry.view.views.task import timeline_tasks_view


def tasks(
    project: Annotated[
        str,
        typer.Option("--project", "-p", help="project id (or id prefix), or 'all'"),
    ] = ALL_PROJECTS,
    source: Annotated[
        str,
        typer.Option(
            "--source",
            "-src",
            callback=validate_source,
            help="valid input: all, project, meeting",
        ),
    ] = SourceFilter.ALL.value,
) -> None:
    """List every task on the timeline with its derived status and progress."""
    project_filter = ALL_PROJECTS
    if project != ALL_PROJECTS:
        try:
            project_filter = PROJECT_REPO.resolve_project_id(project)
        except ValueError as e:
            exit_with_error(e)

    projects = PROJECT_REPO.get_all_projects()
    all_tasks = materialize_tasks(projects)
    project_tasks = filter_tasks(all_tasks, project_filter=project_filter)

    timeline_tasks_view(
        "Timeline tasks",
        filter_tasks(project_tasks, source_filter=source),
        source_counts(project_tasks),
        project_totals=project_task_totals(projects, all_tasks),
    )
