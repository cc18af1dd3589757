# SPDX-License-Identifier: MIT

from typing import TypedDict

from gantry.model.entity_id import EntityId
from gantry.model.project import Project
from gantry.model.timeline import TaskSource, TaskStatus, TimelineTask
from gantry.query.filter_type import ALL_PROJECTS, SourceFilter


class SourceCounts(TypedDict):
    all: int
    project: int
    meeting: int


class StatusSummary(TypedDict):
    total: int
    completed: int
    in_progress: int
    not_started: int
    on_hold: int
    completion_rate: int


def filter_tasks(
    tasks: list[TimelineTask],
    project_filter: str = ALL_PROJECTS,
    source_filter: SourceFilter | str = SourceFilter.ALL,
) -> list[TimelineTask]:
    """
    Narrow timeline tasks by owning project and by provenance.

    Args:
        tasks: Materialized timeline tasks
        project_filter: A project id, or "all"
        source_filter: "all", "project" or "meeting"

    Returns:
        The matching tasks in their incoming order
    """
    source = SourceFilter(source_filter)

    filtered_tasks = tasks
    if project_filter != ALL_PROJECTS:
        filtered_tasks = [
            task for task in filtered_tasks if task["project_id"] == project_filter
        ]

    match source:
        case SourceFilter.PROJECT:
            filtered_tasks = [
                task for task in filtered_tasks if task["source"] == TaskSource.PROJECT
            ]
        case SourceFilter.MEETING:
            filtered_tasks = [
                task for task in filtered_tasks if task["source"] == TaskSource.MEETING
            ]

    return filtered_tasks


def source_counts(tasks: list[TimelineTask]) -> SourceCounts:
    project = sum(1 for task in tasks if task["source"] == TaskSource.PROJECT)
    meeting = sum(1 for task in tasks if task["source"] == TaskSource.MEETING)
    return {"all": len(tasks), "project": project, "meeting": meeting}


def project_counts(tasks: list[TimelineTask]) -> dict[EntityId, int]:
    counts: dict[EntityId, int] = {}
    for task in tasks:
        counts[task["project_id"]] = counts.get(task["project_id"], 0) + 1
    return counts


def project_task_totals(
    projects: list[Project], tasks: list[TimelineTask]
) -> list[tuple[str, int]]:
    """Title and task count of every project, in store order, empty ones included."""
    counts = project_counts(tasks)
    return [
        (project["title"], counts.get(str(project["id"]), 0)) for project in projects
    ]


def status_summary(tasks: list[TimelineTask]) -> StatusSummary:
    """Count tasks per status and the share of completed tasks (rounded percent)."""
    completed = sum(1 for task in tasks if task["completed"])
    total = len(tasks)
    return {
        "total": total,
        "completed": completed,
        "in_progress": sum(
            1 for task in tasks if task["status"] == TaskStatus.IN_PROGRESS
        ),
        "not_started": sum(
            1 for task in tasks if task["status"] == TaskStatus.NOT_STARTED
        ),
        "on_hold": sum(1 for task in tasks if task["status"] == TaskStatus.ON_HOLD),
        "completion_rate": round(completed / total * 100) if total > 0 else 0,
    }
