# SPDX-License-Identifier: MIT

import math
from typing import Optional

import pendulum

from gantry.logger import get_logger
from gantry.model.meeting import Meeting, MeetingTodo
from gantry.model.project import Project
from gantry.model.timeline import (
    MeetingTodoRef,
    ProjectTodoRef,
    TaskSource,
    TaskStatus,
    TimelineTask,
)
from gantry.model.todo import Todo
from gantry.time import (
    LocalDay,
    LocalDayEnd,
    clamp,
    diff_days,
    end_of_local_day,
    now_local,
    parse_local_datetime,
    start_of_local_day,
)

logger = get_logger(__name__)


def derive_status(
    completed: bool, start: LocalDay, end: LocalDayEnd, now: pendulum.DateTime
) -> TaskStatus:
    """
    Derive the display status of a task from its completion flag and dates.

    Returns:
        COMPLETE if completed, IN_PROGRESS if today lies within [start, end],
        ON_HOLD once today is past the end, NOT_STARTED otherwise
    """
    if completed:
        return TaskStatus.COMPLETE

    today = start_of_local_day(now)
    if start <= today <= end:
        return TaskStatus.IN_PROGRESS
    if today > end:
        return TaskStatus.ON_HOLD
    return TaskStatus.NOT_STARTED


def derive_progress(
    completed: bool, start: LocalDay, end: LocalDayEnd, now: pendulum.DateTime
) -> float:
    """
    Linear progress in percent: elapsed days over total inclusive days.

    Completed tasks are always 100. The result is clamped to [0, 100] and a
    non-finite value becomes 0.
    """
    if completed:
        return 100.0

    elapsed_days = diff_days(start, now)
    total_days = max(diff_days(start, end) + 1, 1)
    progress = clamp((elapsed_days / total_days) * 100, 0, 100)
    if not math.isfinite(progress):
        return 0.0
    return float(progress)


def materialize_tasks(
    projects: list[Project], now: Optional[pendulum.DateTime] = None
) -> list[TimelineTask]:
    """
    Flatten project todos and meeting action items into timeline tasks.

    A single "now" is used for the whole pass so every status and progress
    value is computed against the same instant. Records without a usable
    end date are left out of the timeline.

    Args:
        projects: Projects with their todos and meetings
        now: The instant to evaluate against (defaults to the current time)

    Returns:
        Timeline tasks sorted ascending by start date
    """
    if now is None:
        now = now_local()

    tasks: list[TimelineTask] = []
    skipped = 0

    for project in projects:
        for todo in project.get("todos", []):
            todo_task = _task_from_todo(project, todo, now)
            if todo_task is None:
                skipped += 1
                continue
            tasks.append(todo_task)

        for meeting in project.get("meetings", []):
            for meeting_todo in meeting.get("todos", []):
                # action items without a due date never make it onto the chart
                if not meeting_todo.get("due_date"):
                    continue
                meeting_task = _task_from_meeting_todo(
                    project, meeting, meeting_todo, now
                )
                if meeting_task is None:
                    skipped += 1
                    continue
                tasks.append(meeting_task)

    logger.debug(
        "Materialized %d timeline tasks from %d projects (%d skipped)",
        len(tasks),
        len(projects),
        skipped,
    )

    return sorted(tasks, key=lambda task: task["start"])


def _task_from_todo(
    project: Project, todo: Todo, now: pendulum.DateTime
) -> Optional[TimelineTask]:
    # first non-empty of end_date / due_date wins
    end_source = todo.get("end_date") or todo.get("due_date")
    end_value = parse_local_datetime(end_source)
    if end_value is None:
        logger.debug("Skipping todo %s: no usable end date", todo["id"])
        return None

    start_value = parse_local_datetime(todo.get("start_date"))
    if start_value is None:
        start_value = parse_local_datetime(todo.get("created"))
    if start_value is None:
        start_value = now

    start, end = _normalize_range(start_value, end_value)
    completed = bool(todo.get("completed"))

    return {
        "ref": ProjectTodoRef(source=TaskSource.PROJECT, id=str(todo["id"])),
        "title": todo["title"],
        "start": start,
        "end": end,
        "progress": derive_progress(completed, start, end, now),
        "project_id": str(project["id"]),
        "project_title": project["title"],
        "project_color": project["color"],
        "priority": todo.get("priority") or "medium",
        "completed": completed,
        "status": derive_status(completed, start, end, now),
        "source": TaskSource.PROJECT,
        "description": todo.get("description"),
        "notes": todo.get("notes"),
    }


def _task_from_meeting_todo(
    project: Project,
    meeting: Meeting,
    meeting_todo: MeetingTodo,
    now: pendulum.DateTime,
) -> Optional[TimelineTask]:
    end_value = parse_local_datetime(meeting_todo.get("due_date"))
    start_value = parse_local_datetime(meeting.get("meeting_date"))
    if end_value is None or start_value is None:
        logger.debug(
            "Skipping meeting action item %s: unusable meeting or due date",
            meeting_todo["id"],
        )
        return None

    start, end = _normalize_range(start_value, end_value)
    completed = bool(meeting_todo.get("completed"))

    title = meeting_todo["title"]
    if meeting_todo.get("assigned_to"):
        title = f"{title} ({meeting_todo['assigned_to']})"

    description = f'Meeting action item from "{meeting["title"]}"'
    if meeting_todo.get("description"):
        description = f"{description} - {meeting_todo['description']}"
    notes = (
        f"From meeting: {meeting['title']}\n"
        f"Meeting date: {start.to_date_string()}\n"
        f"Assigned to: {meeting_todo.get('assigned_to') or 'Unassigned'}"
    )

    return {
        "ref": MeetingTodoRef(
            source=TaskSource.MEETING,
            id=str(meeting_todo["id"]),
            meeting_id=str(meeting["id"]),
        ),
        "title": title,
        "start": start,
        "end": end,
        "progress": derive_progress(completed, start, end, now),
        "project_id": str(project["id"]),
        "project_title": project["title"],
        "project_color": project["color"],
        "priority": meeting_todo.get("priority") or "medium",
        "completed": completed,
        "status": derive_status(completed, start, end, now),
        "source": TaskSource.MEETING,
        "description": description,
        "notes": notes,
    }


def _normalize_range(
    start_value: pendulum.DateTime, end_value: pendulum.DateTime
) -> tuple[LocalDay, LocalDayEnd]:
    start = start_of_local_day(start_value)
    end = end_of_local_day(end_value)
    # a start recorded after the end (e.g. created after the due date) is
    # pulled back to the end's day
    if start > end:
        start = start_of_local_day(end)
    return start, end
