# SPDX-License-Identifier: MIT

from enum import StrEnum
from typing import Literal, Optional, TypedDict

from gantry.model.entity_id import EntityId
from gantry.model.todo import Priority
from gantry.time import LocalDay, LocalDayEnd


class TaskStatus(StrEnum):
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETE = "Complete"
    ON_HOLD = "On Hold"


class TaskSource(StrEnum):
    PROJECT = "project"
    MEETING = "meeting"


class ProjectTodoRef(TypedDict):
    source: Literal[TaskSource.PROJECT]
    id: EntityId


class MeetingTodoRef(TypedDict):
    source: Literal[TaskSource.MEETING]
    id: EntityId
    meeting_id: EntityId


TaskRef = ProjectTodoRef | MeetingTodoRef


class TimelineTask(TypedDict):
    """One bar on the chart. Derived on every pass, never persisted."""

    ref: TaskRef
    title: str
    start: LocalDay
    end: LocalDayEnd
    progress: float
    project_id: EntityId
    project_title: str
    project_color: str
    priority: Priority
    completed: bool
    status: TaskStatus
    source: TaskSource
    description: Optional[str]
    notes: Optional[str]


def task_key(ref: TaskRef) -> str:
    return f"{ref['source']}:{ref['id']}"
