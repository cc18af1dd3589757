# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

import pendulum

from gantry.model.entity_id import EntityId
from gantry.model.todo import Priority

MeetingStatus = Literal["scheduled", "in_progress", "completed", "cancelled"]


class MeetingTodo(TypedDict):
    id: Optional[EntityId]
    title: str
    description: Optional[str]
    assigned_to: Optional[str]
    due_date: Optional[str]
    priority: Optional[Priority]
    completed: bool
    created: pendulum.DateTime
    updated: pendulum.DateTime


class Meeting(TypedDict):
    id: Optional[EntityId]
    title: str
    description: Optional[str]
    meeting_date: Optional[str]
    duration: int
    status: MeetingStatus
    created: pendulum.DateTime
    updated: pendulum.DateTime
    todos: list[MeetingTodo]
