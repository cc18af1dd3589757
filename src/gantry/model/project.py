# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

import pendulum

from gantry.model.entity_id import EntityId
from gantry.model.meeting import Meeting
from gantry.model.todo import Todo

ProjectCategory = Literal["main", "mine"]
ProjectStatus = Literal["active", "hold", "completed"]

PROJECT_STATUSES: tuple[ProjectStatus, ...] = ("active", "hold", "completed")


class Project(TypedDict):
    id: Optional[EntityId]
    title: str
    description: Optional[str]
    color: str
    category: ProjectCategory
    status: ProjectStatus
    due_date: Optional[str]
    created: pendulum.DateTime
    updated: pendulum.DateTime
    todos: list[Todo]
    meetings: list[Meeting]
