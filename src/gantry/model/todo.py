# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

import pendulum

from gantry.model.entity_id import EntityId

Priority = Literal["low", "medium", "high"]

PRIORITIES: tuple[Priority, ...] = ("low", "medium", "high")


class Todo(TypedDict):
    id: Optional[EntityId]
    title: str
    description: Optional[str]
    completed: bool
    # Dates are kept as entered ("YYYY-MM-DD" or ISO timestamps) and may be
    # missing or malformed. The timeline engine normalizes them.
    start_date: Optional[str]
    end_date: Optional[str]
    due_date: Optional[str]
    notes: Optional[str]
    priority: Optional[Priority]
    created: pendulum.DateTime
    updated: pendulum.DateTime
