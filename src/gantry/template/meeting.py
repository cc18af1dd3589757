# SPDX-License-Identifier: MIT

from gantry.model.meeting import Meeting, MeetingTodo
from gantry.time import now_utc


def get_meeting_template() -> Meeting:
    now = now_utc()
    return {
        "id": None,
        "title": "",
        "description": None,
        "meeting_date": None,
        "duration": 60,
        "status": "scheduled",
        "created": now,
        "updated": now,
        "todos": [],
    }


def get_meeting_todo_template() -> MeetingTodo:
    now = now_utc()
    return {
        "id": None,
        "title": "",
        "description": None,
        "assigned_to": None,
        "due_date": None,
        "priority": "medium",
        "completed": False,
        "created": now,
        "updated": now,
    }
