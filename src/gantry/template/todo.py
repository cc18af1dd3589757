# SPDX-License-Identifier: MIT

from gantry.model.todo import Todo
from gantry.time import now_utc


def get_todo_template() -> Todo:
    now = now_utc()
    return {
        "id": None,
        "title": "",
        "description": None,
        "completed": False,
        "start_date": None,
        "end_date": None,
        "due_date": None,
        "notes": None,
        "priority": "medium",
        "created": now,
        "updated": now,
    }
