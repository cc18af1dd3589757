# SPDX-License-Identifier: MIT

from gantry.model.project import Project
from gantry.time import now_utc

DEFAULT_PROJECT_COLOR = "#3b82f6"


def get_project_template() -> Project:
    now = now_utc()
    return {
        "id": None,
        "title": "",
        "description": None,
        "color": DEFAULT_PROJECT_COLOR,
        "category": "main",
        "status": "active",
        "due_date": None,
        "created": now,
        "updated": now,
        "todos": [],
        "meetings": [],
    }
