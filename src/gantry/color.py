# SPDX-License-Identifier: MIT

import random

from rich.errors import StyleSyntaxError
from rich.style import Style

from gantry.model.timeline import TaskStatus

# Color constant for completed tasks
COMPLETED_TASK_COLOR = "bright_black"

TODAY_MARKER_COLOR = "bright_cyan"

STATUS_COLORS: dict[TaskStatus, str] = {
    TaskStatus.COMPLETE: "green",
    TaskStatus.IN_PROGRESS: "blue",
    TaskStatus.ON_HOLD: "yellow",
    TaskStatus.NOT_STARTED: "grey50",
}

PRIORITY_COLORS: dict[str, str] = {
    "high": "red",
    "medium": "yellow",
    "low": "green",
}


def get_random_color() -> str:
    """Return a random hex color for a new project.

    These colors are chosen for good visibility in terminal displays.
    """
    colors = [
        "#3b82f6",
        "#10b981",
        "#f59e0b",
        "#ef4444",
        "#8b5cf6",
        "#ec4899",
        "#06b6d4",
        "#84cc16",
        "#f97316",
        "#6366f1",
    ]
    return random.choice(colors)


def terminal_color(color: str) -> str:
    """Return color if rich can render it, otherwise a neutral fallback."""
    try:
        Style.parse(color)
    except StyleSyntaxError:
        return "white"
    return color
