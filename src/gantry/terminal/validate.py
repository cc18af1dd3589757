# SPDX-License-Identifier: MIT

from typing import Optional

import typer
from rich.errors import StyleSyntaxError
from rich.style import Style

from gantry.model.project import PROJECT_STATUSES
from gantry.model.todo import PRIORITIES
from gantry.query.filter_type import SourceFilter


def validate_priority(priority: Optional[str]) -> Optional[str]:
    if priority is None:
        return None
    if priority.lower() not in PRIORITIES:
        raise typer.BadParameter(f"Priority must be one of {', '.join(PRIORITIES)}")
    return priority.lower()


def validate_project_status(status: Optional[str]) -> Optional[str]:
    if status is None:
        return None
    if status not in PROJECT_STATUSES:
        raise typer.BadParameter(
            f"Status must be one of {', '.join(PROJECT_STATUSES)}"
        )
    return status


def validate_source(source: str) -> str:
    if source not in [member.value for member in SourceFilter]:
        raise typer.BadParameter(
            f"Source must be one of {', '.join(member.value for member in SourceFilter)}"
        )
    return source


def validate_color(color: Optional[str]) -> Optional[str]:
    if color is None:
        return None
    try:
        Style.parse(color)
    except StyleSyntaxError:
        raise typer.BadParameter(f"Unknown color {color}")
    return color


def validate_width(width: Optional[int]) -> Optional[int]:
    if width is None:
        return None
    if width < 1:
        raise typer.BadParameter("Width must be at least 1")
    return width
