# SPDX-License-Identifier: MIT

from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gantry.color import (
    COMPLETED_TASK_COLOR,
    PRIORITY_COLORS,
    STATUS_COLORS,
    terminal_color,
)
from gantry.model.timeline import TaskSource, TimelineTask
from gantry.query.filter import SourceCounts
from gantry.time import datetime_to_display_local_date_str
from gantry.view.state import get_no_wrap
from gantry.view.views.count import project_totals_line
from gantry.view.views.header import header


def timeline_tasks_view(
    report_name: str,
    tasks: list[TimelineTask],
    counts: SourceCounts,
    project_totals: Optional[list[tuple[str, int]]] = None,
) -> None:
    header(report_name)
    no_wrap = get_no_wrap()

    tasks_table = Table(box=box.SIMPLE)
    for column in [
        "id",
        "title",
        "project",
        "source",
        "start",
        "end",
        "progress",
        "status",
        "priority",
    ]:
        if no_wrap and column in ("title", "project"):
            tasks_table.add_column(column, no_wrap=True, overflow="ellipsis")
        else:
            tasks_table.add_column(column)

    for task in tasks:
        source = "meeting" if task["source"] == TaskSource.MEETING else "project"
        row_style = COMPLETED_TASK_COLOR if task["completed"] else None
        tasks_table.add_row(
            # ids are shown shortened; any unique prefix is accepted back
            task["ref"]["id"][:8],
            escape(task["title"]),
            f"[{terminal_color(task['project_color'])}]{escape(task['project_title'])}[/]"
            if not task["completed"]
            else escape(task["project_title"]),
            source,
            datetime_to_display_local_date_str(task["start"]),
            datetime_to_display_local_date_str(task["end"]),
            f"{round(task['progress'])}%",
            f"[{STATUS_COLORS[task['status']]}]{task['status'].value}[/]",
            f"[{PRIORITY_COLORS.get(task['priority'], 'white')}]{task['priority']}[/]",
            style=row_style,
        )

    console = Console()
    console.print(tasks_table)
    console.print(
        f"[dim]All: {counts['all']}  "
        f"From projects: {counts['project']}  "
        f"From meetings: {counts['meeting']}[/dim]"
    )
    if project_totals:
        console.print(project_totals_line(project_totals))
    console.print()
