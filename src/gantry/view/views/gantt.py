# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
from rich import box
from rich.console import Console, Group
from rich.padding import Padding
from rich.table import Table
from rich.text import Text

from gantry.color import (
    COMPLETED_TASK_COLOR,
    STATUS_COLORS,
    TODAY_MARKER_COLOR,
    terminal_color,
)
from gantry.model.timeline import TaskSource, TaskStatus, TimelineTask
from gantry.model.window import TimelineWindow, TodayMarker
from gantry.query.filter import SourceCounts, StatusSummary
from gantry.service.geometry import compute_geometry, locate_today
from gantry.time import same_local_day
from gantry.view.views.count import project_totals_line
from gantry.view.views.header import header

FILLED_BAR_CHAR = "█"
REMAINING_BAR_CHAR = "░"
TODAY_LINE_CHAR = "│"
ALTERNATE_DAY_BACKGROUND = "on grey15"


def gantt_view(
    report_name: str,
    tasks: list[TimelineTask],
    window: TimelineWindow,
    day_width: int,
    left_column_width: int = 40,
    now: Optional[pendulum.DateTime] = None,
    counts: Optional[SourceCounts] = None,
    project_summary: Optional[StatusSummary] = None,
    project_totals: Optional[list[tuple[str, int]]] = None,
) -> None:
    """
    Display timeline tasks as bars on a two-month day grid.

    Each day takes day_width characters. Bars are placed with the same
    geometry the engine computes for any other renderer, and the today line
    is drawn through every row when today is visible.

    Args:
        report_name: Sub-header shown above the chart
        tasks: The (already filtered) timeline tasks to draw
        window: The visible timeline window
        day_width: Characters per day column
        left_column_width: Width of the task label column
        now: The current instant (defaults to the current time)
        counts: Optional per-source totals for the summary line
        project_summary: Optional status summary of the selected project
        project_totals: Optional task count per project for the count line
    """
    header(report_name)

    console = Console()
    days = window["days"]

    if len(days) == 0:
        console.print("\n[dim]No days to display[/dim]\n")
        return

    if now is None:
        now = pendulum.now("local")

    # The marker is located in the same coordinate space as the rows: the
    # label column is the measured left offset
    marker = locate_today(window, day_width, left_offset=left_column_width, now=now)

    date_range_str = (
        f"{days[0].format('YYYY-MM-DD')} to {days[-1].format('YYYY-MM-DD')}"
    )
    console.print(f"\n[bold]{date_range_str}[/bold]")
    if counts is not None:
        console.print(
            f"[dim]{counts['all']} tasks: {counts['project']} from projects, "
            f"{counts['meeting']} from meetings[/dim]"
        )
    if project_totals:
        console.print(project_totals_line(project_totals))
    console.print()

    chart_elements: list[Text] = [
        _build_month_row(window, day_width, left_column_width),
        _build_day_row(window, day_width, left_column_width, now),
        Text("─" * (left_column_width + len(days) * day_width), style="dim"),
    ]

    if len(tasks) == 0:
        chart_elements.append(Text("No tasks in this timeline", style="dim"))

    for task in tasks:
        chart_elements.append(
            _build_task_row(task, window, day_width, left_column_width, marker)
        )

    console.print(Padding(Group(*chart_elements), (0, 0, 1, 0)))

    if project_summary is not None:
        console.print(_build_summary_table(project_summary))
        console.print()


def _build_month_row(
    window: TimelineWindow, day_width: int, left_column_width: int
) -> Text:
    """
    Build the month header row, one label per (year, month) group.

    The label is cut down to the width of its group when the month is narrow.
    """
    month_row = Text(" " * left_column_width)

    for month_days in window["month_groups"].values():
        group_width = len(month_days) * day_width
        label = month_days[0].format("MMM YYYY")
        if len(label) > group_width:
            label = month_days[0].format("MMM")[:group_width]
        month_row.append(label.ljust(group_width), style="bold magenta")

    return month_row


def _build_day_row(
    window: TimelineWindow,
    day_width: int,
    left_column_width: int,
    now: pendulum.DateTime,
) -> Text:
    day_row = Text(" " * left_column_width)

    for i, day in enumerate(window["days"]):
        if day_width >= 2:
            label = str(day.day).rjust(day_width)
        else:
            # single character columns only show the last digit
            label = str(day.day % 10)

        if same_local_day(day, now):
            style = "bold black on bright_cyan"
        elif day.day_of_week in [pendulum.SATURDAY, pendulum.SUNDAY]:
            style = "bold white on orange4"
        elif i % 2 == 1:
            style = f"bold cyan {ALTERNATE_DAY_BACKGROUND}"
        else:
            style = "bold cyan"
        day_row.append(label, style=style)

    return day_row


def _build_task_row(
    task: TimelineTask,
    window: TimelineWindow,
    day_width: int,
    left_column_width: int,
    marker: Optional[TodayMarker],
) -> Text:
    timeline_width = len(window["days"]) * day_width

    geometry = compute_geometry(task, window, day_width)
    bar_start = int(round(geometry["left_px"]))
    # a sliver still needs one visible character
    bar_width = max(1, int(round(geometry["width_px"])))
    bar_end = min(bar_start + bar_width, timeline_width)
    filled_end = bar_start + int(round((bar_end - bar_start) * task["progress"] / 100))

    marker_column: Optional[int] = None
    if marker is not None:
        marker_column = int(marker["left_px"]) - left_column_width

    bar_color = terminal_color(task["project_color"])
    if task["completed"]:
        bar_color = COMPLETED_TASK_COLOR

    row = Text()
    row.append(_task_label(task, left_column_width), style=bar_color)

    for column in range(timeline_width):
        if bar_start <= column < bar_end:
            if column < filled_end:
                row.append(FILLED_BAR_CHAR, style=bar_color)
            else:
                row.append(REMAINING_BAR_CHAR, style=bar_color)
        elif column == marker_column:
            row.append(TODAY_LINE_CHAR, style=f"bold {TODAY_MARKER_COLOR}")
        elif (column // day_width) % 2 == 1:
            row.append(" ", style=ALTERNATE_DAY_BACKGROUND)
        else:
            row.append(" ")

    row.append(f" {round(task['progress']):>3}% ", style="dim")
    row.append(task["status"].value, style=STATUS_COLORS[task["status"]])

    return row


def _task_label(task: TimelineTask, left_column_width: int) -> str:
    prefix = "◆ " if task["source"] == TaskSource.MEETING else "  "
    title = f"{prefix}{task['title']}"
    max_length = left_column_width - 1
    if len(title) > max_length:
        title = title[: max_length - 1] + "…"
    return title.ljust(left_column_width)


def _build_summary_table(summary: StatusSummary) -> Table:
    table = Table(box=box.SIMPLE, title="Project summary", title_justify="left")
    table.add_column("Total")
    table.add_column("Completed", style=STATUS_COLORS[TaskStatus.COMPLETE])
    table.add_column("In Progress", style=STATUS_COLORS[TaskStatus.IN_PROGRESS])
    table.add_column("Not Started", style=STATUS_COLORS[TaskStatus.NOT_STARTED])
    table.add_column("On Hold", style=STATUS_COLORS[TaskStatus.ON_HOLD])
    table.add_column("Completion")
    table.add_row(
        str(summary["total"]),
        str(summary["completed"]),
        str(summary["in_progress"]),
        str(summary["not_started"]),
        str(summary["on_hold"]),
        f"{summary['completion_rate']}%",
    )
    return table

