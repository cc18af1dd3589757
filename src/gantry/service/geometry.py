# SPDX-License-Identifier: MIT

import math
from typing import Optional

import pendulum

from gantry.model.timeline import TimelineTask
from gantry.model.window import TaskGeometry, TimelineWindow, TodayMarker
from gantry.time import (
    clamp,
    diff_days,
    end_of_local_day,
    now_local,
    same_local_day,
    start_of_local_day,
)

# Fraction of a day column that a degenerate or clipped bar still occupies
MIN_BAR_FRACTION = 0.2


def compute_geometry(
    task: TimelineTask, window: TimelineWindow, day_width: float
) -> TaskGeometry:
    """
    Map a task's date range onto horizontal offsets within the window.

    The range is clamped to the visible days. A task that falls entirely
    outside the window still gets a sliver at the nearest edge.

    Args:
        task: The timeline task to place
        window: The visible timeline window
        day_width: Width of one day column (pixels, characters, ...)

    Returns:
        Left offset and width in the same unit as day_width
    """
    _check_day_width(day_width)

    days = window["days"]
    if len(days) == 0:
        return {"left_px": 0.0, "width_px": 0.0}

    window_start = days[0]
    window_end = end_of_local_day(days[-1])
    last_index = len(days) - 1

    clamped_start = start_of_local_day(max(task["start"], window_start))
    clamped_end = end_of_local_day(min(task["end"], window_end))

    start_index = int(clamp(diff_days(window_start, clamped_start), 0, last_index))
    end_index = int(clamp(diff_days(window_start, clamped_end), 0, last_index))

    left_px = start_index * day_width
    width_px = max(
        (end_index - start_index + 1) * day_width, day_width * MIN_BAR_FRACTION
    )

    return {"left_px": float(left_px), "width_px": float(width_px)}


def locate_today(
    window: TimelineWindow,
    day_width: float,
    left_offset: float = 0.0,
    now: Optional[pendulum.DateTime] = None,
) -> Optional[TodayMarker]:
    """
    Find today's column in the window and the offset of its centre line.

    The column is matched by calendar date rather than by subtracting
    timestamps, so DST transitions cannot shift it by a day.

    Args:
        window: The visible timeline window
        day_width: Width of one day column
        left_offset: Width of whatever sits left of the first day column
        now: The current instant (defaults to the current time)

    Returns:
        The marker, or None when today is outside the window
    """
    _check_day_width(day_width)

    days = window["days"]
    if len(days) == 0:
        return None

    if now is None:
        now = now_local()
    today = start_of_local_day(now)

    if today < days[0] or today > end_of_local_day(days[-1]):
        return None

    for index, day in enumerate(days):
        if same_local_day(day, today):
            return {
                "index": index,
                "left_px": left_offset + index * day_width + day_width / 2,
            }
    return None


def responsive_day_width(
    available_width: float,
    total_days: int,
    minimum: float = 14,
    maximum: float = 56,
    scale: float = 0.9,
) -> float:
    """
    Derive a day column width that fits the available space.

    The evenly divided width is floored, scaled down to leave some breathing
    room and bounded by minimum and maximum.
    """
    if total_days <= 0:
        return minimum
    per_day = math.floor(available_width / total_days)
    return clamp(per_day * scale, minimum, maximum)


def _check_day_width(day_width: float) -> None:
    if not day_width > 0:
        raise ValueError(f"day_width must be positive, got {day_width}")
