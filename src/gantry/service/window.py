# SPDX-License-Identifier: MIT

import datetime
from typing import Optional

import pendulum

from gantry.model.window import MonthKey, TimelineWindow
from gantry.time import LocalDay, days_in_month, now_local, start_of_local_day

# The chart always shows the reference month plus this many following months
WINDOW_MONTHS = 2


def build_timeline_window(reference: datetime.date) -> TimelineWindow:
    """
    Build the visible timeline: every day of the reference month and of the
    month after it.

    Args:
        reference: Any date inside the month that should be shown first

    Returns:
        The window with its ordered days and their (year, month) grouping
    """
    first_day = reference_month_start(reference)

    total_days = 0
    month = first_day
    for _ in range(WINDOW_MONTHS):
        total_days += days_in_month(month)
        month = month.add(months=1)

    # day arithmetic on calendar dates keeps every entry at local midnight
    # even across DST changes
    days = [
        start_of_local_day(first_day.date().add(days=offset))
        for offset in range(total_days)
    ]

    return {
        "reference": first_day,
        "days": days,
        "month_groups": group_days_by_month(days),
    }


def group_days_by_month(days: list[LocalDay]) -> dict[MonthKey, list[LocalDay]]:
    """Group days by (year, month), keeping the order of first appearance."""
    groups: dict[MonthKey, list[LocalDay]] = {}
    for day in days:
        groups.setdefault((day.year, day.month), []).append(day)
    return groups


def reference_month_start(reference: datetime.date) -> LocalDay:
    return start_of_local_day(start_of_local_day(reference).start_of("month"))


def shift_reference_month(reference: datetime.date, months: int) -> LocalDay:
    """Move the reference by whole calendar months, rolling over years."""
    first_day: pendulum.DateTime = reference_month_start(reference)
    return start_of_local_day(first_day.add(months=months))


def next_reference_month(reference: datetime.date) -> LocalDay:
    return shift_reference_month(reference, 1)


def previous_reference_month(reference: datetime.date) -> LocalDay:
    return shift_reference_month(reference, -1)


def today_reference_month(now: Optional[pendulum.DateTime] = None) -> LocalDay:
    if now is None:
        now = now_local()
    return reference_month_start(now)
