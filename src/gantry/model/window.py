# SPDX-License-Identifier: MIT

from typing import TypeAlias, TypedDict

from gantry.time import LocalDay

MonthKey: TypeAlias = tuple[int, int]


class TimelineWindow(TypedDict):
    reference: LocalDay
    days: list[LocalDay]
    month_groups: dict[MonthKey, list[LocalDay]]


class TaskGeometry(TypedDict):
    left_px: float
    width_px: float


class TodayMarker(TypedDict):
    index: int
    left_px: float
