# SPDX-License-Identifier: MIT

import datetime
from typing import NewType, Optional, TypeAlias, cast

import pendulum

# Midnight local time of a calendar day. Only start_of_local_day creates one.
LocalDay = NewType("LocalDay", pendulum.DateTime)

# Last local instant of a calendar day. Only end_of_local_day creates one.
LocalDayEnd = NewType("LocalDayEnd", pendulum.DateTime)

DateLike: TypeAlias = str | datetime.date | datetime.datetime


def now_local() -> pendulum.DateTime:
    return pendulum.now("local")


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def _to_local(value: datetime.date) -> pendulum.DateTime:
    if isinstance(value, datetime.datetime):
        # naive datetimes are taken as local wall time
        return pendulum.instance(value, tz="local").in_tz("local")
    return pendulum.datetime(value.year, value.month, value.day, tz="local")


def start_of_local_day(value: datetime.date) -> LocalDay:
    """Midnight local time on the same calendar day as ``value``."""
    return LocalDay(_to_local(value).start_of("day"))


def end_of_local_day(value: datetime.date) -> LocalDayEnd:
    """The last local instant (23:59:59.999999) of ``value``'s calendar day."""
    return LocalDayEnd(_to_local(value).end_of("day"))


def diff_days(a: datetime.date, b: datetime.date) -> int:
    """
    Signed number of calendar days from ``a`` to ``b``.

    Both values are reduced to their local calendar date first, so the result
    ignores time of day and is not affected by DST transitions.
    """
    a_date = start_of_local_day(a).date()
    b_date = start_of_local_day(b).date()
    return (b_date - a_date).days


def clamp(n: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, n))


def same_local_day(a: datetime.date, b: datetime.date) -> bool:
    """Compare two values by local (year, month, day)."""
    a_local = _to_local(a)
    b_local = _to_local(b)
    return (a_local.year, a_local.month, a_local.day) == (
        b_local.year,
        b_local.month,
        b_local.day,
    )


def days_in_month(value: datetime.date) -> int:
    return _to_local(value).days_in_month


def parse_local_datetime(value: Optional[DateLike]) -> Optional[pendulum.DateTime]:
    """
    Parse a date-ish value into a local pendulum.DateTime.

    Date-only strings ("2024-03-15") are read as local midnight of that date.
    Timestamps carrying an offset are converted to local time. Missing, empty
    or malformed values yield None.

    Args:
        value: A date string, ISO timestamp, date, datetime or None

    Returns:
        The local DateTime, or None if the value is unusable
    """
    if value is None:
        return None
    if isinstance(value, datetime.date):
        return _to_local(value)
    if not isinstance(value, str) or not value.strip():
        return None

    try:
        parsed = pendulum.parse(value.strip(), tz="local")
    except (ValueError, TypeError, OverflowError):
        return None

    if isinstance(parsed, pendulum.DateTime):
        return parsed.in_tz("local")
    if isinstance(parsed, pendulum.Date):
        return _to_local(parsed)
    # durations, bare times and intervals are not dates
    return None


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def datetime_to_display_local_date_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("YYYY-MM-DD ddd")


def datetime_from_local_date_str(date_str: str) -> pendulum.DateTime:
    """Parse a local date string in 'YYYY-MM-DD' format to a pendulum.DateTime at midnight local time."""
    return cast(pendulum.DateTime, pendulum.parse(date_str, tz="local"))
