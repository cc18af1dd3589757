# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from gantry.time import LocalDay, start_of_local_day


def parse_date(date_param: Optional[str | int]) -> Optional[str]:
    """
    Parse a date option into the 'YYYY-MM-DD' string stored on records.

    Accepts YYYY-MM-DD, today, yesterday, tomorrow (or t, y, o) and a day
    offset like 1 or -1.
    """
    if date_param is None:
        return None

    date = str(date_param).strip()

    if re.match(r"^\d{4}-\d{2}-\d{2}$", date):
        try:
            pendulum.parse(date, tz="local")
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date {date}: {e}")
        return date

    # Match numeric input for relative days (e.g., "1", "-1", "365")
    if re.match(r"^-?\d+$", date):
        return pendulum.today("local").add(days=int(date)).to_date_string()

    if date == "today" or date == "t":
        return pendulum.today("local").to_date_string()
    if date == "yesterday" or date == "y":
        return pendulum.yesterday("local").to_date_string()
    if date == "tomorrow" or date == "o":
        return pendulum.tomorrow("local").to_date_string()
    raise typer.BadParameter("Incorrect date format")


def parse_month(month_param: Optional[str]) -> Optional[LocalDay]:
    """Parse a 'YYYY-MM' option into the first day of that month."""
    if month_param is None:
        return None

    month_match = re.match(r"^(\d{4})-(\d{1,2})$", month_param.strip())
    if not month_match:
        raise typer.BadParameter("Incorrect month format, expected YYYY-MM")

    year = int(month_match.group(1))
    month = int(month_match.group(2))
    if month < 1 or month > 12:
        raise typer.BadParameter(f"Month must be between 1 and 12, got {month}")

    return start_of_local_day(pendulum.date(year, month, 1))
