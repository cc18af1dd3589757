# SPDX-License-Identifier: MIT

from typing import TypedDict


class Navigation(TypedDict):
    # "YYYY-MM" of the month shown first in the chart, None follows today
    reference_month: str | None
