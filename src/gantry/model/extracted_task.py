# SPDX-License-Identifier: MIT

from typing import NotRequired, Optional, TypedDict

from gantry.model.todo import Priority


class ExtractedTask(TypedDict):
    """A candidate task as returned by the image extraction service."""

    title: str
    description: NotRequired[Optional[str]]
    startDate: NotRequired[Optional[str]]
    endDate: NotRequired[Optional[str]]
    priority: NotRequired[Optional[Priority]]
    confidence: NotRequired[Optional[float]]
