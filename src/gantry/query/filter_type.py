# SPDX-License-Identifier: MIT

from enum import StrEnum

ALL_PROJECTS = "all"


class SourceFilter(StrEnum):
    ALL = "all"
    PROJECT = "project"
    MEETING = "meeting"
