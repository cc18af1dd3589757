# SPDX-License-Identifier: MIT

import atexit

from gantry.repository.configuration import CONFIGURATION_REPO
from gantry.repository.navigation import NAVIGATION_REPO
from gantry.repository.project import PROJECT_REPO


def flush_and_sync() -> None:
    CONFIGURATION_REPO.flush()
    NAVIGATION_REPO.flush()
    PROJECT_REPO.flush()


def register_cleanup() -> None:
    atexit.register(flush_and_sync)
