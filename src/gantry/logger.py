# SPDX-License-Identifier: MIT

"""
Logging configuration
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "gantry"
DEFAULT_LOG_LEVEL = "WARNING"


def get_logger(name: str) -> logging.Logger:
    """Get a logger below the gantry logger tree"""
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = RichHandler(
            console=Console(stderr=True), show_path=False, rich_tracebacks=True
        )
        handler.setFormatter(logging.Formatter("%(name)s - %(message)s"))
        root.addHandler(handler)
        root.setLevel(DEFAULT_LOG_LEVEL)

    return logging.getLogger(name)


def configure_logging(level: str) -> None:
    """Set the level of every gantry logger; unknown names fall back to WARNING."""
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.getLevelName(DEFAULT_LOG_LEVEL)
    get_logger(ROOT_LOGGER_NAME).setLevel(resolved)
