# SPDX-License-Identifier: MIT

from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from gantry.logger import get_logger

logger = get_logger(__name__)


def exit_with_error(error: Exception | str) -> NoReturn:
    """Print a red error line and leave the command with exit code 1."""
    logger.debug("Command failed: %s", error)
    Console().print(f"[red]Error: {escape(str(error))}[/red]")
    raise typer.Exit(1)
