# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from gantry.repository.project import PROJECT_REPO
from gantry.service.task import import_extracted_tasks, load_extracted_tasks
from gantry.terminal.error import exit_with_error


def import_tasks(
    project: str,
    path: Annotated[
        Path,
        typer.Argument(
            exists=True,
            dir_okay=False,
            readable=True,
            help="file holding the task extraction answer (a JSON array)",
        ),
    ],
) -> None:
    """Import tasks extracted from an image into a project."""
    try:
        project_id = PROJECT_REPO.resolve_project_id(project)
        extracted_tasks = load_extracted_tasks(path)
        created = import_extracted_tasks(project_id, extracted_tasks)
    except ValueError as e:
        exit_with_error(e)

    Console().print(
        f"[green]Imported {created} of {len(extracted_tasks)} tasks[/green]"
    )
