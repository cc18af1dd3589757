# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from gantry import configuration
from gantry.configuration import Configuration
from gantry.repository.configuration import CONFIGURATION_REPO
from gantry.terminal.custom_typer import AlphabeticalAliasedTyperGroup
from gantry.terminal.validate import validate_width

app = typer.Typer(cls=AlphabeticalAliasedTyperGroup, no_args_is_help=True)


def _configuration_table(config: Configuration, title: Optional[str] = None) -> Table:
    table = Table(title=title)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row(
        "day_width",
        str(config["day_width"])
        if config["day_width"] is not None
        else "None (fit to console)",
    )
    table.add_row("left_column_width", str(config["left_column_width"]))
    table.add_row(
        "random_color_for_projects",
        "✓ Enabled" if config["random_color_for_projects"] else "✗ Disabled",
    )
    table.add_row("log_level", config.get("log_level", "WARNING"))
    table.add_row(
        "data_path",
        config["data_path"]
        if config["data_path"]
        else "None (platform data directory)",
    )
    return table


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    console.print(_configuration_table(config))

    yaml_library_type = "untested"
    try:
        from yaml import CDumper as Dumper  # noqa: F401
        from yaml import CLoader as Loader  # noqa: F401

        yaml_library_type = "C"
    except ImportError:
        yaml_library_type = "Python"

    console.print()
    console.print(f"Data directory: {configuration.DATA_PATH}")
    console.print(f"YAML Library Type: {yaml_library_type}")


@app.command("set, s")
def set(
    show_header: Annotated[
        Optional[bool],
        typer.Option(
            "--show-header/--no-show-header",
            help="Enable/disable the report header",
        ),
    ] = None,
    day_width: Annotated[
        Optional[int],
        typer.Option(
            "--day-width",
            callback=validate_width,
            help="Characters per day in the gantt chart",
        ),
    ] = None,
    remove_day_width: Annotated[
        bool,
        typer.Option(
            "--remove-day-width",
            help="Fit the gantt chart to the console width again",
        ),
    ] = False,
    left_column_width: Annotated[
        Optional[int],
        typer.Option(
            "--left-column-width",
            callback=validate_width,
            help="Width of the task label column",
        ),
    ] = None,
    random_color_for_projects: Annotated[
        Optional[bool],
        typer.Option(
            "--random-color-for-projects/--no-random-color-for-projects",
            help="Enable/disable random colors for new projects",
        ),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG, INFO, WARNING, ERROR)",
        ),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option(
            "--data-path",
            help="Directory path for storing data files",
        ),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path",
            help="Reset data path to the platform default",
        ),
    ] = False,
) -> None:
    """
    Update configuration settings.
    """
    CONFIGURATION_REPO.update_config(
        show_header=show_header,
        day_width=day_width,
        remove_day_width=remove_day_width,
        left_column_width=left_column_width,
        random_color_for_projects=random_color_for_projects,
        log_level=log_level,
        data_path=data_path,
        remove_data_path=remove_data_path,
    )

    config = CONFIGURATION_REPO.get_config()

    console = Console()
    console.print("[green]Configuration updated successfully![/green]\n")
    console.print(_configuration_table(config, title="Updated Configuration"))
