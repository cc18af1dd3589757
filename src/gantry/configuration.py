# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import NotRequired, Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "gantry"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_PROJECTS_DIR: Path = DATA_PATH / "projects"
DATA_NAVIGATION_PATH: Path = DATA_PATH / "navigation.yaml"


class Configuration(TypedDict):
    data_path: Optional[str]
    show_header: bool
    day_width: Optional[int]
    left_column_width: int
    random_color_for_projects: bool
    log_level: NotRequired[str]


def get_default_configuration() -> Configuration:
    return {
        "data_path": None,
        "show_header": True,
        "day_width": None,
        "left_column_width": 40,
        "random_color_for_projects": False,
        "log_level": "WARNING",
    }


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories are instantiated.
    """
    global DATA_PATH, DATA_PROJECTS_DIR, DATA_NAVIGATION_PATH

    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return
    data_path_setting = config.get("data_path")

    if data_path_setting is not None:
        DATA_PATH = Path(data_path_setting)
        DATA_PROJECTS_DIR = DATA_PATH / "projects"
        DATA_NAVIGATION_PATH = DATA_PATH / "navigation.yaml"
