# SPDX-License-Identifier: MIT

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from gantry import configuration
from gantry.logger import configure_logging, get_logger
from gantry.model.navigation import Navigation
from gantry.repository.configuration import CONFIGURATION_REPO
from gantry.view import state as view_state

logger = get_logger(__name__)


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    __ensure_config_files()

    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)
    __ensure_data_files()

    config = CONFIGURATION_REPO.get_config()
    configure_logging(config.get("log_level", "WARNING"))
    view_state.set_show_header(config["show_header"])
    logger.debug("Using data directory %s", configuration.DATA_PATH)


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        configuration.APP_CONFIG_PATH.touch()
        config = configuration.get_default_configuration()
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))


def __ensure_data_files() -> None:
    if not configuration.DATA_NAVIGATION_PATH.is_file():
        configuration.DATA_NAVIGATION_PATH.touch()
        navigation: Navigation = {"reference_month": None}
        configuration.DATA_NAVIGATION_PATH.write_text(
            dump(navigation, Dumper=Dumper)
        )

    # Directory-based entity store (one file per project)
    if not configuration.DATA_PROJECTS_DIR.is_dir():
        configuration.DATA_PROJECTS_DIR.mkdir(parents=True, exist_ok=True)
        (configuration.DATA_PROJECTS_DIR / ".gitkeep").touch()
