# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from gantry import configuration
from gantry.model.navigation import Navigation
from gantry.service.window import reference_month_start
from gantry.time import LocalDay, datetime_from_local_date_str


class NavigationRepository:
    """Remembers which month the gantt chart starts at between invocations."""

    def __init__(self) -> None:
        self._navigation: Optional[Navigation] = None
        self.is_dirty = False

    @property
    def navigation(self) -> Navigation:
        if self._navigation is None:
            self.__load_data()
        if self._navigation is None:
            raise ValueError("navigation state could not be loaded")
        return self._navigation

    def __load_data(self) -> None:
        navigation: Optional[Navigation] = None
        if configuration.DATA_NAVIGATION_PATH.is_file():
            navigation = load(
                configuration.DATA_NAVIGATION_PATH.read_text(), Loader=Loader
            )
        if navigation is None:
            navigation = {"reference_month": None}
        self._navigation = navigation

    def __save_data(self, navigation: Navigation) -> None:
        configuration.DATA_NAVIGATION_PATH.write_text(
            dump(navigation, Dumper=Dumper)
        )

    def flush(self) -> bool:
        if self._navigation is not None and self.is_dirty:
            self.__save_data(self._navigation)
            self.is_dirty = False
            return True
        return False

    def get_reference_month(self) -> Optional[LocalDay]:
        reference_month = self.navigation["reference_month"]
        if reference_month is None:
            return None
        return reference_month_start(
            datetime_from_local_date_str(f"{reference_month}-01")
        )

    def set_reference_month(self, reference: Optional[pendulum.DateTime]) -> None:
        self.is_dirty = True
        if reference is None:
            self.navigation["reference_month"] = None
        else:
            self.navigation["reference_month"] = reference.format("YYYY-MM")


NAVIGATION_REPO = NavigationRepository()
