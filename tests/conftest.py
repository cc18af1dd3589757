"""
Test fixtures - isolated config/data directories + a fixed clock
"""
import pendulum
import pytest

from gantry import configuration
from gantry.initialize import initialize
from gantry.repository.configuration import CONFIGURATION_REPO
from gantry.repository.navigation import NAVIGATION_REPO
from gantry.repository.project import PROJECT_REPO
from gantry.view import state as view_state


@pytest.fixture()
def isolated_data(tmp_path, monkeypatch):
    """Point every config and data path at tmp_path and start with empty repositories"""
    config_path = tmp_path / "config"
    data_path = tmp_path / "data"

    monkeypatch.setattr(configuration, "CONFIG_PATH", config_path)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_path / "config.yaml")
    monkeypatch.setattr(configuration, "DATA_PATH", data_path)
    monkeypatch.setattr(configuration, "DATA_PROJECTS_DIR", data_path / "projects")
    monkeypatch.setattr(
        configuration, "DATA_NAVIGATION_PATH", data_path / "navigation.yaml"
    )

    monkeypatch.setattr(PROJECT_REPO, "_projects", None)
    monkeypatch.setattr(PROJECT_REPO, "is_dirty", False)
    monkeypatch.setattr(PROJECT_REPO, "_dirty_ids", set())
    monkeypatch.setattr(PROJECT_REPO, "_deleted_ids", set())
    monkeypatch.setattr(CONFIGURATION_REPO, "_config", None)
    monkeypatch.setattr(CONFIGURATION_REPO, "is_dirty", False)
    monkeypatch.setattr(NAVIGATION_REPO, "_navigation", None)
    monkeypatch.setattr(NAVIGATION_REPO, "is_dirty", False)

    initialize()
    view_state.set_show_header(False)
    view_state.set_no_wrap(False)

    yield data_path

    view_state.set_show_header(True)


@pytest.fixture()
def now():
    """A fixed instant in the middle of a day, local time"""
    return pendulum.datetime(2024, 3, 10, 12, 0, 0, tz="local")


def make_todo(**overrides):
    todo = {
        "id": "todo-1",
        "title": "Write report",
        "description": None,
        "completed": False,
        "start_date": None,
        "end_date": None,
        "due_date": None,
        "notes": None,
        "priority": "medium",
        "created": pendulum.datetime(2024, 3, 1, 9, 0, 0, tz="local"),
        "updated": pendulum.datetime(2024, 3, 1, 9, 0, 0, tz="local"),
    }
    todo.update(overrides)
    return todo


def make_meeting_todo(**overrides):
    meeting_todo = {
        "id": "action-1",
        "title": "Send minutes",
        "description": None,
        "assigned_to": None,
        "due_date": None,
        "priority": "medium",
        "completed": False,
        "created": pendulum.datetime(2024, 3, 1, 9, 0, 0, tz="local"),
        "updated": pendulum.datetime(2024, 3, 1, 9, 0, 0, tz="local"),
    }
    meeting_todo.update(overrides)
    return meeting_todo


def make_meeting(todos=None, **overrides):
    meeting = {
        "id": "meeting-1",
        "title": "Kickoff",
        "description": None,
        "meeting_date": "2024-03-05",
        "duration": 60,
        "status": "completed",
        "created": pendulum.datetime(2024, 3, 1, 9, 0, 0, tz="local"),
        "updated": pendulum.datetime(2024, 3, 1, 9, 0, 0, tz="local"),
        "todos": todos if todos is not None else [],
    }
    meeting.update(overrides)
    return meeting


def make_project(todos=None, meetings=None, **overrides):
    project = {
        "id": "project-1",
        "title": "Website relaunch",
        "description": None,
        "color": "#3b82f6",
        "category": "main",
        "status": "active",
        "due_date": None,
        "created": pendulum.datetime(2024, 2, 1, 9, 0, 0, tz="local"),
        "updated": pendulum.datetime(2024, 2, 1, 9, 0, 0, tz="local"),
        "todos": todos if todos is not None else [],
        "meetings": meetings if meetings is not None else [],
    }
    project.update(overrides)
    return project
