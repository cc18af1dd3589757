"""
Repository tests - per-project YAML files, dirty tracking, id prefixes, navigation, config
"""
import datetime

import pendulum
import pytest
from yaml import safe_dump, safe_load

from gantry import configuration
from gantry.repository.configuration import CONFIGURATION_REPO
from gantry.repository.navigation import NAVIGATION_REPO
from gantry.repository.project import PROJECT_REPO
from gantry.service.timeline import materialize_tasks
from gantry.template.meeting import get_meeting_template, get_meeting_todo_template
from gantry.template.project import get_project_template
from gantry.template.todo import get_todo_template


def reload_projects():
    PROJECT_REPO._projects = None
    return PROJECT_REPO.get_all_projects()


def new_project(title="Website relaunch"):
    project = get_project_template()
    project["title"] = title
    return PROJECT_REPO.save_new_project(project)


# ===================== PROJECTS =====================


class TestProjectRepository:

    def test_starts_empty(self, isolated_data):
        assert PROJECT_REPO.get_all_projects() == []

    def test_flush_writes_one_file_per_project(self, isolated_data):
        first = new_project("First")
        second = new_project("Second")
        assert PROJECT_REPO.flush() is True

        files = sorted(path.name for path in (isolated_data / "projects").glob("*.yaml"))
        assert files == sorted([f"{first}.yaml", f"{second}.yaml"])

    def test_flush_without_changes_does_nothing(self, isolated_data):
        assert PROJECT_REPO.flush() is False

    def test_round_trip_keeps_nested_records(self, isolated_data):
        project_id = new_project()
        todo = get_todo_template()
        todo["title"] = "Draft copy"
        todo["end_date"] = "2024-03-15"
        todo_id = PROJECT_REPO.add_todo(project_id, todo)

        meeting = get_meeting_template()
        meeting["title"] = "Kickoff"
        meeting["meeting_date"] = "2024-03-01"
        meeting_id = PROJECT_REPO.add_meeting(project_id, meeting)
        action = get_meeting_todo_template()
        action["title"] = "Send minutes"
        action["due_date"] = "2024-03-04"
        PROJECT_REPO.add_meeting_todo(project_id, meeting_id, action)
        PROJECT_REPO.flush()

        project = reload_projects()[0]
        assert project["todos"][0]["id"] == todo_id
        assert project["todos"][0]["end_date"] == "2024-03-15"
        assert isinstance(project["created"], pendulum.DateTime)
        assert isinstance(project["todos"][0]["updated"], pendulum.DateTime)
        assert project["meetings"][0]["todos"][0]["due_date"] == "2024-03-04"

    def test_unquoted_yaml_dates_are_read_as_strings(self, isolated_data):
        project_id = new_project()
        todo = get_todo_template()
        todo["title"] = "Hand edited"
        PROJECT_REPO.add_todo(project_id, todo)
        PROJECT_REPO.flush()

        path = isolated_data / "projects" / f"{project_id}.yaml"
        raw = safe_load(path.read_text())
        raw["todos"][0]["end_date"] = datetime.date(2024, 3, 15)
        path.write_text(safe_dump(raw))

        project = reload_projects()[0]
        assert project["todos"][0]["end_date"] == "2024-03-15"

    def test_sparse_hand_written_file_is_usable(self, isolated_data):
        projects_dir = isolated_data / "projects"
        projects_dir.mkdir(parents=True, exist_ok=True)
        (projects_dir / "handmade.yaml").write_text(
            safe_dump(
                {
                    "title": "Hand made",
                    "todos": [
                        {
                            "id": "t1",
                            "title": "Draft",
                            "end_date": "2024-03-15",
                            "completed": False,
                        }
                    ],
                    "meetings": [
                        {
                            "title": "Sync",
                            "meeting_date": "2024-03-05",
                            "todos": [{"title": "Follow up", "due_date": "2024-03-08"}],
                        }
                    ],
                }
            )
        )

        projects = reload_projects()
        project = projects[0]
        assert project["id"] == "handmade"
        assert project["color"] == "#3b82f6"
        assert project["todos"][0]["priority"] == "medium"
        assert project["todos"][0]["notes"] is None
        assert isinstance(project["todos"][0]["created"], pendulum.DateTime)
        assert isinstance(project["meetings"][0]["id"], str)

        now = pendulum.datetime(2024, 3, 10, 12, 0, 0, tz="local")
        tasks = materialize_tasks(projects, now=now)
        assert sorted(task["title"] for task in tasks) == ["Draft", "Follow up"]

        PROJECT_REPO.modify_project("handmade", title="Renamed")
        assert PROJECT_REPO.flush()
        assert reload_projects()[0]["title"] == "Renamed"

    def test_getters_return_copies(self, isolated_data):
        project_id = new_project()
        PROJECT_REPO.get_project(project_id)["title"] = "changed"
        assert PROJECT_REPO.get_project(project_id)["title"] == "Website relaunch"

    def test_modify_project(self, isolated_data):
        project_id = new_project()
        PROJECT_REPO.modify_project(
            project_id, title="Renamed", status="hold", due_date="2024-06-01"
        )
        PROJECT_REPO.modify_project(project_id, remove_due_date=True)
        project = PROJECT_REPO.get_project(project_id)
        assert project["title"] == "Renamed"
        assert project["status"] == "hold"
        assert project["due_date"] is None

    def test_delete_removes_file(self, isolated_data):
        project_id = new_project()
        PROJECT_REPO.flush()
        PROJECT_REPO.delete_project(project_id)
        PROJECT_REPO.flush()

        assert not (isolated_data / "projects" / f"{project_id}.yaml").exists()
        assert reload_projects() == []

    def test_modify_todo_and_meeting_todo(self, isolated_data):
        project_id = new_project()
        todo_id = PROJECT_REPO.add_todo(project_id, get_todo_template())
        meeting_id = PROJECT_REPO.add_meeting(project_id, get_meeting_template())
        action_id = PROJECT_REPO.add_meeting_todo(
            project_id, meeting_id, get_meeting_todo_template()
        )

        PROJECT_REPO.modify_todo(project_id, todo_id, completed=True, end_date="2024-03-09")
        PROJECT_REPO.modify_meeting_todo(
            project_id, meeting_id, action_id, completed=True, assigned_to="Dana"
        )

        project = PROJECT_REPO.get_project(project_id)
        assert project["todos"][0]["completed"] is True
        assert project["todos"][0]["end_date"] == "2024-03-09"
        assert project["meetings"][0]["todos"][0]["completed"] is True
        assert project["meetings"][0]["todos"][0]["assigned_to"] == "Dana"

    def test_unknown_ids_raise(self, isolated_data):
        project_id = new_project()
        with pytest.raises(ValueError):
            PROJECT_REPO.get_project("missing")
        with pytest.raises(ValueError):
            PROJECT_REPO.modify_todo(project_id, "missing", completed=True)
        with pytest.raises(ValueError):
            PROJECT_REPO.add_meeting_todo(
                project_id, "missing", get_meeting_todo_template()
            )


class TestIdResolution:

    def test_unique_prefix_resolves(self, isolated_data):
        project_id = new_project()
        assert PROJECT_REPO.resolve_project_id(project_id[:6]) == project_id
        assert PROJECT_REPO.resolve_project_id(project_id) == project_id

    def test_unknown_prefix_raises(self, isolated_data):
        new_project()
        with pytest.raises(ValueError, match="No entity"):
            PROJECT_REPO.resolve_project_id("zzzz-not-there")

    def test_ambiguous_prefix_raises(self, isolated_data):
        new_project("One")
        new_project("Two")
        with pytest.raises(ValueError, match="ambiguous"):
            PROJECT_REPO.resolve_project_id("")


# ===================== NAVIGATION + CONFIGURATION =====================


class TestNavigationRepository:

    def test_defaults_to_following_today(self, isolated_data):
        assert NAVIGATION_REPO.get_reference_month() is None

    def test_persists_reference_month(self, isolated_data):
        NAVIGATION_REPO.set_reference_month(pendulum.datetime(2024, 11, 17, tz="local"))
        assert NAVIGATION_REPO.flush() is True
        assert safe_load(configuration.DATA_NAVIGATION_PATH.read_text()) == {
            "reference_month": "2024-11"
        }

        NAVIGATION_REPO._navigation = None
        assert NAVIGATION_REPO.get_reference_month() == pendulum.datetime(
            2024, 11, 1, tz="local"
        )

    def test_reset(self, isolated_data):
        NAVIGATION_REPO.set_reference_month(pendulum.datetime(2024, 11, 17, tz="local"))
        NAVIGATION_REPO.set_reference_month(None)
        assert NAVIGATION_REPO.get_reference_month() is None


class TestConfigurationRepository:

    def test_defaults_written_on_first_run(self, isolated_data):
        config = CONFIGURATION_REPO.get_config()
        assert config == configuration.get_default_configuration()

    def test_missing_keys_are_back_filled(self, isolated_data):
        configuration.APP_CONFIG_PATH.write_text(safe_dump({"data_path": None}))
        CONFIGURATION_REPO._config = None
        config = CONFIGURATION_REPO.get_config()
        assert config["left_column_width"] == 40
        assert config["day_width"] is None

    def test_update_and_flush(self, isolated_data):
        CONFIGURATION_REPO.update_config(day_width=3, log_level="debug")
        assert CONFIGURATION_REPO.flush() is True

        stored = safe_load(configuration.APP_CONFIG_PATH.read_text())
        assert stored["day_width"] == 3
        assert stored["log_level"] == "DEBUG"

        CONFIGURATION_REPO.update_config(remove_day_width=True)
        assert CONFIGURATION_REPO.get_config()["day_width"] is None
