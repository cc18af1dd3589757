# SPDX-License-Identifier: MIT

import datetime
from copy import deepcopy
from typing import Any, Optional, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from gantry import configuration, time
from gantry.logger import get_logger
from gantry.model.entity_id import EntityId, generate_entity_id
from gantry.model.meeting import Meeting, MeetingTodo
from gantry.model.project import Project, ProjectCategory, ProjectStatus
from gantry.model.todo import Priority, Todo
from gantry.template.meeting import get_meeting_template, get_meeting_todo_template
from gantry.template.project import get_project_template
from gantry.template.todo import get_todo_template

logger = get_logger(__name__)

_TODO_DATE_FIELDS = ("start_date", "end_date", "due_date")


class ProjectRepository:
    def __init__(self) -> None:
        self._projects: Optional[list[Project]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()
        self._deleted_ids: set[str] = set()

    @property
    def projects(self) -> list[Project]:
        if self._projects is None:
            self.__load_data()
        if self._projects is None:
            raise ValueError("projects could not be loaded")
        return self._projects

    def __load_data(self) -> None:
        self._projects = []
        if not configuration.DATA_PROJECTS_DIR.is_dir():
            return
        for file_path in sorted(configuration.DATA_PROJECTS_DIR.iterdir()):
            if file_path.suffix != ".yaml":
                continue
            raw_project = load(file_path.read_text(), Loader=Loader)
            if raw_project is not None:
                raw_project.setdefault("id", file_path.stem)
                self._projects.append(
                    self.__convert_project_for_deserialization(raw_project)
                )
        logger.debug(
            "Loaded %d projects from %s",
            len(self._projects),
            configuration.DATA_PROJECTS_DIR,
        )

    def __save_data(self) -> None:
        # Write dirty entities
        for project in self.projects:
            if project["id"] in self._dirty_ids:
                serializable_project = self.__convert_project_for_serialization(
                    deepcopy(project)
                )
                file_path = configuration.DATA_PROJECTS_DIR / f"{project['id']}.yaml"
                file_path.write_text(dump(serializable_project, Dumper=Dumper))

        # Remove hard-deleted entity files
        for entity_id in self._deleted_ids:
            file_path = configuration.DATA_PROJECTS_DIR / f"{entity_id}.yaml"
            if file_path.exists():
                file_path.unlink()

        logger.debug(
            "Flushed %d projects, removed %d",
            len(self._dirty_ids),
            len(self._deleted_ids),
        )

        # Clear tracking sets
        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def flush(self) -> bool:
        if self._projects is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_project_for_serialization(self, project: Project) -> dict[str, Any]:
        serializable_project = cast(dict[str, Any], project)
        self.__convert_timestamps_for_serialization(serializable_project)
        for todo in serializable_project["todos"]:
            self.__convert_timestamps_for_serialization(todo)
        for meeting in serializable_project["meetings"]:
            self.__convert_timestamps_for_serialization(meeting)
            for meeting_todo in meeting["todos"]:
                self.__convert_timestamps_for_serialization(meeting_todo)
        return serializable_project

    def __convert_timestamps_for_serialization(self, entity: dict[str, Any]) -> None:
        entity["created"] = time.datetime_to_iso_str(entity["created"])
        entity["updated"] = time.datetime_to_iso_str(entity["updated"])

    def __convert_project_for_deserialization(self, project: dict[str, Any]) -> Project:
        self.__convert_timestamps_for_deserialization(project)
        _fill_missing(project, get_project_template())
        project["due_date"] = _as_date_str(project.get("due_date"))
        for todo in project["todos"]:
            self.__convert_timestamps_for_deserialization(todo)
            _fill_missing(todo, get_todo_template())
            for field in _TODO_DATE_FIELDS:
                todo[field] = _as_date_str(todo.get(field))
        for meeting in project["meetings"]:
            self.__convert_timestamps_for_deserialization(meeting)
            _fill_missing(meeting, get_meeting_template())
            meeting["meeting_date"] = _as_date_str(meeting.get("meeting_date"))
            for meeting_todo in meeting["todos"]:
                self.__convert_timestamps_for_deserialization(meeting_todo)
                _fill_missing(meeting_todo, get_meeting_todo_template())
                meeting_todo["due_date"] = _as_date_str(meeting_todo.get("due_date"))
        return cast(Project, project)

    def __convert_timestamps_for_deserialization(self, entity: dict[str, Any]) -> None:
        for field in ("created", "updated"):
            value = entity.get(field)
            if isinstance(value, datetime.datetime):
                # unquoted timestamps come back from YAML as datetime objects
                entity[field] = time.parse_local_datetime(value)
            elif isinstance(value, str):
                entity[field] = time.datetime_from_str(value)

    def __find_project(self, id: EntityId) -> Project:
        for project in self.projects:
            if project["id"] == id:
                return project
        raise ValueError(f"No project with id {id}")

    def __find_meeting(self, project: Project, meeting_id: EntityId) -> Meeting:
        for meeting in project["meetings"]:
            if meeting["id"] == meeting_id:
                return meeting
        raise ValueError(f"No meeting with id {meeting_id} in project {project['id']}")

    def __touch(self, project: Project) -> None:
        self.is_dirty = True
        project["updated"] = time.now_utc()
        self._dirty_ids.add(cast(str, project["id"]))

    def resolve_project_id(self, id_prefix: str) -> EntityId:
        """Expand an id or a unique id prefix to the full project id."""
        return _resolve_prefix(
            id_prefix, [cast(str, project["id"]) for project in self.projects]
        )

    def resolve_todo_id(self, project_id: EntityId, id_prefix: str) -> EntityId:
        project = self.__find_project(project_id)
        return _resolve_prefix(
            id_prefix, [cast(str, todo["id"]) for todo in project["todos"]]
        )

    def resolve_meeting_id(self, project_id: EntityId, id_prefix: str) -> EntityId:
        project = self.__find_project(project_id)
        return _resolve_prefix(
            id_prefix, [cast(str, meeting["id"]) for meeting in project["meetings"]]
        )

    def resolve_meeting_todo_id(
        self, project_id: EntityId, meeting_id: EntityId, id_prefix: str
    ) -> EntityId:
        meeting = self.__find_meeting(self.__find_project(project_id), meeting_id)
        return _resolve_prefix(
            id_prefix, [cast(str, todo["id"]) for todo in meeting["todos"]]
        )

    def save_new_project(self, project: Project) -> EntityId:
        project["id"] = generate_entity_id()
        self.projects.append(project)
        self.is_dirty = True
        self._dirty_ids.add(project["id"])
        return project["id"]

    def modify_project(
        self,
        id: EntityId,
        title: Optional[str] = None,
        description: Optional[str] = None,
        color: Optional[str] = None,
        category: Optional[ProjectCategory] = None,
        status: Optional[ProjectStatus] = None,
        due_date: Optional[str] = None,
        remove_description: bool = False,
        remove_due_date: bool = False,
    ) -> None:
        project = self.__find_project(id)
        self.__touch(project)

        if title is not None:
            project["title"] = title
        if description is not None:
            project["description"] = description
        if color is not None:
            project["color"] = color
        if category is not None:
            project["category"] = category
        if status is not None:
            project["status"] = status
        if due_date is not None:
            project["due_date"] = due_date

        if remove_description:
            project["description"] = None
        if remove_due_date:
            project["due_date"] = None

    def delete_project(self, id: EntityId) -> None:
        project = self.__find_project(id)
        self.projects.remove(project)
        self.is_dirty = True
        self._dirty_ids.discard(id)
        self._deleted_ids.add(id)

    def add_todo(self, project_id: EntityId, todo: Todo) -> EntityId:
        project = self.__find_project(project_id)
        todo["id"] = generate_entity_id()
        project["todos"].append(todo)
        self.__touch(project)
        return todo["id"]

    def modify_todo(
        self,
        project_id: EntityId,
        todo_id: EntityId,
        title: Optional[str] = None,
        completed: Optional[bool] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        due_date: Optional[str] = None,
        priority: Optional[Priority] = None,
        notes: Optional[str] = None,
    ) -> None:
        project = self.__find_project(project_id)
        todos = [todo for todo in project["todos"] if todo["id"] == todo_id]
        if len(todos) == 0:
            raise ValueError(f"No todo with id {todo_id} in project {project_id}")
        todo = todos[0]
        self.__touch(project)
        todo["updated"] = project["updated"]

        if title is not None:
            todo["title"] = title
        if completed is not None:
            todo["completed"] = completed
        if start_date is not None:
            todo["start_date"] = start_date
        if end_date is not None:
            todo["end_date"] = end_date
        if due_date is not None:
            todo["due_date"] = due_date
        if priority is not None:
            todo["priority"] = priority
        if notes is not None:
            todo["notes"] = notes

    def add_meeting(self, project_id: EntityId, meeting: Meeting) -> EntityId:
        project = self.__find_project(project_id)
        meeting["id"] = generate_entity_id()
        project["meetings"].append(meeting)
        self.__touch(project)
        return meeting["id"]

    def add_meeting_todo(
        self, project_id: EntityId, meeting_id: EntityId, meeting_todo: MeetingTodo
    ) -> EntityId:
        project = self.__find_project(project_id)
        meeting = self.__find_meeting(project, meeting_id)
        meeting_todo["id"] = generate_entity_id()
        meeting["todos"].append(meeting_todo)
        self.__touch(project)
        return meeting_todo["id"]

    def modify_meeting_todo(
        self,
        project_id: EntityId,
        meeting_id: EntityId,
        meeting_todo_id: EntityId,
        completed: Optional[bool] = None,
        due_date: Optional[str] = None,
        assigned_to: Optional[str] = None,
    ) -> None:
        project = self.__find_project(project_id)
        meeting = self.__find_meeting(project, meeting_id)
        meeting_todos = [
            todo for todo in meeting["todos"] if todo["id"] == meeting_todo_id
        ]
        if len(meeting_todos) == 0:
            raise ValueError(
                f"No action item with id {meeting_todo_id} in meeting {meeting_id}"
            )
        meeting_todo = meeting_todos[0]
        self.__touch(project)
        meeting_todo["updated"] = project["updated"]

        if completed is not None:
            meeting_todo["completed"] = completed
        if due_date is not None:
            meeting_todo["due_date"] = due_date
        if assigned_to is not None:
            meeting_todo["assigned_to"] = assigned_to

    def get_all_projects(self) -> list[Project]:
        return deepcopy(self.projects)

    def get_project(self, id: EntityId) -> Project:
        return deepcopy(self.__find_project(id))


def _fill_missing(entity: dict[str, Any], template: Any) -> None:
    # sparse hand-edited records get the same defaults as freshly created ones
    for key, value in template.items():
        if entity.get(key) is None:
            entity[key] = value
    entity["id"] = (
        generate_entity_id() if entity["id"] is None else str(entity["id"])
    )


def _as_date_str(value: Any) -> Optional[str]:
    # hand-edited files may carry unquoted dates that YAML loads as date objects
    if isinstance(value, datetime.date):
        return value.isoformat()
    if value is None:
        return None
    return str(value)


def _resolve_prefix(id_prefix: str, ids: list[EntityId]) -> EntityId:
    if id_prefix in ids:
        return id_prefix
    matches = [id for id in ids if id.startswith(id_prefix)]
    if len(matches) == 0:
        raise ValueError(f"No entity matches id {id_prefix}")
    if len(matches) > 1:
        raise ValueError(f"Id {id_prefix} is ambiguous ({len(matches)} matches)")
    return matches[0]


PROJECT_REPO = ProjectRepository()
