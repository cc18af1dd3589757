# SPDX-License-Identifier: MIT

import json
import re
from pathlib import Path
from typing import Any, Optional, cast

import pendulum

from gantry.logger import get_logger
from gantry.model.entity_id import EntityId
from gantry.model.extracted_task import ExtractedTask
from gantry.model.todo import PRIORITIES, Priority
from gantry.repository.project import PROJECT_REPO
from gantry.template.todo import get_todo_template
from gantry.time import now_local, parse_local_datetime

logger = get_logger(__name__)

_JSON_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")


def create_timeline_todo(
    project_id: EntityId,
    title: str,
    start_date: str,
    end_date: str,
    priority: Priority = "medium",
    today: Optional[pendulum.DateTime] = None,
) -> EntityId:
    """
    Create a dated todo the way the gantt chart's task form does.

    The end date doubles as the due date so older readers of the record keep
    working.

    Raises:
        ValueError: If a field is missing, a date does not parse, or the end
            date lies before the start date
    """
    if not title or not project_id or not start_date or not end_date:
        raise ValueError("title, project, start date and end date are required")

    start = parse_local_datetime(start_date)
    end = parse_local_datetime(end_date)
    if start is None:
        raise ValueError(f"Invalid start date: {start_date}")
    if end is None:
        raise ValueError(f"Invalid end date: {end_date}")
    if end.date() < start.date():
        raise ValueError("End date must not be before the start date")

    if today is None:
        today = now_local()

    todo = get_todo_template()
    todo["title"] = title
    todo["description"] = f"Timeline task: {start_date} to {end_date}"
    todo["start_date"] = start_date
    todo["end_date"] = end_date
    todo["due_date"] = end_date
    todo["priority"] = priority
    todo["notes"] = f"Created from Gantt chart on {today.to_date_string()}"

    todo_id = PROJECT_REPO.add_todo(project_id, todo)
    logger.info("Created timeline todo %s in project %s", todo_id, project_id)
    return todo_id


def parse_extracted_tasks(content: str) -> list[ExtractedTask]:
    """
    Parse the extraction service's answer into candidate tasks.

    The service is asked for a bare JSON array but may wrap it in prose, so
    the outermost array is cut out before parsing.

    Raises:
        ValueError: If no JSON array can be read from the content
    """
    match = _JSON_ARRAY_PATTERN.search(content)
    json_string = match.group(0) if match else content
    try:
        parsed = json.loads(json_string)
    except json.JSONDecodeError as e:
        raise ValueError(f"Could not parse extracted tasks: {e}") from e

    if not isinstance(parsed, list):
        raise ValueError("Extracted tasks must be a JSON array")

    return [cast(ExtractedTask, item) for item in parsed if isinstance(item, dict)]


def load_extracted_tasks(path: Path) -> list[ExtractedTask]:
    return parse_extracted_tasks(path.read_text())


def import_extracted_tasks(
    project_id: EntityId,
    extracted_tasks: list[ExtractedTask],
    today: Optional[pendulum.DateTime] = None,
) -> int:
    """
    Turn extracted candidate tasks into todos of one project.

    Entries without a title are skipped. Unknown priorities fall back to
    medium. Dates are stored as given; the timeline engine ignores the ones
    it cannot read.

    Returns:
        The number of todos created
    """
    if today is None:
        today = now_local()

    created = 0
    for extracted in extracted_tasks:
        title = str(extracted.get("title") or "").strip()
        if not title:
            logger.debug("Skipping extracted task without title")
            continue

        confidence = _as_confidence(extracted.get("confidence"))
        end_date = extracted.get("endDate") or None

        todo = get_todo_template()
        todo["title"] = title
        todo["description"] = (
            extracted.get("description") or "AI-extracted task from image"
        )
        todo["start_date"] = extracted.get("startDate") or None
        todo["end_date"] = end_date
        todo["due_date"] = end_date
        todo["priority"] = _as_priority(extracted.get("priority"))
        todo["notes"] = (
            f"Extracted by AI with {round(confidence * 100)}% confidence "
            f"on {today.to_date_string()}"
        )

        PROJECT_REPO.add_todo(project_id, todo)
        created += 1

    logger.info("Imported %d extracted tasks into project %s", created, project_id)
    return created


def _as_priority(value: Any) -> Priority:
    if isinstance(value, str) and value.lower() in PRIORITIES:
        return cast(Priority, value.lower())
    return "medium"


def _as_confidence(value: Any) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return 0.0
