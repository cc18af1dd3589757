"""
Task materialization tests - date fallbacks, derived status/progress, exclusion rules
"""
import math

import pendulum
import pytest

from conftest import make_meeting, make_meeting_todo, make_project, make_todo
from gantry.model.timeline import TaskSource, TaskStatus, task_key
from gantry.service.timeline import derive_progress, derive_status, materialize_tasks
from gantry.time import end_of_local_day, start_of_local_day


def local_day(year, month, day):
    return start_of_local_day(pendulum.datetime(year, month, day, tz="local"))


# ===================== DERIVED FIELDS =====================


class TestDeriveStatus:

    def test_completed_wins_over_dates(self, now):
        start = local_day(2024, 4, 1)
        end = end_of_local_day(start)
        assert derive_status(True, start, end, now) == TaskStatus.COMPLETE

    def test_in_progress_when_today_is_inside_range(self, now):
        start = local_day(2024, 3, 1)
        end = end_of_local_day(local_day(2024, 3, 15))
        assert derive_status(False, start, end, now) == TaskStatus.IN_PROGRESS

    def test_in_progress_on_first_and_last_day(self, now):
        today = start_of_local_day(now)
        assert (
            derive_status(False, today, end_of_local_day(local_day(2024, 3, 20)), now)
            == TaskStatus.IN_PROGRESS
        )
        assert (
            derive_status(False, local_day(2024, 3, 1), end_of_local_day(today), now)
            == TaskStatus.IN_PROGRESS
        )

    def test_on_hold_once_end_has_passed(self, now):
        start = local_day(2024, 2, 1)
        end = end_of_local_day(local_day(2024, 3, 9))
        assert derive_status(False, start, end, now) == TaskStatus.ON_HOLD

    def test_not_started_before_start(self, now):
        start = local_day(2024, 3, 11)
        end = end_of_local_day(local_day(2024, 3, 20))
        assert derive_status(False, start, end, now) == TaskStatus.NOT_STARTED


class TestDeriveProgress:

    def test_completed_is_full(self, now):
        start = local_day(2024, 5, 1)
        assert derive_progress(True, start, end_of_local_day(start), now) == 100

    def test_linear_over_inclusive_days(self, now):
        start = local_day(2024, 3, 1)
        end = end_of_local_day(local_day(2024, 3, 15))
        assert derive_progress(False, start, end, now) == pytest.approx(60)

    def test_future_task_is_zero(self, now):
        start = local_day(2024, 4, 1)
        end = end_of_local_day(local_day(2024, 4, 10))
        assert derive_progress(False, start, end, now) == 0

    def test_overdue_task_is_capped(self, now):
        start = local_day(2024, 1, 1)
        end = end_of_local_day(local_day(2024, 1, 10))
        assert derive_progress(False, start, end, now) == 100

    def test_single_day_task_starting_today(self, now):
        today = start_of_local_day(now)
        progress = derive_progress(False, today, end_of_local_day(today), now)
        assert progress == 0
        assert math.isfinite(progress)


# ===================== MATERIALIZATION =====================


class TestProjectTodos:

    def test_falls_back_to_creation_for_start(self, now):
        todo = make_todo(
            end_date="2024-03-15",
            created=pendulum.datetime(2024, 3, 1, 10, 0, 0, tz="local"),
        )
        tasks = materialize_tasks([make_project(todos=[todo])], now=now)

        assert len(tasks) == 1
        task = tasks[0]
        assert task["start"] == local_day(2024, 3, 1)
        assert task["end"] == end_of_local_day(local_day(2024, 3, 15))
        assert task["status"] == TaskStatus.IN_PROGRESS
        assert task["progress"] == pytest.approx(60)

    def test_explicit_start_date_wins(self, now):
        todo = make_todo(start_date="2024-03-05", end_date="2024-03-08")
        task = materialize_tasks([make_project(todos=[todo])], now=now)[0]
        assert task["start"] == local_day(2024, 3, 5)
        assert task["status"] == TaskStatus.ON_HOLD

    def test_due_date_used_when_end_date_missing(self, now):
        todo = make_todo(due_date="2024-03-20")
        task = materialize_tasks([make_project(todos=[todo])], now=now)[0]
        assert task["end"] == end_of_local_day(local_day(2024, 3, 20))

    def test_end_date_wins_over_due_date(self, now):
        todo = make_todo(end_date="2024-03-12", due_date="2024-03-20")
        task = materialize_tasks([make_project(todos=[todo])], now=now)[0]
        assert task["end"] == end_of_local_day(local_day(2024, 3, 12))

    def test_todo_without_end_is_excluded(self, now):
        todo = make_todo(start_date="2024-03-01")
        assert materialize_tasks([make_project(todos=[todo])], now=now) == []

    def test_malformed_end_is_excluded(self, now):
        todo = make_todo(end_date="someday", due_date=None)
        assert materialize_tasks([make_project(todos=[todo])], now=now) == []

    def test_malformed_start_falls_back_to_creation(self, now):
        todo = make_todo(
            start_date="31/02/2024",
            end_date="2024-03-15",
            created=pendulum.datetime(2024, 3, 2, 8, 0, 0, tz="local"),
        )
        task = materialize_tasks([make_project(todos=[todo])], now=now)[0]
        assert task["start"] == local_day(2024, 3, 2)

    def test_start_after_end_is_pulled_back(self, now):
        todo = make_todo(
            end_date="2024-02-20",
            created=pendulum.datetime(2024, 3, 1, 9, 0, 0, tz="local"),
        )
        task = materialize_tasks([make_project(todos=[todo])], now=now)[0]
        assert task["start"] == local_day(2024, 2, 20)
        assert task["end"] >= task["start"]

    def test_project_fields_are_copied(self, now):
        todo = make_todo(end_date="2024-03-15", priority=None)
        project = make_project(todos=[todo], color="#ef4444", title="Ops")
        task = materialize_tasks([project], now=now)[0]
        assert task["project_id"] == "project-1"
        assert task["project_title"] == "Ops"
        assert task["project_color"] == "#ef4444"
        assert task["priority"] == "medium"
        assert task["source"] == TaskSource.PROJECT
        assert task["ref"] == {"source": TaskSource.PROJECT, "id": "todo-1"}


class TestMeetingTodos:

    def test_completed_action_item_is_complete(self, now):
        action = make_meeting_todo(due_date="2024-03-10", completed=True)
        meeting = make_meeting(todos=[action], meeting_date="2024-03-01")
        tasks = materialize_tasks([make_project(meetings=[meeting])], now=now)

        assert len(tasks) == 1
        assert tasks[0]["status"] == TaskStatus.COMPLETE
        assert tasks[0]["progress"] == 100
        assert tasks[0]["start"] == local_day(2024, 3, 1)
        assert tasks[0]["source"] == TaskSource.MEETING

    def test_action_item_without_due_date_is_excluded(self, now):
        meeting = make_meeting(todos=[make_meeting_todo(due_date=None)])
        assert materialize_tasks([make_project(meetings=[meeting])], now=now) == []

    def test_action_item_with_bad_meeting_date_is_excluded(self, now):
        action = make_meeting_todo(due_date="2024-03-10")
        meeting = make_meeting(todos=[action], meeting_date="not a date")
        assert materialize_tasks([make_project(meetings=[meeting])], now=now) == []

    def test_assignee_is_part_of_title(self, now):
        action = make_meeting_todo(due_date="2024-03-10", assigned_to="Dana")
        meeting = make_meeting(todos=[action])
        task = materialize_tasks([make_project(meetings=[meeting])], now=now)[0]
        assert task["title"] == "Send minutes (Dana)"
        assert "Kickoff" in task["description"]
        assert "Assigned to: Dana" in task["notes"]

    def test_ref_carries_meeting_id(self, now):
        action = make_meeting_todo(due_date="2024-03-10")
        meeting = make_meeting(todos=[action])
        task = materialize_tasks([make_project(meetings=[meeting])], now=now)[0]
        assert task["ref"] == {
            "source": TaskSource.MEETING,
            "id": "action-1",
            "meeting_id": "meeting-1",
        }


class TestMaterializationPass:

    def test_sorted_by_start(self, now):
        todos = [
            make_todo(id="late", start_date="2024-03-20", end_date="2024-03-25"),
            make_todo(id="early", start_date="2024-03-02", end_date="2024-03-25"),
        ]
        action = make_meeting_todo(due_date="2024-03-12")
        meeting = make_meeting(todos=[action], meeting_date="2024-03-05")
        tasks = materialize_tasks(
            [make_project(todos=todos, meetings=[meeting])], now=now
        )
        assert [task["ref"]["id"] for task in tasks] == ["early", "action-1", "late"]

    def test_bad_records_do_not_stop_the_pass(self, now):
        todos = [
            make_todo(id="broken", end_date="garbage"),
            make_todo(id="fine", end_date="2024-03-15"),
        ]
        tasks = materialize_tasks([make_project(todos=todos)], now=now)
        assert [task["ref"]["id"] for task in tasks] == ["fine"]

    def test_sparse_records_do_not_stop_the_pass(self, now):
        todo = {"id": "bare", "title": "Bare", "end_date": "2024-03-15"}
        meeting = {
            "id": "m1",
            "title": "Sync",
            "meeting_date": "2024-03-05",
            "todos": [{"id": "a1", "title": "Follow up", "due_date": "2024-03-08"}],
        }
        project = {
            "id": "p1",
            "title": "Sparse",
            "color": "#3b82f6",
            "todos": [todo],
            "meetings": [meeting],
        }
        tasks = materialize_tasks([project], now=now)
        assert [task["ref"]["id"] for task in tasks] == ["a1", "bare"]
        assert tasks[1]["priority"] == "medium"
        assert tasks[1]["start"] == local_day(2024, 3, 10)
        assert tasks[0]["notes"].endswith("Assigned to: Unassigned")

    def test_completed_tasks_are_always_complete_and_full(self, now):
        todos = [
            make_todo(id="a", end_date="2023-01-01", completed=True),
            make_todo(id="b", start_date="2025-01-01", end_date="2025-02-01", completed=True),
        ]
        for task in materialize_tasks([make_project(todos=todos)], now=now):
            assert task["status"] == TaskStatus.COMPLETE
            assert task["progress"] == 100

    def test_progress_stays_in_bounds(self, now):
        todos = [
            make_todo(id="past", start_date="2023-01-01", end_date="2023-01-02"),
            make_todo(id="future", start_date="2025-01-01", end_date="2025-01-02"),
            make_todo(id="same-day", start_date="2024-03-10", end_date="2024-03-10"),
        ]
        for task in materialize_tasks([make_project(todos=todos)], now=now):
            assert 0 <= task["progress"] <= 100
            assert math.isfinite(task["progress"])

    def test_task_keys_do_not_collide_across_sources(self, now):
        todo = make_todo(id="same", end_date="2024-03-15")
        action = make_meeting_todo(id="same", due_date="2024-03-15")
        project = make_project(todos=[todo], meetings=[make_meeting(todos=[action])])
        keys = {task_key(task["ref"]) for task in materialize_tasks([project], now=now)}
        assert len(keys) == 2
