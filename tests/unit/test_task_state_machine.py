"""Unit tests for task lifecycle transitions."""

from datetime import UTC, datetime, timedelta

import pytest

from src.domain.task import Task, TaskStatus
from src.modules.tasks.state_machine import TRANSITIONS, can_transition, complete_task, reopen_task, start_task


NOW = datetime(2025, 6, 11, 15, 0, tzinfo=UTC)


def make_task(status: TaskStatus = TaskStatus.PENDING, **overrides) -> Task:
    fields = {
        "id": "t1",
        "title": "Clean the pool",
        "status": status,
        "created_at": NOW - timedelta(days=5),
        "scheduled_for": NOW - timedelta(days=1),
        "assigned_to": "w1",
        "condo_id": "c1",
        **overrides,
    }
    return Task(**fields)


@pytest.mark.unit
class TestTransitionTable:
    def test_cancelled_is_unreachable(self):
        assert all(TaskStatus.CANCELLED not in targets for targets in TRANSITIONS.values())

    def test_no_shortcut_from_pending_to_completed(self):
        assert not can_transition(TaskStatus.PENDING, TaskStatus.COMPLETED)


@pytest.mark.unit
class TestStartTask:
    """Tests for start_task."""

    def test_start_pending_task_needs_no_photo(self):
        task = make_task()

        started = start_task(task, actor_id="w1")

        assert started.status == TaskStatus.IN_PROGRESS
        assert started.photos == []
        assert started.completed_at is None
        assert task.status == TaskStatus.PENDING

    def test_only_assignee_can_start(self):
        with pytest.raises(PermissionError, match="Only the assignee"):
            start_task(make_task(), actor_id="m1")

    def test_cannot_start_task_in_progress(self):
        with pytest.raises(ValueError, match="Cannot start"):
            start_task(make_task(TaskStatus.IN_PROGRESS), actor_id="w1")


@pytest.mark.unit
class TestCompleteTask:
    """Tests for complete_task."""

    def test_rejects_completion_without_photos(self):
        task = make_task(TaskStatus.IN_PROGRESS)

        with pytest.raises(ValueError, match="photo"):
            complete_task(task, actor_id="w1", photos=[], now=NOW)

        assert task.status == TaskStatus.IN_PROGRESS
        assert task.completed_at is None

    def test_completion_appends_photos_and_stamps_time(self):
        task = make_task(TaskStatus.IN_PROGRESS, photos=["data:image/png;base64,ref"])

        completed = complete_task(
            task,
            actor_id="w1",
            photos=["data:image/png;base64,after"],
            observation="  Filter replaced  ",
            now=NOW,
        )

        assert completed.status == TaskStatus.COMPLETED
        assert completed.completed_at == NOW
        assert completed.photos == ["data:image/png;base64,ref", "data:image/png;base64,after"]
        assert completed.completion_observation == "Filter replaced"

    def test_cannot_complete_pending_task(self):
        with pytest.raises(ValueError, match="Cannot complete"):
            complete_task(make_task(), actor_id="w1", photos=["p"], now=NOW)

    def test_only_assignee_can_complete(self):
        with pytest.raises(PermissionError):
            complete_task(make_task(TaskStatus.IN_PROGRESS), actor_id="m1", photos=["p"], now=NOW)


@pytest.mark.unit
class TestReopenTask:
    """Tests for reopen_task."""

    def test_reopen_resets_completion(self):
        task = make_task(
            TaskStatus.COMPLETED,
            completed_at=NOW - timedelta(hours=3),
            completion_observation="Done",
            photos=["p"],
        )

        reopened = reopen_task(task, now=NOW)

        assert reopened.status == TaskStatus.PENDING
        assert reopened.completed_at is None
        assert reopened.completion_observation is None
        assert reopened.scheduled_for == NOW
        assert reopened.photos == ["p"]

    @pytest.mark.parametrize("status", [TaskStatus.PENDING, TaskStatus.IN_PROGRESS, TaskStatus.CANCELLED])
    def test_only_completed_tasks_can_be_reopened(self, status):
        with pytest.raises(ValueError, match="Cannot reopen"):
            reopen_task(make_task(status), now=NOW)
