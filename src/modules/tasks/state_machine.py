"""Pure state transition functions for task lifecycle management.

Each transition validates the current status and returns an updated copy of
the task; persisting it is the caller's job.
"""

import logging
from datetime import datetime

from src.domain.task import Task, TaskStatus


logger = logging.getLogger(__name__)


# CANCELLED exists for stored data but no transition reaches it
TRANSITIONS: dict[TaskStatus, set[TaskStatus]] = {
    TaskStatus.PENDING: {TaskStatus.IN_PROGRESS},
    TaskStatus.IN_PROGRESS: {TaskStatus.COMPLETED},
    TaskStatus.COMPLETED: {TaskStatus.PENDING},
    TaskStatus.CANCELLED: set(),
}


def can_transition(current: TaskStatus, target: TaskStatus) -> bool:
    """Return True if the lifecycle allows moving from current to target."""
    return target in TRANSITIONS.get(current, set())


def _ensure_transition(task: Task, target: TaskStatus, action: str) -> None:
    if not can_transition(task.status, target):
        msg = f"Cannot {action}: task {task.id} is in {task.status} state"
        raise ValueError(msg)


def _ensure_assignee(task: Task, actor_id: str, action: str) -> None:
    if task.assigned_to != actor_id:
        msg = f"Only the assignee can {action} task {task.id}"
        raise PermissionError(msg)


def start_task(task: Task, *, actor_id: str) -> Task:
    """PENDING -> IN_PROGRESS. Needs no evidence."""
    _ensure_transition(task, TaskStatus.IN_PROGRESS, "start")
    _ensure_assignee(task, actor_id, "start")

    logger.info("Task %s started by %s", task.id, actor_id)
    return task.model_copy(update={"status": TaskStatus.IN_PROGRESS})


def complete_task(
    task: Task,
    *,
    actor_id: str,
    photos: list[str],
    observation: str | None = None,
    now: datetime,
) -> Task:
    """IN_PROGRESS -> COMPLETED, appending the staged photo evidence.

    Raises:
        ValueError: If the task is not in progress or no photo was staged
        PermissionError: If the actor is not the assignee
    """
    _ensure_transition(task, TaskStatus.COMPLETED, "complete")
    _ensure_assignee(task, actor_id, "complete")

    staged = [photo for photo in photos if photo]
    if not staged:
        msg = f"Cannot complete task {task.id} without at least one photo"
        raise ValueError(msg)

    note = observation.strip() if observation else None
    logger.info("Task %s completed by %s with %d photo(s)", task.id, actor_id, len(staged))
    return task.model_copy(
        update={
            "status": TaskStatus.COMPLETED,
            "photos": [*task.photos, *staged],
            "completed_at": now,
            "completion_observation": note or None,
        }
    )


def reopen_task(task: Task, *, now: datetime) -> Task:
    """COMPLETED -> PENDING, so the task shows up again today."""
    _ensure_transition(task, TaskStatus.PENDING, "reopen")

    logger.info("Task %s reopened", task.id)
    return task.model_copy(
        update={
            "status": TaskStatus.PENDING,
            "completed_at": None,
            "completion_observation": None,
            "scheduled_for": now,
        }
    )
