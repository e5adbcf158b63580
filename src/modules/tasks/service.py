"""Task service: scheduling, lifecycle transitions and task lists."""

import logging
from datetime import datetime

from pydantic import BaseModel, Field

from src.core.clock import local_date, local_tz, utc_now
from src.core.config import constants
from src.core.db_client import RecordNotFoundError
from src.core.logging import span
from src.core.permissions import Capability, require_capability
from src.core.repository import Repositories
from src.domain.log import LogAction, LogModule
from src.domain.task import Task, TaskFrequency, TaskStatus
from src.domain.update_models import TaskUpdate
from src.domain.user import User
from src.modules.tasks import state_machine, visibility
from src.modules.tasks.visibility import TaskViewFilter
from src.services import activity_log_service


logger = logging.getLogger(__name__)


class TodayList(BaseModel):
    """Tasks shown in the today list plus the filter-tab badge counts."""

    tasks: list[Task] = Field(default_factory=list)
    counts: dict[str, int] = Field(default_factory=dict)


async def resolve_assignee_name(*, repos: Repositories, assigned_to: str) -> str:
    """Display name of a user or vendor ID, or the unassigned label."""
    if not assigned_to:
        return constants.UNASSIGNED_NAME
    for repository in (repos.users, repos.vendors):
        try:
            return (await repository.get(assigned_to)).name
        except RecordNotFoundError:
            continue
    logger.warning("Task assignee %s matches no user or vendor", assigned_to)
    return constants.UNASSIGNED_NAME


async def _log(repos: Repositories, actor: User, action: LogAction, task: Task) -> None:
    await activity_log_service.record(
        repos=repos,
        actor=actor,
        action=action,
        module=LogModule.TASK,
        target_name=task.title,
        condo_id=task.condo_id,
    )


async def create_tasks(
    *,
    repos: Repositories,
    actor: User,
    condo_id: str,
    title: str,
    scheduled_dates: list[datetime],
    description: str = "",
    frequency: TaskFrequency = TaskFrequency.DAILY,
    category: str = "",
    assigned_to: str = "",
    photos: list[str] | None = None,
    now: datetime | None = None,
) -> list[Task]:
    """Schedule a task.

    A one-off task is created once per given date; a recurring task only uses
    the first date as its start date.

    Args:
        repos: Repository bundle
        actor: User scheduling the task
        condo_id: Owning condominium
        title: Task title
        scheduled_dates: One or more dates (at least one)
        description: Detailed description
        frequency: Recurrence policy
        category: Category tag
        assigned_to: User or vendor ID
        photos: Reference photos
        now: Creation timestamp (defaults to the current time)

    Returns:
        The created tasks

    Raises:
        PermissionError: If the actor cannot manage tasks
        ValueError: If no date is given
    """
    with span("task_service.create_tasks"):
        require_capability(actor, Capability.MANAGE_TASKS)
        if not scheduled_dates:
            msg = "At least one scheduled date is required"
            raise ValueError(msg)

        dates = scheduled_dates if frequency == TaskFrequency.ONCE else scheduled_dates[:1]
        assigned_name = await resolve_assignee_name(repos=repos, assigned_to=assigned_to)
        created_at = now or utc_now()

        created: list[Task] = []
        for scheduled_for in dates:
            task = await repos.tasks.create(
                {
                    "title": title,
                    "description": description,
                    "status": TaskStatus.PENDING,
                    "frequency": frequency,
                    "created_at": created_at,
                    "scheduled_for": scheduled_for,
                    "completed_at": None,
                    "assigned_to": assigned_to,
                    "assigned_name": assigned_name,
                    "category": category,
                    "photos": list(photos or []),
                    "completion_observation": None,
                    "condo_id": condo_id,
                }
            )
            await _log(repos, actor, LogAction.CREATE, task)
            created.append(task)

        logger.info("Created %d task(s) '%s' (assigned to: %s)", len(created), title, assigned_name)
        return created


async def get_task(*, repos: Repositories, viewer: User, condo_id: str, task_id: str) -> Task:
    """Fetch a task the viewer may see.

    Tasks of another condominium, or assigned to someone else when the viewer
    only sees their own, read as missing.

    Raises:
        KeyError: If the task does not exist or is not visible to the viewer
    """
    with span("task_service.get_task"):
        task = await repos.tasks.get_in_condo(task_id, condo_id)
        if not visibility.can_view(task, viewer):
            msg = f"Record not found in tasks: {task_id}"
            raise RecordNotFoundError(msg)
        return task


async def update_task(
    *,
    repos: Repositories,
    actor: User,
    condo_id: str,
    task_id: str,
    changes: TaskUpdate,
) -> Task:
    """Edit a task's descriptive fields. Status only changes through transitions."""
    with span("task_service.update_task"):
        require_capability(actor, Capability.MANAGE_TASKS)
        task = await repos.tasks.get_in_condo(task_id, condo_id)

        data = changes.model_dump(exclude_unset=True, exclude_none=True)
        if "assigned_to" in data:
            data["assigned_name"] = await resolve_assignee_name(repos=repos, assigned_to=data["assigned_to"])
        if not data:
            return task

        updated = await repos.tasks.update(task_id, data)
        await _log(repos, actor, LogAction.UPDATE, updated)
        logger.info("Updated task %s: %s", task_id, sorted(data))
        return updated


async def delete_task(*, repos: Repositories, actor: User, condo_id: str, task_id: str) -> None:
    """Delete a task."""
    with span("task_service.delete_task"):
        require_capability(actor, Capability.MANAGE_TASKS)
        task = await repos.tasks.get_in_condo(task_id, condo_id)
        await repos.tasks.delete(task_id)
        await _log(repos, actor, LogAction.DELETE, task)
        logger.info("Deleted task %s", task_id)


async def start_task(*, repos: Repositories, actor: User, condo_id: str, task_id: str) -> Task:
    """Move the actor's own task from PENDING to IN_PROGRESS."""
    with span("task_service.start_task"):
        task = await repos.tasks.get_in_condo(task_id, condo_id)
        started = state_machine.start_task(task, actor_id=actor.id)
        saved = await repos.tasks.save(started)
        await _log(repos, actor, LogAction.START, saved)
        return saved


async def complete_task(
    *,
    repos: Repositories,
    actor: User,
    condo_id: str,
    task_id: str,
    photos: list[str],
    observation: str | None = None,
    now: datetime | None = None,
) -> Task:
    """Finish the actor's own in-progress task with photo evidence.

    Raises:
        ValueError: If the task is not in progress or no photo was given
        PermissionError: If the actor is not the assignee
        KeyError: If the task does not exist in the condominium
    """
    with span("task_service.complete_task"):
        task = await repos.tasks.get_in_condo(task_id, condo_id)
        completed = state_machine.complete_task(
            task,
            actor_id=actor.id,
            photos=photos,
            observation=observation,
            now=now or utc_now(),
        )
        saved = await repos.tasks.save(completed)
        await _log(repos, actor, LogAction.COMPLETE, saved)
        return saved


async def reopen_task(
    *,
    repos: Repositories,
    actor: User,
    condo_id: str,
    task_id: str,
    now: datetime | None = None,
) -> Task:
    """Send a completed task back to PENDING (managers only)."""
    with span("task_service.reopen_task"):
        require_capability(actor, Capability.REOPEN_TASK)
        task = await repos.tasks.get_in_condo(task_id, condo_id)
        reopened = state_machine.reopen_task(task, now=now or utc_now())
        saved = await repos.tasks.save(reopened)
        await _log(repos, actor, LogAction.REOPEN, saved)
        return saved


async def list_today(
    *,
    repos: Repositories,
    viewer: User,
    condo_id: str,
    view_filter: TaskViewFilter = TaskViewFilter.ALL,
    now: datetime | None = None,
) -> TodayList:
    """The viewer's today list, narrowed by a filter tab."""
    with span("task_service.list_today"):
        tz = local_tz()
        today = local_date(now or utc_now(), tz)
        tasks = await repos.tasks.list_by_condo(condo_id)

        visible = visibility.visible_tasks(tasks, viewer=viewer, today=today, tz=tz)
        return TodayList(
            tasks=visibility.apply_view_filter(visible, view_filter),
            counts=visibility.summarize_counts(visible),
        )


async def list_schedule(*, repos: Repositories, viewer: User, condo_id: str) -> list[Task]:
    """Open tasks the viewer may see, earliest first."""
    with span("task_service.list_schedule"):
        require_capability(viewer, Capability.VIEW_SCHEDULE)
        tasks = await repos.tasks.list_by_condo(condo_id)
        return visibility.schedule_view(tasks, viewer=viewer)


async def list_history(*, repos: Repositories, condo_id: str) -> list[Task]:
    """Completed tasks of a condominium, most recent first."""
    with span("task_service.list_history"):
        tasks = await repos.tasks.list_by_condo(condo_id)
        return visibility.completed_history(tasks)
