"""Checklist endpoints: today list, schedule, history and task lifecycle."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query, status

from src.core.repository import Repositories
from src.domain.create_models import TaskCompletion, TaskCreate
from src.domain.task import Task
from src.domain.update_models import TaskUpdate
from src.domain.user import User
from src.interface.dependencies import get_condo_id, get_current_user, get_repositories
from src.modules.tasks import service as task_service
from src.modules.tasks.service import TodayList
from src.modules.tasks.visibility import TaskViewFilter


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("")
async def list_today(
    view: TaskViewFilter = Query(default=TaskViewFilter.ALL, description="Filter tab"),
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> TodayList:
    """Tasks the user should see today."""
    return await task_service.list_today(repos=repos, viewer=user, condo_id=condo_id, view_filter=view)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_tasks(
    payload: TaskCreate,
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> list[Task]:
    """Schedule a task (one per date for one-off tasks)."""
    return await task_service.create_tasks(repos=repos, actor=user, condo_id=condo_id, **payload.model_dump())


@router.get("/schedule")
async def list_schedule(
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> list[Task]:
    """Open tasks the user may see, earliest first."""
    return await task_service.list_schedule(repos=repos, viewer=user, condo_id=condo_id)


@router.get("/history")
async def list_history(
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> list[Task]:
    """Completed tasks, most recent first."""
    return await task_service.list_history(repos=repos, condo_id=condo_id)


@router.get("/{task_id}")
async def get_task(
    task_id: str,
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> Task:
    """One task; tasks the user may not see read as missing."""
    return await task_service.get_task(repos=repos, viewer=user, condo_id=condo_id, task_id=task_id)


@router.patch("/{task_id}")
async def update_task(
    task_id: str,
    changes: TaskUpdate,
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> Task:
    """Edit a task's details or reassign it."""
    return await task_service.update_task(
        repos=repos,
        actor=user,
        condo_id=condo_id,
        task_id=task_id,
        changes=changes,
    )


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: str,
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> None:
    """Remove a task."""
    await task_service.delete_task(repos=repos, actor=user, condo_id=condo_id, task_id=task_id)


@router.post("/{task_id}/start")
async def start_task(
    task_id: str,
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> Task:
    """Move a pending task to in progress."""
    return await task_service.start_task(repos=repos, actor=user, condo_id=condo_id, task_id=task_id)


@router.post("/{task_id}/complete")
async def complete_task(
    task_id: str,
    payload: TaskCompletion,
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> dict[str, Any]:
    """Finish a task with photo evidence.

    The first request (``confirmed`` false) changes nothing and asks for
    confirmation; the confirmed request commits.
    """
    task = await task_service.get_task(repos=repos, viewer=user, condo_id=condo_id, task_id=task_id)
    if not any(payload.photos):
        msg = f"Cannot complete task {task_id} without at least one photo"
        raise ValueError(msg)

    if not payload.confirmed:
        logger.info("task_completion_awaiting_confirmation", extra={"task_id": task_id, "user_id": user.id})
        return {"status": "awaiting_confirmation", "task": task.model_dump(mode="json")}

    completed = await task_service.complete_task(
        repos=repos,
        actor=user,
        condo_id=condo_id,
        task_id=task_id,
        photos=payload.photos,
        observation=payload.observation,
    )
    return {"status": "completed", "task": completed.model_dump(mode="json")}


@router.post("/{task_id}/reopen")
async def reopen_task(
    task_id: str,
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> Task:
    """Send a completed task back to pending."""
    return await task_service.reopen_task(repos=repos, actor=user, condo_id=condo_id, task_id=task_id)
