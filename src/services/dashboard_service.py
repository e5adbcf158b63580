"""Home screen summary for a condominium."""

import logging
from datetime import datetime

from pydantic import BaseModel, Field

from src.core.clock import local_date, local_tz, utc_now
from src.core.logging import span
from src.core.repository import Repositories
from src.domain.budget import BudgetStatus
from src.domain.task import Task, TaskStatus
from src.domain.user import User


logger = logging.getLogger(__name__)

MORNING_END_HOUR = 12
AFTERNOON_END_HOUR = 18


class DashboardSummary(BaseModel):
    """Counters and next task shown on the home screen."""

    greeting: str
    pending: int = Field(..., description="Tasks waiting to be started")
    completed_today: int = Field(..., description="Tasks completed today")
    in_progress: int = Field(..., description="Tasks being worked on")
    pending_budgets: int = Field(..., description="Quotations awaiting a decision")
    my_open_tasks: int = Field(..., description="Viewer's tasks not yet completed")
    next_task: Task | None = Field(default=None, description="Viewer's earliest open task")


def greeting_for(moment: datetime) -> str:
    """Time-of-day greeting for the local hour."""
    if moment.hour < MORNING_END_HOUR:
        return "Good morning"
    if moment.hour < AFTERNOON_END_HOUR:
        return "Good afternoon"
    return "Good evening"


def summarize(tasks: list[Task], *, viewer: User, pending_budgets: int, now: datetime) -> DashboardSummary:
    """Build the summary from a condominium's tasks; ``now`` is local time."""
    today = now.date()
    tz = now.tzinfo
    mine = sorted(
        (task for task in tasks if task.assigned_to == viewer.id and task.status != TaskStatus.COMPLETED),
        key=lambda task: task.scheduled_for,
    )
    return DashboardSummary(
        greeting=greeting_for(now),
        pending=sum(1 for task in tasks if task.status == TaskStatus.PENDING),
        completed_today=sum(
            1
            for task in tasks
            if task.status == TaskStatus.COMPLETED
            and task.completed_at is not None
            and local_date(task.completed_at, tz) == today
        ),
        in_progress=sum(1 for task in tasks if task.status == TaskStatus.IN_PROGRESS),
        pending_budgets=pending_budgets,
        my_open_tasks=len(mine),
        next_task=mine[0] if mine else None,
    )


async def get_summary(
    *,
    repos: Repositories,
    viewer: User,
    condo_id: str,
    now: datetime | None = None,
) -> DashboardSummary:
    """Home screen summary of a condominium for the viewer."""
    with span("dashboard_service.get_summary"):
        local_now = (now or utc_now()).astimezone(local_tz())
        tasks = await repos.tasks.list_by_condo(condo_id)
        budgets = await repos.budgets.list_by_condo(condo_id)
        pending_budgets = sum(1 for budget in budgets if budget.status == BudgetStatus.PENDING)
        return summarize(tasks, viewer=viewer, pending_budgets=pending_budgets, now=local_now)
