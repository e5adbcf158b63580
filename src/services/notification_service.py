"""Login-time reminder of the day's pending tasks."""

import logging
from datetime import datetime

from pydantic import BaseModel

from src.core.clock import local_date, local_tz, utc_now
from src.core.logging import span
from src.core.repository import Repositories
from src.domain.user import User
from src.modules.tasks.visibility import tasks_due_today_for


logger = logging.getLogger(__name__)


class DailyNotification(BaseModel):
    """Reminder shown once when the user logs in."""

    title: str
    body: str
    task_count: int


def format_notification(count: int) -> DailyNotification:
    noun = "task" if count == 1 else "tasks"
    return DailyNotification(
        title="Tasks for today",
        body=f"You have {count} pending {noun} to do today.",
        task_count=count,
    )


async def build_daily_notification(
    *,
    repos: Repositories,
    user: User,
    now: datetime | None = None,
) -> DailyNotification | None:
    """Count the user's PENDING tasks scheduled today; None when there are none.

    Users without a home condominium never get a reminder.
    """
    with span("notification_service.build_daily_notification"):
        if not user.condo_id:
            return None

        tz = local_tz()
        today = local_date(now or utc_now(), tz)
        tasks = await repos.tasks.list_by_condo(user.condo_id)
        due = tasks_due_today_for(tasks, user=user, today=today, tz=tz)
        if not due:
            return None

        logger.info("User %s has %d task(s) today", user.id, len(due))
        return format_notification(len(due))
