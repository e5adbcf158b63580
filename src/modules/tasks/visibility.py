"""Pure rules deciding which tasks appear in a user's lists.

A task shows up in the "today" list when the viewer may see it (role filter)
and it is relevant today (recency filter):

- COMPLETED tasks only on the calendar day they were completed.
- Other tasks when EITHER a one-off task is due today or overdue, OR the
  recurrence rule matches today (DAILY always, WEEKLY on the same weekday,
  MONTHLY on the same day of the month, ONCE on the exact day).

Nothing here touches storage; callers pass the condominium's tasks in.
"""

from collections import Counter
from datetime import date, datetime, tzinfo
from enum import StrEnum

from src.core.clock import local_date
from src.core.permissions import Capability, has_capability
from src.domain.task import Task, TaskFrequency, TaskStatus
from src.domain.user import User


class TaskViewFilter(StrEnum):
    """Secondary narrowing of the today list (the filter tabs)."""

    ALL = "ALL"
    PERMANENT = "PERMANENT"
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


def can_view(task: Task, viewer: User) -> bool:
    """Role filter: managers see the whole condominium, others only their own tasks."""
    if has_capability(viewer.role, Capability.VIEW_ALL_TASKS):
        return True
    return task.assigned_to == viewer.id


def recurrence_matches(task: Task, today: date, tz: tzinfo | None = None) -> bool:
    """Whether the task's recurrence rule falls on the given day."""
    scheduled = local_date(task.scheduled_for, tz)
    match task.frequency:
        case TaskFrequency.DAILY:
            return True
        case TaskFrequency.WEEKLY:
            return scheduled.weekday() == today.weekday()
        case TaskFrequency.MONTHLY:
            return scheduled.day == today.day
        case TaskFrequency.ONCE:
            return scheduled == today
    return False


def is_due_or_overdue(task: Task, today: date, tz: tzinfo | None = None) -> bool:
    """A one-off task scheduled today or on an earlier day."""
    if task.frequency != TaskFrequency.ONCE:
        return False
    return local_date(task.scheduled_for, tz) <= today


def is_relevant_today(task: Task, today: date, tz: tzinfo | None = None) -> bool:
    """Recency filter, independent of who is looking."""
    if task.status == TaskStatus.COMPLETED:
        return task.completed_at is not None and local_date(task.completed_at, tz) == today
    return is_due_or_overdue(task, today, tz) or recurrence_matches(task, today, tz)


def is_visible_today(task: Task, *, viewer: User, today: date, tz: tzinfo | None = None) -> bool:
    """Whether the task belongs in the viewer's today list."""
    return can_view(task, viewer) and is_relevant_today(task, today, tz)


def visible_tasks(tasks: list[Task], *, viewer: User, today: date, tz: tzinfo | None = None) -> list[Task]:
    """The viewer's today list, preserving input order."""
    return [task for task in tasks if is_visible_today(task, viewer=viewer, today=today, tz=tz)]


def apply_view_filter(tasks: list[Task], view_filter: TaskViewFilter) -> list[Task]:
    """Narrow an already visible list to one filter tab."""
    if view_filter == TaskViewFilter.ALL:
        return list(tasks)
    if view_filter == TaskViewFilter.PERMANENT:
        return [task for task in tasks if task.is_recurring]
    return [task for task in tasks if task.status == TaskStatus(view_filter.value)]


def summarize_counts(tasks: list[Task]) -> dict[str, int]:
    """Badge counts for the filter tabs over a visible list."""
    statuses = Counter(task.status for task in tasks)
    return {
        "all": len(tasks),
        "pending": statuses[TaskStatus.PENDING],
        "permanent": sum(1 for task in tasks if task.is_recurring),
        "completed": statuses[TaskStatus.COMPLETED],
    }


def schedule_view(tasks: list[Task], *, viewer: User) -> list[Task]:
    """Open tasks the viewer may see, earliest first."""
    upcoming = [task for task in tasks if task.status != TaskStatus.COMPLETED and can_view(task, viewer)]
    return sorted(upcoming, key=lambda task: task.scheduled_for)


def completed_history(tasks: list[Task]) -> list[Task]:
    """Completed tasks, most recently completed first."""
    done = [task for task in tasks if task.status == TaskStatus.COMPLETED and task.completed_at is not None]
    return sorted(done, key=lambda task: task.completed_at or datetime.min, reverse=True)


def tasks_due_today_for(tasks: list[Task], *, user: User, today: date, tz: tzinfo | None = None) -> list[Task]:
    """The user's own PENDING tasks scheduled for today (the login reminder)."""
    return [
        task
        for task in tasks
        if task.assigned_to == user.id
        and task.status == TaskStatus.PENDING
        and local_date(task.scheduled_for, tz) == today
    ]
