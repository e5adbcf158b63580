"""AI-written activity reports and checklist suggestions."""

import html
import logging
import re
from datetime import date, datetime, tzinfo
from typing import Any

from pydantic import BaseModel, Field
from pydantic_core import to_json

from src.agents.report_agent import ChecklistSuggestion, get_checklist_agent, get_report_agent
from src.core.clock import local_day_bounds, local_tz
from src.core.config import constants
from src.core.errors import ErrorCategory, classify_agent_error
from src.core.logging import span
from src.core.permissions import Capability, require_capability
from src.core.repository import Repositories
from src.domain.incident import Incident
from src.domain.task import Task
from src.domain.user import User


logger = logging.getLogger(__name__)

REPORT_FAILURE_MESSAGE = "Could not generate the report right now."
NO_INCIDENTS_TEXT = "No incidents recorded."

REPORT_INSTRUCTIONS = """You are a consultant specialized in high-level condominium management.
Write a detailed executive report for the period {period}.

ACTIVITY DATA: {activities}
INCIDENT LOG: {incidents}

The report must:
1. Be professional and executive in tone.
2. Highlight the team's efficiency and how incidents were resolved.
3. Point out operational bottlenecks or recurring incident patterns.
4. Suggest strategic and preventive improvements.{instruction}

Format the output with clear headings, use Markdown and keep an authoritative, advisory tone."""

CHECKLIST_PROMPT = (
    'Based on this condominium information: "{condo_info}", generate a checklist of '
    "{min_items} to {max_items} essential tasks for a caretaker to carry out today."
)

# Tokens some models leak into their output
_SPECIAL_TOKEN_PATTERN = re.compile(
    r"<\|(?:FunctionCallEnd|endoftext|im_start|im_end|pad|eos|bos|assistant|user|system)\|>",
    re.IGNORECASE,
)
_BOLD_PATTERN = re.compile(r"\*\*(.+?)\*\*")
_HEADING_PATTERN = re.compile(r"^(#{1,3})\s+(.+)$", re.MULTILINE)


class ActivityReport(BaseModel):
    """Result of a report request; ``html`` always holds something to show."""

    html: str
    text: str
    succeeded: bool
    task_count: int = 0
    incident_count: int = 0
    error_category: ErrorCategory | None = Field(default=None, description="Set when generation failed")


class ChecklistResult(BaseModel):
    """Suggested checklist, or the reason none could be produced."""

    suggestions: list[ChecklistSuggestion] = Field(default_factory=list)
    message: str | None = None


def _sanitize_llm_output(text: str) -> str:
    return _SPECIAL_TOKEN_PATTERN.sub("", text).strip()


def render_report_html(text: str) -> str:
    """Light Markdown to HTML: headings, bold and line breaks."""
    escaped = html.escape(text, quote=False)
    escaped = _HEADING_PATTERN.sub(lambda m: f"<h{len(m.group(1))}>{m.group(2)}</h{len(m.group(1))}>", escaped)
    escaped = _BOLD_PATTERN.sub(r"<strong>\1</strong>", escaped)
    return escaped.replace("\n", "<br/>")


def tasks_in_window(tasks: list[Task], *, start: date, end: date, tz: tzinfo | None = None) -> list[Task]:
    """Tasks scheduled between the first instant of ``start`` and the last of ``end``."""
    window_start, _ = local_day_bounds(start, tz)
    _, window_end = local_day_bounds(end, tz)
    return [task for task in tasks if window_start <= _aware(task.scheduled_for, tz) <= window_end]


def incidents_in_window(
    incidents: list[Incident],
    *,
    start: date,
    end: date,
    tz: tzinfo | None = None,
) -> list[Incident]:
    """Incidents recorded between the first instant of ``start`` and the last of ``end``."""
    window_start, _ = local_day_bounds(start, tz)
    _, window_end = local_day_bounds(end, tz)
    return [incident for incident in incidents if window_start <= _aware(incident.timestamp, tz) <= window_end]


def _aware(value: datetime, tz: tzinfo | None) -> datetime:
    if value.tzinfo is None and tz is not None:
        return value.replace(tzinfo=tz)
    if value.tzinfo is not None and tz is None:
        return value.replace(tzinfo=None)
    return value


def _task_summary(task: Task) -> dict[str, Any]:
    # Photos are data URLs; only their count is useful to the model
    return {
        "title": task.title,
        "description": task.description,
        "status": task.status,
        "frequency": task.frequency,
        "scheduled_for": task.scheduled_for,
        "completed_at": task.completed_at,
        "assigned_to": task.assigned_name,
        "category": task.category,
        "observation": task.completion_observation,
        "photo_count": len(task.photos),
    }


def _incident_summary(incident: Incident) -> dict[str, Any]:
    return {
        "title": incident.title,
        "description": incident.description,
        "status": incident.status,
        "timestamp": incident.timestamp,
        "reported_by": incident.user_name,
    }


def build_report_prompt(
    *,
    tasks: list[Task],
    incidents: list[Incident],
    period: str,
    instruction: str | None = None,
) -> str:
    """Assemble the fixed instructions, the JSON data and the optional user instruction."""
    activities = to_json([_task_summary(task) for task in tasks]).decode()
    incident_text = NO_INCIDENTS_TEXT
    if incidents:
        incident_text = to_json([_incident_summary(item) for item in incidents]).decode()
    extra = f"\n\nSPECIFIC USER INSTRUCTION (follow strictly): {instruction.strip()}" if instruction else ""
    return REPORT_INSTRUCTIONS.format(
        period=period,
        activities=activities,
        incidents=incident_text,
        instruction=extra,
    )


def describe_period(start: date, end: date) -> str:
    """Human-readable period label used in the report prompt."""
    if start == end:
        return start.strftime("%d/%m/%Y")
    return f"{start.strftime('%d/%m/%Y')} to {end.strftime('%d/%m/%Y')}"


async def generate_activity_report(
    *,
    repos: Repositories,
    actor: User,
    condo_id: str,
    start: date,
    end: date,
    instruction: str | None = None,
) -> ActivityReport:
    """Ask the report agent for an executive summary of a period.

    Args:
        repos: Repository bundle
        actor: User requesting the report
        condo_id: Condominium to report on
        start: First day of the period (local calendar)
        end: Last day of the period, inclusive
        instruction: Optional free-text instruction appended to the prompt

    Returns:
        The rendered report, or the static failure message if the agent failed

    Raises:
        PermissionError: If the actor cannot generate reports
        ValueError: If the period ends before it starts
    """
    with span("report_service.generate_activity_report"):
        require_capability(actor, Capability.GENERATE_REPORTS)
        if end < start:
            msg = "Report period must end on or after its start date"
            raise ValueError(msg)

        tz = local_tz()
        tasks = tasks_in_window(await repos.tasks.list_by_condo(condo_id), start=start, end=end, tz=tz)
        incidents = incidents_in_window(await repos.incidents.list_by_condo(condo_id), start=start, end=end, tz=tz)
        prompt = build_report_prompt(
            tasks=tasks,
            incidents=incidents,
            period=describe_period(start, end),
            instruction=instruction,
        )

        try:
            agent = get_report_agent()
            logger.info("report_agent_run", extra={"condo_id": condo_id, "tasks": len(tasks)})
            result = await agent.run(prompt)
        except Exception as e:
            error_category, _ = classify_agent_error(e)
            logger.error(
                "Report generation failed",
                extra={"error": str(e), "error_category": error_category.value},
            )
            return ActivityReport(
                html=REPORT_FAILURE_MESSAGE,
                text=REPORT_FAILURE_MESSAGE,
                succeeded=False,
                task_count=len(tasks),
                incident_count=len(incidents),
                error_category=error_category,
            )

        text = _sanitize_llm_output(result.output)
        return ActivityReport(
            html=render_report_html(text),
            text=text,
            succeeded=True,
            task_count=len(tasks),
            incident_count=len(incidents),
        )


async def suggest_daily_checklist(*, repos: Repositories, actor: User, condo_id: str) -> ChecklistResult:
    """Ask the checklist agent for today's essential caretaker tasks."""
    with span("report_service.suggest_daily_checklist"):
        require_capability(actor, Capability.MANAGE_TASKS)
        condo = await repos.condos.get(condo_id)
        categories = [entry.name for entry in await repos.categories.list_all()]
        condo_info = f"{condo.name}, {condo.address}. Task categories: {', '.join(categories)}"
        prompt = CHECKLIST_PROMPT.format(
            condo_info=condo_info,
            min_items=constants.CHECKLIST_MIN_ITEMS,
            max_items=constants.CHECKLIST_MAX_ITEMS,
        )

        try:
            result = await get_checklist_agent().run(prompt)
        except Exception as e:
            error_category, user_message = classify_agent_error(e)
            logger.error(
                "Checklist suggestion failed",
                extra={"error": str(e), "error_category": error_category.value},
            )
            return ChecklistResult(message=user_message)

        return ChecklistResult(suggestions=result.output[: constants.CHECKLIST_MAX_ITEMS])
