"""AI report endpoints."""

from datetime import date, timedelta

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from src.core.clock import local_date, local_tz, utc_now
from src.core.config import constants
from src.core.repository import Repositories
from src.domain.user import User
from src.interface.dependencies import get_condo_id, get_current_user, get_repositories
from src.services import report_service
from src.services.report_service import ActivityReport, ChecklistResult


router = APIRouter(prefix="/reports", tags=["reports"])


class ReportRequest(BaseModel):
    """Reporting period (local dates, inclusive) and an optional instruction."""

    start: date | None = Field(default=None, description="First day; defaults to a week before the end")
    end: date | None = Field(default=None, description="Last day; defaults to today")
    instruction: str | None = Field(default=None, description="Extra instruction for the report writer")


@router.post("/activity")
async def generate_activity_report(
    request: ReportRequest,
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> ActivityReport:
    end = request.end or local_date(utc_now(), local_tz())
    start = request.start or end - timedelta(days=constants.REPORT_DEFAULT_LOOKBACK_DAYS)
    return await report_service.generate_activity_report(
        repos=repos,
        actor=user,
        condo_id=condo_id,
        start=start,
        end=end,
        instruction=request.instruction,
    )


@router.post("/checklist")
async def suggest_checklist(
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> ChecklistResult:
    """AI-suggested tasks for today."""
    return await report_service.suggest_daily_checklist(repos=repos, actor=user, condo_id=condo_id)
