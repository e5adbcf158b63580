"""Navigation menu and home screen summary."""

from fastapi import APIRouter, Depends

from src.core.permissions import MenuItem, menu_for
from src.core.repository import Repositories
from src.domain.user import User
from src.interface.dependencies import get_condo_id, get_current_user, get_repositories
from src.services import dashboard_service
from src.services.dashboard_service import DashboardSummary


router = APIRouter(tags=["home"])


@router.get("/menu")
async def get_menu(user: User = Depends(get_current_user)) -> list[MenuItem]:
    """Navigation entries the user's role may open."""
    return menu_for(user.role)


@router.get("/dashboard")
async def get_dashboard(
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> DashboardSummary:
    return await dashboard_service.get_summary(repos=repos, viewer=user, condo_id=condo_id)
