"""Report and checklist agents backed by OpenRouter.

Both agents are created lazily on first use so that importing the application
never requires an API key.
"""

import logging

from pydantic import BaseModel, Field
from pydantic_ai import Agent
from pydantic_ai.models.openrouter import OpenRouterModel
from pydantic_ai.providers.openrouter import OpenRouterProvider

from src.core.config import settings


logger = logging.getLogger(__name__)


class ChecklistSuggestion(BaseModel):
    """A task the AI suggests adding to today's checklist."""

    title: str = Field(..., description="Short task title")
    description: str = Field(..., description="What has to be done")
    category: str = Field(..., description="Category tag such as cleaning or maintenance")


class _AgentState:
    """Singleton state for the agent instances."""

    model: OpenRouterModel | None = None
    report: Agent[None, str] | None = None
    checklist: Agent[None, list[ChecklistSuggestion]] | None = None


def _get_model() -> OpenRouterModel:
    if _AgentState.model is None:
        api_key = settings.require_credential("openrouter_api_key", "OpenRouter API key")
        provider = OpenRouterProvider(api_key=api_key)
        _AgentState.model = OpenRouterModel(model_name=settings.model_id, provider=provider)
        logger.info("Report model initialized", extra={"model_id": settings.model_id})
    return _AgentState.model


def get_report_agent() -> Agent[None, str]:
    """Get or create the free-text report agent."""
    if _AgentState.report is None:
        # Failures surface to the caller, which falls back to a static message
        _AgentState.report = Agent(model=_get_model(), output_type=str, retries=0)
    return _AgentState.report


def get_checklist_agent() -> Agent[None, list[ChecklistSuggestion]]:
    """Get or create the structured checklist agent."""
    if _AgentState.checklist is None:
        _AgentState.checklist = Agent(model=_get_model(), output_type=list[ChecklistSuggestion], retries=1)
    return _AgentState.checklist


def reset_agents() -> None:
    """Drop cached agents (used after settings change and in tests)."""
    _AgentState.model = None
    _AgentState.report = None
    _AgentState.checklist = None
