"""Pytest configuration and shared fixtures."""

import logging

import pytest

from src.agents.report_agent import reset_agents


logger = logging.getLogger(__name__)


@pytest.fixture(autouse=True)
def fresh_agents():
    """Agents are cached per process; drop them so patched settings take effect."""
    reset_agents()
    yield
    reset_agents()
