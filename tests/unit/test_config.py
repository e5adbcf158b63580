"""Tests for configuration validation."""

import pytest

from src.core.config import Settings, constants


def test_require_credential_with_valid_value() -> None:
    """Test require_credential returns value when credential is set."""
    settings = Settings(openrouter_api_key="sk-test")

    assert settings.require_credential("openrouter_api_key", "OpenRouter API key") == "sk-test"


def test_require_credential_with_none_raises_error() -> None:
    """Test require_credential raises ValueError when credential is None."""
    settings = Settings(openrouter_api_key=None)

    with pytest.raises(ValueError, match="OpenRouter API key credential not configured"):
        settings.require_credential("openrouter_api_key", "OpenRouter API key")


def test_require_credential_with_empty_string_raises_error() -> None:
    """Test require_credential raises ValueError when credential is empty."""
    settings = Settings(openrouter_api_key="")

    with pytest.raises(ValueError, match="OPENROUTER_API_KEY"):
        settings.require_credential("openrouter_api_key", "OpenRouter API key")


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("TIMEZONE", "America/Recife")
    monkeypatch.setenv("SEED_DEMO_DATA", "false")

    settings = Settings()

    assert settings.timezone == "America/Recife"
    assert settings.seed_demo_data is False


def test_default_categories() -> None:
    assert "Piscina" in constants.DEFAULT_CATEGORIES
    assert constants.CHECKLIST_MIN_ITEMS <= constants.CHECKLIST_MAX_ITEMS
