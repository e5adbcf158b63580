"""Configuration management for condocheck."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # SQLite Configuration
    sqlite_db_path: str = Field(default="./data/condocheck.db", description="Path to the SQLite database file")

    # Session Configuration
    secret_key: str = Field(default="change-me-in-production", description="Secret used to sign session cookies")
    session_max_age_seconds: int = Field(default=86400, description="Lifetime of a login session (in seconds)")
    is_production: bool = Field(default=False, description="Enables secure cookies and production logging")

    # Local calendar used for "today" comparisons
    timezone: str = Field(default="America/Sao_Paulo", description="IANA timezone of the managed condominiums")

    # OpenRouter Configuration
    openrouter_api_key: str | None = Field(default=None, description="OpenRouter API key for report generation")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")

    # Demo data
    seed_demo_data: bool = Field(default=True, description="Seed a demo condominium and staff on an empty database")
    seed_password: str = Field(default="123", description="Password given to seeded demo users")

    def require_credential(self, field_name: str, service_name: str) -> str:
        """Validate that a required credential is set, raising a clear error if missing.

        Args:
            field_name: Name of the field to check
            service_name: Human-readable service name for error message

        Returns:
            The credential value

        Raises:
            ValueError: If the credential is None or empty
        """
        value = getattr(self, field_name)
        if not value:
            raise ValueError(
                f"{service_name} credential not configured. "
                f"Set {field_name.upper()} environment variable or add to .env file."
            )
        return value

    # AI Model Configuration
    model_id: str = Field(
        default="google/gemini-2.5-flash",
        description="Model ID for OpenRouter used by activity reports",
    )


# Application Constants
class Constants:
    """Application-wide constants."""

    # Authentication
    MIN_USERNAME_LENGTH: int = 3
    PASSWORD_HASH_ITERATIONS: int = 120_000
    SESSION_COOKIE_NAME: str = "condocheck_session"

    # Audit trail
    ACTIVITY_LOG_MAX_ENTRIES: int = 1000

    # Pagination Defaults
    DEFAULT_PER_PAGE_LIMIT: int = 100  # Default pagination limit for list queries

    # Reports
    REPORT_DEFAULT_LOOKBACK_DAYS: int = 7
    CHECKLIST_MIN_ITEMS: int = 5
    CHECKLIST_MAX_ITEMS: int = 7

    # Seed data
    DEFAULT_CATEGORIES: tuple[str, ...] = (
        "Manutenção",
        "Limpeza",
        "Piscina",
        "Jardinagem",
        "Segurança",
        "Outros",
    )
    UNASSIGNED_NAME: str = "Unassigned"


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
