"""User domain models and enums."""

from enum import StrEnum

from pydantic import BaseModel, Field, field_validator

from src.core.config import constants


# Constants for validation
MAX_NAME_LENGTH = 80


class UserRole(StrEnum):
    """Staff role inside a condominium."""

    SINDICO = "SINDICO"  # elected building manager (owner role)
    GESTOR = "GESTOR"  # property manager (operator role)
    ZELADOR = "ZELADOR"  # caretaker
    LIMPEZA = "LIMPEZA"  # cleaning staff
    PORTEIRO = "PORTEIRO"  # doorman


MANAGER_ROLES: frozenset[UserRole] = frozenset({UserRole.SINDICO, UserRole.GESTOR})
WORKER_ROLES: frozenset[UserRole] = frozenset({UserRole.ZELADOR, UserRole.LIMPEZA, UserRole.GESTOR})


class User(BaseModel):
    """User data transfer object."""

    id: str = Field(..., description="Unique user ID from database")
    name: str = Field(..., description="Display name, also used as login name")
    role: UserRole = Field(default=UserRole.ZELADOR, description="Role inside the condominium")
    job_title: str | None = Field(default=None, description="Custom job function label")
    email: str = Field(default="", description="Contact email")
    password_hash: str = Field(default="", description="PBKDF2 password hash")
    avatar: str | None = Field(default=None, description="Avatar image (data URL)")
    active: bool = Field(default=True, description="Inactive users cannot log in")
    condo_id: str | None = Field(default=None, description="Home condominium (None for portfolio owners)")

    @property
    def is_manager(self) -> bool:
        """Whether the user holds a management role."""
        return self.role in MANAGER_ROLES

    @field_validator("name")
    @classmethod
    def validate_name_usable(cls, v: str) -> str:
        """Validate name is usable as a login name."""
        v = v.strip()

        if len(v) < constants.MIN_USERNAME_LENGTH:
            raise ValueError(f"Name must have at least {constants.MIN_USERNAME_LENGTH} characters")

        if len(v) > MAX_NAME_LENGTH:
            raise ValueError(f"Name too long (max {MAX_NAME_LENGTH} characters)")

        return v
