"""Port for user persistence used by registration and session resolution."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID


class DuplicateUserEmailError(ValueError):
    """Raised when a user account already exists for the email."""

    def __init__(self, *, email: str) -> None:
        super().__init__(f"user already exists: {email}")
        self.email = email


@dataclass(frozen=True)
class UserCreateInput:
    """Input payload for inserting one user account."""

    name: str
    email: str
    password_hash: str


@dataclass(frozen=True)
class UserRecord:
    """User persistence model."""

    user_id: UUID
    name: str
    email: str
    password_hash: str
    created_at: datetime
    updated_at: datetime


class UserRepositoryPort(Protocol):
    """User repository contract."""

    async def create_user(self, payload: UserCreateInput) -> UserRecord:
        """Persist one user or raise DuplicateUserEmailError."""

    async def get_by_id(self, *, user_id: UUID) -> UserRecord | None:
        """Return user by id or None."""

    async def get_by_email(self, *, email: str) -> UserRecord | None:
        """Return user by normalized email or None."""
