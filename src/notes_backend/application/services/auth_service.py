"""Application service for user registration and password verification."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from notes_backend.application.ports.password_hasher_port import PasswordHasherPort
from notes_backend.application.ports.user_repository_port import (
    UserCreateInput,
    UserRecord,
    UserRepositoryPort,
)
from notes_backend.domain.auth.credentials import (
    normalize_display_name,
    normalize_user_email,
    normalize_user_password,
)

_BCRYPT_MAX_PASSWORD_BYTES = 72
logger = logging.getLogger(__name__)


class RegistrationInputError(ValueError):
    """Raised when registration fields are blank or unusable."""


class AuthOutcome(StrEnum):
    """Supported authentication outcomes."""

    SUCCESS = "success"
    INVALID_CREDENTIALS = "invalid_credentials"


@dataclass(frozen=True)
class AuthResult:
    """Authentication result model."""

    outcome: AuthOutcome
    user: UserRecord | None = None


class AuthService:
    """Register accounts and authenticate email/password credentials."""

    def __init__(
        self,
        *,
        users: UserRepositoryPort,
        password_hasher: PasswordHasherPort,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    async def register(self, *, name: str, email: str, password: str) -> UserRecord:
        """Create one account with a hashed password.

        Raises RegistrationInputError for blank fields and DuplicateUserEmailError
        when the normalized email is already taken.
        """

        try:
            normalized_name = normalize_display_name(name=name)
            normalized_email = normalize_user_email(email=email)
            normalized_password = normalize_user_password(password=password)
        except ValueError as exc:
            raise RegistrationInputError(str(exc)) from exc

        if len(normalized_password.encode("utf-8")) > _BCRYPT_MAX_PASSWORD_BYTES:
            raise RegistrationInputError("password cannot exceed 72 bytes")

        user = await self._users.create_user(
            UserCreateInput(
                name=normalized_name,
                email=normalized_email,
                password_hash=self._password_hasher.hash_password(normalized_password),
            )
        )
        logger.info("user_registered user_id=%s", user.user_id)
        return user

    async def authenticate(self, *, email: str, password: str) -> AuthResult:
        """Verify credentials; unknown email and wrong password look identical."""

        try:
            normalized_email = normalize_user_email(email=email)
        except ValueError:
            return AuthResult(outcome=AuthOutcome.INVALID_CREDENTIALS)

        user = await self._users.get_by_email(email=normalized_email)
        if user is None:
            logger.info("login_failed reason=unknown_email")
            return AuthResult(outcome=AuthOutcome.INVALID_CREDENTIALS)

        is_valid = self._password_hasher.verify_password(
            password=password,
            password_hash=user.password_hash,
        )
        if not is_valid:
            logger.info("login_failed reason=wrong_password user_id=%s", user.user_id)
            return AuthResult(outcome=AuthOutcome.INVALID_CREDENTIALS)

        logger.info("login_success user_id=%s", user.user_id)
        return AuthResult(outcome=AuthOutcome.SUCCESS, user=user)
