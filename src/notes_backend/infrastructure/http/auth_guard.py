"""Session gate: bearer header parsing, credential verification, user resolution."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from uuid import UUID

from fastapi import HTTPException, Request

from notes_backend.application.ports.user_repository_port import UserRecord, UserRepositoryPort
from notes_backend.application.services.credential_verifier import CredentialVerifier
from notes_backend.domain.auth.errors import (
    CredentialVerificationError,
    RevocationStoreUnavailableError,
)
from notes_backend.domain.auth.tokens import VerifiedCredential

UNAUTHENTICATED_DETAIL = "invalid or expired auth token"
UNAVAILABLE_DETAIL = "authentication temporarily unavailable"
logger = logging.getLogger(__name__)


class MissingAuthTokenError(PermissionError):
    """Raised when a bearer token is required but not provided."""


class InvalidAuthTokenError(PermissionError):
    """Raised when the bearer header or the presented token is not acceptable."""


class AuthUnavailableError(RuntimeError):
    """Raised when token validity cannot be established; the request is refused."""


@dataclass(frozen=True)
class AuthenticatedSession:
    """Identity attached to one admitted request."""

    user: UserRecord
    credential: VerifiedCredential


SessionDependency = Callable[[Request], Awaitable[AuthenticatedSession]]


def extract_bearer_token(authorization_header: str | None) -> str:
    """Extract token from standard `Authorization: Bearer <token>` header."""

    if authorization_header is None or not authorization_header.strip():
        raise MissingAuthTokenError("missing bearer token")

    parts = authorization_header.strip().split()
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
        raise InvalidAuthTokenError("invalid bearer token header")

    return parts[1]


class SessionAuthGuard:
    """Admit or reject one request before any protected logic runs."""

    def __init__(
        self,
        *,
        verifier: CredentialVerifier,
        user_repository: UserRepositoryPort,
    ) -> None:
        self._verifier = verifier
        self._user_repository = user_repository

    async def require_session(self, *, authorization_header: str | None) -> AuthenticatedSession:
        """Resolve the caller behind a bearer header.

        Every verification failure collapses into InvalidAuthTokenError with one
        message; the specific reason is only logged.
        """

        token = extract_bearer_token(authorization_header)
        try:
            credential = await self._verifier.verify(token)
        except RevocationStoreUnavailableError as exc:
            logger.error("credential_check_unavailable error=%s", exc)
            raise AuthUnavailableError(UNAVAILABLE_DETAIL) from exc
        except CredentialVerificationError as exc:
            logger.info("credential_rejected reason=%s", exc.reason.value)
            raise InvalidAuthTokenError(UNAUTHENTICATED_DETAIL) from exc

        user = await self._resolve_user(subject=credential.subject)
        if user is None:
            logger.info("credential_rejected reason=unknown_subject")
            raise InvalidAuthTokenError(UNAUTHENTICATED_DETAIL)

        return AuthenticatedSession(user=user, credential=credential)

    async def _resolve_user(self, *, subject: str) -> UserRecord | None:
        try:
            user_id = UUID(subject)
        except ValueError:
            return None
        return await self._user_repository.get_by_id(user_id=user_id)


def build_session_dependency(guard: SessionAuthGuard) -> SessionDependency:
    """Build a FastAPI dependency enforcing the gate and storing the session on the request."""

    async def require_authenticated_session(request: Request) -> AuthenticatedSession:
        try:
            session = await guard.require_session(
                authorization_header=request.headers.get("authorization")
            )
        except MissingAuthTokenError as exc:
            raise _unauthenticated(str(exc)) from exc
        except InvalidAuthTokenError as exc:
            raise _unauthenticated(str(exc)) from exc
        except AuthUnavailableError as exc:
            raise HTTPException(status_code=503, detail=str(exc)) from exc

        request.state.auth_session = session
        return session

    return require_authenticated_session


def _unauthenticated(detail: str) -> HTTPException:
    return HTTPException(
        status_code=401,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )
