"""FastAPI router for registration, login, and logout."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from notes_backend.application.dto.auth_models import (
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    RegisterRequest,
    RegisterResponse,
)
from notes_backend.application.ports.user_repository_port import DuplicateUserEmailError
from notes_backend.application.services.auth_service import (
    AuthOutcome,
    AuthService,
    RegistrationInputError,
)
from notes_backend.application.services.session_service import SessionService
from notes_backend.infrastructure.http.auth_guard import AuthenticatedSession, SessionDependency


def build_auth_router(
    *,
    auth_service: AuthService,
    session_service: SessionService,
    require_session: SessionDependency,
) -> APIRouter:
    """Build router exposing account and session endpoints."""

    router = APIRouter(prefix="/api/auth", tags=["auth"])

    @router.post("/register", response_model=RegisterResponse, status_code=201)
    async def register(payload: RegisterRequest) -> RegisterResponse:
        try:
            user = await auth_service.register(
                name=payload.name,
                email=payload.email,
                password=payload.password,
            )
        except RegistrationInputError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except DuplicateUserEmailError as exc:
            raise HTTPException(status_code=409, detail="user already exists") from exc

        return RegisterResponse(message="user registered", user_id=user.user_id)

    @router.post("/login", response_model=LoginResponse)
    async def login(payload: LoginRequest) -> LoginResponse:
        result = await auth_service.authenticate(email=payload.email, password=payload.password)
        if result.outcome is not AuthOutcome.SUCCESS or result.user is None:
            raise HTTPException(status_code=401, detail="invalid credentials")

        issued = session_service.open_session(user=result.user)
        return LoginResponse(token=issued.token, expires_at=issued.claims.expires_at)

    @router.post("/logout", response_model=LogoutResponse)
    async def logout(
        session: AuthenticatedSession = Depends(require_session),
    ) -> LogoutResponse:
        await session_service.revoke_session(credential=session.credential)
        return LogoutResponse(ok=True)

    return router
