"""notes-api entrypoint and HTTP route wiring."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager, suppress
from datetime import timedelta

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notes_backend.application.ports.note_repository_port import NoteRepositoryPort
from notes_backend.application.ports.revocation_store_port import RevocationStorePort
from notes_backend.application.ports.user_repository_port import UserRepositoryPort
from notes_backend.application.services.auth_service import AuthService
from notes_backend.application.services.credential_issuer import CredentialIssuer
from notes_backend.application.services.credential_verifier import CredentialVerifier
from notes_backend.application.services.note_service import NoteService
from notes_backend.application.services.revocation_sweeper import RevocationSweeper
from notes_backend.application.services.session_service import SessionService
from notes_backend.config.settings import Settings, load_settings
from notes_backend.infrastructure.db.note_repository import SqlAlchemyNoteRepository
from notes_backend.infrastructure.db.revocation_repository import SqlAlchemyRevocationStore
from notes_backend.infrastructure.db.session import create_session_factory
from notes_backend.infrastructure.db.user_repository import SqlAlchemyUserRepository
from notes_backend.infrastructure.http.auth_guard import (
    SessionAuthGuard,
    build_session_dependency,
)
from notes_backend.infrastructure.http.auth_router import build_auth_router
from notes_backend.infrastructure.http.notes_router import build_notes_router
from notes_backend.infrastructure.logging import configure_logging
from notes_backend.infrastructure.security.jwt_token_signer import JwtTokenSigner
from notes_backend.infrastructure.security.password_hasher import BcryptPasswordHasher

NOTES_API_HOST = "0.0.0.0"
logger = logging.getLogger(__name__)


def create_app(
    *,
    settings: Settings | None = None,
    users: UserRepositoryPort | None = None,
    notes: NoteRepositoryPort | None = None,
    revocation_store: RevocationStorePort | None = None,
    issuer: CredentialIssuer | None = None,
    verifier: CredentialVerifier | None = None,
    password_hasher: BcryptPasswordHasher | None = None,
    run_sweeper: bool = True,
) -> FastAPI:
    """Create FastAPI app; settings and signing secret are validated here, before serving."""

    if settings is None:
        settings = load_settings()
    configure_logging(level=settings.log_level)

    signer = JwtTokenSigner(secret=settings.jwt_secret)
    if users is None or notes is None or revocation_store is None:
        session_factory = create_session_factory(settings.database_url)
        users = users or SqlAlchemyUserRepository(session_factory)
        notes = notes or SqlAlchemyNoteRepository(session_factory)
        revocation_store = revocation_store or SqlAlchemyRevocationStore(session_factory)

    if issuer is None:
        issuer = CredentialIssuer(
            signer=signer,
            token_ttl=timedelta(seconds=settings.token_ttl_seconds),
        )
    if verifier is None:
        verifier = CredentialVerifier(
            signer=signer,
            revocation_store=revocation_store,
            lookup_timeout_seconds=settings.revocation_lookup_timeout_seconds,
        )
    if password_hasher is None:
        password_hasher = BcryptPasswordHasher(rounds=settings.bcrypt_rounds)

    auth_service = AuthService(users=users, password_hasher=password_hasher)
    session_service = SessionService(issuer=issuer, revocation_store=revocation_store)
    guard = SessionAuthGuard(verifier=verifier, user_repository=users)
    require_session = build_session_dependency(guard)
    sweeper = RevocationSweeper(
        revocation_store=revocation_store,
        interval_seconds=settings.revocation_sweep_interval_seconds,
    )

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        if not run_sweeper:
            yield
            return

        stop_event = asyncio.Event()
        sweep_task = asyncio.create_task(sweeper.run_until_stopped(stop_event))
        logger.info(
            "revocation_sweeper_started interval_seconds=%s",
            settings.revocation_sweep_interval_seconds,
        )
        try:
            yield
        finally:
            stop_event.set()
            with suppress(asyncio.CancelledError):
                await sweep_task
            logger.info("revocation_sweeper_stopped")

    app = FastAPI(lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(
        build_auth_router(
            auth_service=auth_service,
            session_service=session_service,
            require_session=require_session,
        )
    )
    app.include_router(
        build_notes_router(
            note_service=NoteService(notes=notes),
            require_session=require_session,
        )
    )
    return app


def run_asgi_server(*, host: str = NOTES_API_HOST, port: int | None = None) -> None:
    """Run notes-api as a long-lived ASGI process using application factory mode."""

    if port is None:
        port = load_settings().api_port
    uvicorn.run(
        "apps.api.main:create_app",
        host=host,
        port=port,
        factory=True,
    )


def main() -> None:
    """Run notes-api runtime process."""

    run_asgi_server()


if __name__ == "__main__":
    main()
