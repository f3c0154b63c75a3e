"""Mint signed, time-bounded bearer credentials for authenticated users."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from uuid import uuid4

from notes_backend.application.ports.token_signer_port import TokenSignerPort
from notes_backend.domain.auth.errors import ConfigurationError
from notes_backend.domain.auth.tokens import CredentialClaims, IssuedCredential

NowCallable = Callable[[], datetime]
TokenIdFactory = Callable[[], str]
DEFAULT_TOKEN_TTL = timedelta(hours=1)
logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _new_token_id() -> str:
    return uuid4().hex


class CredentialIssuer:
    """Stateless issuer; signing key and TTL are fixed at construction."""

    def __init__(
        self,
        *,
        signer: TokenSignerPort,
        token_ttl: timedelta = DEFAULT_TOKEN_TTL,
        now: NowCallable = _utc_now,
        token_id_factory: TokenIdFactory = _new_token_id,
    ) -> None:
        if token_ttl.total_seconds() < 1:
            raise ConfigurationError("token TTL must be at least one second")
        self._signer = signer
        self._token_ttl = token_ttl
        self._now = now
        self._token_id_factory = token_id_factory

    def issue(self, *, subject: str) -> IssuedCredential:
        """Issue a credential for an already-authenticated principal."""

        # JWT timestamps carry whole seconds only.
        issued_at = self._now().replace(microsecond=0)
        claims = CredentialClaims(
            subject=subject,
            token_id=self._token_id_factory(),
            issued_at=issued_at,
            expires_at=issued_at + self._token_ttl,
        )
        token = self._signer.sign(claims)
        logger.info(
            "credential_issued subject=%s token_id=%s expires_at=%s",
            subject,
            claims.token_id,
            claims.expires_at.isoformat(),
        )
        return IssuedCredential(token=token, claims=claims)
