"""Two-stage verification of presented bearer credentials.

Stage one parses the token and consults the revocation store. Stage two checks
the signature and then the expiry against the injected clock. Each stage
raises a `CredentialVerificationError` subclass; the first failure wins.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import UTC, datetime

from notes_backend.application.ports.revocation_store_port import RevocationStorePort
from notes_backend.application.ports.token_signer_port import TokenSignerPort
from notes_backend.domain.auth.errors import (
    ExpiredCredentialError,
    RevocationStoreUnavailableError,
    RevokedCredentialError,
)
from notes_backend.domain.auth.tokens import CredentialClaims, VerifiedCredential, hash_token

NowCallable = Callable[[], datetime]
DEFAULT_LOOKUP_TIMEOUT_SECONDS = 2.0


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


class CredentialVerifier:
    """Decide whether one presented token is currently valid."""

    def __init__(
        self,
        *,
        signer: TokenSignerPort,
        revocation_store: RevocationStorePort,
        lookup_timeout_seconds: float = DEFAULT_LOOKUP_TIMEOUT_SECONDS,
        now: NowCallable = _utc_now,
    ) -> None:
        self._signer = signer
        self._revocation_store = revocation_store
        self._lookup_timeout_seconds = lookup_timeout_seconds
        self._now = now

    async def verify(self, token: str) -> VerifiedCredential:
        """Return the verified credential or raise the first failing check."""

        claims = self._signer.read_claims(token)
        token_hash = hash_token(token)
        await self.check_not_revoked(token_hash=token_hash)
        self.check_cryptographic_validity(token=token, claims=claims)
        return VerifiedCredential(token_hash=token_hash, claims=claims)

    async def check_not_revoked(self, *, token_hash: str) -> None:
        """Raise when the fingerprint is revoked or the store cannot answer."""

        try:
            revoked = await asyncio.wait_for(
                self._revocation_store.is_revoked(token_hash=token_hash),
                timeout=self._lookup_timeout_seconds,
            )
        except TimeoutError as exc:
            raise RevocationStoreUnavailableError(
                "revocation lookup timed out"
            ) from exc
        except Exception as exc:  # noqa: BLE001
            raise RevocationStoreUnavailableError(
                f"revocation lookup failed: {type(exc).__name__}"
            ) from exc

        if revoked:
            raise RevokedCredentialError("token was revoked")

    def check_cryptographic_validity(self, *, token: str, claims: CredentialClaims) -> None:
        """Raise when the signature is wrong or the expiry has passed."""

        self._signer.verify_signature(token)
        if self._now() > claims.expires_at:
            raise ExpiredCredentialError("token expired")
