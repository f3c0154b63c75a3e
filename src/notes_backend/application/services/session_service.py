"""Open and close bearer sessions on top of the issuer and revocation store."""

from __future__ import annotations

import logging

from notes_backend.application.ports.revocation_store_port import RevocationStorePort
from notes_backend.application.ports.user_repository_port import UserRecord
from notes_backend.application.services.credential_issuer import CredentialIssuer
from notes_backend.domain.auth.tokens import IssuedCredential, VerifiedCredential

logger = logging.getLogger(__name__)


class SessionService:
    """Issue credentials at login and revoke them at logout."""

    def __init__(
        self,
        *,
        issuer: CredentialIssuer,
        revocation_store: RevocationStorePort,
    ) -> None:
        self._issuer = issuer
        self._revocation_store = revocation_store

    def open_session(self, *, user: UserRecord) -> IssuedCredential:
        """Issue a bearer credential whose subject is the user id."""

        return self._issuer.issue(subject=str(user.user_id))

    async def revoke_session(self, *, credential: VerifiedCredential) -> None:
        """Revoke the presented credential until its own natural expiry.

        Repeated logout with the same token is a no-op.
        """

        inserted = await self._revocation_store.revoke(
            token_hash=credential.token_hash,
            expires_at=credential.expires_at,
        )
        logger.info(
            "session_revoked subject=%s token_id=%s already_revoked=%s",
            credential.subject,
            credential.claims.token_id,
            not inserted,
        )
