"""Port for the revoked-credential store consulted on every request."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol


class RevocationStorePort(Protocol):
    """Revocation store contract keyed by token fingerprint.

    Entries carry the revoked credential's own expiry and stay visible to
    `is_revoked` until a sweep runs with `now >= expires_at`.
    """

    async def revoke(self, *, token_hash: str, expires_at: datetime) -> bool:
        """Record one revocation; return False when it already existed."""

    async def is_revoked(self, *, token_hash: str) -> bool:
        """Return whether a revocation entry exists for the fingerprint."""

    async def sweep_expired(self, *, now: datetime) -> int:
        """Delete entries with `expires_at <= now` and return the count removed."""
