"""Port for signing and checking bearer credential claims."""

from __future__ import annotations

from typing import Protocol

from notes_backend.domain.auth.tokens import CredentialClaims


class TokenSignerPort(Protocol):
    """Signed-token codec contract.

    `read_claims` only parses; it must not be treated as proof of integrity.
    `verify_signature` checks integrity only; expiry is judged by the caller.
    """

    def sign(self, claims: CredentialClaims) -> str:
        """Serialize and sign claims into an opaque bearer string."""

    def read_claims(self, token: str) -> CredentialClaims:
        """Parse claims without verification or raise MalformedCredentialError."""

    def verify_signature(self, token: str) -> None:
        """Raise InvalidSignatureError when the signature does not match."""
