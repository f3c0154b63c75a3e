"""Bearer credential value objects and token fingerprinting."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CredentialClaims:
    """Claims carried inside one signed bearer credential."""

    subject: str
    token_id: str
    issued_at: datetime
    expires_at: datetime

    def __post_init__(self) -> None:
        if self.expires_at <= self.issued_at:
            raise ValueError("credential expiry must be later than issuance")


@dataclass(frozen=True)
class IssuedCredential:
    """Signed bearer token returned to the caller at login."""

    token: str
    claims: CredentialClaims


@dataclass(frozen=True)
class VerifiedCredential:
    """Credential that passed revocation, signature, and expiry checks."""

    token_hash: str
    claims: CredentialClaims

    @property
    def subject(self) -> str:
        return self.claims.subject

    @property
    def expires_at(self) -> datetime:
        return self.claims.expires_at


def hash_token(token: str) -> str:
    """Return the deterministic SHA-256 fingerprint used to key revocations."""

    return hashlib.sha256(token.encode("utf-8")).hexdigest()
