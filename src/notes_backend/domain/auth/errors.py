"""Error taxonomy for credential issuance and verification."""

from __future__ import annotations

from enum import StrEnum


class ConfigurationError(RuntimeError):
    """Raised at startup when auth configuration cannot serve traffic."""


class RejectionReason(StrEnum):
    """Internal reasons a presented credential was refused."""

    MALFORMED = "malformed"
    REVOKED = "revoked"
    INVALID_SIGNATURE = "invalid_signature"
    EXPIRED = "expired"
    UNAVAILABLE = "unavailable"


class CredentialVerificationError(PermissionError):
    """Base class for every credential verification failure."""

    reason: RejectionReason

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.reason.value.replace("_", " "))


class MalformedCredentialError(CredentialVerificationError):
    """Raised when a token cannot be parsed into the expected claims."""

    reason = RejectionReason.MALFORMED


class RevokedCredentialError(CredentialVerificationError):
    """Raised when a token was explicitly revoked by logout."""

    reason = RejectionReason.REVOKED


class InvalidSignatureError(CredentialVerificationError):
    """Raised when the token signature does not match its claims."""

    reason = RejectionReason.INVALID_SIGNATURE


class ExpiredCredentialError(CredentialVerificationError):
    """Raised when the token expiry has passed."""

    reason = RejectionReason.EXPIRED


class RevocationStoreUnavailableError(CredentialVerificationError):
    """Raised when revocation status cannot be determined; fails closed."""

    reason = RejectionReason.UNAVAILABLE
