"""HS256 JWT codec for bearer credentials backed by python-jose."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from jose import jws, jwt
from jose.exceptions import JOSEError

from notes_backend.application.ports.token_signer_port import TokenSignerPort
from notes_backend.domain.auth.errors import (
    ConfigurationError,
    InvalidSignatureError,
    MalformedCredentialError,
)
from notes_backend.domain.auth.tokens import CredentialClaims

JWT_ALGORITHM = "HS256"


class JwtTokenSigner(TokenSignerPort):
    """Sign and check credential claims with one process-wide HMAC secret."""

    def __init__(self, *, secret: str, algorithm: str = JWT_ALGORITHM) -> None:
        if not secret or not secret.strip():
            raise ConfigurationError("JWT signing secret is missing or empty")
        self._secret = secret
        self._algorithm = algorithm

    def sign(self, claims: CredentialClaims) -> str:
        payload = {
            "sub": claims.subject,
            "jti": claims.token_id,
            "iat": int(claims.issued_at.timestamp()),
            "exp": int(claims.expires_at.timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def read_claims(self, token: str) -> CredentialClaims:
        try:
            payload = jwt.get_unverified_claims(token)
        except JOSEError as exc:
            raise MalformedCredentialError("token is not a parseable JWT") from exc

        return _claims_from_payload(payload)

    def verify_signature(self, token: str) -> None:
        try:
            jws.verify(token, self._secret, algorithms=[self._algorithm])
        except JOSEError as exc:
            raise InvalidSignatureError("token signature verification failed") from exc


def _claims_from_payload(payload: dict[str, Any]) -> CredentialClaims:
    subject = payload.get("sub")
    token_id = payload.get("jti")
    issued_at = payload.get("iat")
    expires_at = payload.get("exp")

    if not isinstance(subject, str) or not subject:
        raise MalformedCredentialError("token subject claim is missing")
    if not isinstance(token_id, str) or not token_id:
        raise MalformedCredentialError("token id claim is missing")
    if not _is_timestamp(issued_at) or not _is_timestamp(expires_at):
        raise MalformedCredentialError("token timestamp claims are missing")

    try:
        return CredentialClaims(
            subject=subject,
            token_id=token_id,
            issued_at=datetime.fromtimestamp(issued_at, tz=UTC),
            expires_at=datetime.fromtimestamp(expires_at, tz=UTC),
        )
    except (OverflowError, OSError, ValueError) as exc:
        raise MalformedCredentialError("token timestamp claims are invalid") from exc


def _is_timestamp(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
