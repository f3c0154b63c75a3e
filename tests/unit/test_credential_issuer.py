from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from notes_backend.application.services.credential_issuer import CredentialIssuer
from notes_backend.domain.auth.errors import ConfigurationError
from notes_backend.infrastructure.security.jwt_token_signer import JwtTokenSigner

SECRET = "signing-secret"


def test_issue_sets_expiry_ttl_after_issuance_and_signs_claims() -> None:
    fixed_now = datetime(2026, 2, 15, 0, 0, 0, 750_000, tzinfo=UTC)
    signer = JwtTokenSigner(secret=SECRET)
    issuer = CredentialIssuer(
        signer=signer,
        token_ttl=timedelta(hours=1),
        now=lambda: fixed_now,
        token_id_factory=lambda: "token-1",
    )

    issued = issuer.issue(subject="u1")

    assert issued.claims.subject == "u1"
    assert issued.claims.token_id == "token-1"
    assert issued.claims.issued_at == datetime(2026, 2, 15, 0, 0, 0, tzinfo=UTC)
    assert issued.claims.expires_at == datetime(2026, 2, 15, 1, 0, 0, tzinfo=UTC)
    assert signer.read_claims(issued.token) == issued.claims
    signer.verify_signature(issued.token)


def test_tokens_issued_in_same_second_are_distinct() -> None:
    fixed_now = datetime(2026, 2, 15, tzinfo=UTC)
    issuer = CredentialIssuer(signer=JwtTokenSigner(secret=SECRET), now=lambda: fixed_now)

    first = issuer.issue(subject="u1")
    second = issuer.issue(subject="u1")

    assert first.token != second.token
    assert first.claims.expires_at == second.claims.expires_at


def test_default_ttl_is_one_hour() -> None:
    fixed_now = datetime(2026, 2, 15, tzinfo=UTC)
    issuer = CredentialIssuer(signer=JwtTokenSigner(secret=SECRET), now=lambda: fixed_now)

    issued = issuer.issue(subject="u1")

    assert issued.claims.expires_at - issued.claims.issued_at == timedelta(hours=1)


@pytest.mark.parametrize("ttl", [timedelta(0), timedelta(milliseconds=500), timedelta(hours=-1)])
def test_non_positive_ttl_is_rejected_at_construction(ttl: timedelta) -> None:
    with pytest.raises(ConfigurationError):
        CredentialIssuer(signer=JwtTokenSigner(secret=SECRET), token_ttl=ttl)
