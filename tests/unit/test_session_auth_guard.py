from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta

import pytest

from notes_backend.application.services.credential_issuer import CredentialIssuer
from notes_backend.application.services.credential_verifier import CredentialVerifier
from notes_backend.domain.auth.tokens import hash_token
from notes_backend.infrastructure.http.auth_guard import (
    UNAUTHENTICATED_DETAIL,
    AuthUnavailableError,
    InvalidAuthTokenError,
    MissingAuthTokenError,
    SessionAuthGuard,
    extract_bearer_token,
)
from notes_backend.infrastructure.security.jwt_token_signer import JwtTokenSigner
from tests.support.fakes import (
    FailingRevocationStore,
    FakeClock,
    FakeRevocationStore,
    FakeUserRepository,
    make_user,
)
from tests.support.tokens import tamper_payload

SECRET = "signing-secret"


def _guard(
    store: FakeRevocationStore,
    users: FakeUserRepository,
) -> tuple[SessionAuthGuard, CredentialIssuer, FakeClock]:
    clock = FakeClock(datetime(2026, 3, 1, 9, 0, 0, tzinfo=UTC))
    signer = JwtTokenSigner(secret=SECRET)
    issuer = CredentialIssuer(signer=signer, now=clock)
    verifier = CredentialVerifier(signer=signer, revocation_store=store, now=clock)
    return SessionAuthGuard(verifier=verifier, user_repository=users), issuer, clock


def test_extract_bearer_token_returns_token_value() -> None:
    assert extract_bearer_token("Bearer opaque-token") == "opaque-token"
    assert extract_bearer_token("bearer opaque-token") == "opaque-token"


@pytest.mark.parametrize("header", [None, "", "   "])
def test_extract_bearer_token_rejects_missing_value(header: str | None) -> None:
    with pytest.raises(MissingAuthTokenError, match="missing bearer token"):
        extract_bearer_token(header)


@pytest.mark.parametrize("header", ["Basic token", "Bearer", "Bearer   ", "Bearer a b"])
def test_extract_bearer_token_rejects_malformed_header(header: str) -> None:
    with pytest.raises(InvalidAuthTokenError, match="invalid bearer token header"):
        extract_bearer_token(header)


@pytest.mark.asyncio
async def test_guard_admits_valid_token_and_resolves_user() -> None:
    user = make_user()
    guard, issuer, _ = _guard(FakeRevocationStore(), FakeUserRepository([user]))
    issued = issuer.issue(subject=str(user.user_id))

    session = await guard.require_session(authorization_header=f"Bearer {issued.token}")

    assert session.user == user
    assert session.credential.token_hash == hash_token(issued.token)
    assert session.credential.expires_at == issued.claims.expires_at


@pytest.mark.asyncio
async def test_rejections_share_one_message_and_log_distinct_reasons(
    caplog: pytest.LogCaptureFixture,
) -> None:
    user = make_user()
    store = FakeRevocationStore()
    guard, issuer, clock = _guard(store, FakeUserRepository([user]))
    revoked = issuer.issue(subject=str(user.user_id))
    await store.revoke(token_hash=hash_token(revoked.token), expires_at=revoked.claims.expires_at)
    forged = tamper_payload(issuer.issue(subject=str(user.user_id)).token, sub="someone-else")
    expiring = issuer.issue(subject=str(user.user_id))
    clock.advance(timedelta(hours=1, seconds=1))

    caplog.set_level(logging.INFO, logger="notes_backend.infrastructure.http.auth_guard")
    messages = []
    for token in ("garbage", revoked.token, forged, expiring.token):
        with pytest.raises(InvalidAuthTokenError) as exc_info:
            await guard.require_session(authorization_header=f"Bearer {token}")
        messages.append(str(exc_info.value))

    assert set(messages) == {UNAUTHENTICATED_DETAIL}
    for reason in ("malformed", "revoked", "invalid_signature", "expired"):
        assert f"credential_rejected reason={reason}" in caplog.text
    assert revoked.token not in caplog.text


@pytest.mark.asyncio
async def test_guard_rejects_token_for_deleted_user() -> None:
    user = make_user()
    guard, issuer, _ = _guard(FakeRevocationStore(), FakeUserRepository([]))
    issued = issuer.issue(subject=str(user.user_id))

    with pytest.raises(InvalidAuthTokenError, match=UNAUTHENTICATED_DETAIL):
        await guard.require_session(authorization_header=f"Bearer {issued.token}")


@pytest.mark.asyncio
async def test_guard_rejects_non_uuid_subject() -> None:
    guard, issuer, _ = _guard(FakeRevocationStore(), FakeUserRepository([make_user()]))
    issued = issuer.issue(subject="not-a-uuid")

    with pytest.raises(InvalidAuthTokenError, match=UNAUTHENTICATED_DETAIL):
        await guard.require_session(authorization_header=f"Bearer {issued.token}")


@pytest.mark.asyncio
async def test_guard_fails_closed_when_revocation_store_is_down() -> None:
    user = make_user()
    guard, issuer, _ = _guard(FailingRevocationStore(), FakeUserRepository([user]))
    issued = issuer.issue(subject=str(user.user_id))

    with pytest.raises(AuthUnavailableError):
        await guard.require_session(authorization_header=f"Bearer {issued.token}")
