from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta, timezone
from pathlib import Path

import pytest
import sqlalchemy as sa

from notes_backend.infrastructure.db.revocation_repository import SqlAlchemyRevocationStore
from notes_backend.infrastructure.db.session import create_session_factory
from tests.support.database import upgrade_head

EXPIRES_AT = datetime(2026, 6, 1, 12, 0, 0, tzinfo=UTC)


def _count_rows(sync_url: str) -> int:
    engine = sa.create_engine(sync_url)
    with engine.begin() as connection:
        count = connection.execute(sa.text("SELECT COUNT(*) FROM revoked_tokens")).scalar_one()
    engine.dispose()
    return int(count)


@pytest.mark.asyncio
async def test_revoke_is_idempotent_and_visible_to_lookup(tmp_path: Path) -> None:
    sync_url, async_url = upgrade_head(tmp_path, "revocation_idempotent.db")
    store = SqlAlchemyRevocationStore(create_session_factory(async_url))

    assert await store.is_revoked(token_hash="a" * 64) is False
    assert await store.revoke(token_hash="a" * 64, expires_at=EXPIRES_AT) is True
    assert await store.revoke(token_hash="a" * 64, expires_at=EXPIRES_AT) is False
    assert await store.is_revoked(token_hash="a" * 64) is True
    assert await store.is_revoked(token_hash="b" * 64) is False
    assert _count_rows(sync_url) == 1


@pytest.mark.asyncio
async def test_concurrent_revokes_of_same_token_leave_one_entry(tmp_path: Path) -> None:
    sync_url, async_url = upgrade_head(tmp_path, "revocation_concurrent.db")
    store = SqlAlchemyRevocationStore(create_session_factory(async_url))

    results = await asyncio.gather(
        store.revoke(token_hash="c" * 64, expires_at=EXPIRES_AT),
        store.revoke(token_hash="c" * 64, expires_at=EXPIRES_AT),
    )

    assert sorted(results) == [False, True]
    assert _count_rows(sync_url) == 1


@pytest.mark.asyncio
async def test_sweep_never_evicts_before_expiry(tmp_path: Path) -> None:
    sync_url, async_url = upgrade_head(tmp_path, "revocation_sweep.db")
    store = SqlAlchemyRevocationStore(create_session_factory(async_url))
    await store.revoke(token_hash="d" * 64, expires_at=EXPIRES_AT)
    await store.revoke(token_hash="e" * 64, expires_at=EXPIRES_AT + timedelta(hours=1))

    assert await store.sweep_expired(now=EXPIRES_AT - timedelta(seconds=1)) == 0
    assert await store.is_revoked(token_hash="d" * 64) is True

    assert await store.sweep_expired(now=EXPIRES_AT) == 1
    assert await store.is_revoked(token_hash="d" * 64) is False
    assert await store.is_revoked(token_hash="e" * 64) is True
    assert _count_rows(sync_url) == 1


@pytest.mark.asyncio
async def test_sweep_compares_instants_across_timezones(tmp_path: Path) -> None:
    _, async_url = upgrade_head(tmp_path, "revocation_timezones.db")
    store = SqlAlchemyRevocationStore(create_session_factory(async_url))
    await store.revoke(token_hash="f" * 64, expires_at=EXPIRES_AT)
    behind_utc = EXPIRES_AT.astimezone(timezone(timedelta(hours=-3))) - timedelta(seconds=1)

    assert await store.sweep_expired(now=behind_utc) == 0
    assert await store.is_revoked(token_hash="f" * 64) is True
