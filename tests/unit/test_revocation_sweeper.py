from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta

import pytest

from notes_backend.application.services.revocation_sweeper import RevocationSweeper
from tests.support.fakes import FakeClock, FakeRevocationStore

T0 = datetime(2026, 4, 1, tzinfo=UTC)


class ExplodingRevocationStore(FakeRevocationStore):
    def __init__(self) -> None:
        super().__init__()
        self.sweep_calls = 0

    async def sweep_expired(self, *, now: datetime) -> int:
        self.sweep_calls += 1
        raise ConnectionError("database unreachable")


@pytest.mark.asyncio
async def test_run_once_removes_only_entries_at_or_past_expiry() -> None:
    store = FakeRevocationStore()
    clock = FakeClock(T0)
    await store.revoke(token_hash="past", expires_at=T0 - timedelta(seconds=1))
    await store.revoke(token_hash="boundary", expires_at=T0)
    await store.revoke(token_hash="future", expires_at=T0 + timedelta(seconds=1))
    sweeper = RevocationSweeper(revocation_store=store, now=clock)

    removed = await sweeper.run_once()

    assert removed == 2
    assert list(store.entries) == ["future"]


@pytest.mark.asyncio
async def test_run_until_stopped_survives_store_errors_and_stops_promptly() -> None:
    store = ExplodingRevocationStore()
    stop_event = asyncio.Event()
    sleeps: list[float] = []

    async def fake_sleep(seconds: float) -> None:
        sleeps.append(seconds)
        if len(sleeps) >= 2:
            stop_event.set()
        await asyncio.sleep(0)

    sweeper = RevocationSweeper(
        revocation_store=store,
        interval_seconds=30.0,
        sleep=fake_sleep,
    )

    await asyncio.wait_for(sweeper.run_until_stopped(stop_event), timeout=1.0)

    assert store.sweep_calls == 2
    assert sleeps == [30.0, 30.0]


@pytest.mark.asyncio
async def test_stop_event_interrupts_interval_wait() -> None:
    stop_event = asyncio.Event()
    sweeper = RevocationSweeper(revocation_store=FakeRevocationStore(), interval_seconds=3600.0)

    task = asyncio.create_task(sweeper.run_until_stopped(stop_event))
    await asyncio.sleep(0.01)
    stop_event.set()

    await asyncio.wait_for(task, timeout=1.0)
