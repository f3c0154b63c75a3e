"""Periodic garbage collection of revocation entries past their expiry."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime

from notes_backend.application.ports.revocation_store_port import RevocationStorePort

SleepCallable = Callable[[float], Awaitable[None]]
NowCallable = Callable[[], datetime]
logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


class RevocationSweeper:
    """Best-effort sweep loop; the verifier's expiry check stays authoritative."""

    def __init__(
        self,
        *,
        revocation_store: RevocationStorePort,
        interval_seconds: float = 300.0,
        sleep: SleepCallable = asyncio.sleep,
        now: NowCallable = _utc_now,
    ) -> None:
        self._revocation_store = revocation_store
        self._interval_seconds = interval_seconds
        self._sleep = sleep
        self._now = now

    async def run_once(self) -> int:
        """Sweep once and return the number of removed entries."""

        removed = await self._revocation_store.sweep_expired(now=self._now())
        if removed:
            logger.info("revocation_sweep_done removed=%s", removed)
        return removed

    async def run_until_stopped(self, stop_event: asyncio.Event) -> None:
        """Sweep on a fixed interval until stop_event is set."""

        while not stop_event.is_set():
            try:
                await self.run_once()
            except Exception as error:  # noqa: BLE001
                logger.warning("revocation_sweep_failed error=%s", error)
            await self._wait(stop_event)

    async def _wait(self, stop_event: asyncio.Event) -> None:
        sleeper = asyncio.ensure_future(self._sleep(self._interval_seconds))
        stopper = asyncio.ensure_future(stop_event.wait())
        _, pending = await asyncio.wait(
            {sleeper, stopper},
            return_when=asyncio.FIRST_COMPLETED,
        )
        for task in pending:
            task.cancel()
