"""SQLAlchemy adapter for the revoked-token store."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any, cast

import sqlalchemy as sa
from sqlalchemy.engine import CursorResult
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from notes_backend.application.ports.revocation_store_port import RevocationStorePort
from notes_backend.infrastructure.db.metadata import revoked_tokens

logger = logging.getLogger(__name__)


class SqlAlchemyRevocationStore(RevocationStorePort):
    """Revocation store keyed by token fingerprint primary key.

    Single-row atomicity of the primary key makes concurrent revokes of the
    same token converge on one entry.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def revoke(self, *, token_hash: str, expires_at: datetime) -> bool:
        """Insert one entry; a duplicate fingerprint is a no-op."""

        statement = sa.insert(revoked_tokens).values(
            token_hash=token_hash,
            expires_at=expires_at.astimezone(UTC),
            revoked_at=datetime.now(tz=UTC),
        )

        async with self._session_factory() as session:
            try:
                await session.execute(statement)
                await session.commit()
            except IntegrityError:
                await session.rollback()
                return False

        return True

    async def is_revoked(self, *, token_hash: str) -> bool:
        statement = (
            sa.select(revoked_tokens.c.token_hash)
            .where(revoked_tokens.c.token_hash == token_hash)
            .limit(1)
        )

        async with self._session_factory() as session:
            result = await session.execute(statement)

        return result.first() is not None

    async def sweep_expired(self, *, now: datetime) -> int:
        """Delete entries whose expiry is at or before `now`."""

        statement = sa.delete(revoked_tokens).where(
            revoked_tokens.c.expires_at <= now.astimezone(UTC)
        )

        async with self._session_factory() as session:
            result = cast(CursorResult[Any], await session.execute(statement))
            await session.commit()

        removed = int(result.rowcount or 0)
        logger.debug("revocation_sweep now=%s removed=%s", now.isoformat(), removed)
        return removed
