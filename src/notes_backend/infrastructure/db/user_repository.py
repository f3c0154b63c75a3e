"""SQLAlchemy adapter for user persistence."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import cast
from uuid import UUID, uuid4

import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from notes_backend.application.ports.user_repository_port import (
    DuplicateUserEmailError,
    UserCreateInput,
    UserRecord,
    UserRepositoryPort,
)
from notes_backend.infrastructure.db.metadata import users
from notes_backend.infrastructure.db.timestamps import as_utc


class SqlAlchemyUserRepository(UserRepositoryPort):
    """User repository backed by SQLAlchemy async sessions."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def create_user(self, payload: UserCreateInput) -> UserRecord:
        """Insert one user row; the unique email constraint decides duplicates."""

        now = datetime.now(tz=UTC)
        statement = sa.insert(users).values(
            id=uuid4(),
            name=payload.name,
            email=payload.email,
            password_hash=payload.password_hash,
            created_at=now,
            updated_at=now,
        ).returning(*users.c)

        async with self._session_factory() as session:
            try:
                result = await session.execute(statement)
                row = result.mappings().one()
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                raise DuplicateUserEmailError(email=payload.email) from exc

        return _to_user_record(row)

    async def get_by_id(self, *, user_id: UUID) -> UserRecord | None:
        statement = sa.select(*users.c).where(users.c.id == user_id).limit(1)
        return await self._fetch_one(statement)

    async def get_by_email(self, *, email: str) -> UserRecord | None:
        statement = sa.select(*users.c).where(users.c.email == email).limit(1)
        return await self._fetch_one(statement)

    async def _fetch_one(self, statement: sa.Select[tuple[object, ...]]) -> UserRecord | None:
        async with self._session_factory() as session:
            result = await session.execute(statement)

        row = result.mappings().first()
        if row is None:
            return None
        return _to_user_record(row)


def _to_user_record(row: sa.RowMapping) -> UserRecord:
    raw_user_id = row["id"]
    user_id = raw_user_id if isinstance(raw_user_id, UUID) else UUID(str(raw_user_id))
    return UserRecord(
        user_id=user_id,
        name=cast(str, row["name"]),
        email=cast(str, row["email"]),
        password_hash=cast(str, row["password_hash"]),
        created_at=as_utc(cast(datetime, row["created_at"])),
        updated_at=as_utc(cast(datetime, row["updated_at"])),
    )
