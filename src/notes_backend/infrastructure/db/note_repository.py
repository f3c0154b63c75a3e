"""SQLAlchemy adapter for note persistence."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import cast
from uuid import UUID, uuid4

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from notes_backend.application.ports.note_repository_port import (
    NoteCreateInput,
    NoteRecord,
    NoteRepositoryPort,
)
from notes_backend.infrastructure.db.metadata import notes
from notes_backend.infrastructure.db.timestamps import as_utc


class SqlAlchemyNoteRepository(NoteRepositoryPort):
    """Note repository backed by SQLAlchemy async sessions."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def create_note(self, payload: NoteCreateInput) -> NoteRecord:
        now = datetime.now(tz=UTC)
        statement = sa.insert(notes).values(
            id=uuid4(),
            user_id=payload.user_id,
            title=payload.title,
            content=payload.content,
            created_at=now,
            updated_at=now,
        ).returning(*notes.c)

        async with self._session_factory() as session:
            result = await session.execute(statement)
            row = result.mappings().one()
            await session.commit()

        return _to_note_record(row)

    async def list_notes_for_user(self, *, user_id: UUID) -> list[NoteRecord]:
        """Return notes owned by one user, newest first."""

        statement = (
            sa.select(*notes.c)
            .where(notes.c.user_id == user_id)
            .order_by(notes.c.created_at.desc(), notes.c.id)
        )

        async with self._session_factory() as session:
            result = await session.execute(statement)

        return [_to_note_record(row) for row in result.mappings().all()]


def _to_note_record(row: sa.RowMapping) -> NoteRecord:
    raw_note_id = row["id"]
    raw_user_id = row["user_id"]
    return NoteRecord(
        note_id=raw_note_id if isinstance(raw_note_id, UUID) else UUID(str(raw_note_id)),
        user_id=raw_user_id if isinstance(raw_user_id, UUID) else UUID(str(raw_user_id)),
        title=cast(str, row["title"]),
        content=cast(str, row["content"]),
        created_at=as_utc(cast(datetime, row["created_at"])),
        updated_at=as_utc(cast(datetime, row["updated_at"])),
    )
