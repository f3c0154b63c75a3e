"""Port for per-user note persistence."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID


@dataclass(frozen=True)
class NoteCreateInput:
    """Input payload for inserting one note."""

    user_id: UUID
    title: str
    content: str


@dataclass(frozen=True)
class NoteRecord:
    """Persisted note model."""

    note_id: UUID
    user_id: UUID
    title: str
    content: str
    created_at: datetime
    updated_at: datetime


class NoteRepositoryPort(Protocol):
    """Note repository contract."""

    async def create_note(self, payload: NoteCreateInput) -> NoteRecord:
        """Persist one note and return the stored row."""

    async def list_notes_for_user(self, *, user_id: UUID) -> list[NoteRecord]:
        """Return notes owned by one user, newest first."""
