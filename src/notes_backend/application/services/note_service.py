"""Application service for notes owned by the authenticated user."""

from __future__ import annotations

from uuid import UUID

from notes_backend.application.ports.note_repository_port import (
    NoteCreateInput,
    NoteRecord,
    NoteRepositoryPort,
)


class EmptyNoteError(ValueError):
    """Raised when a note title or content is blank."""

    def __init__(self) -> None:
        super().__init__("title or content cannot be empty")


class NoteService:
    """Create and list notes scoped to one owner."""

    def __init__(self, *, notes: NoteRepositoryPort) -> None:
        self._notes = notes

    async def create_note(self, *, user_id: UUID, title: str, content: str) -> NoteRecord:
        if not title.strip() or not content.strip():
            raise EmptyNoteError()

        return await self._notes.create_note(
            NoteCreateInput(user_id=user_id, title=title.strip(), content=content)
        )

    async def list_notes(self, *, user_id: UUID) -> list[NoteRecord]:
        return await self._notes.list_notes_for_user(user_id=user_id)
