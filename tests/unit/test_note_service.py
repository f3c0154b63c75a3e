from __future__ import annotations

from uuid import uuid4

import pytest

from notes_backend.application.services.note_service import EmptyNoteError, NoteService
from tests.support.fakes import FakeNoteRepository


@pytest.mark.parametrize(("title", "content"), [("", "body"), ("title", ""), ("  ", "  ")])
@pytest.mark.asyncio
async def test_blank_title_or_content_is_rejected(title: str, content: str) -> None:
    notes = FakeNoteRepository()
    service = NoteService(notes=notes)

    with pytest.raises(EmptyNoteError, match="title or content cannot be empty"):
        await service.create_note(user_id=uuid4(), title=title, content=content)

    assert notes.notes == []


@pytest.mark.asyncio
async def test_notes_are_listed_per_owner_newest_first() -> None:
    service = NoteService(notes=FakeNoteRepository())
    owner = uuid4()
    other = uuid4()

    first = await service.create_note(user_id=owner, title=" First ", content="a")
    await service.create_note(user_id=other, title="Other", content="b")
    second = await service.create_note(user_id=owner, title="Second", content="c")

    listed = await service.list_notes(user_id=owner)

    assert [note.note_id for note in listed] == [second.note_id, first.note_id]
    assert first.title == "First"
