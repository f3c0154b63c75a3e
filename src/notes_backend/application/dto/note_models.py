"""Pydantic models for note HTTP contracts."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from notes_backend.application.dto.auth_models import StrictModel


class NoteCreateRequest(StrictModel):
    """HTTP request model for creating one note; missing fields count as blank."""

    title: str = ""
    content: str = ""


class NoteItem(StrictModel):
    """One note as returned to its owner."""

    note_id: UUID
    title: str
    content: str
    created_at: datetime
    updated_at: datetime


class NoteCreateResponse(StrictModel):
    message: str
    note: NoteItem


class NoteListResponse(StrictModel):
    message: str
    notes: list[NoteItem]
