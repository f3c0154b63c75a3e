"""FastAPI router for notes owned by the authenticated caller."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from notes_backend.application.dto.note_models import (
    NoteCreateRequest,
    NoteCreateResponse,
    NoteItem,
    NoteListResponse,
)
from notes_backend.application.ports.note_repository_port import NoteRecord
from notes_backend.application.services.note_service import EmptyNoteError, NoteService
from notes_backend.infrastructure.http.auth_guard import AuthenticatedSession, SessionDependency


def build_notes_router(
    *,
    note_service: NoteService,
    require_session: SessionDependency,
) -> APIRouter:
    """Build router whose every route passes through the session gate."""

    router = APIRouter(
        prefix="/api/notes",
        tags=["notes"],
        dependencies=[Depends(require_session)],
    )

    @router.post("/create", response_model=NoteCreateResponse, status_code=201)
    async def create_note(
        payload: NoteCreateRequest,
        session: AuthenticatedSession = Depends(require_session),
    ) -> NoteCreateResponse:
        try:
            note = await note_service.create_note(
                user_id=session.user.user_id,
                title=payload.title,
                content=payload.content,
            )
        except EmptyNoteError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        return NoteCreateResponse(message="note created", note=_to_note_item(note))

    @router.get("/getNotes", response_model=NoteListResponse)
    async def get_notes(
        session: AuthenticatedSession = Depends(require_session),
    ) -> NoteListResponse:
        notes = await note_service.list_notes(user_id=session.user.user_id)
        return NoteListResponse(
            message="notes retrieved",
            notes=[_to_note_item(note) for note in notes],
        )

    return router


def _to_note_item(note: NoteRecord) -> NoteItem:
    return NoteItem(
        note_id=note.note_id,
        title=note.title,
        content=note.content,
        created_at=note.created_at,
        updated_at=note.updated_at,
    )
