"""
Notes API — Notes Route Handlers
=================================

What:  GET / POST / PATCH / DELETE on /notes.
How:   Parses the JSON body, delegates to NoteService, returns JSON.
       Errors raised by the service are turned into responses by the
       global exception handlers; no handler catches anything itself.

Note that PATCH and DELETE take the note id in the request body, not in
the path, and that DELETE answers with a bare JSON string. A request with no
body at all is treated like an empty JSON object, so it reaches the service
and fails its field checks with 400.
"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.database import get_db_session
from notes_api.schemas.note import (
    ErrorResponse,
    MessageResponse,
    NoteCreateRequest,
    NoteDeleteRequest,
    NoteUpdateRequest,
    NoteWithUsername,
)
from notes_api.services.note_service import NoteService
from notes_api.stores import NoteStore, UserStore


# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(tags=["Notes"])

_client_errors = {
    400: {"description": "Missing fields, unknown user or note", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


def get_note_service(db: AsyncSession = Depends(get_db_session)) -> NoteService:
    """Builds a NoteService around the request's session."""
    return NoteService(notes=NoteStore(db), users=UserStore(db))


@router.get(
    "/notes",
    response_model=List[NoteWithUsername],
    responses={
        400: {"description": "No notes found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List all notes with their owner's username",
)
async def list_notes(
    service: NoteService = Depends(get_note_service),
) -> List[NoteWithUsername]:
    return await service.list_notes()


@router.post(
    "/notes",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        **_client_errors,
        409: {"description": "Duplicate note title", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    payload: Optional[NoteCreateRequest] = Body(default=None),
    service: NoteService = Depends(get_note_service),
) -> MessageResponse:
    payload = payload or NoteCreateRequest()
    return await service.create_note(
        user=payload.user,
        title=payload.title,
        text=payload.text,
    )


@router.patch(
    "/notes",
    response_model=MessageResponse,
    responses={
        **_client_errors,
        409: {"description": "Duplicate note title", "model": ErrorResponse},
    },
    summary="Replace a note's user, title, text and completed flag",
)
async def update_note(
    payload: Optional[NoteUpdateRequest] = Body(default=None),
    service: NoteService = Depends(get_note_service),
) -> MessageResponse:
    """
    Full replace of the note named by `payload.id`.

    All of id, user, title, text and completed must be sent; completed
    must be a JSON boolean.
    """
    payload = payload or NoteUpdateRequest()
    return await service.update_note(
        note_id=payload.id,
        user=payload.user,
        title=payload.title,
        text=payload.text,
        completed=payload.completed,
    )


@router.delete(
    "/notes",
    response_model=str,
    responses=_client_errors,
    summary="Delete a note",
)
async def delete_note(
    payload: Optional[NoteDeleteRequest] = Body(default=None),
    service: NoteService = Depends(get_note_service),
) -> str:
    payload = payload or NoteDeleteRequest()
    return await service.delete_note(note_id=payload.id)
