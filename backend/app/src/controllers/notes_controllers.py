"""Interaction log endpoints."""

from typing import List

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.orm import Session

from src.controllers.dependencies import get_current_user_id
from src.repositories.crm.dependencies import get_db
from src.repositories.crm.schemas.notes_schema import NoteCreate, NoteResponse
from src.services.crm.notes_service import NoteService, get_note_service

note_router = APIRouter(prefix="/api/customers/{customer_id}", tags=["Notes"])


@note_router.get("/notes")
def list_notes(
    customer_id: int,
    db: Session = Depends(get_db),
    note_service: NoteService = Depends(get_note_service),
) -> List[NoteResponse]:
    """Notes of a customer, newest first, with author and annotation."""
    return [NoteResponse.from_note(note) for note in note_service.list_notes(db, customer_id)]


@note_router.post("/notes", status_code=status.HTTP_201_CREATED)
def create_note(
    customer_id: int,
    note_in: NoteCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    """
    Append a note.

    Long notes are annotated when OpenAI is configured; the annotation is
    best-effort and never fails this request.
    """
    note = note_service.add_note(db, customer_id, user_id, note_in.content, note_in.type)
    return NoteResponse.from_note(note)


@note_router.post("/upload-audio", status_code=status.HTTP_201_CREATED)
def upload_audio(
    customer_id: int,
    audio: UploadFile = File(...),
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    """Transcribe an uploaded recording into an audio note."""
    note = note_service.add_audio_note(
        db, customer_id, user_id, audio.file, audio.filename or "audio.mp3"
    )
    return NoteResponse.from_note(note)
