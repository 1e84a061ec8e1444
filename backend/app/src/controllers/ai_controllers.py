"""Standalone AI helpers: message drafting and transcription."""

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from src.repositories.crm.dependencies import get_db
from src.repositories.crm.schemas.analysis_schema import (
    DraftMessageRequest,
    DraftMessageResponse,
    TranscriptionResponse,
)
from src.services.ai.transcription_service import (
    TranscriptionService,
    get_transcription_service,
)
from src.services.crm.customer_analysis_service import (
    CustomerAnalysisService,
    get_customer_analysis_service,
)

ai_router = APIRouter(prefix="/api", tags=["AI"])


@ai_router.post("/ai/generate-message")
def generate_message(
    request: DraftMessageRequest,
    db: Session = Depends(get_db),
    analysis_service: CustomerAnalysisService = Depends(get_customer_analysis_service),
) -> DraftMessageResponse:
    message = analysis_service.draft_message(db, request.customer_id, request.message_type)
    return DraftMessageResponse(message=message)


@ai_router.post("/transcribe")
def transcribe(
    audio: UploadFile = File(...),
    transcription_service: TranscriptionService = Depends(get_transcription_service),
) -> TranscriptionResponse:
    text = transcription_service.transcribe(audio.file, audio.filename or "audio.mp3")
    return TranscriptionResponse(text=text)
