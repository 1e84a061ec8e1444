"""Meeting endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from src.controllers.dependencies import get_current_user_id
from src.repositories.crm.dependencies import get_db
from src.repositories.crm.schemas.meetings_schema import (
    MeetingCreate,
    MeetingResponse,
    MeetingStatusUpdate,
)
from src.services.crm.meetings_service import MeetingService, get_meeting_service

meeting_router = APIRouter(prefix="/api/meetings", tags=["Meetings"])


@meeting_router.get("")
def list_meetings(
    db: Session = Depends(get_db),
    meeting_service: MeetingService = Depends(get_meeting_service),
) -> List[MeetingResponse]:
    return [MeetingResponse.from_meeting(m) for m in meeting_service.list_meetings(db)]


@meeting_router.post("", status_code=status.HTTP_201_CREATED)
def create_meeting(
    meeting_in: MeetingCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    meeting_service: MeetingService = Depends(get_meeting_service),
) -> MeetingResponse:
    return MeetingResponse.from_meeting(meeting_service.create(db, user_id, meeting_in))


@meeting_router.put("/{meeting_id}")
def update_meeting(
    meeting_id: int,
    update: MeetingStatusUpdate,
    db: Session = Depends(get_db),
    meeting_service: MeetingService = Depends(get_meeting_service),
) -> MeetingResponse:
    meeting = meeting_service.update_status(db, meeting_id, update.status)
    return MeetingResponse.from_meeting(meeting)
