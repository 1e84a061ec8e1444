"""Pydantic schemas for meetings."""

from datetime import datetime
from typing import Annotated, Literal, Optional

from pydantic import BaseModel, StringConstraints, model_validator

from src.repositories.crm.models.meetings_model import Meeting


MeetingStatus = Literal["scheduled", "completed", "cancelled"]


class MeetingCreate(BaseModel):
    """Payload to schedule a meeting."""

    customer_id: int
    title: Annotated[str, StringConstraints(min_length=1, max_length=255)]
    description: Optional[str] = None
    start_date: datetime
    end_date: datetime

    @model_validator(mode="after")
    def _check_range(self) -> "MeetingCreate":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class MeetingStatusUpdate(BaseModel):
    status: MeetingStatus


class MeetingResponse(BaseModel):
    """Response model for a meeting joined with customer and organiser names."""

    id: int
    customer_id: int
    user_id: int
    title: str
    description: Optional[str] = None
    start_date: datetime
    end_date: datetime
    status: MeetingStatus
    notification_sent: bool
    created_at: datetime
    customer_name: Optional[str] = None
    company: Optional[str] = None
    user_name: Optional[str] = None

    @classmethod
    def from_meeting(cls, meeting: Meeting) -> "MeetingResponse":
        customer = meeting.customer
        return cls(
            id=meeting.id,
            customer_id=meeting.customer_id,
            user_id=meeting.user_id,
            title=meeting.title,
            description=meeting.description,
            start_date=meeting.start_date,
            end_date=meeting.end_date,
            status=meeting.status,
            notification_sent=meeting.notification_sent,
            created_at=meeting.created_at,
            customer_name=customer.full_name if customer else None,
            company=customer.company if customer else None,
            user_name=meeting.user.username if meeting.user else None,
        )
