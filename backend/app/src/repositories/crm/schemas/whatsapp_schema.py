"""Pydantic schemas for WhatsApp messages and templates."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field


class SendMessageRequest(BaseModel):
    """Outbound message request."""

    customer_id: int
    message: str = Field(..., min_length=1)


class SendMessageResponse(BaseModel):
    """Outcome of an outbound send."""

    success: bool
    messageId: Optional[str] = None


class MessageResponse(BaseModel):
    """Response model for a logged WhatsApp message."""

    id: int
    customer_id: int
    direction: Literal["inbound", "outbound"]
    message: str
    status: Optional[str] = None
    phone_number: Optional[str] = None
    provider_sid: Optional[str] = None
    created_at: datetime

    model_config = {
        "from_attributes": True,
    }


class TemplateResponse(BaseModel):
    """Response model for a message template."""

    id: int
    name: str
    template_type: str
    content: str
    is_active: bool

    model_config = {
        "from_attributes": True,
    }


class WebhookAck(BaseModel):
    """Data model for the response of the inbound webhook."""

    status: str = Field(..., description="Either 'stored' or 'ignored'.")
    message_id: Optional[int] = None
