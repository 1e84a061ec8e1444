"""WhatsApp endpoints used by the dashboard."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from src.repositories.crm.dependencies import get_db
from src.repositories.crm.schemas.whatsapp_schema import (
    MessageResponse,
    SendMessageRequest,
    SendMessageResponse,
    TemplateResponse,
)
from src.services.crm.whatsapp_service import WhatsAppService, get_whatsapp_service

whatsapp_router = APIRouter(prefix="/api/whatsapp", tags=["WhatsApp"])


@whatsapp_router.get("/templates")
def list_templates(
    db: Session = Depends(get_db),
    whatsapp_service: WhatsAppService = Depends(get_whatsapp_service),
) -> List[TemplateResponse]:
    return [TemplateResponse.model_validate(t) for t in whatsapp_service.list_templates(db)]


@whatsapp_router.post("/send")
def send_message(
    request: SendMessageRequest,
    db: Session = Depends(get_db),
    whatsapp_service: WhatsAppService = Depends(get_whatsapp_service),
) -> SendMessageResponse:
    """Send a message to the customer's stored phone through Twilio."""
    message = whatsapp_service.record_outbound(db, request.customer_id, request.message)
    return SendMessageResponse(success=True, messageId=message.provider_sid)


@whatsapp_router.get("/messages/{customer_id}")
def list_messages(
    customer_id: int,
    db: Session = Depends(get_db),
    whatsapp_service: WhatsAppService = Depends(get_whatsapp_service),
) -> List[MessageResponse]:
    return [
        MessageResponse.model_validate(m)
        for m in whatsapp_service.list_messages(db, customer_id)
    ]
