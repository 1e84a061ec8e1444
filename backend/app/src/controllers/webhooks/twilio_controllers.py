"""FastAPI endpoint for Twilio inbound WhatsApp webhooks."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Form
from sqlalchemy.orm import Session

from src.repositories.crm.dependencies import get_db
from src.repositories.crm.schemas.whatsapp_schema import WebhookAck
from src.services.crm.whatsapp_service import WhatsAppService, get_whatsapp_service

logger = logging.getLogger("twilio.webhook")

twilio_router = APIRouter(prefix="/api/whatsapp", tags=["twilio"])


@twilio_router.post("/webhook")
def receive_twilio_webhook(
    From: str = Form(...),
    Body: str = Form(default=""),
    db: Session = Depends(get_db),
    whatsapp_service: WhatsAppService = Depends(get_whatsapp_service),
) -> WebhookAck:
    """Log an inbound WhatsApp message against the matching customer."""
    logger.info("New WhatsApp message from %s", From)

    message = whatsapp_service.record_inbound(db, From, Body)
    if message is None:
        return WebhookAck(status="ignored")

    return WebhookAck(status="stored", message_id=message.id)
