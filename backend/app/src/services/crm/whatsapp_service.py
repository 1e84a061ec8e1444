"""This module provides the WhatsAppService class (the messaging log)."""

import logging
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from src.repositories.crm.crud.customers_crud import CRUDCustomer
from src.repositories.crm.crud.whatsapp_crud import CRUDWhatsApp
from src.repositories.crm.models.whatsapp_model import WhatsAppMessage, WhatsAppTemplate
from src.services.errors import ConfigurationError, NotFoundError
from src.services.messaging.whatsapp.phone import (
    digits_only,
    strip_inbound_prefixes,
    to_whatsapp_address,
)
from src.services.messaging.whatsapp.twilio_client import TwilioWhatsAppClient
from src.services.settings.runtime_config import (
    ConfigManager,
    RuntimeConfig,
    get_config_manager,
)

logger = logging.getLogger(__name__)

NO_PHONE_MESSAGE = "Customer not found or has no phone number on file."


class WhatsAppService:
    """Send WhatsApp messages and log inbound/outbound traffic per customer."""

    def __init__(
        self,
        repository: CRUDWhatsApp,
        customer_repository: CRUDCustomer,
        client: Optional[TwilioWhatsAppClient],
        config: RuntimeConfig,
    ) -> None:
        self.repository = repository
        self.customer_repository = customer_repository
        self.client = client
        self.config = config

    def record_outbound(
        self, db: Session, customer_id: int, message: str
    ) -> WhatsAppMessage:
        """
        Send ``message`` to the customer's stored phone and log it.

        Args:
            db (Session): The database session.
            customer_id (int): Recipient.
            message (str): Body text.

        Returns:
            WhatsAppMessage: The logged message with the provider status.

        Raises:
            ConfigurationError: Twilio credentials are missing.
            NotFoundError: unknown customer or no phone on file.
            ProviderError: Twilio refused the message; nothing is logged.
        """
        if self.client is None:
            raise ConfigurationError("WhatsApp integration is not configured.")

        customer = self.customer_repository.get(db, customer_id)
        if customer is None or not digits_only(customer.phone or ""):
            raise NotFoundError(NO_PHONE_MESSAGE)

        sent = self.client.send_message(to_whatsapp_address(customer.phone), message)
        logger.info("WhatsApp message %s sent to customer %s", sent.sid, customer_id)

        return self.repository.create_message(
            db,
            {
                "customer_id": customer.id,
                "direction": "outbound",
                "message": message,
                "status": sent.status,
                "phone_number": customer.phone,
                "provider_sid": sent.sid,
            },
        )

    def record_inbound(
        self, db: Session, from_phone_raw: str, body: str
    ) -> Optional[WhatsAppMessage]:
        """
        Attach an inbound message to the first customer whose phone contains the sender.

        The sender is reduced to its last ``phone_match_digits`` digits and
        matched as a substring of stored phone numbers, so customers sharing a
        suffix collide and the lowest id wins. Unmatched messages are dropped.

        Args:
            db (Session): The database session.
            from_phone_raw (str): Sender as received, e.g. ``whatsapp:+905551112233``.
            body (str): Message text.

        Returns:
            Optional[WhatsAppMessage]: The logged message, or None when dropped.
        """
        digits = strip_inbound_prefixes(from_phone_raw)
        if not digits:
            logger.info("Inbound message without a usable sender (%s) dropped", from_phone_raw)
            return None

        fragment = digits[-self.config.phone_match_digits:]
        matches = self.customer_repository.find_by_phone_fragment(db, fragment)
        if not matches:
            logger.info("No customer matches inbound number %s, message dropped", digits)
            return None
        if len(matches) > 1:
            logger.warning(
                "Inbound number %s matches %d customers, using customer %s",
                digits,
                len(matches),
                matches[0].id,
            )

        customer = matches[0]
        return self.repository.create_message(
            db,
            {
                "customer_id": customer.id,
                "direction": "inbound",
                "message": body or "",
                "status": "received",
                "phone_number": f"+{digits}"[:20],
            },
        )

    def list_messages(self, db: Session, customer_id: int) -> List[WhatsAppMessage]:
        return self.repository.get_by_customer_id(db, customer_id)

    def list_templates(self, db: Session) -> List[WhatsAppTemplate]:
        return self.repository.list_active_templates(db)


def get_whatsapp_service(
    repository: CRUDWhatsApp = Depends(),
    customer_repository: CRUDCustomer = Depends(),
    config_manager: ConfigManager = Depends(get_config_manager),
) -> WhatsAppService:
    """Assemble a WhatsAppService from the current configuration snapshot."""
    return WhatsAppService(
        repository,
        customer_repository,
        config_manager.integrations.whatsapp,
        config_manager.config,
    )
