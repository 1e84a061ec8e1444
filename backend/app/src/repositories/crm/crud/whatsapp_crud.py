"""
CRUD operations for the WhatsApp message log and templates.

This module provides a `CRUDWhatsApp` class with methods to:
- Log a message.
- Retrieve the messages of a customer in chronological order.
- List the active templates.
"""

from typing import Any, Dict, List

from sqlalchemy.orm import Session

from src.repositories.crm.models.whatsapp_model import WhatsAppMessage, WhatsAppTemplate


class CRUDWhatsApp:
    """Repository class for WhatsApp messages and templates."""

    def create_message(self, db: Session, data: Dict[str, Any]) -> WhatsAppMessage:
        """
        Create a new message in the database.

        Args:
            db (Session): The database session.
            data (Dict[str, Any]): Column values of the message.

        Returns:
            WhatsAppMessage: The newly created message object.
        """
        message = WhatsAppMessage(**data)
        db.add(message)
        db.commit()
        db.refresh(message)
        return message

    def get_by_customer_id(self, db: Session, customer_id: int) -> List[WhatsAppMessage]:
        """Return the customer's messages, oldest first."""
        return (
            db.query(WhatsAppMessage)
            .filter(WhatsAppMessage.customer_id == customer_id)
            .order_by(WhatsAppMessage.created_at, WhatsAppMessage.id)
            .all()
        )

    def list_active_templates(self, db: Session) -> List[WhatsAppTemplate]:
        return (
            db.query(WhatsAppTemplate)
            .filter(WhatsAppTemplate.is_active.is_(True))
            .order_by(WhatsAppTemplate.id)
            .all()
        )
