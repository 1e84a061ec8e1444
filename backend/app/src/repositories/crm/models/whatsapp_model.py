"""This module defines the WhatsApp message log and message templates."""

from sqlalchemy import (
    Boolean,
    Column,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    TIMESTAMP,
)
from sqlalchemy.orm import relationship

from src.repositories.crm.database import Base, utcnow


class WhatsAppMessage(Base):  # type: ignore[misc]
    """
    Represents a WhatsApp message exchanged with a customer.

    Attributes:
        id (int): Primary key.
        customer_id (int): Customer the message belongs to.
        direction (str): "inbound" or "outbound".
        message (str): Body text.
        status (str): Delivery status reported by the provider.
        phone_number (str): Phone number the message was sent to or received from.
        provider_sid (str): Provider-assigned identifier, outbound only.
    """

    __tablename__ = "whatsapp_messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(
        Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False
    )
    direction = Column(
        Enum("inbound", "outbound", name="message_direction"), nullable=False
    )
    message = Column(Text, nullable=False)
    status = Column(String(20), nullable=True)
    phone_number = Column(String(20), nullable=True)
    provider_sid = Column(String(64), nullable=True)
    created_at = Column(TIMESTAMP(timezone=False), default=utcnow)

    customer = relationship("Customer", back_populates="messages")


class WhatsAppTemplate(Base):  # type: ignore[misc]
    """Reusable message body with a ``{customer_name}`` placeholder."""

    __tablename__ = "whatsapp_templates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)
    template_type = Column(
        Enum(
            "first_contact",
            "proposal_response",
            "thank_you",
            "follow_up",
            name="template_type",
        ),
        nullable=False,
    )
    content = Column(Text, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(TIMESTAMP(timezone=False), default=utcnow)
