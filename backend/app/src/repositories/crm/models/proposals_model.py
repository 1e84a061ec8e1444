"""This module defines proposals and their service line items."""

from sqlalchemy import (
    Column,
    Date,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    TIMESTAMP,
)
from sqlalchemy.orm import relationship

from src.repositories.crm.database import Base, utcnow


class Proposal(Base):  # type: ignore[misc]
    """
    Represents a price proposal sent to a customer.

    ``total_amount`` is the sum of the items' ``total_price``.
    """

    __tablename__ = "proposals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(
        Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    total_amount = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    status = Column(
        Enum("pending", "approved", "rejected", name="proposal_status"),
        default="pending",
        nullable=False,
    )
    valid_until = Column(Date, nullable=True)
    created_at = Column(TIMESTAMP(timezone=False), default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=False), default=utcnow, onupdate=utcnow)

    customer = relationship("Customer", back_populates="proposals")
    user = relationship("User")
    items = relationship(
        "ProposalItem", back_populates="proposal", cascade="all, delete-orphan"
    )
    expenses = relationship("Expense", back_populates="proposal")


class ProposalItem(Base):  # type: ignore[misc]
    """A single service line of a proposal."""

    __tablename__ = "proposal_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    proposal_id = Column(
        Integer, ForeignKey("proposals.id", ondelete="CASCADE"), nullable=False
    )
    service_id = Column(
        Integer, ForeignKey("services.id", ondelete="CASCADE"), nullable=False
    )
    description = Column(Text, nullable=True)
    quantity = Column(Integer, default=1, nullable=False)
    unit_price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    total_price = Column(Numeric(10, 2, asdecimal=False), nullable=False)

    proposal = relationship("Proposal", back_populates="items")
    service = relationship("Service")
