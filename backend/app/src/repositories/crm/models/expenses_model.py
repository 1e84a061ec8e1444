"""SQLAlchemy model for agency expenses."""

from sqlalchemy import (
    Column,
    Date,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    TIMESTAMP,
)
from sqlalchemy.orm import relationship

from src.repositories.crm.database import Base, utcnow


class Expense(Base):  # type: ignore[misc]
    """
    Represents a cost, optionally tied to a customer and/or a proposal.

    The links are nulled (not cascaded) when the customer or proposal goes away.
    """

    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(
        Integer, ForeignKey("customers.id", ondelete="SET NULL"), nullable=True
    )
    proposal_id = Column(
        Integer, ForeignKey("proposals.id", ondelete="SET NULL"), nullable=True
    )
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    amount = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    category = Column(String(100), nullable=True)
    expense_date = Column(Date, nullable=False)
    created_at = Column(TIMESTAMP(timezone=False), default=utcnow)

    customer = relationship("Customer", back_populates="expenses")
    proposal = relationship("Proposal", back_populates="expenses")
