"""SQLAlchemy model for agency customers, the root of every cascade-delete tree."""

from typing import Optional

from sqlalchemy import (
    Column,
    Enum,
    Integer,
    Numeric,
    String,
    Text,
    TIMESTAMP,
)
from sqlalchemy.orm import relationship

from src.repositories.crm.database import Base, utcnow
from src.repositories.crm.models.services_model import Service, customer_services


class Customer(Base):  # type: ignore[misc]
    """
    Represents a customer record of the agency.

    The classification columns (customer_type, potential_budget,
    sales_difficulty_score, interested_services, ai_analysis_date) stay NULL
    until a customer analysis has been run.
    """

    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, nullable=True)
    phone = Column(String(20), nullable=True)
    company = Column(String(100), nullable=True)
    instagram = Column(String(100), nullable=True)
    website = Column(String(255), nullable=True)
    status = Column(
        Enum("active", "inactive", "potential", name="customer_status"),
        default="potential",
        nullable=False,
    )
    avatar = Column(String(255), nullable=True)
    last_interaction = Column(TIMESTAMP(timezone=False), nullable=True)

    customer_type = Column(
        Enum("cold", "warm", "hot", name="customer_type"), nullable=True
    )
    potential_budget = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    sales_difficulty_score = Column(Integer, nullable=True)
    interested_services = Column(Text, nullable=True)
    ai_analysis_date = Column(TIMESTAMP(timezone=False), nullable=True)

    created_at = Column(TIMESTAMP(timezone=False), default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=False), default=utcnow, onupdate=utcnow)

    services = relationship(
        Service, secondary=customer_services, order_by=Service.name
    )
    notes = relationship(
        "Note", back_populates="customer", cascade="all, delete-orphan"
    )
    tasks = relationship(
        "Task", back_populates="customer", cascade="all, delete-orphan"
    )
    messages = relationship(
        "WhatsAppMessage", back_populates="customer", cascade="all, delete-orphan"
    )
    meetings = relationship(
        "Meeting", back_populates="customer", cascade="all, delete-orphan"
    )
    proposals = relationship(
        "Proposal", back_populates="customer", cascade="all, delete-orphan"
    )
    expenses = relationship("Expense", back_populates="customer")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def service_names(self) -> Optional[str]:
        """Comma-joined service names, or None when the customer has none."""
        if not self.services:
            return None
        return ",".join(service.name for service in self.services)
