"""This module defines the agency service catalogue and its customer association table."""

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Table,
    Text,
    TIMESTAMP,
    UniqueConstraint,
)

from src.repositories.crm.database import Base, utcnow


customer_services = Table(
    "customer_services",
    Base.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "customer_id",
        Integer,
        ForeignKey("customers.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "service_id",
        Integer,
        ForeignKey("services.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("created_at", TIMESTAMP(timezone=False), default=utcnow),
    UniqueConstraint("customer_id", "service_id", name="unique_customer_service"),
)


class Service(Base):  # type: ignore[misc]
    """
    Represents a service the agency sells.

    Attributes:
        id (int): Primary key.
        name (str): Unique display name ("SEO", "Web Tasarım", ...).
        description (str): Free-text description.
        default_price (float): Suggested unit price for proposals.
        is_active (bool): Inactive services are hidden from the catalogue.
    """

    __tablename__ = "services"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    default_price = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(TIMESTAMP(timezone=False), default=utcnow)
