"""SQLAlchemy model for customer meetings."""

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


class Meeting(Base):  # type: ignore[misc]
    """Represents a scheduled meeting with a customer."""

    __tablename__ = "meetings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(
        Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    start_date = Column(TIMESTAMP(timezone=False), nullable=False)
    end_date = Column(TIMESTAMP(timezone=False), nullable=False)
    status = Column(
        Enum("scheduled", "completed", "cancelled", name="meeting_status"),
        default="scheduled",
        nullable=False,
    )
    notification_sent = Column(Boolean, default=False, nullable=False)
    created_at = Column(TIMESTAMP(timezone=False), default=utcnow)

    customer = relationship("Customer", back_populates="meetings")
    user = relationship("User")
