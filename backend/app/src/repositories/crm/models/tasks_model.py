"""SQLAlchemy model for follow-up tasks, manual or AI generated."""

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


class Task(Base):  # type: ignore[misc]
    """
    Represents a to-do item linked to a customer.

    ``created_by_ai`` is true exactly when ``task_type`` is ``ai_generated``.
    """

    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(
        Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    priority = Column(
        Enum("low", "medium", "high", name="task_priority"),
        default="medium",
        nullable=False,
    )
    status = Column(
        Enum("pending", "in_progress", "completed", name="task_status"),
        default="pending",
        nullable=False,
    )
    task_type = Column(
        Enum("manual", "ai_generated", name="task_type"),
        default="manual",
        nullable=False,
    )
    due_date = Column(TIMESTAMP(timezone=False), nullable=True)
    created_by_ai = Column(Boolean, default=False, nullable=False)
    created_at = Column(TIMESTAMP(timezone=False), default=utcnow)

    customer = relationship("Customer", back_populates="tasks")
    user = relationship("User")
