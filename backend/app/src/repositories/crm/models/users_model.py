"""SQLAlchemy model for agency users (note, task and proposal authors)."""

from sqlalchemy import Column, Enum, Integer, String, TIMESTAMP

from src.repositories.crm.database import Base, utcnow


class User(Base):  # type: ignore[misc]
    """Represents an agency team member."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), unique=True, nullable=False)
    email = Column(String(100), unique=True, nullable=False)
    role = Column(Enum("admin", "user", name="user_role"), default="user", nullable=False)
    avatar = Column(String(255), nullable=True)
    created_at = Column(TIMESTAMP(timezone=False), default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=False), default=utcnow, onupdate=utcnow)
