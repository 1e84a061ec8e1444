"""This module defines the Note model and its 1:1 AI annotation."""

from sqlalchemy import (
    Boolean,
    Column,
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


NOTE_TYPES = ("phone", "meeting", "email", "whatsapp", "general", "audio")


class Note(Base):  # type: ignore[misc]
    """
    Represents an interaction with a customer.

    Attributes:
        id (int): Primary key.
        customer_id (int): Owning customer.
        user_id (int): Author of the note.
        type (str): One of phone, meeting, email, whatsapp, general, audio.
        content (str): Free text, or the transcription for audio notes.
        is_transcribed (bool): True when content came from speech-to-text.
        audio_file_path (str): Name of the uploaded recording, audio notes only.
        created_at (timestamp): Creation time, notes are never edited.
    """

    __tablename__ = "notes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(
        Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    type = Column(Enum(*NOTE_TYPES, name="note_type"), default="general", nullable=False)
    content = Column(Text, nullable=False)
    is_transcribed = Column(Boolean, default=False, nullable=False)
    audio_file_path = Column(String(255), nullable=True)
    created_at = Column(TIMESTAMP(timezone=False), default=utcnow)

    customer = relationship("Customer", back_populates="notes")
    author = relationship("User")
    annotation = relationship(
        "NoteAnnotation",
        back_populates="note",
        uselist=False,
        cascade="all, delete-orphan",
    )


class NoteAnnotation(Base):  # type: ignore[misc]
    """AI judgement attached to a single note."""

    __tablename__ = "ai_analysis"

    id = Column(Integer, primary_key=True, autoincrement=True)
    note_id = Column(
        Integer,
        ForeignKey("notes.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    sentiment = Column(String(20), nullable=True)
    priority = Column(String(20), nullable=True)
    suggestions = Column(Text, nullable=True)
    next_actions = Column(Text, nullable=True)
    confidence_score = Column(Numeric(3, 2, asdecimal=False), nullable=True)
    created_at = Column(TIMESTAMP(timezone=False), default=utcnow)

    note = relationship("Note", back_populates="annotation")
