"""
Pydantic models for notes and their AI annotation.

The note response flattens the author name and, when present, the annotation
fields into a single record.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel

from src.repositories.crm.models.notes_model import Note


NoteType = Literal["phone", "meeting", "email", "whatsapp", "general", "audio"]
Sentiment = Literal["positive", "neutral", "negative"]
Priority = Literal["low", "medium", "high"]


class NoteCreate(BaseModel):
    """
    Represents the data required to create a new note.

    Attributes:
        content (str): What happened during the interaction.
        type (str): Interaction channel, defaults to "general".
    """

    content: str
    type: NoteType = "general"


class AnnotationResult(BaseModel):
    """Structured judgement produced for a note."""

    sentiment: Sentiment = "neutral"
    priority: Priority = "medium"
    suggestions: str = ""
    next_actions: str = ""
    confidence: float


class NoteResponse(BaseModel):
    """Response model for a note joined with its author and annotation."""

    id: int
    customer_id: int
    user_id: int
    type: NoteType
    content: str
    is_transcribed: bool
    audio_file_path: Optional[str] = None
    created_at: datetime
    author_name: Optional[str] = None
    sentiment: Optional[str] = None
    priority: Optional[str] = None
    suggestions: Optional[str] = None
    next_actions: Optional[str] = None
    confidence_score: Optional[float] = None

    @classmethod
    def from_note(cls, note: Note) -> "NoteResponse":
        annotation = note.annotation
        return cls(
            id=note.id,
            customer_id=note.customer_id,
            user_id=note.user_id,
            type=note.type,
            content=note.content,
            is_transcribed=note.is_transcribed,
            audio_file_path=note.audio_file_path,
            created_at=note.created_at,
            author_name=note.author.username if note.author else None,
            sentiment=annotation.sentiment if annotation else None,
            priority=annotation.priority if annotation else None,
            suggestions=annotation.suggestions if annotation else None,
            next_actions=annotation.next_actions if annotation else None,
            confidence_score=annotation.confidence_score if annotation else None,
        )
