"""Annotation engine: AI judgement of a single customer note.

The engine asks the language model for sentiment, priority, suggestions and
next actions, stores the result next to the note and, for high priority
notes, schedules an AI follow-up task. Any failure is raised as
``AnnotationError`` so the caller can carry on without an annotation.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.repositories.crm.crud.notes_crud import CRUDNote
from src.repositories.crm.models.notes_model import Note, NoteAnnotation
from src.repositories.crm.schemas.notes_schema import AnnotationResult
from src.services.ai.openai_client import OpenAIClient
from src.services.crm.tasks_service import TaskService
from src.services.errors import AnnotationError
from src.services.settings.runtime_config import RuntimeConfig

logger = logging.getLogger(__name__)

NOTE_ANALYSIS_PROMPT = """You are a CRM assistant for a digital agency. Analyse the customer note and return:
1) sentiment (positive/neutral/negative)
2) priority (low/medium/high)
3) short suggestions
4) next actions

Answer in the language of the note, as a JSON object:
{
  "sentiment": "positive/neutral/negative",
  "priority": "low/medium/high",
  "suggestions": "short suggestions",
  "next_actions": "next actions"
}"""

FOLLOW_UP_TITLE = "AI Suggested Follow-up"

_SENTIMENTS = {
    "positive": "positive",
    "pozitif": "positive",
    "neutral": "neutral",
    "nötr": "neutral",
    "notr": "neutral",
    "negative": "negative",
    "negatif": "negative",
}
_PRIORITIES = {
    "low": "low",
    "düşük": "low",
    "medium": "medium",
    "orta": "medium",
    "high": "high",
    "yüksek": "high",
}


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return "\n".join(str(item) for item in value)
    return str(value)


def normalize_judgement(raw: Dict[str, Any], confidence: float) -> AnnotationResult:
    """Map a model answer (English or Turkish labels) onto ``AnnotationResult``."""
    sentiment = _SENTIMENTS.get(str(raw.get("sentiment", "")).strip().lower(), "neutral")
    priority = _PRIORITIES.get(str(raw.get("priority", "")).strip().lower(), "medium")
    return AnnotationResult(
        sentiment=sentiment,
        priority=priority,
        suggestions=_as_text(raw.get("suggestions")),
        next_actions=_as_text(raw.get("next_actions")),
        confidence=confidence,
    )


class AnnotationEngine:
    """Produce and persist the annotation of a note."""

    def __init__(
        self,
        client: Optional[OpenAIClient],
        note_repository: CRUDNote,
        task_service: TaskService,
        config: RuntimeConfig,
    ) -> None:
        self.client = client
        self.note_repository = note_repository
        self.task_service = task_service
        self.config = config

    @property
    def available(self) -> bool:
        return self.client is not None

    def should_annotate(self, content: str) -> bool:
        """True when a provider is configured and the note is long enough."""
        return self.available and len(content) > self.config.annotation_min_length

    def judge(self, content: str) -> AnnotationResult:
        """
        Ask the model for a judgement of ``content``.

        Raises:
            AnnotationError: provider missing, call failed or output unusable.
        """
        if self.client is None:
            raise AnnotationError("Annotation provider is not configured")
        try:
            raw = self.client.complete_json(
                NOTE_ANALYSIS_PROMPT,
                f'Analyse this customer note: "{content}"',
                max_tokens=500,
            )
        except Exception as exc:
            raise AnnotationError(f"Note analysis failed: {exc}") from exc
        return normalize_judgement(raw, self.config.annotation_confidence)

    def annotate(self, db: Session, note: Note) -> NoteAnnotation:
        """
        Judge ``note``, store the annotation and create a follow-up task when urgent.

        The annotation and the optional task are committed together.

        Raises:
            AnnotationError: on any provider or database failure.
        """
        result = self.judge(note.content)
        try:
            annotation = self.note_repository.create_annotation(
                db,
                note,
                {
                    "sentiment": result.sentiment,
                    "priority": result.priority,
                    "suggestions": result.suggestions,
                    "next_actions": result.next_actions,
                    "confidence_score": result.confidence,
                },
            )
            if result.priority == "high":
                self.task_service.create_ai_task(
                    db,
                    customer_id=note.customer_id,
                    user_id=note.user_id,
                    title=FOLLOW_UP_TITLE,
                    description=result.next_actions,
                    priority="high",
                    due_in_days=self.config.note_task_due_days,
                )
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            raise AnnotationError(f"Could not store annotation: {exc}") from exc

        db.refresh(annotation)
        return annotation
