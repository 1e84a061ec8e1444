"""This module provides the NoteService class (the interaction log)."""

import logging
from typing import BinaryIO, List

from fastapi import Depends
from sqlalchemy.orm import Session

from src.repositories.crm.crud.customers_crud import CRUDCustomer
from src.repositories.crm.crud.notes_crud import CRUDNote
from src.repositories.crm.database import utcnow
from src.repositories.crm.models.customers_model import Customer
from src.repositories.crm.models.notes_model import Note
from src.services.ai.annotation_engine import AnnotationEngine
from src.services.ai.transcription_service import TranscriptionService
from src.services.crm.tasks_service import TaskService, get_task_service
from src.services.errors import AnnotationError, NotFoundError, ValidationError
from src.services.settings.runtime_config import ConfigManager, get_config_manager

logger = logging.getLogger(__name__)


class NoteService:
    """Append notes to a customer's history and trigger their annotation."""

    def __init__(
        self,
        repository: CRUDNote,
        customer_repository: CRUDCustomer,
        annotation_engine: AnnotationEngine,
        transcription_service: TranscriptionService,
    ) -> None:
        self.repository = repository
        self.customer_repository = customer_repository
        self.annotation_engine = annotation_engine
        self.transcription_service = transcription_service

    def list_notes(self, db: Session, customer_id: int) -> List[Note]:
        """Return the customer's notes, newest first, with their annotations."""
        return self.repository.get_by_customer_id(db, customer_id)

    def add_note(
        self,
        db: Session,
        customer_id: int,
        user_id: int,
        content: str,
        note_type: str = "general",
    ) -> Note:
        """
        Store a note, touch the customer's last interaction and annotate it.

        The note insert and the ``last_interaction`` update share one commit.
        Annotation runs afterwards and never fails the call: on error the note
        is returned without annotation fields.

        Args:
            db (Session): The database session.
            customer_id (int): Customer the note is about.
            user_id (int): Author.
            content (str): Note text.
            note_type (str): Interaction channel.

        Returns:
            Note: The stored note.

        Raises:
            ValidationError: ``content`` is empty.
            NotFoundError: the customer does not exist.
        """
        if not content or not content.strip():
            raise ValidationError("Note content is required.")

        customer = self._get_customer(db, customer_id)
        note = self.repository.create(
            db,
            {
                "customer_id": customer.id,
                "user_id": user_id,
                "content": content,
                "type": note_type or "general",
            },
        )
        customer.last_interaction = utcnow()
        db.commit()
        db.refresh(note)

        if self.annotation_engine.should_annotate(content):
            try:
                self.annotation_engine.annotate(db, note)
            except AnnotationError as exc:
                logger.warning("AI analysis failed for note %s: %s", note.id, exc)
            db.refresh(note)

        return note

    def add_audio_note(
        self,
        db: Session,
        customer_id: int,
        user_id: int,
        audio: BinaryIO,
        filename: str = "audio.mp3",
    ) -> Note:
        """
        Transcribe ``audio`` and store the text as an ``audio`` note.

        Audio notes are not annotated.

        Raises:
            NotFoundError: the customer does not exist.
            ConfigurationError: no transcription provider.
            ProviderError: the transcription failed.
        """
        customer = self._get_customer(db, customer_id)
        text = self.transcription_service.transcribe(audio, filename)

        note = self.repository.create(
            db,
            {
                "customer_id": customer.id,
                "user_id": user_id,
                "content": text,
                "type": "audio",
                "is_transcribed": True,
                "audio_file_path": filename[:255] if filename else None,
            },
        )
        customer.last_interaction = utcnow()
        db.commit()
        db.refresh(note)
        logger.info("Audio note %s stored for customer %s", note.id, customer_id)
        return note

    def _get_customer(self, db: Session, customer_id: int) -> Customer:
        customer = self.customer_repository.get(db, customer_id)
        if customer is None:
            raise NotFoundError("Customer not found")
        return customer


def get_note_service(
    repository: CRUDNote = Depends(),
    customer_repository: CRUDCustomer = Depends(),
    task_service: TaskService = Depends(get_task_service),
    config_manager: ConfigManager = Depends(get_config_manager),
) -> NoteService:
    """Assemble a NoteService from the current configuration snapshot."""
    client = config_manager.integrations.openai
    engine = AnnotationEngine(client, repository, task_service, config_manager.config)
    return NoteService(
        repository, customer_repository, engine, TranscriptionService(client)
    )
