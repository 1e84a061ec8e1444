"""
CRUD operations for notes and their annotations.

This module provides a `CRUDNote` class with methods to:
- Retrieve the notes of a customer, newest first.
- Create a note.
- Attach an annotation to a note.
"""

from typing import Any, Dict, List

from sqlalchemy import desc
from sqlalchemy.orm import Session

from src.repositories.crm.models.notes_model import Note, NoteAnnotation


class CRUDNote:
    """Repository class for handling database operations related to notes."""

    def get_by_customer_id(self, db: Session, customer_id: int) -> List[Note]:
        """
        Retrieve every note of a customer, newest first.

        Args:
            db (Session): The database session.
            customer_id (int): The customer whose notes are listed.

        Returns:
            List[Note]: The customer's notes.
        """
        return (
            db.query(Note)
            .filter(Note.customer_id == customer_id)
            .order_by(desc(Note.created_at), desc(Note.id))
            .all()
        )

    def create(self, db: Session, data: Dict[str, Any]) -> Note:
        """Add a note to the session and flush it so it has an ID."""
        note = Note(**data)
        db.add(note)
        db.flush()
        return note

    def create_annotation(
        self, db: Session, note: Note, data: Dict[str, Any]
    ) -> NoteAnnotation:
        """Attach an annotation row to ``note``."""
        annotation = NoteAnnotation(note_id=note.id, **data)
        db.add(annotation)
        db.flush()
        return annotation
