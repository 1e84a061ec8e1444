"""Test NoteService and its annotation flow."""

import io
from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from src.repositories.crm.crud.customers_crud import CRUDCustomer
from src.repositories.crm.crud.notes_crud import CRUDNote
from src.repositories.crm.crud.tasks_crud import CRUDTask
from src.repositories.crm.database import utcnow
from src.repositories.crm.models.notes_model import NoteAnnotation
from src.repositories.crm.models.tasks_model import Task
from src.services.ai.annotation_engine import FOLLOW_UP_TITLE, AnnotationEngine
from src.services.ai.openai_client import OpenAIClient
from src.services.ai.transcription_service import TranscriptionService
from src.services.crm.notes_service import NoteService
from src.services.crm.tasks_service import TaskService
from src.services.errors import ConfigurationError, NotFoundError, ValidationError

LONG_NOTE = (
    "Customer called and wants a new e-commerce site before the summer campaign, "
    "asked for a proposal this week."
)


class TestNoteService:
    """Test cases for the interaction log."""

    @pytest.fixture(autouse=True)
    def setup(self, db, user, make_customer, runtime_config) -> None:
        self.db = db
        self.user = user
        self.customer = make_customer(phone="+905551112233")
        self.config = runtime_config
        self.mock_client = MagicMock(spec=OpenAIClient)
        self.mock_client.complete_json.return_value = {
            "sentiment": "positive",
            "priority": "low",
            "suggestions": "Send portfolio",
            "next_actions": "Prepare a proposal",
        }
        self.note_service = self._build(self.mock_client)

    def _build(self, client) -> NoteService:
        repository = CRUDNote()
        task_service = TaskService(CRUDTask(), CRUDCustomer())
        engine = AnnotationEngine(client, repository, task_service, self.config)
        return NoteService(repository, CRUDCustomer(), engine, TranscriptionService(client))

    def _tasks(self):
        return self.db.query(Task).filter(Task.customer_id == self.customer.id).all()

    def test_add_note_sets_last_interaction(self) -> None:
        before = utcnow()

        note = self.note_service.add_note(
            self.db, self.customer.id, self.user.id, "Short call", "phone"
        )

        self.db.refresh(self.customer)
        assert note.id is not None
        assert note.type == "phone"
        assert self.customer.last_interaction >= before - timedelta(seconds=1)

    def test_short_note_is_not_annotated(self) -> None:
        content = "x" * self.config.annotation_min_length

        note = self.note_service.add_note(self.db, self.customer.id, self.user.id, content)

        assert note.annotation is None
        self.mock_client.complete_json.assert_not_called()

    def test_long_note_is_annotated(self) -> None:
        note = self.note_service.add_note(self.db, self.customer.id, self.user.id, LONG_NOTE)

        assert note.annotation is not None
        assert note.annotation.sentiment == "positive"
        assert note.annotation.priority == "low"
        assert note.annotation.confidence_score == pytest.approx(0.85)
        assert self._tasks() == []

    def test_high_priority_note_creates_one_follow_up_task(self) -> None:
        self.mock_client.complete_json.return_value = {
            "sentiment": "nötr",
            "priority": "Yüksek",
            "suggestions": ["Call back", "Send prices"],
            "next_actions": "Call tomorrow morning",
        }
        before = utcnow()

        note = self.note_service.add_note(self.db, self.customer.id, self.user.id, LONG_NOTE)

        assert note.annotation.priority == "high"
        assert note.annotation.sentiment == "neutral"
        tasks = self._tasks()
        assert len(tasks) == 1
        task = tasks[0]
        assert task.title == FOLLOW_UP_TITLE
        assert task.description == "Call tomorrow morning"
        assert task.priority == "high"
        assert task.status == "pending"
        assert task.task_type == "ai_generated"
        assert task.created_by_ai is True
        assert task.user_id == self.user.id
        expected_due = before + timedelta(days=self.config.note_task_due_days)
        assert abs(task.due_date - expected_due) < timedelta(minutes=1)

    def test_provider_failure_still_stores_note(self) -> None:
        self.mock_client.complete_json.side_effect = RuntimeError("rate limited")

        note = self.note_service.add_note(self.db, self.customer.id, self.user.id, LONG_NOTE)

        assert note.id is not None
        assert note.annotation is None
        assert self.db.query(NoteAnnotation).count() == 0
        assert self._tasks() == []

    def test_without_provider_note_is_stored_plain(self) -> None:
        service = self._build(None)

        note = service.add_note(self.db, self.customer.id, self.user.id, LONG_NOTE)

        assert note.annotation is None

    def test_empty_content_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            self.note_service.add_note(self.db, self.customer.id, self.user.id, "   ")

        self.mock_client.complete_json.assert_not_called()

    def test_unknown_customer(self) -> None:
        with pytest.raises(NotFoundError):
            self.note_service.add_note(self.db, 999, self.user.id, "Hello")

    def test_list_notes_newest_first(self) -> None:
        first = self.note_service.add_note(self.db, self.customer.id, self.user.id, "one")
        second = self.note_service.add_note(self.db, self.customer.id, self.user.id, "two")
        first.created_at = second.created_at - timedelta(minutes=5)
        self.db.commit()

        notes = self.note_service.list_notes(self.db, self.customer.id)

        assert [note.id for note in notes] == [second.id, first.id]

    def test_audio_note_is_transcribed_and_not_annotated(self) -> None:
        self.mock_client.transcribe.return_value = "  " + LONG_NOTE + "  "

        note = self.note_service.add_audio_note(
            self.db, self.customer.id, self.user.id, io.BytesIO(b"fake-audio"), "call.mp3"
        )

        assert note.type == "audio"
        assert note.is_transcribed is True
        assert note.audio_file_path == "call.mp3"
        assert note.content == LONG_NOTE
        assert note.annotation is None
        self.mock_client.complete_json.assert_not_called()

    def test_audio_note_without_provider(self) -> None:
        service = self._build(None)

        with pytest.raises(ConfigurationError):
            service.add_audio_note(
                self.db, self.customer.id, self.user.id, io.BytesIO(b"x"), "call.mp3"
            )
