"""Test the HTTP surface with an in-memory database and mocked providers."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app import create_app
from src.repositories.crm.dependencies import get_db
from src.repositories.crm.models.customers_model import Customer
from src.repositories.crm.models.tasks_model import Task
from src.repositories.crm.models.whatsapp_model import WhatsAppMessage
from src.services.ai.openai_client import OpenAIClient
from src.services.crm.customers_service import CustomerService, get_customer_service
from src.services.messaging.whatsapp.twilio_client import SentMessage, TwilioWhatsAppClient
from src.services.settings.runtime_config import ConfigManager, Integrations
from startup import DEFAULT_SERVICES, DEFAULT_TEMPLATES, create_seed_data


class TestAPI:
    """End-to-end tests of the routers."""

    @pytest.fixture(autouse=True)
    def setup(self, db, env_settings) -> None:
        self.db = db
        create_seed_data(db)

        self.mock_openai = MagicMock(spec=OpenAIClient)
        self.mock_twilio = MagicMock(spec=TwilioWhatsAppClient)
        self.mock_twilio.send_message.return_value = SentMessage(sid="SM42", status="queued")
        integrations = Integrations(openai=self.mock_openai, whatsapp=self.mock_twilio)

        app = create_app(settings=env_settings, init_db=False)
        app.state.config_manager = ConfigManager(
            env_settings, integrations_factory=lambda _config: integrations
        )

        def override_get_db():
            yield db

        app.dependency_overrides[get_db] = override_get_db
        self.app = app
        self.client = TestClient(app)

    def _create_customer(self, **fields) -> dict:
        payload = {"first_name": "Ayşe", "last_name": "Yılmaz", **fields}
        response = self.client.post("/api/customers", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    def test_healthcheck(self) -> None:
        assert self.client.get("/").json() == {"status": "ok"}

    def test_services_catalogue_is_seeded(self) -> None:
        response = self.client.get("/api/services")

        assert response.status_code == 200
        assert len(response.json()) == len(DEFAULT_SERVICES)

    def test_customer_lifecycle(self) -> None:
        seo_id = next(s["id"] for s in self.client.get("/api/services").json() if s["name"] == "SEO")

        created = self._create_customer(email="ayse@example.com", services=[seo_id])
        assert created["status"] == "potential"
        assert created["customer_type"] is None
        assert created["services"] == "SEO"

        updated = self.client.put(
            f"/api/customers/{created['id']}", json={"company": "Pixel Ajans", "services": []}
        )
        assert updated.status_code == 200
        assert updated.json()["company"] == "Pixel Ajans"
        assert updated.json()["services"] is None

        listed = self.client.get("/api/customers", params={"search": "pixel"}).json()
        assert [c["id"] for c in listed] == [created["id"]]

        deleted = self.client.delete(f"/api/customers/{created['id']}")
        assert deleted.json() == {"message": "Customer deleted successfully"}
        assert self.client.get("/api/customers").json() == []

    def test_duplicate_email(self) -> None:
        self._create_customer(email="ayse@example.com")

        response = self.client.post(
            "/api/customers",
            json={"first_name": "Ali", "last_name": "Demir", "email": "ayse@example.com"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "This email address is already registered."}

    def test_missing_required_field(self) -> None:
        response = self.client.post("/api/customers", json={"first_name": "Ali"})

        assert response.status_code == 400
        assert "last_name" in response.json()["error"]

    def test_update_unknown_customer_returns_null(self) -> None:
        response = self.client.put("/api/customers/999", json={"company": "Acme"})

        assert response.status_code == 200
        assert response.json() is None

    def test_note_creation_with_annotation(self) -> None:
        customer = self._create_customer()
        self.mock_openai.complete_json.return_value = {
            "sentiment": "positive",
            "priority": "high",
            "suggestions": "Send prices",
            "next_actions": "Call tomorrow",
        }
        content = "Customer is very interested in a complete website redesign and SEO package."

        response = self.client.post(
            f"/api/customers/{customer['id']}/notes", json={"content": content, "type": "phone"}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["priority"] == "high"
        assert body["author_name"] == "admin"
        tasks = self.client.get("/api/tasks").json()
        assert len(tasks) == 1
        assert tasks[0]["created_by_ai"] is True
        assert tasks[0]["customer_name"] == "Ayşe Yılmaz"

    def test_note_for_unknown_customer(self) -> None:
        response = self.client.post("/api/customers/999/notes", json={"content": "Hello"})

        assert response.status_code == 404
        assert response.json() == {"error": "Customer not found"}

    def test_send_whatsapp_without_phone(self) -> None:
        customer = self._create_customer()

        response = self.client.post(
            "/api/whatsapp/send", json={"customer_id": customer["id"], "message": "Merhaba"}
        )

        assert response.status_code == 404
        assert response.json() == {
            "error": "Customer not found or has no phone number on file."
        }
        assert self.db.query(WhatsAppMessage).count() == 0

    def test_send_whatsapp(self) -> None:
        customer = self._create_customer(phone="+905551112233")

        response = self.client.post(
            "/api/whatsapp/send", json={"customer_id": customer["id"], "message": "Merhaba"}
        )

        assert response.json() == {"success": True, "messageId": "SM42"}
        messages = self.client.get(f"/api/whatsapp/messages/{customer['id']}").json()
        assert [m["direction"] for m in messages] == ["outbound"]

    def test_inbound_webhook(self) -> None:
        customer = self._create_customer(phone="+905551112233")

        stored = self.client.post(
            "/api/whatsapp/webhook", data={"From": "whatsapp:+905551112233", "Body": "Fiyat?"}
        )
        ignored = self.client.post(
            "/api/whatsapp/webhook", data={"From": "whatsapp:+15550000000", "Body": "Hi"}
        )

        assert stored.status_code == 200
        assert stored.json()["status"] == "stored"
        assert ignored.json() == {"status": "ignored", "message_id": None}
        message = self.db.query(WhatsAppMessage).one()
        assert message.customer_id == customer["id"]
        assert message.direction == "inbound"

    def test_templates(self) -> None:
        names = [t["name"] for t in self.client.get("/api/whatsapp/templates").json()]

        assert names == [name for name, _type, _content in DEFAULT_TEMPLATES]

    def test_analyze_hot_customer(self) -> None:
        customer = self._create_customer()
        self.client.post(f"/api/customers/{customer['id']}/notes", json={"content": "Wants SEO"})
        self.mock_openai.complete_json.return_value = {"customer_type": "hot", "next_actions": "Call"}

        response = self.client.post(f"/api/customers/{customer['id']}/analyze")

        assert response.status_code == 200
        assert response.json()["customer_type"] == "hot"
        assert self.db.query(Task).filter(Task.created_by_ai.is_(True)).count() == 1
        refreshed = self.client.get("/api/customers").json()[0]
        assert refreshed["customer_type"] == "hot"

    def test_analyze_without_history(self) -> None:
        customer = self._create_customer()

        response = self.client.post(f"/api/customers/{customer['id']}/analyze")

        assert response.status_code == 400
        self.mock_openai.complete_json.assert_not_called()

    def test_generate_message(self) -> None:
        customer = self._create_customer()
        self.mock_openai.complete.return_value = "Merhaba Ayşe"

        response = self.client.post(
            "/api/ai/generate-message",
            json={"customer_id": customer["id"], "message_type": "follow_up"},
        )

        assert response.json() == {"message": "Merhaba Ayşe"}

    def test_transcribe(self) -> None:
        self.mock_openai.transcribe.return_value = "Merhaba"

        response = self.client.post(
            "/api/transcribe", files={"audio": ("note.mp3", b"fake-audio", "audio/mpeg")}
        )

        assert response.json() == {"text": "Merhaba"}

    def test_upload_audio_note(self) -> None:
        customer = self._create_customer()
        self.mock_openai.transcribe.return_value = "Customer asked for a call back."

        response = self.client.post(
            f"/api/customers/{customer['id']}/upload-audio",
            files={"audio": ("note.mp3", b"fake-audio", "audio/mpeg")},
        )

        assert response.status_code == 201
        assert response.json()["type"] == "audio"
        assert response.json()["is_transcribed"] is True

    def test_proposal_flow(self) -> None:
        customer = self._create_customer()
        services = self.client.get("/api/services").json()

        response = self.client.post(
            "/api/proposals",
            json={
                "customer_id": customer["id"],
                "title": "Website",
                "items": [
                    {"service_id": services[0]["id"], "quantity": 2, "unit_price": 100.5},
                    {"service_id": services[1]["id"], "unit_price": 50},
                ],
            },
        )

        assert response.status_code == 201
        proposal = response.json()
        assert proposal["total_amount"] == pytest.approx(251.0)
        approved = self.client.put(
            f"/api/proposals/{proposal['id']}/status", json={"status": "approved"}
        )
        assert approved.json()["status"] == "approved"
        listed = self.client.get(f"/api/customers/{customer['id']}/proposals").json()
        assert [p["id"] for p in listed] == [proposal["id"]]

    def test_meeting_and_expense(self) -> None:
        customer = self._create_customer()

        meeting = self.client.post(
            "/api/meetings",
            json={
                "customer_id": customer["id"],
                "title": "Kickoff",
                "start_date": "2030-01-01T10:00:00",
                "end_date": "2030-01-01T11:00:00",
            },
        )
        expense = self.client.post(
            "/api/expenses",
            json={
                "customer_id": customer["id"],
                "title": "Stock photos",
                "amount": 120,
                "expense_date": "2030-01-02",
            },
        )

        assert meeting.status_code == 201
        assert meeting.json()["notification_sent"] is False
        assert expense.status_code == 201
        assert expense.json()["customer_name"] == "Ayşe Yılmaz"

    def test_settings_round_trip(self) -> None:
        response = self.client.put("/api/settings", json={"app_name": "My Agency"})

        assert response.json() == {"message": "Settings updated successfully"}
        assert self.client.get("/api/settings").json()["app_name"] == "My Agency"

    def test_openai_connection_check(self) -> None:
        self.mock_openai.complete.return_value = "Hi"

        response = self.client.post("/api/test/openai")

        assert response.json()["success"] is True

    def test_smtp_connection_check_unconfigured(self) -> None:
        response = self.client.post("/api/test/smtp")

        assert response.status_code == 400
        assert "error" in response.json()

    def test_unknown_user_header(self) -> None:
        customer = self._create_customer()

        response = self.client.post(
            f"/api/customers/{customer['id']}/notes",
            json={"content": "Hello"},
            headers={"X-User-Id": "999"},
        )

        assert response.status_code == 404
        assert self.db.query(Customer).count() == 1

    def test_unexpected_error_returns_json_body(self) -> None:
        failing_service = MagicMock(spec=CustomerService)
        failing_service.list.side_effect = RuntimeError("database is locked")
        self.app.dependency_overrides[get_customer_service] = lambda: failing_service
        client = TestClient(self.app, raise_server_exceptions=False)

        response = client.get("/api/customers")

        assert response.status_code == 500
        assert response.json() == {"error": "database is locked"}

    def test_dashboard_stats(self) -> None:
        customer = self._create_customer(status="active")
        self.client.post(f"/api/customers/{customer['id']}/notes", json={"content": "Short call"})

        response = self.client.get("/api/dashboard/stats")

        assert response.status_code == 200
        body = response.json()
        assert body["activeCustomers"] == 1
        assert body["recentNotes"] == 1
        assert body["topCustomers"][0]["name"] == "Ayşe Yılmaz"
        assert body["topCustomers"][0]["note_count"] == 1
