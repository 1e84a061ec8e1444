"""Test CustomerService."""

from datetime import date, datetime, timedelta

import pytest

from src.repositories.crm.crud.customers_crud import CRUDCustomer
from src.repositories.crm.crud.services_crud import CRUDService
from src.repositories.crm.models.expenses_model import Expense
from src.repositories.crm.models.meetings_model import Meeting
from src.repositories.crm.models.notes_model import Note, NoteAnnotation
from src.repositories.crm.models.proposals_model import Proposal, ProposalItem
from src.repositories.crm.models.services_model import customer_services
from src.repositories.crm.models.tasks_model import Task
from src.repositories.crm.models.whatsapp_model import WhatsAppMessage
from src.repositories.crm.schemas.customers_schema import (
    CustomerCreate,
    CustomerFilter,
    CustomerUpdate,
)
from src.services.crm.customers_service import DUPLICATE_EMAIL_MESSAGE, CustomerService
from src.services.errors import ConflictError, ValidationError


class TestCustomerService:
    """Test cases for the customer store."""

    @pytest.fixture(autouse=True)
    def setup(self, db, user, services) -> None:
        self.db = db
        self.user = user
        self.services = services
        self.service = CustomerService(CRUDCustomer(), CRUDService())

    def test_create_defaults_to_potential_without_classification(self) -> None:
        # Act
        customer = self.service.create(
            self.db, CustomerCreate(first_name="Ayşe", last_name="Yılmaz")
        )

        # Assert
        assert customer.id is not None
        assert customer.status == "potential"
        assert customer.customer_type is None
        assert customer.potential_budget is None
        assert customer.sales_difficulty_score is None
        assert customer.ai_analysis_date is None
        assert customer.service_names is None

    def test_create_links_services(self) -> None:
        seo, logo = self.services[1], self.services[2]

        customer = self.service.create(
            self.db,
            CustomerCreate(
                first_name="Mehmet",
                last_name="Kaya",
                email="mehmet@example.com",
                services=[seo.id, logo.id],
            ),
        )

        assert {service.name for service in customer.services} == {"SEO", "Logo Tasarım"}

    def test_create_rejects_unknown_service(self) -> None:
        with pytest.raises(ValidationError):
            self.service.create(
                self.db,
                CustomerCreate(first_name="Ali", last_name="Demir", services=[999]),
            )

        assert self.service.list(self.db) == []

    def test_duplicate_email_is_a_conflict(self) -> None:
        self.service.create(
            self.db,
            CustomerCreate(first_name="Ali", last_name="Demir", email="ali@example.com"),
        )

        with pytest.raises(ConflictError) as exc_info:
            self.service.create(
                self.db,
                CustomerCreate(first_name="Veli", last_name="Demir", email="ali@example.com"),
            )

        assert exc_info.value.message == DUPLICATE_EMAIL_MESSAGE
        assert exc_info.value.status_code == 400
        assert len(self.service.list(self.db)) == 1

    def test_blank_email_is_stored_as_null(self) -> None:
        first = self.service.create(
            self.db, CustomerCreate(first_name="A", last_name="B", email="")
        )
        second = self.service.create(
            self.db, CustomerCreate(first_name="C", last_name="D", email="")
        )

        assert first.email is None
        assert second.email is None

    def test_list_filters_by_search_and_status(self) -> None:
        self.service.create(
            self.db,
            CustomerCreate(first_name="Ayşe", last_name="Yılmaz", company="Pixel Ajans"),
        )
        self.service.create(
            self.db,
            CustomerCreate(first_name="Can", last_name="Öz", status="active"),
        )

        by_company = self.service.list(self.db, CustomerFilter(search="pixel"))
        by_status = self.service.list(self.db, CustomerFilter(status="active"))

        assert [c.first_name for c in by_company] == ["Ayşe"]
        assert [c.first_name for c in by_status] == ["Can"]

    def test_list_orders_by_last_update_and_is_repeatable(self) -> None:
        first = self.service.create(self.db, CustomerCreate(first_name="First", last_name="X"))
        second = self.service.create(self.db, CustomerCreate(first_name="Second", last_name="X"))
        first.updated_at = datetime(2030, 1, 1)
        second.updated_at = datetime(2029, 1, 1)
        self.db.commit()

        listed = self.service.list(self.db)

        assert [c.id for c in listed] == [first.id, second.id]
        assert [c.id for c in self.service.list(self.db)] == [c.id for c in listed]

    def test_update_replaces_service_set(self) -> None:
        web, seo, logo = self.services
        customer = self.service.create(
            self.db,
            CustomerCreate(first_name="Ayşe", last_name="Yılmaz", services=[web.id, seo.id]),
        )

        updated = self.service.update(
            self.db, customer.id, CustomerUpdate(services=[seo.id, logo.id, logo.id])
        )

        assert updated is not None
        links = self.db.execute(
            customer_services.select().where(customer_services.c.customer_id == customer.id)
        ).fetchall()
        assert sorted(row.service_id for row in links) == sorted([seo.id, logo.id])
        self.db.expire_all()
        assert sorted(updated.service_names.split(",")) == ["Logo Tasarım", "SEO"]

    def test_update_keeps_services_when_not_supplied(self) -> None:
        web = self.services[0]
        customer = self.service.create(
            self.db, CustomerCreate(first_name="Ayşe", last_name="Yılmaz", services=[web.id])
        )

        updated = self.service.update(self.db, customer.id, CustomerUpdate(company="Acme"))

        assert updated.company == "Acme"
        assert [service.id for service in updated.services] == [web.id]

    def test_update_with_unknown_service_changes_nothing(self) -> None:
        customer = self.service.create(
            self.db, CustomerCreate(first_name="Ayşe", last_name="Yılmaz")
        )

        with pytest.raises(ValidationError):
            self.service.update(
                self.db, customer.id, CustomerUpdate(company="Acme", services=[404])
            )

        self.db.expire_all()
        assert self.service.get(self.db, customer.id).company is None

    def test_update_missing_customer_is_a_no_op(self) -> None:
        assert self.service.update(self.db, 12345, CustomerUpdate(company="Acme")) is None

    def test_delete_missing_customer_is_a_no_op(self) -> None:
        self.service.delete(self.db, 12345)

    def test_delete_cascades_and_detaches_expenses(self) -> None:
        seo = self.services[1]
        customer = self.service.create(
            self.db,
            CustomerCreate(
                first_name="Ayşe", last_name="Yılmaz", phone="+905551112233", services=[seo.id]
            ),
        )
        note = Note(customer_id=customer.id, user_id=self.user.id, content="Called")
        self.db.add(note)
        self.db.flush()
        self.db.add(NoteAnnotation(note_id=note.id, sentiment="neutral", priority="low"))
        self.db.add(Task(customer_id=customer.id, user_id=self.user.id, title="Follow up"))
        self.db.add(
            WhatsAppMessage(customer_id=customer.id, direction="outbound", message="Hi")
        )
        self.db.add(
            Meeting(
                customer_id=customer.id,
                user_id=self.user.id,
                title="Kickoff",
                start_date=datetime(2030, 1, 1, 10),
                end_date=datetime(2030, 1, 1, 11),
            )
        )
        proposal = Proposal(
            customer_id=customer.id, user_id=self.user.id, title="SEO", total_amount=3000.0
        )
        proposal.items = [
            ProposalItem(service_id=seo.id, quantity=1, unit_price=3000.0, total_price=3000.0)
        ]
        self.db.add(proposal)
        self.db.flush()
        expense = Expense(
            customer_id=customer.id,
            proposal_id=proposal.id,
            title="Hosting",
            amount=100.0,
            expense_date=date.today() - timedelta(days=1),
        )
        self.db.add(expense)
        self.db.commit()

        self.service.delete(self.db, customer.id)

        self.db.expire_all()
        for model in (Note, NoteAnnotation, Task, WhatsAppMessage, Meeting, Proposal, ProposalItem):
            assert self.db.query(model).count() == 0
        assert self.db.execute(customer_services.select()).fetchall() == []
        kept = self.db.query(Expense).one()
        assert kept.customer_id is None
        assert kept.proposal_id is None
