"""This module provides the ProposalService class."""

from typing import List

from fastapi import Depends
from sqlalchemy.orm import Session

from src.repositories.crm.crud.customers_crud import CRUDCustomer
from src.repositories.crm.crud.proposals_crud import CRUDProposal
from src.repositories.crm.models.proposals_model import Proposal
from src.repositories.crm.schemas.proposals_schema import ProposalCreate
from src.services.errors import NotFoundError, ValidationError


class ProposalService:
    """Service layer for proposals and their line items."""

    def __init__(self, repository: CRUDProposal, customer_repository: CRUDCustomer) -> None:
        self.repository = repository
        self.customer_repository = customer_repository

    def list_proposals(self, db: Session) -> List[Proposal]:
        return self.repository.list(db)

    def list_for_customer(self, db: Session, customer_id: int) -> List[Proposal]:
        return self.repository.get_by_customer_id(db, customer_id)

    def create(self, db: Session, user_id: int, proposal_in: ProposalCreate) -> Proposal:
        """
        Create a proposal; each item total is quantity x unit price and the
        proposal total is their sum.

        Raises:
            NotFoundError: unknown customer.
            ValidationError: an item references an unknown service.
        """
        if self.customer_repository.get(db, proposal_in.customer_id) is None:
            raise NotFoundError("Customer not found")

        service_ids = list(dict.fromkeys(item.service_id for item in proposal_in.items))
        known = {service.id for service in self.customer_repository.get_services(db, service_ids)}
        missing = [str(service_id) for service_id in service_ids if service_id not in known]
        if missing:
            raise ValidationError(f"Unknown service id(s): {', '.join(missing)}")

        items = [
            {
                "service_id": item.service_id,
                "description": item.description,
                "quantity": item.quantity,
                "unit_price": item.unit_price,
                "total_price": round(item.quantity * item.unit_price, 2),
            }
            for item in proposal_in.items
        ]
        total_amount = round(sum(item["total_price"] for item in items), 2)

        return self.repository.create(
            db,
            {
                "customer_id": proposal_in.customer_id,
                "user_id": user_id,
                "title": proposal_in.title,
                "description": proposal_in.description,
                "valid_until": proposal_in.valid_until,
                "total_amount": total_amount,
            },
            items,
        )

    def update_status(self, db: Session, proposal_id: int, status: str) -> Proposal:
        proposal = self.repository.get(db, proposal_id)
        if proposal is None:
            raise NotFoundError("Proposal not found")
        return self.repository.update_status(db, proposal, status)


def get_proposal_service(
    repository: CRUDProposal = Depends(),
    customer_repository: CRUDCustomer = Depends(),
) -> ProposalService:
    return ProposalService(repository, customer_repository)
