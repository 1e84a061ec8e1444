"""This module provides the ExpenseService class."""

from typing import List

from fastapi import Depends
from sqlalchemy.orm import Session

from src.repositories.crm.crud.customers_crud import CRUDCustomer
from src.repositories.crm.crud.expenses_crud import CRUDExpense
from src.repositories.crm.crud.proposals_crud import CRUDProposal
from src.repositories.crm.models.expenses_model import Expense
from src.repositories.crm.schemas.expenses_schema import ExpenseCreate
from src.services.errors import NotFoundError


class ExpenseService:
    """Record agency costs against customers and proposals."""

    def __init__(
        self,
        repository: CRUDExpense,
        customer_repository: CRUDCustomer,
        proposal_repository: CRUDProposal,
    ) -> None:
        self.repository = repository
        self.customer_repository = customer_repository
        self.proposal_repository = proposal_repository

    def list_expenses(self, db: Session) -> List[Expense]:
        return self.repository.list(db)

    def create(self, db: Session, expense_in: ExpenseCreate) -> Expense:
        if (
            expense_in.customer_id is not None
            and self.customer_repository.get(db, expense_in.customer_id) is None
        ):
            raise NotFoundError("Customer not found")
        if (
            expense_in.proposal_id is not None
            and self.proposal_repository.get(db, expense_in.proposal_id) is None
        ):
            raise NotFoundError("Proposal not found")
        return self.repository.create(db, expense_in.model_dump())


def get_expense_service(
    repository: CRUDExpense = Depends(),
    customer_repository: CRUDCustomer = Depends(),
    proposal_repository: CRUDProposal = Depends(),
) -> ExpenseService:
    return ExpenseService(repository, customer_repository, proposal_repository)
