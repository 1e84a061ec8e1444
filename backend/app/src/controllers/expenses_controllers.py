"""Expense endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from src.repositories.crm.dependencies import get_db
from src.repositories.crm.schemas.expenses_schema import ExpenseCreate, ExpenseResponse
from src.services.crm.expenses_service import ExpenseService, get_expense_service

expense_router = APIRouter(prefix="/api/expenses", tags=["Expenses"])


@expense_router.get("")
def list_expenses(
    db: Session = Depends(get_db),
    expense_service: ExpenseService = Depends(get_expense_service),
) -> List[ExpenseResponse]:
    return [ExpenseResponse.from_expense(e) for e in expense_service.list_expenses(db)]


@expense_router.post("", status_code=status.HTTP_201_CREATED)
def create_expense(
    expense_in: ExpenseCreate,
    db: Session = Depends(get_db),
    expense_service: ExpenseService = Depends(get_expense_service),
) -> ExpenseResponse:
    return ExpenseResponse.from_expense(expense_service.create(db, expense_in))
