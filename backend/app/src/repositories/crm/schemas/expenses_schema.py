"""Pydantic schemas for expenses."""

from datetime import date, datetime
from typing import Annotated, Optional

from pydantic import BaseModel, Field, StringConstraints

from src.repositories.crm.models.expenses_model import Expense


class ExpenseCreate(BaseModel):
    customer_id: Optional[int] = None
    proposal_id: Optional[int] = None
    title: Annotated[str, StringConstraints(min_length=1, max_length=255)]
    description: Optional[str] = None
    amount: float = Field(..., ge=0)
    category: Optional[Annotated[str, StringConstraints(max_length=100)]] = None
    expense_date: date


class ExpenseResponse(BaseModel):
    """Response model for an expense joined with customer name and proposal title."""

    id: int
    customer_id: Optional[int] = None
    proposal_id: Optional[int] = None
    title: str
    description: Optional[str] = None
    amount: float
    category: Optional[str] = None
    expense_date: date
    created_at: datetime
    customer_name: Optional[str] = None
    proposal_title: Optional[str] = None

    @classmethod
    def from_expense(cls, expense: Expense) -> "ExpenseResponse":
        return cls(
            id=expense.id,
            customer_id=expense.customer_id,
            proposal_id=expense.proposal_id,
            title=expense.title,
            description=expense.description,
            amount=expense.amount,
            category=expense.category,
            expense_date=expense.expense_date,
            created_at=expense.created_at,
            customer_name=expense.customer.full_name if expense.customer else None,
            proposal_title=expense.proposal.title if expense.proposal else None,
        )
