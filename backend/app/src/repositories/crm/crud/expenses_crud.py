"""CRUD helpers for expenses."""

from typing import Any, Dict, List

from sqlalchemy import desc
from sqlalchemy.orm import Session

from src.repositories.crm.models.expenses_model import Expense


class CRUDExpense:
    """Database access for expenses."""

    def list(self, db: Session) -> List[Expense]:
        return db.query(Expense).order_by(desc(Expense.expense_date), desc(Expense.id)).all()

    def create(self, db: Session, data: Dict[str, Any]) -> Expense:
        expense = Expense(**data)
        db.add(expense)
        db.commit()
        db.refresh(expense)
        return expense
