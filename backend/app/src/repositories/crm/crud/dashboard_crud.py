"""
Aggregate queries behind the dashboard.

This module provides a `CRUDDashboard` class with methods to:
- Count customers, meetings, notes and tasks matching a filter.
- Sum proposal amounts, optionally by status.
- Read customer creation times for the growth chart.
- Rank customers by note count.
"""

from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import desc, func
from sqlalchemy.orm import Session

from src.repositories.crm.models.customers_model import Customer
from src.repositories.crm.models.meetings_model import Meeting
from src.repositories.crm.models.notes_model import Note
from src.repositories.crm.models.proposals_model import Proposal
from src.repositories.crm.models.tasks_model import Task


class CRUDDashboard:
    """Read-only statistics over the CRM tables."""

    def count_customers(self, db: Session, status: str) -> int:
        return db.query(func.count(Customer.id)).filter(Customer.status == status).scalar() or 0

    def count_meetings_between(self, db: Session, start: datetime, end: datetime) -> int:
        """Count meetings starting within ``[start, end]``."""
        return (
            db.query(func.count(Meeting.id))
            .filter(Meeting.start_date >= start, Meeting.start_date <= end)
            .scalar()
            or 0
        )

    def count_notes_since(self, db: Session, since: datetime) -> int:
        return db.query(func.count(Note.id)).filter(Note.created_at >= since).scalar() or 0

    def count_tasks(self, db: Session, user_id: int, status: str) -> int:
        return (
            db.query(func.count(Task.id))
            .filter(Task.user_id == user_id, Task.status == status)
            .scalar()
            or 0
        )

    def sum_proposals(self, db: Session, status: Optional[str] = None) -> float:
        """
        Sum ``total_amount`` over proposals.

        Args:
            db (Session): The database session.
            status (Optional[str]): Only count proposals in this status.

        Returns:
            float: The total, 0 when there are no proposals.
        """
        query = db.query(func.coalesce(func.sum(Proposal.total_amount), 0))
        if status:
            query = query.filter(Proposal.status == status)
        return float(query.scalar() or 0)

    def customer_created_dates(self, db: Session, since: datetime) -> List[datetime]:
        rows = (
            db.query(Customer.created_at)
            .filter(Customer.created_at >= since)
            .order_by(Customer.created_at)
            .all()
        )
        return [created_at for (created_at,) in rows]

    def top_customers_by_notes(
        self, db: Session, since: datetime, limit: int
    ) -> List[Tuple[Customer, int]]:
        """
        Rank customers by the number of notes written since ``since``.

        Customers without notes in the window are left out. Ties go to the
        older customer record.
        """
        note_count = func.count(Note.id).label("note_count")
        return [
            (customer, count)
            for customer, count in (
                db.query(Customer, note_count)
                .join(Note, Note.customer_id == Customer.id)
                .filter(Note.created_at >= since)
                .group_by(Customer.id)
                .order_by(desc(note_count), Customer.id)
                .limit(limit)
                .all()
            )
        ]
