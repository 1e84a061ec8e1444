"""This module provides the DashboardService class."""

import calendar
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from src.repositories.crm.crud.dashboard_crud import CRUDDashboard
from src.repositories.crm.database import utcnow
from src.repositories.crm.schemas.dashboard_schema import (
    DashboardStats,
    MonthlyCustomers,
    TopCustomer,
)

WEEK_WINDOW_DAYS = 7
GROWTH_MONTHS = 6
TOP_CUSTOMERS_DAYS = 30
TOP_CUSTOMERS_LIMIT = 5


def months_before(moment: datetime, months: int) -> datetime:
    """Shift ``moment`` back by whole months, clamping the day to the target month."""
    month_index = moment.year * 12 + moment.month - 1 - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


class DashboardService:
    """Summarise pipeline activity for the dashboard."""

    def __init__(self, repository: CRUDDashboard) -> None:
        self.repository = repository

    def get_stats(
        self, db: Session, user_id: int, now: Optional[datetime] = None
    ) -> DashboardStats:
        """
        Collect the dashboard figures.

        Args:
            db (Session): The database session.
            user_id (int): Acting user, whose pending tasks are counted.
            now (Optional[datetime]): Reference time, defaults to the current UTC time.

        Returns:
            DashboardStats: Counts for the week around ``now``, proposal totals,
                monthly customer growth over six months and the five customers
                with the most notes in the last 30 days.
        """
        now = now or utcnow()
        week = timedelta(days=WEEK_WINDOW_DAYS)
        top = self.repository.top_customers_by_notes(
            db, now - timedelta(days=TOP_CUSTOMERS_DAYS), TOP_CUSTOMERS_LIMIT
        )

        return DashboardStats(
            activeCustomers=self.repository.count_customers(db, "active"),
            weeklyMeetings=self.repository.count_meetings_between(db, now - week, now + week),
            recentNotes=self.repository.count_notes_since(db, now - week),
            pendingTasks=self.repository.count_tasks(db, user_id, "pending"),
            totalProposals=self.repository.sum_proposals(db),
            wonProposals=self.repository.sum_proposals(db, "approved"),
            lostProposals=self.repository.sum_proposals(db, "rejected"),
            monthlyCustomers=self._monthly_customers(
                db, months_before(now, GROWTH_MONTHS)
            ),
            topCustomers=[
                TopCustomer(
                    id=customer.id,
                    name=customer.full_name,
                    company=customer.company,
                    note_count=count,
                )
                for customer, count in top
            ],
        )

    def _monthly_customers(self, db: Session, since: datetime) -> List[MonthlyCustomers]:
        counts: Dict[str, int] = {}
        for created_at in self.repository.customer_created_dates(db, since):
            month = created_at.strftime("%Y-%m")
            counts[month] = counts.get(month, 0) + 1
        return [MonthlyCustomers(month=month, count=count) for month, count in sorted(counts.items())]


def get_dashboard_service(repository: CRUDDashboard = Depends()) -> DashboardService:
    return DashboardService(repository)
