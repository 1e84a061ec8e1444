"""Pydantic schemas for the dashboard statistics."""

from typing import List, Optional

from pydantic import BaseModel


class MonthlyCustomers(BaseModel):
    month: str
    count: int


class TopCustomer(BaseModel):
    """A customer ranked by recent note count."""

    id: int
    name: str
    company: Optional[str] = None
    note_count: int


class DashboardStats(BaseModel):
    """Response model of the dashboard summary, keyed the way the frontend reads it."""

    activeCustomers: int
    weeklyMeetings: int
    recentNotes: int
    pendingTasks: int
    totalProposals: float
    wonProposals: float
    lostProposals: float
    monthlyCustomers: List[MonthlyCustomers]
    topCustomers: List[TopCustomer]
