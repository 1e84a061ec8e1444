"""Dashboard endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from src.controllers.dependencies import get_current_user_id
from src.repositories.crm.dependencies import get_db
from src.repositories.crm.schemas.dashboard_schema import DashboardStats
from src.services.crm.dashboard_service import DashboardService, get_dashboard_service

dashboard_router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


@dashboard_router.get("/stats")
def get_stats(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    dashboard_service: DashboardService = Depends(get_dashboard_service),
) -> DashboardStats:
    return dashboard_service.get_stats(db, user_id)
