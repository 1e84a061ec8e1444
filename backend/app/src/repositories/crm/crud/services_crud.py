"""CRUD helpers for the service catalogue."""

from typing import List

from sqlalchemy.orm import Session

from src.repositories.crm.models.services_model import Service


class CRUDService:
    """Database access for catalogue services."""

    def list_active(self, db: Session) -> List[Service]:
        return (
            db.query(Service)
            .filter(Service.is_active.is_(True))
            .order_by(Service.name)
            .all()
        )
