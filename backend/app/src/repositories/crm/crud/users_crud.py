"""CRUD helpers for users."""

from typing import Optional

from sqlalchemy.orm import Session

from src.repositories.crm.models.users_model import User


class CRUDUser:
    """Database access for users."""

    def get(self, db: Session, user_id: int) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    def get_first_admin(self, db: Session) -> Optional[User]:
        return db.query(User).filter(User.role == "admin").order_by(User.id).first()
