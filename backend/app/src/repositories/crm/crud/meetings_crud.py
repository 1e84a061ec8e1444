"""CRUD helpers for meetings."""

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from src.repositories.crm.models.meetings_model import Meeting


class CRUDMeeting:
    """Database access for meetings."""

    def get(self, db: Session, meeting_id: int) -> Optional[Meeting]:
        return db.query(Meeting).filter(Meeting.id == meeting_id).first()

    def list(self, db: Session) -> List[Meeting]:
        return db.query(Meeting).order_by(Meeting.start_date, Meeting.id).all()

    def create(self, db: Session, data: Dict[str, Any]) -> Meeting:
        meeting = Meeting(**data)
        db.add(meeting)
        db.commit()
        db.refresh(meeting)
        return meeting

    def update_status(self, db: Session, meeting: Meeting, status: str) -> Meeting:
        meeting.status = status
        db.add(meeting)
        db.commit()
        db.refresh(meeting)
        return meeting
