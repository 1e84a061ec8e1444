"""This module provides the MeetingService class."""

import logging
import smtplib
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from src.repositories.crm.crud.customers_crud import CRUDCustomer
from src.repositories.crm.crud.meetings_crud import CRUDMeeting
from src.repositories.crm.models.meetings_model import Meeting
from src.repositories.crm.schemas.meetings_schema import MeetingCreate
from src.services.errors import NotFoundError
from src.services.messaging.email.smtp_client import SMTPMailer
from src.services.settings.runtime_config import ConfigManager, get_config_manager

logger = logging.getLogger(__name__)


class MeetingService:
    """Schedule meetings and notify customers by email when SMTP is configured."""

    def __init__(
        self,
        repository: CRUDMeeting,
        customer_repository: CRUDCustomer,
        mailer: Optional[SMTPMailer] = None,
    ) -> None:
        self.repository = repository
        self.customer_repository = customer_repository
        self.mailer = mailer

    def list_meetings(self, db: Session) -> List[Meeting]:
        """Return every meeting ordered by start date."""
        return self.repository.list(db)

    def create(self, db: Session, user_id: int, meeting_in: MeetingCreate) -> Meeting:
        """
        Schedule a meeting.

        When a mailer is configured and the customer has an email, an
        invitation is sent and ``notification_sent`` is set; a mail failure is
        logged and does not fail the call.
        """
        customer = self.customer_repository.get(db, meeting_in.customer_id)
        if customer is None:
            raise NotFoundError("Customer not found")

        meeting = self.repository.create(db, {**meeting_in.model_dump(), "user_id": user_id})

        if self.mailer is not None and customer.email:
            try:
                self.mailer.send(
                    customer.email,
                    f"Meeting: {meeting.title}",
                    f"Hello {customer.first_name},\n\n"
                    f"Our meeting \"{meeting.title}\" is scheduled for "
                    f"{meeting.start_date:%Y-%m-%d %H:%M}.\n",
                )
                meeting.notification_sent = True
                db.commit()
                db.refresh(meeting)
            except (smtplib.SMTPException, OSError) as exc:
                logger.warning("Meeting %s notification failed: %s", meeting.id, exc)

        return meeting

    def update_status(self, db: Session, meeting_id: int, status: str) -> Meeting:
        meeting = self.repository.get(db, meeting_id)
        if meeting is None:
            raise NotFoundError("Meeting not found")
        return self.repository.update_status(db, meeting, status)


def get_meeting_service(
    repository: CRUDMeeting = Depends(),
    customer_repository: CRUDCustomer = Depends(),
    config_manager: ConfigManager = Depends(get_config_manager),
) -> MeetingService:
    return MeetingService(repository, customer_repository, config_manager.integrations.mailer)
