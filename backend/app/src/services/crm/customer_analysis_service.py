"""Customer-level AI workflows: expert analysis and sales message drafting."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from fastapi import Depends
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from src.repositories.crm.crud.customers_crud import CRUDCustomer
from src.repositories.crm.database import utcnow
from src.repositories.crm.models.customers_model import Customer
from src.repositories.crm.schemas.analysis_schema import CustomerAnalysisResult
from src.services.ai.openai_client import OpenAIClient
from src.services.crm.tasks_service import TaskService, get_task_service
from src.services.errors import (
    ConfigurationError,
    NotFoundError,
    ProviderError,
    ValidationError,
)
from src.services.settings.runtime_config import (
    ConfigManager,
    RuntimeConfig,
    get_config_manager,
)

logger = logging.getLogger(__name__)

CUSTOMER_ANALYSIS_PROMPT = """You are a CRM analyst for a digital agency. Analyse the customer data and write a detailed report.

Fields to determine:
1. Customer type (cold/warm/hot), based on how often and how well the customer engages
2. Services the customer is interested in (Web Design, Social Media Management, SEO, E-Commerce, Graphic Design, Logo Design, Google Ads, Meta Ads, Brand Consulting)
3. Potential budget (number, in the agency's currency)
4. Sales difficulty score (1-10, 1 easy, 10 very hard)
5. Detailed analysis
6. Recommendations and next steps

Answer as a JSON object:
{
  "customer_type": "hot/warm/cold",
  "interested_services": "comma separated services",
  "potential_budget": number,
  "sales_difficulty_score": 1-10,
  "detailed_analysis": "detailed report",
  "recommendations": "recommendations and strategies",
  "next_actions": "next steps"
}"""

SALES_ASSISTANT_PROMPT = (
    "You are a professional sales assistant for a digital agency. Write personalised, "
    "friendly and professional messages in the customer's language."
)

MESSAGE_PROMPTS = {
    "first_contact": "Write a professional first contact message for {name} ({company}). Keep it warm and professional.",
    "proposal_response": "Write a follow-up message for {first_name} about the proposal we sent. Keep it polite and encouraging.",
    "thank_you": "Write a thank-you message for {first_name} after our meeting or conversation.",
    "follow_up": "Write a follow-up message for {first_name} to check on their decision or needs.",
}

HOT_CUSTOMER_TASK_TITLE = "AI Suggested: Urgent Follow-up"
NOT_ENOUGH_DATA_MESSAGE = (
    "Not enough data for analysis. Add notes, meetings or proposals for this customer first."
)


class CustomerAnalysisService:
    """Classify customers and draft sales messages with the language model."""

    def __init__(
        self,
        customer_repository: CRUDCustomer,
        task_service: TaskService,
        client: Optional[OpenAIClient],
        config: RuntimeConfig,
    ) -> None:
        self.customer_repository = customer_repository
        self.task_service = task_service
        self.client = client
        self.config = config

    def analyze(self, db: Session, customer_id: int, user_id: int) -> CustomerAnalysisResult:
        """
        Classify a customer from its notes, meetings and proposals.

        Writes the classification fields and ``ai_analysis_date``; a ``hot``
        result also creates a high priority AI task due the next day.

        Raises:
            ConfigurationError: no OpenAI credentials.
            NotFoundError: unknown customer.
            ValidationError: the customer has no notes, meetings or proposals.
            ProviderError: the model call failed or returned unusable output.
        """
        client = self._require_client()
        customer = self._get_customer(db, customer_id)
        if not (customer.notes or customer.meetings or customer.proposals):
            raise ValidationError(NOT_ENOUGH_DATA_MESSAGE)

        payload = json.dumps(self._analysis_payload(customer), ensure_ascii=False, indent=2)
        try:
            raw = client.complete_json(
                CUSTOMER_ANALYSIS_PROMPT,
                f"Analyse this customer data: {payload}",
                max_tokens=1500,
                temperature=0.7,
            )
            analysis = CustomerAnalysisResult.model_validate(raw)
        except PydanticValidationError as exc:
            logger.error("Customer analysis returned unusable output: %s", exc)
            raise ProviderError(f"AI analysis returned unusable output: {exc}") from exc
        except Exception as exc:
            logger.error("AI analysis error: %s", exc)
            raise ProviderError(f"AI analysis failed: {exc}") from exc

        self.customer_repository.update(
            db,
            customer,
            {
                "customer_type": analysis.customer_type,
                "interested_services": analysis.interested_services,
                "potential_budget": analysis.potential_budget,
                "sales_difficulty_score": analysis.sales_difficulty_score,
                "ai_analysis_date": utcnow(),
            },
        )
        if analysis.customer_type == "hot":
            self.task_service.create_ai_task(
                db,
                customer_id=customer.id,
                user_id=user_id,
                title=HOT_CUSTOMER_TASK_TITLE,
                description=analysis.next_actions,
                priority="high",
                due_in_days=self.config.analysis_task_due_days,
            )
        db.commit()
        logger.info(
            "Customer %s classified as %s", customer_id, analysis.customer_type
        )
        return analysis

    def draft_message(self, db: Session, customer_id: int, message_type: str) -> str:
        """
        Draft a personalised WhatsApp/email message.

        Unknown ``message_type`` values fall back to ``first_contact``.
        """
        client = self._require_client()
        customer = self._get_customer(db, customer_id)
        template = MESSAGE_PROMPTS.get(message_type, MESSAGE_PROMPTS["first_contact"])
        prompt = template.format(
            name=customer.full_name,
            first_name=customer.first_name,
            company=customer.company or "company",
        )
        try:
            return client.complete(
                [
                    {"role": "system", "content": SALES_ASSISTANT_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=200,
            )
        except Exception as exc:
            logger.error("Message generation failed: %s", exc)
            raise ProviderError(f"Message generation failed: {exc}") from exc

    def _require_client(self) -> OpenAIClient:
        if self.client is None:
            raise ConfigurationError("OpenAI integration is not configured.")
        return self.client

    def _get_customer(self, db: Session, customer_id: int) -> Customer:
        customer = self.customer_repository.get(db, customer_id)
        if customer is None:
            raise NotFoundError("Customer not found")
        return customer

    @staticmethod
    def _analysis_payload(customer: Customer) -> Dict[str, Any]:
        notes = sorted(customer.notes, key=lambda note: note.created_at, reverse=True)
        meetings = sorted(
            customer.meetings, key=lambda meeting: meeting.start_date, reverse=True
        )
        proposals = sorted(
            customer.proposals, key=lambda proposal: proposal.created_at, reverse=True
        )
        return {
            "customer": {
                "name": customer.full_name,
                "company": customer.company,
                "email": customer.email,
                "phone": customer.phone,
                "instagram": customer.instagram,
                "website": customer.website,
                "current_status": customer.status,
            },
            "notes": [
                {"content": note.content, "type": note.type, "date": str(note.created_at)}
                for note in notes
            ],
            "meetings": [
                {
                    "title": meeting.title,
                    "description": meeting.description,
                    "status": meeting.status,
                    "date": str(meeting.start_date),
                }
                for meeting in meetings
            ],
            "proposals": [
                {
                    "title": proposal.title,
                    "description": proposal.description,
                    "amount": proposal.total_amount,
                    "status": proposal.status,
                }
                for proposal in proposals
            ],
        }


def get_customer_analysis_service(
    customer_repository: CRUDCustomer = Depends(),
    task_service: TaskService = Depends(get_task_service),
    config_manager: ConfigManager = Depends(get_config_manager),
) -> CustomerAnalysisService:
    return CustomerAnalysisService(
        customer_repository,
        task_service,
        config_manager.integrations.openai,
        config_manager.config,
    )
