"""Pydantic schemas for proposals and their line items."""

from datetime import date, datetime
from typing import Annotated, List, Literal, Optional

from pydantic import BaseModel, Field, StringConstraints

from src.repositories.crm.models.proposals_model import Proposal, ProposalItem


ProposalStatus = Literal["pending", "approved", "rejected"]


class ProposalItemCreate(BaseModel):
    service_id: int
    description: Optional[str] = None
    quantity: int = Field(default=1, ge=1)
    unit_price: float = Field(..., ge=0)


class ProposalCreate(BaseModel):
    """Payload to create a proposal with at least one item."""

    customer_id: int
    title: Annotated[str, StringConstraints(min_length=1, max_length=255)]
    description: Optional[str] = None
    valid_until: Optional[date] = None
    items: List[ProposalItemCreate] = Field(..., min_length=1)


class ProposalStatusUpdate(BaseModel):
    status: ProposalStatus


class ProposalItemResponse(BaseModel):
    id: int
    service_id: int
    service_name: Optional[str] = None
    description: Optional[str] = None
    quantity: int
    unit_price: float
    total_price: float

    @classmethod
    def from_item(cls, item: ProposalItem) -> "ProposalItemResponse":
        return cls(
            id=item.id,
            service_id=item.service_id,
            service_name=item.service.name if item.service else None,
            description=item.description,
            quantity=item.quantity,
            unit_price=item.unit_price,
            total_price=item.total_price,
        )


class ProposalResponse(BaseModel):
    """Response model for a proposal joined with customer, author and items."""

    id: int
    customer_id: int
    user_id: int
    title: str
    description: Optional[str] = None
    total_amount: float
    status: ProposalStatus
    valid_until: Optional[date] = None
    created_at: datetime
    updated_at: datetime
    customer_name: Optional[str] = None
    company: Optional[str] = None
    user_name: Optional[str] = None
    items: List[ProposalItemResponse] = Field(default_factory=list)

    @classmethod
    def from_proposal(cls, proposal: Proposal) -> "ProposalResponse":
        customer = proposal.customer
        return cls(
            id=proposal.id,
            customer_id=proposal.customer_id,
            user_id=proposal.user_id,
            title=proposal.title,
            description=proposal.description,
            total_amount=proposal.total_amount,
            status=proposal.status,
            valid_until=proposal.valid_until,
            created_at=proposal.created_at,
            updated_at=proposal.updated_at,
            customer_name=customer.full_name if customer else None,
            company=customer.company if customer else None,
            user_name=proposal.user.username if proposal.user else None,
            items=[ProposalItemResponse.from_item(item) for item in proposal.items],
        )
