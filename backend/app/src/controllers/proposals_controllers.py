"""Proposal endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from src.controllers.dependencies import get_current_user_id
from src.repositories.crm.dependencies import get_db
from src.repositories.crm.schemas.proposals_schema import (
    ProposalCreate,
    ProposalResponse,
    ProposalStatusUpdate,
)
from src.services.crm.proposals_service import ProposalService, get_proposal_service

proposal_router = APIRouter(prefix="/api", tags=["Proposals"])


@proposal_router.get("/proposals")
def list_proposals(
    db: Session = Depends(get_db),
    proposal_service: ProposalService = Depends(get_proposal_service),
) -> List[ProposalResponse]:
    return [ProposalResponse.from_proposal(p) for p in proposal_service.list_proposals(db)]


@proposal_router.get("/customers/{customer_id}/proposals")
def list_customer_proposals(
    customer_id: int,
    db: Session = Depends(get_db),
    proposal_service: ProposalService = Depends(get_proposal_service),
) -> List[ProposalResponse]:
    proposals = proposal_service.list_for_customer(db, customer_id)
    return [ProposalResponse.from_proposal(p) for p in proposals]


@proposal_router.post("/proposals", status_code=status.HTTP_201_CREATED)
def create_proposal(
    proposal_in: ProposalCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    proposal_service: ProposalService = Depends(get_proposal_service),
) -> ProposalResponse:
    return ProposalResponse.from_proposal(proposal_service.create(db, user_id, proposal_in))


@proposal_router.put("/proposals/{proposal_id}/status")
def update_proposal_status(
    proposal_id: int,
    update: ProposalStatusUpdate,
    db: Session = Depends(get_db),
    proposal_service: ProposalService = Depends(get_proposal_service),
) -> ProposalResponse:
    proposal = proposal_service.update_status(db, proposal_id, update.status)
    return ProposalResponse.from_proposal(proposal)
