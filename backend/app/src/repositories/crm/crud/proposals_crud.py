"""
CRUD operations for proposals.

This module provides a `CRUDProposal` class with methods to:
- Retrieve a proposal by ID.
- List every proposal, or a customer's proposals, newest first.
- Create a proposal together with its items.
- Update the status of a proposal.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from src.repositories.crm.models.proposals_model import Proposal, ProposalItem


class CRUDProposal:
    """Repository class for handling database operations related to proposals."""

    def get(self, db: Session, proposal_id: int) -> Optional[Proposal]:
        return db.query(Proposal).filter(Proposal.id == proposal_id).first()

    def list(self, db: Session) -> List[Proposal]:
        return db.query(Proposal).order_by(desc(Proposal.created_at), desc(Proposal.id)).all()

    def get_by_customer_id(self, db: Session, customer_id: int) -> List[Proposal]:
        return (
            db.query(Proposal)
            .filter(Proposal.customer_id == customer_id)
            .order_by(desc(Proposal.created_at), desc(Proposal.id))
            .all()
        )

    def create(
        self, db: Session, data: Dict[str, Any], items: List[Dict[str, Any]]
    ) -> Proposal:
        """
        Create a proposal and its items in one transaction.

        Args:
            db (Session): The database session.
            data (Dict[str, Any]): Proposal column values.
            items (List[Dict[str, Any]]): Column values of each item.

        Returns:
            Proposal: The stored proposal.
        """
        proposal = Proposal(**data)
        proposal.items = [ProposalItem(**item) for item in items]
        db.add(proposal)
        db.commit()
        db.refresh(proposal)
        return proposal

    def update_status(self, db: Session, proposal: Proposal, status: str) -> Proposal:
        proposal.status = status
        db.add(proposal)
        db.commit()
        db.refresh(proposal)
        return proposal
