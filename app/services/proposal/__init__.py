"""Proposal services."""

from app.services.proposal.permissions import can_confirm_decision, can_delete_option, can_manage_proposal
from app.services.proposal.service import ProposalService

__all__ = [
    "ProposalService",
    "can_confirm_decision",
    "can_delete_option",
    "can_manage_proposal",
]
