"""Proposal API views - thin layer over services."""

from app.container import container
from app.models.core import ActivityType, Proposal
from app.services.proposal import can_manage_proposal
from web.api.errors import PermissionDeniedError, ValidationError
from web.api.lookups import require_proposal, require_user

from .schemas import DeleteResponse, ProposalItem, ProposalsResponse, SpecificsItem


def _item(proposal: Proposal, consensus: int) -> ProposalItem:
    specifics = proposal.specifics
    return ProposalItem(
        id=proposal.id,
        title=proposal.title,
        kind=proposal.kind.value,
        emoji=proposal.emoji,
        created_by=proposal.created_by,
        created_at=proposal.created_at,
        status=proposal.status.value,
        specifics=SpecificsItem(**specifics.to_dict()) if specifics else None,
        consensus=consensus,
    )


def list_proposals() -> ProposalsResponse:
    """Get all proposals with best-day consensus."""
    consensus = container.availability.consensus_by_proposal()
    items = [_item(p, consensus.get(p.id, 0)) for p in container.proposals.list_proposals()]
    return ProposalsResponse(items=items, total_users=len(container.proposals.list_users()))


def get_proposal(proposal_id: str) -> ProposalItem:
    """Get one proposal."""
    proposal = require_proposal(proposal_id)
    return _item(proposal, container.availability.proposal_consensus(proposal_id))


def create_proposal(title: str, kind: str, emoji: str, user_id: str) -> ProposalItem:
    """Create a proposal and its default decision configs."""
    require_user(user_id)
    if not title or not title.strip():
        raise ValidationError("Title is required")
    try:
        activity = ActivityType(kind)
    except ValueError:
        raise ValidationError(f"Invalid kind: {kind}. Must be event or sejour") from None

    proposal = container.proposals.create_proposal(title, activity, emoji, user_id)
    container.decisions.ensure_configs(proposal.id)
    return _item(proposal, 0)


def delete_proposal(proposal_id: str, user_id: str) -> DeleteResponse:
    """Delete a proposal and everything scoped to it."""
    user = require_user(user_id)
    proposal = require_proposal(proposal_id)
    if not can_manage_proposal(user, proposal):
        raise PermissionDeniedError("Only the creator or an admin can delete this proposal")

    deleted = container.proposals.delete_proposal(proposal_id)
    return DeleteResponse(proposal_id=proposal_id, deleted=deleted)
