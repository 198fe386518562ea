"""Lookups shared by views - raise NotFoundError for unknown ids."""

from app.container import container
from app.models.core import Proposal, User
from web.api.errors import NotFoundError


def require_user(user_id: str) -> User:
    user = container.proposals.get_user(user_id)
    if user is None:
        raise NotFoundError(f"User not found: {user_id}")
    return user


def require_proposal(proposal_id: str) -> Proposal:
    proposal = container.proposals.get_proposal(proposal_id)
    if proposal is None:
        raise NotFoundError(f"Proposal not found: {proposal_id}")
    return proposal
