"""Permission predicates, checked by callers before acting."""

from app.models.core import Proposal, User
from app.models.decision import DecisionOption


def can_confirm_decision(user: User | None, proposal: Proposal) -> bool:
    """Only the proposal's creator or an admin may confirm."""
    if user is None:
        return False
    return user.is_admin or proposal.created_by == user.id


def can_delete_option(user: User | None, option: DecisionOption) -> bool:
    if user is None:
        return False
    return user.is_admin or option.created_by == user.id


def can_manage_proposal(user: User | None, proposal: Proposal) -> bool:
    """Creator or admin may delete a proposal."""
    return can_confirm_decision(user, proposal)
