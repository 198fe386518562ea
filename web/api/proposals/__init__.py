"""Proposals API."""

from web.api.proposals.views import create_proposal, delete_proposal, get_proposal, list_proposals

__all__ = [
    "list_proposals",
    "get_proposal",
    "create_proposal",
    "delete_proposal",
]
