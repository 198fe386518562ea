"""Proposal API response schemas."""

from pydantic import BaseModel


class SpecificsItem(BaseModel):
    """Resolved details of a confirmed proposal."""

    date: str | None = None
    time: str | None = None
    location: str | None = None


class ProposalItem(BaseModel):
    """Proposal with its best-day consensus."""

    id: str
    title: str
    kind: str
    emoji: str
    created_by: str
    created_at: str
    status: str
    specifics: SpecificsItem | None
    consensus: int


class ProposalsResponse(BaseModel):
    """Proposals list response."""

    items: list[ProposalItem]
    total_users: int


class DeleteResponse(BaseModel):
    """Proposal deletion response."""

    proposal_id: str
    deleted: bool
