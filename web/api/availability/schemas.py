"""Availability API response schemas."""

from pydantic import BaseModel


class DateRangeItem(BaseModel):
    """Run of consecutive marked days."""

    start_date: str
    end_date: str
    days: int


class AvailabilityResponse(BaseModel):
    """A user's dates for a proposal."""

    user_id: str
    proposal_id: str
    dates: list[str]
    ranges: list[DateRangeItem]


class DateConsensusItem(BaseModel):
    """Availability on one date."""

    date: str
    available_user_ids: list[str]
    unavailable_user_ids: list[str]
    percent: int


class ConsensusResponse(BaseModel):
    """Consensus response."""

    proposal_id: str
    total_users: int
    consensus: int
    dates: dict[str, int]
    best_dates: list[DateConsensusItem]
