"""Availability API views - thin layer over services."""

from app.container import container
from app.models.decision import DateConsensus
from web.api.errors import validate_iso_date
from web.api.lookups import require_proposal, require_user

from .schemas import AvailabilityResponse, ConsensusResponse, DateConsensusItem, DateRangeItem


def _response(user_id: str, proposal_id: str) -> AvailabilityResponse:
    ranges = container.availability.availability_ranges(user_id, proposal_id)
    return AvailabilityResponse(
        user_id=user_id,
        proposal_id=proposal_id,
        dates=[d for _, _, run in ranges for d in run],
        ranges=[DateRangeItem(start_date=s, end_date=e, days=len(run)) for s, e, run in ranges],
    )


def _consensus_item(detail: DateConsensus) -> DateConsensusItem:
    return DateConsensusItem(
        date=detail.date,
        available_user_ids=list(detail.available_user_ids),
        unavailable_user_ids=list(detail.unavailable_user_ids),
        percent=detail.percent,
    )


def set_availability(user_id: str, proposal_id: str, dates: list[str]) -> AvailabilityResponse:
    """Replace the user's dates. An empty list clears them."""
    require_user(user_id)
    require_proposal(proposal_id)
    for d in dates:
        validate_iso_date(d)

    container.availability.set_availability(user_id, proposal_id, dates)
    return _response(user_id, proposal_id)


def mark_range(user_id: str, proposal_id: str, start: str, end: str) -> AvailabilityResponse:
    """Add a span of days to the user's dates."""
    require_user(user_id)
    require_proposal(proposal_id)
    validate_iso_date(start)
    validate_iso_date(end)

    container.availability.mark_range(user_id, proposal_id, start, end)
    return _response(user_id, proposal_id)


def get_availability(user_id: str, proposal_id: str) -> AvailabilityResponse:
    """Get the user's dates for a proposal."""
    require_proposal(proposal_id)
    return _response(user_id, proposal_id)


def get_consensus(proposal_id: str) -> ConsensusResponse:
    """Get per-date and best-day consensus."""
    require_proposal(proposal_id)
    service = container.availability

    return ConsensusResponse(
        proposal_id=proposal_id,
        total_users=len(container.proposals.list_users()),
        consensus=service.proposal_consensus(proposal_id),
        dates=service.date_percentages(proposal_id),
        best_dates=[_consensus_item(d) for d in service.best_dates(proposal_id)],
    )


def get_date_detail(proposal_id: str, date: str) -> DateConsensusItem:
    """Get who can and cannot make a date."""
    require_proposal(proposal_id)
    validate_iso_date(date)
    return _consensus_item(container.availability.date_detail(proposal_id, date))
