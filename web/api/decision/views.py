"""Decision API views - thin layer over services.

Confirmation and option deletion are permission-checked here; the services
trust their callers.
"""

from app.container import container
from app.models.core import ActivityType
from app.models.decision import DecisionConfirmation, OverlapWindow, VotingMode, vote_option_ids
from app.services.proposal import can_confirm_decision, can_delete_option
from web.api.errors import NotFoundError, PermissionDeniedError, ValidationError, validate_dimension, validate_mode
from web.api.lookups import require_proposal, require_user

from .schemas import (
    CandidateItem,
    ConfirmationItem,
    DecisionResponse,
    OptionItem,
    WindowItem,
    WindowsResponse,
)


def _confirmation_item(c: DecisionConfirmation) -> ConfirmationItem:
    return ConfirmationItem(
        id=c.id,
        option_ids=list(c.option_ids),
        confirmed_by=c.confirmed_by,
        confirmed_at=c.confirmed_at,
        note=c.note,
    )


def _window_item(w: OverlapWindow) -> WindowItem:
    return WindowItem(
        key=w.key,
        start_date=w.start_date,
        end_date=w.end_date,
        nights=w.nights,
        participant_count=w.participant_count,
        participant_user_ids=list(w.participant_user_ids),
        label=w.label,
    )


def get_decision(proposal_id: str, dimension: str, user_id: str) -> DecisionResponse:
    """Get options, scores and confirmation state for a dimension."""
    dim = validate_dimension(dimension)
    user = require_user(user_id)
    proposal = require_proposal(proposal_id)
    service = container.decisions

    config = service.get_or_create_config(proposal_id, dim)
    tally = service.tally(proposal_id, dim)
    vote = service.user_vote(proposal_id, dim, user_id)
    latest = service.latest_confirmation(proposal_id, dim)

    return DecisionResponse(
        proposal_id=proposal_id,
        dimension=dim.value,
        mode=config.mode.value,
        status=config.status.value,
        total_votes=tally.total_votes,
        options=[
            OptionItem(
                id=row.option.id,
                label=row.option.label,
                created_by=row.option.created_by,
                metadata=row.option.metadata,
                support=row.support,
                percent=row.percent,
            )
            for row in tally.options
        ],
        top_candidates=[
            CandidateItem(
                option_id=c.option.id,
                label=c.option.label,
                score=c.score,
                first_choice_count=c.first_choice_count,
            )
            for c in tally.top_candidates
        ],
        user_vote=vote_option_ids(vote) if vote else [],
        default_selection=service.default_selection(proposal_id, dim, user_id),
        can_confirm=can_confirm_decision(user, proposal),
        latest_confirmation=_confirmation_item(latest) if latest else None,
    )


def set_mode(proposal_id: str, dimension: str, mode: str, user_id: str) -> DecisionResponse:
    """Change the voting mode of a dimension."""
    dim, new_mode = validate_dimension(dimension), validate_mode(mode)
    require_proposal(proposal_id)
    container.decisions.set_mode(proposal_id, dim, new_mode)
    return get_decision(proposal_id, dimension, user_id)


def add_option(proposal_id: str, dimension: str, label: str, user_id: str) -> DecisionResponse:
    """Add a user-authored option."""
    dim = validate_dimension(dimension)
    require_user(user_id)
    require_proposal(proposal_id)

    if container.decisions.add_option(proposal_id, dim, label, user_id) is None:
        raise ValidationError("Option label is required")
    return get_decision(proposal_id, dimension, user_id)


def delete_option(proposal_id: str, dimension: str, option_id: str, user_id: str) -> DecisionResponse:
    """Delete an option. Only its creator or an admin may."""
    dim = validate_dimension(dimension)
    user = require_user(user_id)
    require_proposal(proposal_id)

    option = next((o for o in container.decisions.list_options(proposal_id, dim) if o.id == option_id), None)
    if option is None:
        raise NotFoundError(f"Option not found: {option_id}")
    if not can_delete_option(user, option):
        raise PermissionDeniedError("Only the option's creator or an admin can delete it")

    container.decisions.delete_option(option_id)
    return get_decision(proposal_id, dimension, user_id)


def cast_vote(proposal_id: str, dimension: str, option_id: str, user_id: str) -> DecisionResponse:
    """Vote for an option: pick it (single) or toggle it (multi)."""
    dim = validate_dimension(dimension)
    require_user(user_id)
    require_proposal(proposal_id)
    service = container.decisions

    if all(o.id != option_id for o in service.list_options(proposal_id, dim)):
        raise NotFoundError(f"Option not found: {option_id}")

    mode = service.get_or_create_config(proposal_id, dim).mode
    if mode == VotingMode.RANKED:
        raise ValidationError("Ranked dimensions are voted with move_option")
    if mode == VotingMode.MULTI:
        service.toggle_multi_vote(proposal_id, dim, user_id, option_id)
    else:
        service.cast_single_vote(proposal_id, dim, user_id, option_id)
    return get_decision(proposal_id, dimension, user_id)


def move_option(proposal_id: str, dimension: str, option_id: str, direction: str, user_id: str) -> DecisionResponse:
    """Move an option up or down in the user's ranking."""
    dim = validate_dimension(dimension)
    require_user(user_id)
    require_proposal(proposal_id)
    if direction not in ("up", "down"):
        raise ValidationError(f"Invalid direction: {direction}. Must be up or down")

    container.decisions.move_ranked_option(proposal_id, dim, user_id, option_id, direction)
    return get_decision(proposal_id, dimension, user_id)


def confirm_selection(
    proposal_id: str,
    dimension: str,
    option_ids: list[str],
    user_id: str,
    note: str | None = None,
) -> ConfirmationItem:
    """Confirm option(s) for a dimension. Creator or admin only."""
    dim = validate_dimension(dimension)
    user = require_user(user_id)
    proposal = require_proposal(proposal_id)

    if not can_confirm_decision(user, proposal):
        raise PermissionDeniedError("Only this proposal's creator or an admin can confirm selections")
    if not option_ids:
        raise ValidationError("Select at least one option to confirm")

    confirmation = container.decisions.confirm_selection(proposal_id, dim, option_ids, user_id, note)
    return _confirmation_item(confirmation)


def get_overlap_windows(proposal_id: str) -> WindowsResponse:
    """Preview overlap windows without creating options."""
    require_proposal(proposal_id)
    windows = container.sejour.windows(proposal_id)
    return WindowsResponse(
        proposal_id=proposal_id,
        windows=[_window_item(w) for w in windows],
        created_count=0,
        message=f"Found {len(windows)} overlap window{'' if len(windows) == 1 else 's'}.",
    )


def generate_overlap_options(proposal_id: str, user_id: str) -> WindowsResponse:
    """Create time options from overlap windows of a sejour."""
    require_user(user_id)
    proposal = require_proposal(proposal_id)
    if proposal.kind != ActivityType.SEJOUR:
        raise ValidationError("Overlap windows are only generated for sejour proposals")

    result = container.sejour.generate_window_options(proposal_id, user_id)
    count = len(result.created)

    if not result.windows:
        message = "No overlap windows found yet. Add more date availability first."
    elif count == 0:
        message = "Overlap windows are already generated."
    else:
        message = f"Generated {count} overlap window option{'' if count == 1 else 's'}."

    return WindowsResponse(
        proposal_id=proposal_id,
        windows=[_window_item(w) for w in result.windows],
        created_count=count,
        message=message,
    )
