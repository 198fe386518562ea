"""Decision enums - dimensions, voting modes, statuses."""

from enum import StrEnum


class Dimension(StrEnum):
    """Independent axis a proposal is decided along."""

    TIME = "time"
    PLACE = "place"
    REQUIREMENT = "requirement"


class VotingMode(StrEnum):
    SINGLE = "single"
    MULTI = "multi"
    RANKED = "ranked"


class DecisionStatus(StrEnum):
    """Per-dimension status. PENDING_CONFIRMATION is reserved and never entered."""

    OPEN = "open"
    PENDING_CONFIRMATION = "pending_confirmation"
    CONFIRMED = "confirmed"


def default_mode(dimension: Dimension) -> VotingMode:
    """Requirements are multi-select, everything else single choice."""
    if dimension == Dimension.REQUIREMENT:
        return VotingMode.MULTI
    return VotingMode.SINGLE
