"""Decision vote models.

A vote is either an ordered ranking (single and ranked modes, a single-choice
vote is a ranking of one) or an unordered selection (multi mode).
"""

from dataclasses import dataclass

from app.models.common import BaseEntity
from app.models.decision.enums import Dimension

VOTE_DDL = """
CREATE TABLE IF NOT EXISTS decision_vote (
    id VARCHAR NOT NULL,
    proposal_id VARCHAR NOT NULL,
    dimension VARCHAR NOT NULL,
    user_id VARCHAR NOT NULL,
    kind VARCHAR NOT NULL,
    option_ids JSON NOT NULL,
    updated_at VARCHAR NOT NULL,
    PRIMARY KEY (proposal_id, dimension, user_id)
)
"""

RANKED = "ranked"
SELECTION = "selection"


@dataclass(frozen=True)
class RankedVote(BaseEntity):
    """Ordered preference, best first."""

    id: str
    proposal_id: str
    dimension: Dimension
    user_id: str
    order: tuple[str, ...]
    updated_at: str

    def without(self, option_id: str) -> "RankedVote":
        return RankedVote(
            id=self.id,
            proposal_id=self.proposal_id,
            dimension=self.dimension,
            user_id=self.user_id,
            order=tuple(o for o in self.order if o != option_id),
            updated_at=self.updated_at,
        )


@dataclass(frozen=True)
class SetVote(BaseEntity):
    """Unordered approval of any number of options."""

    id: str
    proposal_id: str
    dimension: Dimension
    user_id: str
    selected: frozenset[str]
    updated_at: str

    def without(self, option_id: str) -> "SetVote":
        return SetVote(
            id=self.id,
            proposal_id=self.proposal_id,
            dimension=self.dimension,
            user_id=self.user_id,
            selected=self.selected - {option_id},
            updated_at=self.updated_at,
        )


DecisionVote = RankedVote | SetVote


def vote_option_ids(vote: DecisionVote) -> list[str]:
    """Option ids referenced by a vote, ranking order kept."""
    if isinstance(vote, RankedVote):
        return list(vote.order)
    return sorted(vote.selected)


def vote_kind(vote: DecisionVote) -> str:
    return RANKED if isinstance(vote, RankedVote) else SELECTION
