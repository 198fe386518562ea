"""Per-dimension decision configuration model."""

from dataclasses import dataclass

from app.models.common import BaseEntity
from app.models.decision.enums import DecisionStatus, Dimension, VotingMode

CONFIG_DDL = """
CREATE TABLE IF NOT EXISTS decision_config (
    proposal_id VARCHAR NOT NULL,
    dimension VARCHAR NOT NULL,
    mode VARCHAR NOT NULL,
    status VARCHAR NOT NULL,
    PRIMARY KEY (proposal_id, dimension)
)
"""


@dataclass(frozen=True)
class ProposalDecisionConfig(BaseEntity):
    """Voting mode and status for one (proposal, dimension)."""

    proposal_id: str
    dimension: Dimension
    mode: VotingMode
    status: DecisionStatus = DecisionStatus.OPEN
