"""Decision domain models - options, votes, configs, confirmations."""

from app.models.decision.config import CONFIG_DDL, ProposalDecisionConfig
from app.models.decision.confirmation import CONFIRMATION_DDL, DecisionConfirmation
from app.models.decision.entities import (
    Candidate,
    DateConsensus,
    DecisionTally,
    OptionSupport,
    OverlapWindow,
    WindowGeneration,
)
from app.models.decision.enums import DecisionStatus, Dimension, VotingMode, default_mode
from app.models.decision.option import OPTION_DDL, DecisionOption
from app.models.decision.vote import (
    VOTE_DDL,
    DecisionVote,
    RankedVote,
    SetVote,
    vote_kind,
    vote_option_ids,
)

__all__ = [
    "OPTION_DDL",
    "VOTE_DDL",
    "CONFIG_DDL",
    "CONFIRMATION_DDL",
    "Dimension",
    "VotingMode",
    "DecisionStatus",
    "default_mode",
    "DecisionOption",
    "DecisionVote",
    "RankedVote",
    "SetVote",
    "vote_kind",
    "vote_option_ids",
    "ProposalDecisionConfig",
    "DecisionConfirmation",
    "Candidate",
    "OptionSupport",
    "DecisionTally",
    "OverlapWindow",
    "WindowGeneration",
    "DateConsensus",
]
