"""Models package - DDL and entities for all domains."""

from app.models.common import BaseEntity
from app.models.core import (
    AVAILABILITY_DDL,
    PROPOSAL_DDL,
    USER_DDL,
)
from app.models.decision import (
    CONFIG_DDL,
    CONFIRMATION_DDL,
    OPTION_DDL,
    VOTE_DDL,
)

ALL_DDL = [
    # Core
    USER_DDL,
    PROPOSAL_DDL,
    AVAILABILITY_DDL,
    # Decision
    OPTION_DDL,
    VOTE_DDL,
    CONFIG_DDL,
    CONFIRMATION_DDL,
]

__all__ = [
    "BaseEntity",
    # Core
    "USER_DDL",
    "PROPOSAL_DDL",
    "AVAILABILITY_DDL",
    # Decision
    "OPTION_DDL",
    "VOTE_DDL",
    "CONFIG_DDL",
    "CONFIRMATION_DDL",
    # All DDL
    "ALL_DDL",
]
