"""Core domain models - users, proposals, availability."""

from app.models.core.availability import AVAILABILITY_DDL, Availability
from app.models.core.proposal import PROPOSAL_DDL, ActivityStatus, ActivityType, Proposal, Specifics
from app.models.core.user import DEMO_USERS, USER_DDL, User

__all__ = [
    "USER_DDL",
    "PROPOSAL_DDL",
    "AVAILABILITY_DDL",
    "User",
    "DEMO_USERS",
    "Proposal",
    "Specifics",
    "ActivityType",
    "ActivityStatus",
    "Availability",
]
