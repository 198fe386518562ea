"""Proposal (activity) model."""

from dataclasses import dataclass
from enum import StrEnum

from app.models.common import BaseEntity

PROPOSAL_DDL = """
CREATE TABLE IF NOT EXISTS proposal (
    id VARCHAR PRIMARY KEY,
    title VARCHAR NOT NULL,
    kind VARCHAR NOT NULL,
    emoji VARCHAR,
    created_by VARCHAR NOT NULL,
    created_at VARCHAR NOT NULL,
    status VARCHAR NOT NULL,
    specifics JSON
)
"""


class ActivityType(StrEnum):
    """Single-day event or multi-day stay."""

    EVENT = "event"
    SEJOUR = "sejour"


class ActivityStatus(StrEnum):
    PROPOSED = "proposed"
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"


@dataclass(frozen=True)
class Specifics(BaseEntity):
    """Resolved details, written back when a dimension is confirmed."""

    date: str | None = None
    time: str | None = None
    location: str | None = None


@dataclass(frozen=True)
class Proposal(BaseEntity):
    """Proposed activity."""

    id: str
    title: str
    kind: ActivityType
    emoji: str
    created_by: str
    created_at: str
    status: ActivityStatus = ActivityStatus.PROPOSED
    specifics: Specifics | None = None
