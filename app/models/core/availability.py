"""Availability (user dates per proposal) model."""

from dataclasses import dataclass

from app.models.common import BaseEntity

AVAILABILITY_DDL = """
CREATE TABLE IF NOT EXISTS availability (
    id VARCHAR NOT NULL,
    user_id VARCHAR NOT NULL,
    proposal_id VARCHAR NOT NULL,
    dates JSON NOT NULL,
    time_slots JSON,
    PRIMARY KEY (user_id, proposal_id)
)
"""


@dataclass(frozen=True)
class Availability(BaseEntity):
    """Dates one user can make for one proposal (sorted, unique)."""

    id: str
    user_id: str
    proposal_id: str
    dates: tuple[str, ...]
    time_slots: tuple[str, ...] = ()
