"""Decision confirmation model (append-only log)."""

from dataclasses import dataclass

from app.models.common import BaseEntity
from app.models.decision.enums import Dimension

CONFIRMATION_DDL = """
CREATE TABLE IF NOT EXISTS decision_confirmation (
    id VARCHAR PRIMARY KEY,
    proposal_id VARCHAR NOT NULL,
    dimension VARCHAR NOT NULL,
    option_ids JSON NOT NULL,
    confirmed_by VARCHAR NOT NULL,
    confirmed_at VARCHAR NOT NULL,
    note VARCHAR
)
"""


@dataclass(frozen=True)
class DecisionConfirmation(BaseEntity):
    """Chosen option(s) for a dimension. The latest one is authoritative."""

    id: str
    proposal_id: str
    dimension: Dimension
    option_ids: tuple[str, ...]
    confirmed_by: str
    confirmed_at: str
    note: str | None = None

    def without(self, option_id: str) -> "DecisionConfirmation":
        return DecisionConfirmation(
            id=self.id,
            proposal_id=self.proposal_id,
            dimension=self.dimension,
            option_ids=tuple(o for o in self.option_ids if o != option_id),
            confirmed_by=self.confirmed_by,
            confirmed_at=self.confirmed_at,
            note=self.note,
        )
