"""Decision option model."""

from dataclasses import dataclass, field

from app.models.common import BaseEntity
from app.models.decision.enums import Dimension

OPTION_DDL = """
CREATE TABLE IF NOT EXISTS decision_option (
    id VARCHAR PRIMARY KEY,
    proposal_id VARCHAR NOT NULL,
    dimension VARCHAR NOT NULL,
    label VARCHAR NOT NULL,
    created_by VARCHAR NOT NULL,
    created_at VARCHAR NOT NULL,
    metadata JSON
)
"""


@dataclass(frozen=True)
class DecisionOption(BaseEntity):
    """Candidate answer for one dimension. Created or deleted, never edited."""

    id: str
    proposal_id: str
    dimension: Dimension
    label: str
    created_by: str
    created_at: str
    metadata: dict[str, str] = field(default_factory=dict)

    def __hash__(self) -> int:
        return hash(self.id)
