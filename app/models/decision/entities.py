"""Decision domain entities - computed results."""

from dataclasses import dataclass

from app.models.common import BaseEntity
from app.models.decision.enums import VotingMode
from app.models.decision.option import DecisionOption


@dataclass(frozen=True)
class Candidate(BaseEntity):
    """Option with its Borda score and first-choice count."""

    option: DecisionOption
    score: int
    first_choice_count: int


@dataclass(frozen=True)
class OptionSupport(BaseEntity):
    """Support for one option under the current voting mode."""

    option: DecisionOption
    support: int
    percent: int


@dataclass(frozen=True)
class DecisionTally(BaseEntity):
    """Everything the option list shows for one dimension."""

    mode: VotingMode
    total_votes: int
    options: tuple[OptionSupport, ...]
    top_candidates: tuple[Candidate, ...]


@dataclass(frozen=True)
class OverlapWindow(BaseEntity):
    """Run of consecutive days a group of users shares."""

    start_date: str
    end_date: str
    nights: int
    participant_count: int
    participant_user_ids: tuple[str, ...]
    label: str

    @property
    def key(self) -> str:
        return f"{self.start_date}|{self.end_date}|{','.join(self.participant_user_ids)}"


@dataclass(frozen=True)
class WindowGeneration(BaseEntity):
    """Result of turning overlap windows into time options."""

    windows: tuple[OverlapWindow, ...]
    created: tuple[DecisionOption, ...]


@dataclass(frozen=True)
class DateConsensus(BaseEntity):
    """Who can make one date, and the share of all users that is."""

    date: str
    available_user_ids: tuple[str, ...]
    unavailable_user_ids: tuple[str, ...]
    percent: int
