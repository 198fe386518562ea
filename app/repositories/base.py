"""Base repository - storage contract shared by every backend."""

from abc import ABC, abstractmethod
from dataclasses import replace

from app.models.core import Availability, Proposal, User
from app.models.decision import (
    DecisionConfirmation,
    DecisionOption,
    DecisionVote,
    Dimension,
    ProposalDecisionConfig,
)
from helpers.calendar import normalize_dates

PROPOSAL_FIELDS = ("title", "kind", "emoji", "status", "specifics")


class BaseRepository(ABC):
    """Storage contract. Reads return immutable snapshots.

    Implementations must enforce the cascades: deleting a proposal removes
    everything scoped to it, deleting an option strips it from votes and
    confirmations.
    """

    # Users

    @abstractmethod
    def list_users(self) -> list[User]: ...

    @abstractmethod
    def get_user(self, user_id: str) -> User | None: ...

    @abstractmethod
    def add_user(self, user: User) -> User: ...

    # Proposals

    @abstractmethod
    def list_proposals(self) -> list[Proposal]: ...

    @abstractmethod
    def get_proposal(self, proposal_id: str) -> Proposal | None: ...

    @abstractmethod
    def add_proposal(self, proposal: Proposal) -> Proposal: ...

    @abstractmethod
    def update_proposal(self, proposal_id: str, **fields) -> Proposal | None:
        """Apply all fields in one write. Returns None for unknown proposals."""

    @abstractmethod
    def delete_proposal(self, proposal_id: str) -> bool:
        """Delete a proposal and every record scoped to it, atomically."""

    # Availability

    @abstractmethod
    def list_availabilities(self, proposal_id: str | None = None) -> list[Availability]: ...

    @abstractmethod
    def get_availability(self, user_id: str, proposal_id: str) -> Availability | None: ...

    @abstractmethod
    def set_availability(self, availability: Availability) -> Availability | None:
        """Upsert by (user, proposal). Empty dates delete the record."""

    @abstractmethod
    def delete_availability(self, user_id: str, proposal_id: str) -> None: ...

    # Options

    @abstractmethod
    def list_options(self, proposal_id: str, dimension: Dimension) -> list[DecisionOption]: ...

    @abstractmethod
    def create_option(self, option: DecisionOption) -> DecisionOption: ...

    @abstractmethod
    def delete_option(self, option_id: str) -> bool:
        """Delete an option and strip its id from all votes and confirmations."""

    # Votes

    @abstractmethod
    def list_votes(self, proposal_id: str, dimension: Dimension) -> list[DecisionVote]: ...

    @abstractmethod
    def upsert_vote(self, vote: DecisionVote) -> DecisionVote:
        """Last write wins per (user, proposal, dimension)."""

    @abstractmethod
    def delete_vote(self, user_id: str, proposal_id: str, dimension: Dimension) -> None: ...

    # Configs

    @abstractmethod
    def get_config(self, proposal_id: str, dimension: Dimension) -> ProposalDecisionConfig | None: ...

    @abstractmethod
    def upsert_config(self, config: ProposalDecisionConfig) -> ProposalDecisionConfig: ...

    # Confirmations

    @abstractmethod
    def list_confirmations(self, proposal_id: str, dimension: Dimension) -> list[DecisionConfirmation]: ...

    @abstractmethod
    def append_confirmation(self, confirmation: DecisionConfirmation) -> DecisionConfirmation: ...

    # Shared helpers

    @staticmethod
    def _check_proposal_fields(fields: dict) -> None:
        unknown = set(fields) - set(PROPOSAL_FIELDS)
        if unknown:
            raise ValueError(f"Unknown proposal fields: {', '.join(sorted(unknown))}")

    @staticmethod
    def _normalized(availability: Availability) -> Availability | None:
        """Sorted unique dates, or None when nothing is left to store."""
        dates = normalize_dates(availability.dates)
        if not dates:
            return None
        return replace(availability, dates=dates, time_slots=tuple(availability.time_slots or ()))
