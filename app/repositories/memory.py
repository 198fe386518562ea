"""In-memory repository - process-local backend for tests and local mode."""

import threading
from dataclasses import replace

from loguru import logger

from app.models.core import Availability, Proposal, User
from app.models.decision import (
    DecisionConfirmation,
    DecisionOption,
    DecisionVote,
    Dimension,
    ProposalDecisionConfig,
)
from app.repositories.base import BaseRepository


class MemoryRepository(BaseRepository):
    """Dict-backed repository. All writes hold one lock."""

    def __init__(self, users: list[User] | None = None):
        self._lock = threading.RLock()
        self._users: dict[str, User] = {u.id: u for u in users or []}
        self._proposals: dict[str, Proposal] = {}
        self._availabilities: dict[tuple[str, str], Availability] = {}
        self._options: dict[str, DecisionOption] = {}
        self._votes: dict[tuple[str, str, str], DecisionVote] = {}
        self._configs: dict[tuple[str, str], ProposalDecisionConfig] = {}
        self._confirmations: list[DecisionConfirmation] = []
        logger.debug("{} initialized with {} users", self.__class__.__name__, len(self._users))

    # Users

    def list_users(self) -> list[User]:
        with self._lock:
            return list(self._users.values())

    def get_user(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    def add_user(self, user: User) -> User:
        with self._lock:
            self._users[user.id] = user
        return user

    # Proposals

    def list_proposals(self) -> list[Proposal]:
        with self._lock:
            return list(self._proposals.values())

    def get_proposal(self, proposal_id: str) -> Proposal | None:
        return self._proposals.get(proposal_id)

    def add_proposal(self, proposal: Proposal) -> Proposal:
        with self._lock:
            self._proposals[proposal.id] = proposal
        return proposal

    def update_proposal(self, proposal_id: str, **fields) -> Proposal | None:
        self._check_proposal_fields(fields)
        with self._lock:
            current = self._proposals.get(proposal_id)
            if current is None:
                return None
            updated = replace(current, **fields)
            self._proposals[proposal_id] = updated
        return updated

    def delete_proposal(self, proposal_id: str) -> bool:
        with self._lock:
            if self._proposals.pop(proposal_id, None) is None:
                return False
            self._availabilities = {k: a for k, a in self._availabilities.items() if a.proposal_id != proposal_id}
            self._options = {k: o for k, o in self._options.items() if o.proposal_id != proposal_id}
            self._votes = {k: v for k, v in self._votes.items() if v.proposal_id != proposal_id}
            self._configs = {k: c for k, c in self._configs.items() if c.proposal_id != proposal_id}
            self._confirmations = [c for c in self._confirmations if c.proposal_id != proposal_id]
        logger.info("Proposal {} deleted with dependent records", proposal_id)
        return True

    # Availability

    def list_availabilities(self, proposal_id: str | None = None) -> list[Availability]:
        with self._lock:
            return [a for a in self._availabilities.values() if proposal_id is None or a.proposal_id == proposal_id]

    def get_availability(self, user_id: str, proposal_id: str) -> Availability | None:
        return self._availabilities.get((user_id, proposal_id))

    def set_availability(self, availability: Availability) -> Availability | None:
        normalized = self._normalized(availability)
        if normalized is None:
            self.delete_availability(availability.user_id, availability.proposal_id)
            return None
        with self._lock:
            self._availabilities[(normalized.user_id, normalized.proposal_id)] = normalized
        return normalized

    def delete_availability(self, user_id: str, proposal_id: str) -> None:
        with self._lock:
            self._availabilities.pop((user_id, proposal_id), None)

    # Options

    def list_options(self, proposal_id: str, dimension: Dimension) -> list[DecisionOption]:
        with self._lock:
            return [o for o in self._options.values() if o.proposal_id == proposal_id and o.dimension == dimension]

    def create_option(self, option: DecisionOption) -> DecisionOption:
        with self._lock:
            self._options[option.id] = option
        return option

    def delete_option(self, option_id: str) -> bool:
        with self._lock:
            if self._options.pop(option_id, None) is None:
                return False
            self._votes = {k: v.without(option_id) for k, v in self._votes.items()}
            self._confirmations = [c.without(option_id) for c in self._confirmations]
        logger.debug("Option {} deleted and stripped from votes", option_id)
        return True

    # Votes

    def list_votes(self, proposal_id: str, dimension: Dimension) -> list[DecisionVote]:
        with self._lock:
            return [v for v in self._votes.values() if v.proposal_id == proposal_id and v.dimension == dimension]

    def upsert_vote(self, vote: DecisionVote) -> DecisionVote:
        with self._lock:
            self._votes[(vote.proposal_id, vote.dimension, vote.user_id)] = vote
        return vote

    def delete_vote(self, user_id: str, proposal_id: str, dimension: Dimension) -> None:
        with self._lock:
            self._votes.pop((proposal_id, dimension, user_id), None)

    # Configs

    def get_config(self, proposal_id: str, dimension: Dimension) -> ProposalDecisionConfig | None:
        return self._configs.get((proposal_id, dimension))

    def upsert_config(self, config: ProposalDecisionConfig) -> ProposalDecisionConfig:
        with self._lock:
            self._configs[(config.proposal_id, config.dimension)] = config
        return config

    # Confirmations

    def list_confirmations(self, proposal_id: str, dimension: Dimension) -> list[DecisionConfirmation]:
        with self._lock:
            return [c for c in self._confirmations if c.proposal_id == proposal_id and c.dimension == dimension]

    def append_confirmation(self, confirmation: DecisionConfirmation) -> DecisionConfirmation:
        with self._lock:
            self._confirmations.append(confirmation)
        return confirmation
