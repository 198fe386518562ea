"""Proposal service - creating, updating and deleting activities."""

from collections.abc import Callable

from loguru import logger

from app.models.common import new_id, utc_now
from app.models.core import ActivityStatus, ActivityType, Proposal, User
from app.repositories.base import BaseRepository


class ProposalService:
    """Proposal lifecycle. Deletes cascade through the repository."""

    def __init__(
        self,
        repo: BaseRepository,
        clock: Callable[[], str] = utc_now,
        id_factory: Callable[[], str] = new_id,
    ):
        self._repo = repo
        self._clock = clock
        self._new_id = id_factory
        logger.debug("ProposalService initialized")

    def list_users(self) -> list[User]:
        return self._repo.list_users()

    def get_user(self, user_id: str) -> User | None:
        return self._repo.get_user(user_id)

    def list_proposals(self) -> list[Proposal]:
        return self._repo.list_proposals()

    def get_proposal(self, proposal_id: str) -> Proposal | None:
        return self._repo.get_proposal(proposal_id)

    def create_proposal(self, title: str, kind: ActivityType, emoji: str, created_by: str) -> Proposal:
        proposal = Proposal(
            id=self._new_id(),
            title=title.strip(),
            kind=ActivityType(kind),
            emoji=emoji,
            created_by=created_by,
            created_at=self._clock(),
            status=ActivityStatus.PROPOSED,
        )
        logger.info("Proposal {} created by {}", proposal.id, created_by)
        return self._repo.add_proposal(proposal)

    def update_proposal(self, proposal_id: str, **fields) -> Proposal | None:
        return self._repo.update_proposal(proposal_id, **fields)

    def delete_proposal(self, proposal_id: str) -> bool:
        return self._repo.delete_proposal(proposal_id)
