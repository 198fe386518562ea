"""Availability service - marking dates and consensus per proposal."""

from collections.abc import Callable, Iterable

from loguru import logger

from app.models.common import new_id
from app.models.core import Availability
from app.models.decision import DateConsensus
from app.repositories.base import BaseRepository
from helpers import calendar, formulas
from settings import BEST_DATES_LIMIT, BEST_DATES_THRESHOLD


class AvailabilityService:
    """Availability writes and consensus analytics."""

    def __init__(self, repo: BaseRepository, id_factory: Callable[[], str] = new_id):
        self._repo = repo
        self._new_id = id_factory
        logger.debug("AvailabilityService initialized")

    # Writes

    def set_availability(
        self,
        user_id: str,
        proposal_id: str,
        dates: Iterable[str],
        time_slots: Iterable[str] = (),
    ) -> Availability | None:
        """Replace a user's dates for a proposal. No dates removes the record."""
        existing = self._repo.get_availability(user_id, proposal_id)
        availability = Availability(
            id=existing.id if existing else self._new_id(),
            user_id=user_id,
            proposal_id=proposal_id,
            dates=tuple(dates),
            time_slots=tuple(time_slots),
        )
        saved = self._repo.set_availability(availability)
        logger.debug("Availability {} / {}: {} date(s)", user_id, proposal_id, len(saved.dates) if saved else 0)
        return saved

    def mark_range(self, user_id: str, proposal_id: str, start: str, end: str) -> Availability | None:
        """Add every day from start to end (either order) to the user's dates."""
        if end < start:
            start, end = end, start
        existing = self._repo.get_availability(user_id, proposal_id)
        current = existing.dates if existing else ()
        slots = existing.time_slots if existing else ()
        return self.set_availability(user_id, proposal_id, [*current, *calendar.enumerate_dates_in_range(start, end)], slots)

    def clear(self, user_id: str, proposal_id: str) -> None:
        self._repo.delete_availability(user_id, proposal_id)

    def availability_ranges(self, user_id: str, proposal_id: str) -> list[tuple[str, str, list[str]]]:
        """User's dates grouped into runs of consecutive days."""
        existing = self._repo.get_availability(user_id, proposal_id)
        return calendar.contiguous_date_ranges(existing.dates) if existing else []

    # Consensus

    def _date_users(self, proposal_id: str) -> tuple[dict[str, set[str]], list[str]]:
        """Date -> available known users, plus all user ids."""
        user_ids = [u.id for u in self._repo.list_users()]
        known = set(user_ids)
        availabilities = [a for a in self._repo.list_availabilities(proposal_id) if a.user_id in known]
        return calendar.build_date_to_users(availabilities, proposal_id), user_ids

    def date_percentages(self, proposal_id: str) -> dict[str, int]:
        """Consensus per marked date."""
        date_users, user_ids = self._date_users(proposal_id)
        return formulas.date_percentages(date_users, len(user_ids))

    def proposal_consensus(self, proposal_id: str) -> int:
        """Best single-day consensus for a proposal."""
        date_users, user_ids = self._date_users(proposal_id)
        return formulas.max_consensus(date_users, len(user_ids))

    def consensus_by_proposal(self) -> dict[str, int]:
        """Best-day consensus for every proposal (0 when nothing is marked)."""
        result = {p.id: self.proposal_consensus(p.id) for p in self._repo.list_proposals()}
        logger.debug("Computed consensus for {} proposals", len(result))
        return result

    def date_detail(self, proposal_id: str, date: str) -> DateConsensus:
        """Who is and isn't available on one date."""
        date_users, user_ids = self._date_users(proposal_id)
        available = date_users.get(date, set())
        return DateConsensus(
            date=date,
            available_user_ids=tuple(u for u in user_ids if u in available),
            unavailable_user_ids=tuple(u for u in user_ids if u not in available),
            percent=formulas.percent(len(available), len(user_ids)),
        )

    def best_dates(
        self,
        proposal_id: str,
        limit: int = BEST_DATES_LIMIT,
        threshold: float = BEST_DATES_THRESHOLD,
    ) -> list[DateConsensus]:
        """Most-shared dates, keeping only those reaching the threshold share."""
        date_users, user_ids = self._date_users(proposal_id)
        needed = formulas.quorum(len(user_ids), threshold)

        ranked = sorted(date_users.items(), key=lambda item: (-len(item[1]), item[0]))[:limit]
        return [self.date_detail(proposal_id, d) for d, users in ranked if len(users) >= needed]
