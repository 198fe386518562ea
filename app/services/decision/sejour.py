"""Sejour planner - overlap windows turned into time options."""

from loguru import logger

from app.models.decision import Dimension, OverlapWindow, WindowGeneration
from app.repositories.base import BaseRepository
from app.services.decision.service import DecisionService
from helpers import calendar
from settings import MAX_WINDOWS, MIN_NIGHTS, MIN_PARTICIPANTS

SOURCE_TAG = "sejour-overlap"


def compute_overlap_windows(
    availabilities: list,
    proposal_id: str,
    min_nights: int = MIN_NIGHTS,
    min_participants: int = MIN_PARTICIPANTS,
    max_windows: int = MAX_WINDOWS,
) -> list[OverlapWindow]:
    """Ranked candidate stays where enough users share consecutive days."""
    date_users = calendar.build_date_to_users(availabilities, proposal_id)
    windows = calendar.overlap_windows(date_users, min_nights, min_participants, max_windows)
    return [OverlapWindow(**w) for w in windows]


def window_metadata(window: OverlapWindow) -> dict[str, str]:
    return {
        "windowKey": window.key,
        "startDate": window.start_date,
        "endDate": window.end_date,
        "nights": str(window.nights),
        "participantCount": str(window.participant_count),
        "participantUserIds": ",".join(window.participant_user_ids),
        "source": SOURCE_TAG,
    }


class SejourPlanner:
    """Generates time options from shared availability."""

    def __init__(self, repo: BaseRepository, decisions: DecisionService):
        self._repo = repo
        self._decisions = decisions
        logger.debug("SejourPlanner initialized")

    def windows(
        self,
        proposal_id: str,
        min_nights: int = MIN_NIGHTS,
        min_participants: int = MIN_PARTICIPANTS,
        max_windows: int = MAX_WINDOWS,
    ) -> list[OverlapWindow]:
        availabilities = self._repo.list_availabilities(proposal_id)
        return compute_overlap_windows(availabilities, proposal_id, min_nights, min_participants, max_windows)

    def generate_window_options(self, proposal_id: str, user_id: str, **constraints) -> WindowGeneration:
        """Add one time option per new window, skipping windows already offered."""
        windows = self.windows(proposal_id, **constraints)
        if not windows:
            logger.info("No overlap windows for {}", proposal_id)
            return WindowGeneration(windows=(), created=())

        existing = {
            o.metadata.get("windowKey")
            for o in self._decisions.list_options(proposal_id, Dimension.TIME)
            if o.metadata.get("windowKey")
        }

        created = []
        for window in windows:
            if window.key in existing:
                continue
            option = self._decisions.add_option(
                proposal_id,
                Dimension.TIME,
                window.label,
                user_id,
                metadata=window_metadata(window),
            )
            created.append(option)

        logger.info("Generated {} overlap option(s) for {} from {} window(s)", len(created), proposal_id, len(windows))
        return WindowGeneration(windows=tuple(windows), created=tuple(created))
