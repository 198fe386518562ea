"""Decision service - per-dimension configs, options, votes and confirmation."""

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime

from loguru import logger

from app.models.common import new_id, utc_now
from app.models.core import ActivityStatus, Specifics
from app.models.decision import (
    DecisionConfirmation,
    DecisionOption,
    DecisionStatus,
    DecisionTally,
    DecisionVote,
    Dimension,
    ProposalDecisionConfig,
    RankedVote,
    SetVote,
    VotingMode,
    default_mode,
)
from app.repositories.base import BaseRepository
from app.services.decision import aggregator
from settings import TOP_CANDIDATES


def _resolved_date(option: DecisionOption) -> str | None:
    """Date text from window metadata: a single day or 'start to end'."""
    start = option.metadata.get("startDate")
    end = option.metadata.get("endDate")
    if not start or not end:
        return None
    return start if start == end else f"{start} to {end}"


class DecisionService:
    """Decision state machine: open -> confirmed, per (proposal, dimension).

    Permission to confirm is checked by the caller, not here.
    """

    def __init__(
        self,
        repo: BaseRepository,
        clock: Callable[[], str] = utc_now,
        id_factory: Callable[[], str] = new_id,
    ):
        self._repo = repo
        self._clock = clock
        self._new_id = id_factory
        logger.debug("DecisionService initialized")

    # Configs

    def get_or_create_config(self, proposal_id: str, dimension: Dimension) -> ProposalDecisionConfig:
        """Stored config, or a persisted default (open, dimension's default mode)."""
        dimension = Dimension(dimension)
        config = self._repo.get_config(proposal_id, dimension)
        if config is not None:
            return config

        config = ProposalDecisionConfig(
            proposal_id=proposal_id,
            dimension=dimension,
            mode=default_mode(dimension),
            status=DecisionStatus.OPEN,
        )
        logger.debug("Default config created: {} / {}", proposal_id, dimension)
        return self._repo.upsert_config(config)

    def ensure_configs(self, proposal_id: str) -> list[ProposalDecisionConfig]:
        return [self.get_or_create_config(proposal_id, d) for d in Dimension]

    def set_mode(self, proposal_id: str, dimension: Dimension, mode: VotingMode) -> ProposalDecisionConfig:
        """Change voting mode, keep status. Existing votes are left as they are."""
        dimension, mode = Dimension(dimension), VotingMode(mode)
        current = self._repo.get_config(proposal_id, dimension)
        status = current.status if current is not None else DecisionStatus.OPEN

        config = ProposalDecisionConfig(proposal_id=proposal_id, dimension=dimension, mode=mode, status=status)
        logger.info("Mode for {} / {} set to {}", proposal_id, dimension, mode)
        return self._repo.upsert_config(config)

    # Options

    def list_options(self, proposal_id: str, dimension: Dimension) -> list[DecisionOption]:
        return self._repo.list_options(proposal_id, Dimension(dimension))

    def add_option(
        self,
        proposal_id: str,
        dimension: Dimension,
        label: str,
        user_id: str,
        metadata: dict[str, str] | None = None,
    ) -> DecisionOption | None:
        """Create an option. Blank labels are ignored."""
        label = (label or "").strip()
        if not label:
            logger.warning("Blank option label ignored for {} / {}", proposal_id, dimension)
            return None

        option = DecisionOption(
            id=self._new_id(),
            proposal_id=proposal_id,
            dimension=Dimension(dimension),
            label=label,
            created_by=user_id,
            created_at=self._clock(),
            metadata=dict(metadata or {}),
        )
        return self._repo.create_option(option)

    def delete_option(self, option_id: str) -> bool:
        return self._repo.delete_option(option_id)

    # Votes

    def list_votes(self, proposal_id: str, dimension: Dimension) -> list[DecisionVote]:
        return self._repo.list_votes(proposal_id, Dimension(dimension))

    def user_vote(self, proposal_id: str, dimension: Dimension, user_id: str) -> DecisionVote | None:
        return next((v for v in self.list_votes(proposal_id, dimension) if v.user_id == user_id), None)

    def _save_ranking(self, proposal_id, dimension, user_id, order) -> RankedVote:
        existing = self.user_vote(proposal_id, dimension, user_id)
        vote = RankedVote(
            id=existing.id if existing else self._new_id(),
            proposal_id=proposal_id,
            dimension=Dimension(dimension),
            user_id=user_id,
            order=tuple(order),
            updated_at=self._clock(),
        )
        return self._repo.upsert_vote(vote)

    def cast_single_vote(self, proposal_id: str, dimension: Dimension, user_id: str, option_id: str) -> RankedVote:
        """Single choice is a ranking of one."""
        return self._save_ranking(proposal_id, dimension, user_id, [option_id])

    def toggle_multi_vote(self, proposal_id: str, dimension: Dimension, user_id: str, option_id: str) -> SetVote:
        """Add the option to the user's selection, or remove it if present."""
        existing = self.user_vote(proposal_id, dimension, user_id)
        selected = existing.selected if isinstance(existing, SetVote) else frozenset()
        selected = selected - {option_id} if option_id in selected else selected | {option_id}

        vote = SetVote(
            id=existing.id if existing else self._new_id(),
            proposal_id=proposal_id,
            dimension=Dimension(dimension),
            user_id=user_id,
            selected=selected,
            updated_at=self._clock(),
        )
        return self._repo.upsert_vote(vote)

    def move_ranked_option(
        self,
        proposal_id: str,
        dimension: Dimension,
        user_id: str,
        option_id: str,
        direction: str,
    ) -> RankedVote | None:
        """Swap an option with its neighbour in the user's full ranking.

        Unranked options are appended in option order first. Moves past either
        end, or of unknown options, change nothing.
        """
        existing = self.user_vote(proposal_id, dimension, user_id)
        current = list(existing.order) if isinstance(existing, RankedVote) else []
        ranking = current + [o.id for o in self.list_options(proposal_id, dimension) if o.id not in current]

        if option_id not in ranking or direction not in ("up", "down"):
            return None
        index = ranking.index(option_id)
        swap = index - 1 if direction == "up" else index + 1
        if swap < 0 or swap >= len(ranking):
            return None

        ranking[index], ranking[swap] = ranking[swap], ranking[index]
        return self._save_ranking(proposal_id, dimension, user_id, ranking)

    def retract_vote(self, proposal_id: str, dimension: Dimension, user_id: str) -> None:
        self._repo.delete_vote(user_id, proposal_id, Dimension(dimension))

    def tally(self, proposal_id: str, dimension: Dimension, limit: int = TOP_CANDIDATES) -> DecisionTally:
        """Scores and support for the dimension under its current mode."""
        config = self.get_or_create_config(proposal_id, dimension)
        options = self.list_options(proposal_id, dimension)
        votes = self.list_votes(proposal_id, dimension)
        return aggregator.summarize(options, votes, config.mode, limit)

    def default_selection(self, proposal_id: str, dimension: Dimension, user_id: str) -> list[str]:
        """Pre-filled confirmation choice: the user's own vote, else the first option."""
        config = self.get_or_create_config(proposal_id, dimension)
        vote = self.user_vote(proposal_id, dimension, user_id)

        if config.mode == VotingMode.MULTI:
            return sorted(vote.selected) if isinstance(vote, SetVote) else []
        if isinstance(vote, RankedVote) and vote.order:
            return [vote.order[0]]

        options = self.list_options(proposal_id, dimension)
        return [options[0].id] if options else []

    # Confirmation

    def confirm_selection(
        self,
        proposal_id: str,
        dimension: Dimension,
        option_ids: list[str],
        confirming_user_id: str,
        note: str | None = None,
    ) -> DecisionConfirmation | None:
        """Confirm the chosen option(s) and project them onto the proposal.

        Appends a confirmation, marks the dimension confirmed and sets the
        whole proposal to confirmed, whichever dimension this is. Time and
        place selections are written into the proposal's specifics. Empty
        selections and unknown proposals change nothing.
        """
        dimension = Dimension(dimension)
        option_ids = list(dict.fromkeys(option_ids or []))
        if not option_ids:
            logger.warning("Empty confirmation ignored for {} / {}", proposal_id, dimension)
            return None

        proposal = self._repo.get_proposal(proposal_id)
        if proposal is None:
            logger.warning("Confirmation for unknown proposal {} ignored", proposal_id)
            return None

        confirmation = self._repo.append_confirmation(
            DecisionConfirmation(
                id=self._new_id(),
                proposal_id=proposal_id,
                dimension=dimension,
                option_ids=tuple(option_ids),
                confirmed_by=confirming_user_id,
                confirmed_at=self._clock(),
                note=(note or "").strip() or None,
            )
        )

        config = self.get_or_create_config(proposal_id, dimension)
        self._repo.upsert_config(replace(config, status=DecisionStatus.CONFIRMED))

        chosen = set(option_ids)
        selected = [o for o in self.list_options(proposal_id, dimension) if o.id in chosen]
        specifics = proposal.specifics or Specifics()
        labels = ", ".join(o.label for o in selected)

        if dimension == Dimension.TIME and selected:
            specifics = replace(specifics, time=labels)
            date = _resolved_date(selected[0])
            if date:
                specifics = replace(specifics, date=date)
        elif dimension == Dimension.PLACE and selected:
            specifics = replace(specifics, location=labels)

        self._repo.update_proposal(proposal_id, status=ActivityStatus.CONFIRMED, specifics=specifics)
        logger.info(
            "Confirmed {} / {}: {} option(s) by {}",
            proposal_id,
            dimension,
            len(option_ids),
            confirming_user_id,
        )
        return confirmation

    def confirmations(self, proposal_id: str, dimension: Dimension) -> list[DecisionConfirmation]:
        """Confirmation history, newest first."""
        history = self._repo.list_confirmations(proposal_id, Dimension(dimension))
        # later appends win timestamp ties
        ordered = sorted(enumerate(history), key=lambda p: (datetime.fromisoformat(p[1].confirmed_at), p[0]), reverse=True)
        return [c for _, c in ordered]

    def latest_confirmation(self, proposal_id: str, dimension: Dimension) -> DecisionConfirmation | None:
        history = self.confirmations(proposal_id, dimension)
        return history[0] if history else None
