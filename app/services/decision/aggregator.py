"""Vote aggregation over option and vote snapshots.

Pure functions: stale option references and votes cast under another mode
contribute nothing, they never raise.
"""

from collections.abc import Sequence

from app.models.decision import (
    Candidate,
    DecisionOption,
    DecisionTally,
    DecisionVote,
    OptionSupport,
    RankedVote,
    SetVote,
    VotingMode,
)
from helpers import formulas


def _rankings(votes: Sequence[DecisionVote]) -> list[tuple[str, ...]]:
    return [v.order for v in votes if isinstance(v, RankedVote)]


def _selections(votes: Sequence[DecisionVote]) -> list[frozenset[str]]:
    return [v.selected for v in votes if isinstance(v, SetVote)]


def compute_first_choice_counts(options: Sequence[DecisionOption], votes: Sequence[DecisionVote]) -> dict[str, int]:
    """Votes ranking each option first. Every option gets an entry."""
    return formulas.first_choice_counts([o.id for o in options], _rankings(votes))


def compute_ranked_scores(options: Sequence[DecisionOption], votes: Sequence[DecisionVote]) -> dict[str, int]:
    """Borda-style score per option."""
    return formulas.borda_scores([o.id for o in options], _rankings(votes))


def get_top_candidates(
    options: Sequence[DecisionOption],
    ranked_scores: dict[str, int],
    first_choice_counts: dict[str, int],
    limit: int = 3,
) -> list[Candidate]:
    """Best options by score, ties broken by first-choice count."""
    by_id = {o.id: o for o in options}
    rows = formulas.rank_by_score([o.id for o in options], ranked_scores, first_choice_counts, limit)
    return [Candidate(option=by_id[oid], score=score, first_choice_count=first) for oid, score, first in rows]


def option_support(option_id: str, votes: Sequence[DecisionVote], mode: VotingMode) -> int:
    """Selections containing the option (multi) or rankings led by it."""
    if mode == VotingMode.MULTI:
        return formulas.support_count(option_id, _selections(votes))
    return sum(1 for ranking in _rankings(votes) if ranking and ranking[0] == option_id)


def support_percent(option_id: str, votes: Sequence[DecisionVote], mode: VotingMode) -> int:
    """Support as a whole percentage of all votes, 0 without votes."""
    return formulas.percent(option_support(option_id, votes, mode), len(votes))


def summarize(
    options: Sequence[DecisionOption],
    votes: Sequence[DecisionVote],
    mode: VotingMode,
    limit: int = 3,
) -> DecisionTally:
    """Support rows for every option plus the top ranked candidates."""
    scores = compute_ranked_scores(options, votes)
    firsts = compute_first_choice_counts(options, votes)

    rows = tuple(
        OptionSupport(
            option=o,
            support=option_support(o.id, votes, mode),
            percent=support_percent(o.id, votes, mode),
        )
        for o in options
    )

    return DecisionTally(
        mode=mode,
        total_votes=len(votes),
        options=rows,
        top_candidates=tuple(get_top_candidates(options, scores, firsts, limit)),
    )
