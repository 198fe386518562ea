"""Pure math formulas - no dependencies, easily testable."""
from collections.abc import Iterable, Sequence
from math import ceil, floor


def half_up(value: float) -> int:
    """Round half away from zero for non-negative values (2.5 -> 3)."""
    return int(floor(value + 0.5))


def percent(part: int, total: int) -> int:
    """Whole percentage of part in total, 0 when total is empty."""
    if total <= 0:
        return 0
    return half_up(part * 100 / total)


def first_choice_counts(option_ids: Iterable[str], rankings: Iterable[Sequence[str]]) -> dict[str, int]:
    """How many rankings put each known option first."""
    counts = {o: 0 for o in option_ids}

    for ranking in rankings:
        if not ranking:
            continue
        first = ranking[0]
        if first in counts:
            counts[first] += 1

    return counts


def borda_scores(option_ids: Iterable[str], rankings: Iterable[Sequence[str]]) -> dict[str, int]:
    """Borda points: position i in a ranking of length L earns L - i."""
    scores = {o: 0 for o in option_ids}

    for ranking in rankings:
        length = len(ranking)
        for index, option_id in enumerate(ranking):
            if option_id in scores:
                scores[option_id] += length - index

    return scores


def rank_by_score(
    option_ids: Sequence[str],
    scores: dict[str, int],
    tiebreak: dict[str, int],
    limit: int,
) -> list[tuple[str, int, int]]:
    """Top options as [(id, score, tiebreak)] - score desc, then tiebreak desc."""
    rows = [(o, scores.get(o, 0), tiebreak.get(o, 0)) for o in option_ids]
    rows.sort(key=lambda r: (r[1], r[2]), reverse=True)
    return rows[: max(limit, 0)]


def support_count(option_id: str, groups: Iterable[Iterable[str]]) -> int:
    """Number of groups containing the option."""
    return sum(1 for g in groups if option_id in g)


def date_percentages(date_users: dict[str, set[str]], total_users: int) -> dict[str, int]:
    """Consensus per date: share of all users available that day."""
    return {d: percent(len(users), total_users) for d, users in date_users.items()}


def max_consensus(date_users: dict[str, set[str]], total_users: int) -> int:
    """Best single-day consensus (not an average)."""
    return max(date_percentages(date_users, total_users).values(), default=0)


def quorum(total_users: int, threshold: float) -> int:
    """Smallest head count reaching the threshold share of users."""
    return ceil(total_users * threshold)
