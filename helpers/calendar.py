"""Calendar math - ISO dates, contiguous ranges and sejour overlap windows.

Dates are ``yyyy-mm-dd`` strings throughout, so lexicographic order is
chronological order.
"""
from collections import defaultdict
from collections.abc import Iterable
from datetime import date, timedelta

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def parse_iso(value: str) -> date:
    return date.fromisoformat(value)


def is_iso_date(value: str) -> bool:
    """True for a valid ``yyyy-mm-dd`` string."""
    if not isinstance(value, str) or len(value) != 10:
        return False
    try:
        parse_iso(value)
    except ValueError:
        return False
    return True


def days_between(start: str, end: str) -> int:
    """Calendar-day difference end - start."""
    return (parse_iso(end) - parse_iso(start)).days


def is_next_day(previous: str, current: str) -> bool:
    return days_between(previous, current) == 1


def month_day(value: str) -> str:
    """'2024-01-05' -> 'Jan 5'."""
    d = parse_iso(value)
    return f"{MONTHS[d.month - 1]} {d.day}"


def normalize_dates(dates: Iterable[str]) -> tuple[str, ...]:
    """Sorted, deduplicated view of a date collection."""
    return tuple(sorted(set(dates)))


def enumerate_dates_in_range(start: str, end: str) -> list[str]:
    """Every date from start to end inclusive (empty if end < start)."""
    first, last = parse_iso(start), parse_iso(end)
    return [(first + timedelta(days=i)).isoformat() for i in range((last - first).days + 1)]


def contiguous_date_ranges(dates: Iterable[str]) -> list[tuple[str, str, list[str]]]:
    """Split dates into runs of consecutive days: [(start, end, dates)]."""
    ordered = normalize_dates(dates)
    if not ordered:
        return []

    runs = [[ordered[0]]]
    for current in ordered[1:]:
        if is_next_day(runs[-1][-1], current):
            runs[-1].append(current)
        else:
            runs.append([current])

    return [(run[0], run[-1], run) for run in runs]


def build_date_to_users(availabilities: Iterable, proposal_id: str) -> dict[str, set[str]]:
    """Map date -> user ids available that day, for one proposal.

    Accepts any records with ``user_id``, ``proposal_id`` and ``dates``.
    Malformed dates are skipped.
    """
    date_users: dict[str, set[str]] = defaultdict(set)
    for a in availabilities:
        if a.proposal_id != proposal_id:
            continue
        for d in a.dates or ():
            if is_iso_date(d):
                date_users[d].add(a.user_id)
    return dict(date_users)


def window_key(start: str, end: str, user_ids: Iterable[str]) -> str:
    """Dedup key of a window: start|end|sorted ids."""
    return f"{start}|{end}|{','.join(sorted(user_ids))}"


def window_label(start: str, end: str, participants: int) -> str:
    """'Jan 5 - Jan 8 (3 nights, 2 persons)'."""
    nights = days_between(start, end)
    night_word = "night" if nights == 1 else "nights"
    person_word = "person" if participants == 1 else "persons"
    return f"{month_day(start)} - {month_day(end)} ({nights} {night_word}, {participants} {person_word})"


def overlap_windows(
    date_users: dict[str, set[str]],
    min_nights: int = 2,
    min_participants: int = 2,
    max_windows: int = 8,
) -> list[dict]:
    """Runs of consecutive days shared by at least min_participants users.

    Every (start, end) pair that still has enough common participants and
    spans at least min_nights is a window; the participant set only shrinks
    as the end moves forward. Sorted by participants desc, nights desc,
    start asc.
    """
    dates = sorted(date_users)
    windows = []
    seen = set()

    for i, start in enumerate(dates):
        active = set(date_users[start])
        if len(active) < min_participants:
            continue

        for j in range(i, len(dates)):
            end = dates[j]
            if j > i:
                if not is_next_day(dates[j - 1], end):
                    break
                active &= date_users[end]

            if len(active) < min_participants:
                break

            nights = days_between(start, end)
            if nights < min_nights:
                continue

            participants = tuple(sorted(active))
            key = window_key(start, end, participants)
            if key in seen:
                continue
            seen.add(key)

            windows.append(
                {
                    "start_date": start,
                    "end_date": end,
                    "nights": nights,
                    "participant_count": len(participants),
                    "participant_user_ids": participants,
                    "label": window_label(start, end, len(participants)),
                }
            )

    windows.sort(key=lambda w: w["start_date"])
    windows.sort(key=lambda w: (w["participant_count"], w["nights"]), reverse=True)
    return windows[: max(max_windows, 0)]
