"""Shared fixtures."""

from datetime import datetime, timedelta, timezone
from itertools import count

import pytest

from app.models.core import ActivityType, Proposal, User
from app.repositories import MemoryRepository
from app.services import AvailabilityService, DecisionService, ProposalService, SejourPlanner

USERS = [
    User(id="alice", name="Alice", is_admin=True),
    User(id="bob", name="Bob"),
    User(id="carol", name="Carol"),
    User(id="dave", name="Dave"),
    User(id="erin", name="Erin"),
]


def make_clock():
    """Clock advancing one second per call."""
    start = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
    ticks = count(1)
    return lambda: (start + timedelta(seconds=next(ticks))).isoformat()


def make_ids(prefix: str = "id"):
    ticks = count(1)
    return lambda: f"{prefix}-{next(ticks)}"


@pytest.fixture
def clock():
    return make_clock()


@pytest.fixture
def ids():
    return make_ids("opt")


@pytest.fixture
def users():
    return list(USERS)


@pytest.fixture
def repo(users):
    return MemoryRepository(users=users)


@pytest.fixture
def proposal(repo):
    return repo.add_proposal(
        Proposal(
            id="p1",
            title="Beach trip",
            kind=ActivityType.SEJOUR,
            emoji="🏖️",
            created_by="bob",
            created_at="2024-05-01T10:00:00+00:00",
        )
    )


@pytest.fixture
def decisions(repo, clock, ids):
    return DecisionService(repo, clock=clock, id_factory=ids)


@pytest.fixture
def availability(repo):
    return AvailabilityService(repo, id_factory=make_ids("av"))


@pytest.fixture
def proposals(repo):
    return ProposalService(repo, clock=make_clock(), id_factory=make_ids("p"))


@pytest.fixture
def sejour(repo, decisions):
    return SejourPlanner(repo, decisions)
