"""Integration tests for the DuckDB repository."""

import pytest

from app.models.core import ActivityStatus, ActivityType, Proposal, Specifics, User
from app.models.decision import DecisionStatus, Dimension, RankedVote, SetVote, VotingMode
from app.repositories import DatabaseRepository, MemoryRepository, create_repository
from app.repositories.db import close_db
from app.services import AvailabilityService, DecisionService, SejourPlanner


@pytest.fixture
def db_path(tmp_path):
    path = str(tmp_path / "meetup.duckdb")
    yield path
    close_db(path)


@pytest.fixture
def db_repo(db_path, users):
    repo = DatabaseRepository(db_path)
    for user in users:
        repo.add_user(user)
    repo.add_proposal(
        Proposal(
            id="p1",
            title="Beach trip",
            kind=ActivityType.SEJOUR,
            emoji="🏖️",
            created_by="bob",
            created_at="2024-05-01T10:00:00+00:00",
        )
    )
    return repo


@pytest.fixture
def db_decisions(db_repo, clock, ids):
    return DecisionService(db_repo, clock=clock, id_factory=ids)


class TestFactory:
    def test_memory_starts_with_demo_users(self):
        repo = create_repository("memory")

        assert isinstance(repo, MemoryRepository)
        assert [u.name for u in repo.list_users()] == ["Alice", "Bob", "Charlie", "Diana", "Eve"]
        assert repo.get_user("1").is_admin

    def test_duckdb(self, db_path):
        assert isinstance(create_repository("duckdb", db_path), DatabaseRepository)

    def test_unknown_source(self):
        with pytest.raises(ValueError):
            create_repository("postgres")


class TestUsersAndProposals:
    def test_users_keep_insert_order(self, db_repo, users):
        assert [u.id for u in db_repo.list_users()] == [u.id for u in users]
        assert db_repo.get_user("alice").is_admin
        assert db_repo.get_user("nobody") is None

    def test_add_user_replaces(self, db_repo, users):
        db_repo.add_user(User(id="bob", name="Robert"))
        assert db_repo.get_user("bob").name == "Robert"
        assert len(db_repo.list_users()) == len(users)

    def test_update_specifics_round_trip(self, db_repo):
        db_repo.update_proposal("p1", status=ActivityStatus.CONFIRMED, specifics=Specifics(location="Lake"))

        proposal = db_repo.get_proposal("p1")

        assert proposal.status == ActivityStatus.CONFIRMED
        assert proposal.kind == ActivityType.SEJOUR
        assert proposal.specifics == Specifics(location="Lake")

    def test_update_unknown(self, db_repo):
        assert db_repo.update_proposal("missing", title="x") is None


class TestDecisionFlow:
    def test_votes_by_kind(self, db_repo, db_decisions):
        lake = db_decisions.add_option("p1", Dimension.PLACE, "Lake", "bob")
        tent = db_decisions.add_option("p1", Dimension.REQUIREMENT, "Tent", "bob")

        db_decisions.cast_single_vote("p1", Dimension.PLACE, "carol", lake.id)
        db_decisions.toggle_multi_vote("p1", Dimension.REQUIREMENT, "carol", tent.id)

        place_vote = db_repo.list_votes("p1", Dimension.PLACE)[0]
        requirement_vote = db_repo.list_votes("p1", Dimension.REQUIREMENT)[0]
        assert isinstance(place_vote, RankedVote)
        assert place_vote.order == (lake.id,)
        assert isinstance(requirement_vote, SetVote)
        assert requirement_vote.selected == frozenset({tent.id})

    def test_vote_upsert_keeps_one_row(self, db_repo, db_decisions):
        lake = db_decisions.add_option("p1", Dimension.PLACE, "Lake", "bob")
        hill = db_decisions.add_option("p1", Dimension.PLACE, "Hill", "bob")

        db_decisions.cast_single_vote("p1", Dimension.PLACE, "carol", lake.id)
        db_decisions.cast_single_vote("p1", Dimension.PLACE, "carol", hill.id)

        votes = db_repo.list_votes("p1", Dimension.PLACE)
        assert len(votes) == 1
        assert votes[0].order == (hill.id,)

    def test_config_upsert(self, db_repo, db_decisions):
        db_decisions.get_or_create_config("p1", Dimension.TIME)
        db_decisions.set_mode("p1", Dimension.TIME, VotingMode.RANKED)

        config = db_repo.get_config("p1", Dimension.TIME)
        assert config.mode == VotingMode.RANKED
        assert config.status == DecisionStatus.OPEN

    def test_confirm_time_window(self, db_repo, db_decisions):
        option = db_decisions.add_option(
            "p1",
            Dimension.TIME,
            "Jun 5 - Jun 7 (2 nights, 2 persons)",
            "bob",
            metadata={"startDate": "2024-06-05", "endDate": "2024-06-07"},
        )

        db_decisions.confirm_selection("p1", Dimension.TIME, [option.id], "bob", note="booked")

        proposal = db_repo.get_proposal("p1")
        assert proposal.status == ActivityStatus.CONFIRMED
        assert proposal.specifics.date == "2024-06-05 to 2024-06-07"
        assert db_decisions.latest_confirmation("p1", Dimension.TIME).note == "booked"

    def test_delete_option_strips_references(self, db_repo, db_decisions):
        tent = db_decisions.add_option("p1", Dimension.REQUIREMENT, "Tent", "bob")
        stove = db_decisions.add_option("p1", Dimension.REQUIREMENT, "Stove", "bob")
        db_decisions.toggle_multi_vote("p1", Dimension.REQUIREMENT, "carol", tent.id)
        db_decisions.toggle_multi_vote("p1", Dimension.REQUIREMENT, "carol", stove.id)
        db_decisions.confirm_selection("p1", Dimension.REQUIREMENT, [tent.id, stove.id], "bob")

        assert db_repo.delete_option(tent.id)

        assert [o.id for o in db_repo.list_options("p1", Dimension.REQUIREMENT)] == [stove.id]
        assert db_repo.list_votes("p1", Dimension.REQUIREMENT)[0].selected == frozenset({stove.id})
        assert db_repo.list_confirmations("p1", Dimension.REQUIREMENT)[0].option_ids == (stove.id,)

    def test_delete_proposal_cascades(self, db_repo, db_decisions):
        lake = db_decisions.add_option("p1", Dimension.PLACE, "Lake", "bob")
        db_decisions.cast_single_vote("p1", Dimension.PLACE, "carol", lake.id)
        db_decisions.confirm_selection("p1", Dimension.PLACE, [lake.id], "bob")
        AvailabilityService(db_repo).set_availability("carol", "p1", ["2024-06-01"])

        assert db_repo.delete_proposal("p1")

        assert db_repo.get_proposal("p1") is None
        assert db_repo.list_options("p1", Dimension.PLACE) == []
        assert db_repo.list_votes("p1", Dimension.PLACE) == []
        assert db_repo.list_confirmations("p1", Dimension.PLACE) == []
        assert db_repo.get_config("p1", Dimension.PLACE) is None
        assert db_repo.list_availabilities("p1") == []


class TestAvailability:
    def test_dates_round_trip_sorted(self, db_repo):
        service = AvailabilityService(db_repo)
        service.set_availability("carol", "p1", ["2024-06-03", "2024-06-01"])

        saved = db_repo.get_availability("carol", "p1")

        assert saved.dates == ("2024-06-01", "2024-06-03")

    def test_consensus(self, db_repo):
        service = AvailabilityService(db_repo)
        for user_id in ("alice", "bob", "carol"):
            service.set_availability(user_id, "p1", ["2024-06-01"])
        assert service.proposal_consensus("p1") == 60

    def test_generate_window_options(self, db_repo, db_decisions):
        service = AvailabilityService(db_repo)
        service.mark_range("alice", "p1", "2024-01-01", "2024-01-04")
        service.mark_range("bob", "p1", "2024-01-02", "2024-01-05")
        planner = SejourPlanner(db_repo, db_decisions)

        first = planner.generate_window_options("p1", "bob")
        second = planner.generate_window_options("p1", "bob")

        assert len(first.created) == 1
        assert second.created == ()
        option = db_repo.list_options("p1", Dimension.TIME)[0]
        assert option.metadata["windowKey"] == "2024-01-02|2024-01-04|alice,bob"


class TestReadOnly:
    def test_writes_rejected(self, db_repo, db_path):
        close_db(db_path)
        reader = DatabaseRepository(db_path, read_only=True)

        assert reader.get_proposal("p1") is not None
        with pytest.raises(RuntimeError):
            reader.add_user(User(id="zed", name="Zed"))
