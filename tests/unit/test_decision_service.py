"""Unit tests for DecisionService."""

import pytest

from app.models.core import ActivityStatus, Specifics
from app.models.decision import DecisionStatus, Dimension, RankedVote, SetVote, VotingMode
from app.services import DecisionService


class TestConfigs:
    def test_default_config_created_once(self, repo, decisions, proposal):
        first = decisions.get_or_create_config(proposal.id, Dimension.TIME)
        second = decisions.get_or_create_config(proposal.id, Dimension.TIME)

        assert first == second
        assert first.mode == VotingMode.SINGLE
        assert first.status == DecisionStatus.OPEN
        assert repo.get_config(proposal.id, Dimension.TIME) == first

    def test_requirement_defaults_to_multi(self, decisions, proposal):
        assert decisions.get_or_create_config(proposal.id, Dimension.REQUIREMENT).mode == VotingMode.MULTI

    def test_ensure_configs_covers_all_dimensions(self, decisions, proposal):
        configs = decisions.ensure_configs(proposal.id)
        assert {c.dimension for c in configs} == set(Dimension)

    def test_set_mode_keeps_status(self, decisions, proposal):
        option = decisions.add_option(proposal.id, Dimension.PLACE, "Lake", "bob")
        decisions.confirm_selection(proposal.id, Dimension.PLACE, [option.id], "bob")

        config = decisions.set_mode(proposal.id, Dimension.PLACE, VotingMode.RANKED)

        assert config.mode == VotingMode.RANKED
        assert config.status == DecisionStatus.CONFIRMED

    def test_set_mode_creates_missing_config(self, decisions, proposal):
        config = decisions.set_mode(proposal.id, Dimension.TIME, "multi")
        assert config.mode == VotingMode.MULTI
        assert config.status == DecisionStatus.OPEN


class TestOptions:
    def test_blank_label_ignored(self, decisions, proposal):
        assert decisions.add_option(proposal.id, Dimension.PLACE, "   ", "bob") is None
        assert decisions.list_options(proposal.id, Dimension.PLACE) == []

    def test_label_trimmed(self, decisions, proposal):
        option = decisions.add_option(proposal.id, Dimension.PLACE, "  Lake  ", "bob")
        assert option.label == "Lake"
        assert option.created_by == "bob"

    def test_delete_strips_votes(self, decisions, proposal):
        lake = decisions.add_option(proposal.id, Dimension.PLACE, "Lake", "bob")
        hill = decisions.add_option(proposal.id, Dimension.PLACE, "Hill", "bob")
        decisions.move_ranked_option(proposal.id, Dimension.PLACE, "carol", hill.id, "up")

        assert decisions.delete_option(lake.id)

        vote = decisions.user_vote(proposal.id, Dimension.PLACE, "carol")
        assert vote.order == (hill.id,)


class TestVoting:
    def test_single_vote_replaces(self, decisions, proposal):
        lake = decisions.add_option(proposal.id, Dimension.PLACE, "Lake", "bob")
        hill = decisions.add_option(proposal.id, Dimension.PLACE, "Hill", "bob")

        first = decisions.cast_single_vote(proposal.id, Dimension.PLACE, "carol", lake.id)
        second = decisions.cast_single_vote(proposal.id, Dimension.PLACE, "carol", hill.id)

        assert isinstance(second, RankedVote)
        assert second.id == first.id
        assert second.order == (hill.id,)
        assert len(decisions.list_votes(proposal.id, Dimension.PLACE)) == 1

    def test_toggle_multi(self, decisions, proposal):
        tent = decisions.add_option(proposal.id, Dimension.REQUIREMENT, "Tent", "bob")
        stove = decisions.add_option(proposal.id, Dimension.REQUIREMENT, "Stove", "bob")

        decisions.toggle_multi_vote(proposal.id, Dimension.REQUIREMENT, "carol", tent.id)
        decisions.toggle_multi_vote(proposal.id, Dimension.REQUIREMENT, "carol", stove.id)
        vote = decisions.toggle_multi_vote(proposal.id, Dimension.REQUIREMENT, "carol", tent.id)

        assert isinstance(vote, SetVote)
        assert vote.selected == frozenset({stove.id})

    def test_move_fills_unranked_options(self, decisions, proposal):
        ids = [decisions.add_option(proposal.id, Dimension.PLACE, label, "bob").id for label in ("A", "B", "C")]

        vote = decisions.move_ranked_option(proposal.id, Dimension.PLACE, "carol", ids[2], "up")

        assert vote.order == (ids[0], ids[2], ids[1])

    def test_move_past_edge_is_noop(self, decisions, proposal):
        ids = [decisions.add_option(proposal.id, Dimension.PLACE, label, "bob").id for label in ("A", "B")]

        assert decisions.move_ranked_option(proposal.id, Dimension.PLACE, "carol", ids[0], "up") is None
        assert decisions.move_ranked_option(proposal.id, Dimension.PLACE, "carol", "ghost", "down") is None
        assert decisions.move_ranked_option(proposal.id, Dimension.PLACE, "carol", ids[0], "sideways") is None
        assert decisions.user_vote(proposal.id, Dimension.PLACE, "carol") is None

    def test_retract_vote(self, decisions, proposal):
        lake = decisions.add_option(proposal.id, Dimension.PLACE, "Lake", "bob")
        decisions.cast_single_vote(proposal.id, Dimension.PLACE, "carol", lake.id)

        decisions.retract_vote(proposal.id, Dimension.PLACE, "carol")

        assert decisions.user_vote(proposal.id, Dimension.PLACE, "carol") is None

    def test_tally_uses_config_mode(self, decisions, proposal):
        tent = decisions.add_option(proposal.id, Dimension.REQUIREMENT, "Tent", "bob")
        decisions.toggle_multi_vote(proposal.id, Dimension.REQUIREMENT, "carol", tent.id)
        decisions.toggle_multi_vote(proposal.id, Dimension.REQUIREMENT, "dave", tent.id)

        tally = decisions.tally(proposal.id, Dimension.REQUIREMENT)

        assert tally.mode == VotingMode.MULTI
        assert tally.options[0].percent == 100


class TestDefaultSelection:
    def test_first_option_without_vote(self, decisions, proposal):
        lake = decisions.add_option(proposal.id, Dimension.PLACE, "Lake", "bob")
        decisions.add_option(proposal.id, Dimension.PLACE, "Hill", "bob")
        assert decisions.default_selection(proposal.id, Dimension.PLACE, "carol") == [lake.id]

    def test_user_top_choice(self, decisions, proposal):
        decisions.add_option(proposal.id, Dimension.PLACE, "Lake", "bob")
        hill = decisions.add_option(proposal.id, Dimension.PLACE, "Hill", "bob")
        decisions.cast_single_vote(proposal.id, Dimension.PLACE, "carol", hill.id)
        assert decisions.default_selection(proposal.id, Dimension.PLACE, "carol") == [hill.id]

    def test_multi_without_vote_is_empty(self, decisions, proposal):
        decisions.add_option(proposal.id, Dimension.REQUIREMENT, "Tent", "bob")
        assert decisions.default_selection(proposal.id, Dimension.REQUIREMENT, "carol") == []

    def test_no_options(self, decisions, proposal):
        assert decisions.default_selection(proposal.id, Dimension.PLACE, "carol") == []


class TestConfirmSelection:
    def test_time_writes_label_and_window_date(self, repo, decisions, proposal):
        option = decisions.add_option(
            proposal.id,
            Dimension.TIME,
            "Jun 5 - Jun 7 (2 nights, 3 persons)",
            "bob",
            metadata={"startDate": "2024-06-05", "endDate": "2024-06-07"},
        )

        confirmation = decisions.confirm_selection(proposal.id, Dimension.TIME, [option.id], "bob", note="  booked ")

        updated = repo.get_proposal(proposal.id)
        assert confirmation.note == "booked"
        assert confirmation.option_ids == (option.id,)
        assert updated.status == ActivityStatus.CONFIRMED
        assert updated.specifics.time == "Jun 5 - Jun 7 (2 nights, 3 persons)"
        assert updated.specifics.date == "2024-06-05 to 2024-06-07"
        assert decisions.get_or_create_config(proposal.id, Dimension.TIME).status == DecisionStatus.CONFIRMED

    def test_single_day_sets_date_and_status(self, repo, decisions, proposal):
        option = decisions.add_option(
            proposal.id, Dimension.TIME, "June 5", "bob", metadata={"startDate": "2024-06-05", "endDate": "2024-06-05"}
        )

        decisions.confirm_selection(proposal.id, Dimension.TIME, [option.id], "bob")

        updated = repo.get_proposal(proposal.id)
        assert updated.specifics.date == "2024-06-05"
        assert updated.specifics.time == "June 5"
        assert updated.status == ActivityStatus.CONFIRMED

    def test_time_without_metadata_keeps_date(self, repo, decisions, proposal):
        repo.update_proposal(proposal.id, specifics=Specifics(date="2024-07-01"))
        option = decisions.add_option(proposal.id, Dimension.TIME, "Morning", "bob")

        decisions.confirm_selection(proposal.id, Dimension.TIME, [option.id], "bob")

        specifics = repo.get_proposal(proposal.id).specifics
        assert specifics.time == "Morning"
        assert specifics.date == "2024-07-01"

    def test_place_joins_labels_in_option_order(self, repo, decisions, proposal):
        lake = decisions.add_option(proposal.id, Dimension.PLACE, "Lake", "bob")
        hill = decisions.add_option(proposal.id, Dimension.PLACE, "Hill", "bob")

        decisions.confirm_selection(proposal.id, Dimension.PLACE, [hill.id, lake.id, hill.id], "bob")

        assert repo.get_proposal(proposal.id).specifics.location == "Lake, Hill"

    def test_requirement_leaves_specifics(self, repo, decisions, proposal):
        tent = decisions.add_option(proposal.id, Dimension.REQUIREMENT, "Tent", "bob")

        decisions.confirm_selection(proposal.id, Dimension.REQUIREMENT, [tent.id], "bob")

        updated = repo.get_proposal(proposal.id)
        assert updated.status == ActivityStatus.CONFIRMED
        assert updated.specifics == Specifics()

    @pytest.mark.parametrize("option_ids", [[], None])
    def test_empty_selection_is_noop(self, repo, decisions, proposal, option_ids):
        assert decisions.confirm_selection(proposal.id, Dimension.PLACE, option_ids, "bob") is None
        assert repo.get_proposal(proposal.id).status == ActivityStatus.PROPOSED
        assert decisions.confirmations(proposal.id, Dimension.PLACE) == []

    def test_unknown_proposal_is_noop(self, decisions):
        assert decisions.confirm_selection("missing", Dimension.PLACE, ["x"], "bob") is None

    def test_latest_confirmation_wins(self, decisions, proposal):
        lake = decisions.add_option(proposal.id, Dimension.PLACE, "Lake", "bob")
        hill = decisions.add_option(proposal.id, Dimension.PLACE, "Hill", "bob")

        decisions.confirm_selection(proposal.id, Dimension.PLACE, [lake.id], "bob")
        decisions.confirm_selection(proposal.id, Dimension.PLACE, [hill.id], "alice")

        history = decisions.confirmations(proposal.id, Dimension.PLACE)
        assert [c.option_ids for c in history] == [(hill.id,), (lake.id,)]
        assert decisions.latest_confirmation(proposal.id, Dimension.PLACE).confirmed_by == "alice"

    def test_same_timestamp_later_append_wins(self, repo, proposal):
        decisions = DecisionService(repo, clock=lambda: "2024-06-01T12:00:00+00:00")
        lake = decisions.add_option(proposal.id, Dimension.PLACE, "Lake", "bob")
        hill = decisions.add_option(proposal.id, Dimension.PLACE, "Hill", "bob")

        decisions.confirm_selection(proposal.id, Dimension.PLACE, [lake.id], "bob")
        decisions.confirm_selection(proposal.id, Dimension.PLACE, [hill.id], "bob")

        assert decisions.latest_confirmation(proposal.id, Dimension.PLACE).option_ids == (hill.id,)

    def test_no_confirmation(self, decisions, proposal):
        assert decisions.latest_confirmation(proposal.id, Dimension.TIME) is None
