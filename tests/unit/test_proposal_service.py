"""Unit tests for ProposalService and permissions."""

from app.models.core import ActivityStatus, ActivityType, Specifics, User
from app.models.decision import DecisionOption, Dimension
from app.services.proposal import can_confirm_decision, can_delete_option, can_manage_proposal


class TestProposalService:
    def test_create(self, proposals):
        proposal = proposals.create_proposal("Dinner", ActivityType.EVENT, "🍝", "carol")

        assert proposal.id == "p-1"
        assert proposal.status == ActivityStatus.PROPOSED
        assert proposal.created_at.startswith("2024-06-01T12:00:01")
        assert proposals.get_proposal(proposal.id) == proposal

    def test_update(self, proposals, proposal):
        updated = proposals.update_proposal(proposal.id, specifics=Specifics(time="Evening"))
        assert updated.specifics.time == "Evening"

    def test_delete(self, proposals, proposal):
        assert proposals.delete_proposal(proposal.id)
        assert proposals.list_proposals() == []


class TestPermissions:
    def test_confirm(self, proposal):
        assert can_confirm_decision(User(id="bob", name="Bob"), proposal)
        assert can_confirm_decision(User(id="zed", name="Zed", is_admin=True), proposal)
        assert not can_confirm_decision(User(id="carol", name="Carol"), proposal)
        assert not can_confirm_decision(None, proposal)

    def test_manage_matches_confirm(self, proposal):
        assert can_manage_proposal(User(id="bob", name="Bob"), proposal)
        assert not can_manage_proposal(User(id="carol", name="Carol"), proposal)

    def test_delete_option(self):
        option = DecisionOption(
            id="o1",
            proposal_id="p1",
            dimension=Dimension.PLACE,
            label="Lake",
            created_by="carol",
            created_at="2024-06-01T00:00:00+00:00",
        )
        assert can_delete_option(User(id="carol", name="Carol"), option)
        assert can_delete_option(User(id="alice", name="Alice", is_admin=True), option)
        assert not can_delete_option(User(id="bob", name="Bob"), option)
