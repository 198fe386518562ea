"""Decision API response schemas."""

from pydantic import BaseModel


class OptionItem(BaseModel):
    """Option with its support under the current mode."""

    id: str
    label: str
    created_by: str
    metadata: dict[str, str]
    support: int
    percent: int


class CandidateItem(BaseModel):
    """Top ranked candidate."""

    option_id: str
    label: str
    score: int
    first_choice_count: int


class ConfirmationItem(BaseModel):
    """Recorded confirmation."""

    id: str
    option_ids: list[str]
    confirmed_by: str
    confirmed_at: str
    note: str | None


class DecisionResponse(BaseModel):
    """Everything shown for one decision dimension."""

    proposal_id: str
    dimension: str
    mode: str
    status: str
    total_votes: int
    options: list[OptionItem]
    top_candidates: list[CandidateItem]
    user_vote: list[str]
    default_selection: list[str]
    can_confirm: bool
    latest_confirmation: ConfirmationItem | None


class WindowItem(BaseModel):
    """Overlap window."""

    key: str
    start_date: str
    end_date: str
    nights: int
    participant_count: int
    participant_user_ids: list[str]
    label: str


class WindowsResponse(BaseModel):
    """Overlap windows and the options generated from them."""

    proposal_id: str
    windows: list[WindowItem]
    created_count: int
    message: str
