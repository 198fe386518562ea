"""Decision API."""

from web.api.decision.views import (
    add_option,
    cast_vote,
    confirm_selection,
    delete_option,
    generate_overlap_options,
    get_decision,
    get_overlap_windows,
    move_option,
    set_mode,
)

__all__ = [
    "get_decision",
    "set_mode",
    "add_option",
    "delete_option",
    "cast_vote",
    "move_option",
    "confirm_selection",
    "get_overlap_windows",
    "generate_overlap_options",
]
