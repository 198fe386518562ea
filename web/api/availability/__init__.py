"""Availability API."""

from web.api.availability.views import (
    get_availability,
    get_consensus,
    get_date_detail,
    mark_range,
    set_availability,
)

__all__ = [
    "set_availability",
    "mark_range",
    "get_availability",
    "get_consensus",
    "get_date_detail",
]
