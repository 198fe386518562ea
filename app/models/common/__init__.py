"""Common models - base classes and shared helpers."""

from app.models.common.base import BaseEntity
from app.models.common.clock import new_id, utc_now

__all__ = [
    "BaseEntity",
    "new_id",
    "utc_now",
]
