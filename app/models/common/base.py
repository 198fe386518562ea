"""Base entity class for all domain entities."""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any


def _plain(value: Any) -> Any:
    """JSON-friendly copy: enums to values, sets sorted, tuples to lists."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (set, frozenset)):
        return sorted(_plain(v) for v in value)
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


@dataclass(frozen=True)
class BaseEntity:
    """Base class for all entities. Instances are immutable snapshots."""

    def to_dict(self) -> dict[str, Any]:
        """Convert entity to a JSON-friendly dictionary."""
        return _plain(asdict(self))
