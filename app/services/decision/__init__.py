"""Decision services - aggregation, confirmation, sejour windows."""

from app.services.decision.sejour import SejourPlanner, compute_overlap_windows
from app.services.decision.service import DecisionService

__all__ = [
    "DecisionService",
    "SejourPlanner",
    "compute_overlap_windows",
]
