"""Services package - service class exports."""

from app.services.availability import AvailabilityService
from app.services.decision import DecisionService, SejourPlanner
from app.services.proposal import ProposalService

__all__ = [
    "AvailabilityService",
    "DecisionService",
    "ProposalService",
    "SejourPlanner",
]
