"""Dependency Injection container - initialized at app startup."""

from loguru import logger

from app.repositories import BaseRepository, create_repository
from app.services.availability import AvailabilityService
from app.services.decision import DecisionService, SejourPlanner
from app.services.proposal import ProposalService
from settings import DATA_SOURCE, DB_PATH


class Container:
    """Application DI container - holds all singleton instances."""

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def init(self, repo: BaseRepository | None = None) -> None:
        """Initialize all dependencies. Call once at app startup."""
        if self._initialized:
            return

        # One repository for every entity
        self.repo = repo or create_repository(DATA_SOURCE, DB_PATH)

        # Services (with injected repo)
        self.proposals = ProposalService(repo=self.repo)
        self.availability = AvailabilityService(repo=self.repo)
        self.decisions = DecisionService(repo=self.repo)
        self.sejour = SejourPlanner(repo=self.repo, decisions=self.decisions)

        self._initialized = True
        logger.info("Container initialized with {}", self.repo.__class__.__name__)

    def reset(self) -> None:
        """Drop all instances so init() can wire a new repository."""
        self._initialized = False


# Global container instance
container = Container()
