#!/usr/bin/env python3
"""
Create the DuckDB database and seed demo users.

Usage:
    python init_db.py              # Create tables and seed demo users
    python init_db.py --no-seed    # Create tables only
    python init_db.py --report     # Print proposals with their consensus
"""

import sys
from pathlib import Path

# Add project to path
sys.path.insert(0, str(Path(__file__).parent))

from app.models.core import DEMO_USERS
from app.repositories import DatabaseRepository
from app.services import AvailabilityService
from settings import DB_PATH
from settings.logging import setup_logging

logger = setup_logging(to_file=True)


def seed_users(repo: DatabaseRepository) -> int:
    """Add demo users that are not there yet."""
    added = 0
    for user in DEMO_USERS:
        if repo.get_user(user.id) is None:
            repo.add_user(user)
            added += 1
    logger.info("Seeded {} user(s)", added)
    return added


def run_report(repo: DatabaseRepository) -> None:
    """Print every proposal with its best-day consensus."""
    consensus = AvailabilityService(repo).consensus_by_proposal()
    proposals = repo.list_proposals()

    print("\n" + "=" * 60)
    print("PROPOSALS")
    print("=" * 60)

    if not proposals:
        print("\n⚠️  No proposals yet.\n")
        return

    for p in proposals:
        print(f"\n{p.emoji} {p.title} [{p.kind}] - {p.status}")
        print(f"  Consensus: {consensus.get(p.id, 0)}%")
        if p.specifics:
            for name, value in p.specifics.to_dict().items():
                if value:
                    print(f"  {name.capitalize()}: {value}")

    print("\n" + "=" * 60 + "\n")


def main():
    args = sys.argv[1:]
    repo = DatabaseRepository(DB_PATH)
    logger.info("Database ready: {}", DB_PATH)

    if "--report" in args:
        run_report(repo)
        return

    if "--no-seed" not in args:
        seed_users(repo)


if __name__ == "__main__":
    main()
