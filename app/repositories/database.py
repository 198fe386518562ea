"""DuckDB repository - persistent backend."""

import json
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import duckdb
from loguru import logger

from app.models.core import ActivityStatus, ActivityType, Availability, Proposal, Specifics, User
from app.models.decision import (
    DecisionConfirmation,
    DecisionOption,
    DecisionStatus,
    DecisionVote,
    Dimension,
    ProposalDecisionConfig,
    RankedVote,
    SetVote,
    VotingMode,
    vote_kind,
    vote_option_ids,
)
from app.models.decision.vote import RANKED
from app.repositories.base import BaseRepository
from app.repositories.db import get_db, reconnect_db
from settings import DB_PATH

PROPOSAL_COLUMNS = "id, title, kind, emoji, created_by, created_at, status, specifics"
OPTION_COLUMNS = "id, proposal_id, dimension, label, created_by, created_at, metadata"
VOTE_COLUMNS = "id, proposal_id, dimension, user_id, kind, option_ids, updated_at"
CONFIRMATION_COLUMNS = "id, proposal_id, dimension, option_ids, confirmed_by, confirmed_at, note"

# Tables holding records scoped to a proposal, deleted with it
SCOPED_TABLES = ("availability", "decision_option", "decision_vote", "decision_config", "decision_confirmation")


def _loads(value: str | None, default: Any) -> Any:
    return json.loads(value) if value else default


def _to_proposal(row: tuple) -> Proposal:
    specifics = _loads(row[7], None)
    return Proposal(
        id=row[0],
        title=row[1],
        kind=ActivityType(row[2]),
        emoji=row[3] or "",
        created_by=row[4],
        created_at=row[5],
        status=ActivityStatus(row[6]),
        specifics=Specifics(**specifics) if specifics is not None else None,
    )


def _to_availability(row: tuple) -> Availability:
    return Availability(
        id=row[0],
        user_id=row[1],
        proposal_id=row[2],
        dates=tuple(_loads(row[3], [])),
        time_slots=tuple(_loads(row[4], [])),
    )


def _to_option(row: tuple) -> DecisionOption:
    return DecisionOption(
        id=row[0],
        proposal_id=row[1],
        dimension=Dimension(row[2]),
        label=row[3],
        created_by=row[4],
        created_at=row[5],
        metadata=_loads(row[6], {}),
    )


def _to_vote(row: tuple) -> DecisionVote:
    ids = _loads(row[5], [])
    common = {"id": row[0], "proposal_id": row[1], "dimension": Dimension(row[2]), "user_id": row[3], "updated_at": row[6]}
    if row[4] == RANKED:
        return RankedVote(order=tuple(ids), **common)
    return SetVote(selected=frozenset(ids), **common)


def _to_confirmation(row: tuple) -> DecisionConfirmation:
    return DecisionConfirmation(
        id=row[0],
        proposal_id=row[1],
        dimension=Dimension(row[2]),
        option_ids=tuple(_loads(row[3], [])),
        confirmed_by=row[4],
        confirmed_at=row[5],
        note=row[6],
    )


def _proposal_value(name: str, value: Any) -> Any:
    if name == "specifics":
        return json.dumps(value.to_dict()) if value is not None else None
    return str(value)


class DatabaseRepository(BaseRepository):
    """Repository over a DuckDB file. Connections are thread-local."""

    def __init__(self, db_path: str | None = None, read_only: bool = False):
        self._path = db_path or DB_PATH
        self._read_only = read_only
        get_db(self._path, read_only)
        logger.debug("{} initialized: {}", self.__class__.__name__, self._path)

    @property
    def _db(self) -> duckdb.DuckDBPyConnection:
        return get_db(self._path, self._read_only)

    def refresh(self) -> None:
        """Reconnect to database."""
        reconnect_db(self._path, self._read_only)
        logger.info("Repository refreshed")

    def execute(self, query: str, params: list | None = None) -> Any:
        """Execute SQL query."""
        if params:
            return self._db.execute(query, params)
        return self._db.execute(query)

    def fetchall(self, query: str, params: list | None = None) -> list:
        """Execute and fetch all rows."""
        return self.execute(query, params).fetchall()

    def fetchone(self, query: str, params: list | None = None) -> Any:
        """Execute and fetch one row."""
        return self.execute(query, params).fetchone()

    def _writable(self) -> None:
        if self._read_only:
            raise RuntimeError("Cannot write in read-only mode")

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        """Run several statements as one unit."""
        self._writable()
        conn = self._db
        conn.begin()
        try:
            yield
        except Exception:
            conn.rollback()
            raise
        conn.commit()

    # Users

    def list_users(self) -> list[User]:
        rows = self.fetchall("SELECT id, name, is_admin FROM app_user ORDER BY rowid")
        return [User(id=r[0], name=r[1], is_admin=bool(r[2])) for r in rows]

    def get_user(self, user_id: str) -> User | None:
        row = self.fetchone("SELECT id, name, is_admin FROM app_user WHERE id = ?", [user_id])
        return User(id=row[0], name=row[1], is_admin=bool(row[2])) if row else None

    def add_user(self, user: User) -> User:
        self._writable()
        self.execute("INSERT OR REPLACE INTO app_user VALUES (?, ?, ?)", [user.id, user.name, user.is_admin])
        return user

    # Proposals

    def list_proposals(self) -> list[Proposal]:
        rows = self.fetchall(f"SELECT {PROPOSAL_COLUMNS} FROM proposal ORDER BY created_at, rowid")
        return [_to_proposal(r) for r in rows]

    def get_proposal(self, proposal_id: str) -> Proposal | None:
        row = self.fetchone(f"SELECT {PROPOSAL_COLUMNS} FROM proposal WHERE id = ?", [proposal_id])
        return _to_proposal(row) if row else None

    def add_proposal(self, proposal: Proposal) -> Proposal:
        self._writable()
        self.execute(
            f"INSERT INTO proposal ({PROPOSAL_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            [
                proposal.id,
                proposal.title,
                str(proposal.kind),
                proposal.emoji,
                proposal.created_by,
                proposal.created_at,
                str(proposal.status),
                _proposal_value("specifics", proposal.specifics),
            ],
        )
        return proposal

    def update_proposal(self, proposal_id: str, **fields) -> Proposal | None:
        self._check_proposal_fields(fields)
        self._writable()
        if self.get_proposal(proposal_id) is None:
            return None
        if fields:
            assignments = ", ".join(f"{name} = ?" for name in fields)
            params = [_proposal_value(name, value) for name, value in fields.items()]
            self.execute(f"UPDATE proposal SET {assignments} WHERE id = ?", [*params, proposal_id])
        return self.get_proposal(proposal_id)

    def delete_proposal(self, proposal_id: str) -> bool:
        if self.get_proposal(proposal_id) is None:
            return False
        with self._transaction():
            for table in SCOPED_TABLES:
                self.execute(f"DELETE FROM {table} WHERE proposal_id = ?", [proposal_id])
            self.execute("DELETE FROM proposal WHERE id = ?", [proposal_id])
        logger.info("Proposal {} deleted with dependent records", proposal_id)
        return True

    # Availability

    def list_availabilities(self, proposal_id: str | None = None) -> list[Availability]:
        query = "SELECT id, user_id, proposal_id, dates, time_slots FROM availability"
        if proposal_id is None:
            return [_to_availability(r) for r in self.fetchall(f"{query} ORDER BY rowid")]
        rows = self.fetchall(f"{query} WHERE proposal_id = ? ORDER BY rowid", [proposal_id])
        return [_to_availability(r) for r in rows]

    def get_availability(self, user_id: str, proposal_id: str) -> Availability | None:
        row = self.fetchone(
            "SELECT id, user_id, proposal_id, dates, time_slots FROM availability WHERE user_id = ? AND proposal_id = ?",
            [user_id, proposal_id],
        )
        return _to_availability(row) if row else None

    def set_availability(self, availability: Availability) -> Availability | None:
        normalized = self._normalized(availability)
        if normalized is None:
            self.delete_availability(availability.user_id, availability.proposal_id)
            return None
        self._writable()
        self.execute(
            "INSERT OR REPLACE INTO availability VALUES (?, ?, ?, ?, ?)",
            [
                normalized.id,
                normalized.user_id,
                normalized.proposal_id,
                json.dumps(list(normalized.dates)),
                json.dumps(list(normalized.time_slots)),
            ],
        )
        return normalized

    def delete_availability(self, user_id: str, proposal_id: str) -> None:
        self._writable()
        self.execute("DELETE FROM availability WHERE user_id = ? AND proposal_id = ?", [user_id, proposal_id])

    # Options

    def list_options(self, proposal_id: str, dimension: Dimension) -> list[DecisionOption]:
        rows = self.fetchall(
            f"SELECT {OPTION_COLUMNS} FROM decision_option WHERE proposal_id = ? AND dimension = ? ORDER BY rowid",
            [proposal_id, str(dimension)],
        )
        return [_to_option(r) for r in rows]

    def create_option(self, option: DecisionOption) -> DecisionOption:
        self._writable()
        self.execute(
            f"INSERT INTO decision_option ({OPTION_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
            [
                option.id,
                option.proposal_id,
                str(option.dimension),
                option.label,
                option.created_by,
                option.created_at,
                json.dumps(option.metadata or {}),
            ],
        )
        return option

    def delete_option(self, option_id: str) -> bool:
        if self.fetchone("SELECT id FROM decision_option WHERE id = ?", [option_id]) is None:
            return False

        with self._transaction():
            self.execute("DELETE FROM decision_option WHERE id = ?", [option_id])

            for vote in [_to_vote(r) for r in self.fetchall(f"SELECT {VOTE_COLUMNS} FROM decision_vote")]:
                if option_id not in vote_option_ids(vote):
                    continue
                self.execute(
                    "UPDATE decision_vote SET option_ids = ? WHERE proposal_id = ? AND dimension = ? AND user_id = ?",
                    [json.dumps(vote_option_ids(vote.without(option_id))), vote.proposal_id, str(vote.dimension), vote.user_id],
                )

            rows = self.fetchall(f"SELECT {CONFIRMATION_COLUMNS} FROM decision_confirmation")
            for confirmation in [_to_confirmation(r) for r in rows]:
                if option_id not in confirmation.option_ids:
                    continue
                self.execute(
                    "UPDATE decision_confirmation SET option_ids = ? WHERE id = ?",
                    [json.dumps(list(confirmation.without(option_id).option_ids)), confirmation.id],
                )

        logger.debug("Option {} deleted and stripped from votes", option_id)
        return True

    # Votes

    def list_votes(self, proposal_id: str, dimension: Dimension) -> list[DecisionVote]:
        rows = self.fetchall(
            f"SELECT {VOTE_COLUMNS} FROM decision_vote WHERE proposal_id = ? AND dimension = ? ORDER BY rowid",
            [proposal_id, str(dimension)],
        )
        return [_to_vote(r) for r in rows]

    def upsert_vote(self, vote: DecisionVote) -> DecisionVote:
        self._writable()
        self.execute(
            f"INSERT OR REPLACE INTO decision_vote ({VOTE_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
            [
                vote.id,
                vote.proposal_id,
                str(vote.dimension),
                vote.user_id,
                vote_kind(vote),
                json.dumps(vote_option_ids(vote)),
                vote.updated_at,
            ],
        )
        return vote

    def delete_vote(self, user_id: str, proposal_id: str, dimension: Dimension) -> None:
        self._writable()
        self.execute(
            "DELETE FROM decision_vote WHERE user_id = ? AND proposal_id = ? AND dimension = ?",
            [user_id, proposal_id, str(dimension)],
        )

    # Configs

    def get_config(self, proposal_id: str, dimension: Dimension) -> ProposalDecisionConfig | None:
        row = self.fetchone(
            "SELECT proposal_id, dimension, mode, status FROM decision_config WHERE proposal_id = ? AND dimension = ?",
            [proposal_id, str(dimension)],
        )
        if not row:
            return None
        return ProposalDecisionConfig(
            proposal_id=row[0],
            dimension=Dimension(row[1]),
            mode=VotingMode(row[2]),
            status=DecisionStatus(row[3]),
        )

    def upsert_config(self, config: ProposalDecisionConfig) -> ProposalDecisionConfig:
        self._writable()
        self.execute(
            "INSERT OR REPLACE INTO decision_config VALUES (?, ?, ?, ?)",
            [config.proposal_id, str(config.dimension), str(config.mode), str(config.status)],
        )
        return config

    # Confirmations

    def list_confirmations(self, proposal_id: str, dimension: Dimension) -> list[DecisionConfirmation]:
        rows = self.fetchall(
            f"SELECT {CONFIRMATION_COLUMNS} FROM decision_confirmation WHERE proposal_id = ? AND dimension = ? ORDER BY rowid",
            [proposal_id, str(dimension)],
        )
        return [_to_confirmation(r) for r in rows]

    def append_confirmation(self, confirmation: DecisionConfirmation) -> DecisionConfirmation:
        self._writable()
        self.execute(
            f"INSERT INTO decision_confirmation ({CONFIRMATION_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
            [
                confirmation.id,
                confirmation.proposal_id,
                str(confirmation.dimension),
                json.dumps(list(confirmation.option_ids)),
                confirmation.confirmed_by,
                confirmation.confirmed_at,
                confirmation.note,
            ],
        )
        return confirmation
