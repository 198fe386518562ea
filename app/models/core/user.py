"""User model."""

from dataclasses import dataclass

from app.models.common import BaseEntity

USER_DDL = """
CREATE TABLE IF NOT EXISTS app_user (
    id VARCHAR PRIMARY KEY,
    name VARCHAR NOT NULL,
    is_admin BOOLEAN DEFAULT FALSE
)
"""


@dataclass(frozen=True)
class User(BaseEntity):
    """Group member. Admins may confirm any proposal's decisions."""

    id: str
    name: str
    is_admin: bool = False


# Group seeded into fresh stores
DEMO_USERS = (
    User(id="1", name="Alice", is_admin=True),
    User(id="2", name="Bob"),
    User(id="3", name="Charlie"),
    User(id="4", name="Diana"),
    User(id="5", name="Eve"),
)
