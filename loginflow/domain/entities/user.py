"""
User Entity

Represents an account that can authenticate through the login flow.
"""

from datetime import UTC, datetime
from typing import List, Optional

from sqlmodel import JSON, Column, DateTime, Field, SQLModel


class User(SQLModel, table=True):
    """
    User entity - identity record consumed by every login action.

    Business Rules:
    - user_login is unique and compared case-insensitively
    - user_email is unique
    - user_pass is an opaque bcrypt hash, never a plaintext password
    - capabilities is a flat set of tokens, no role inheritance
    - Never deleted by the login flow
    """

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_login: str = Field(unique=True, index=True, max_length=60)
    user_email: str = Field(unique=True, index=True, max_length=100)
    user_pass: str = Field(max_length=255)

    capabilities: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    locale: str = Field(default="", max_length=20)

    user_registered: datetime = Field(
        default_factory=lambda: datetime.now(UTC), sa_column=Column(DateTime)
    )

    def has_cap(self, capability: str) -> bool:
        value = getattr(capability, "value", capability)
        return value in set(self.capabilities or [])
