"""
Session Entity

Server side half of the authenticated session cookie pair.
"""

from datetime import UTC, datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class Session(SQLModel, table=True):
    """
    Session entity - one row per issued session token.

    Business Rules:
    - Only sha256(token) is stored as the verifier
    - expiration is a unix timestamp
    - remember distinguishes persistent from browser-session cookies
    - Destroyed on logout and on password reset
    """

    __tablename__ = "sessions"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    verifier: str = Field(max_length=64, unique=True, index=True)

    expiration: int
    remember: bool = Field(default=False)
    secure: bool = Field(default=False)

    login_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_session_expiration", "expiration"),)
