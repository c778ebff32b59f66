"""
AuditEvent Entity

Immutable log of authentication events raised by the login actions.
"""

from datetime import UTC, datetime
from typing import Optional

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - append-only record of login flow events.

    Business Rules:
    - Immutable (never updated or deleted)
    - user_id nullable for events without a resolved user (failed login)
    - event_metadata never holds plaintext keys, tokens or passwords
    """

    __tablename__ = "audit_events"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: Optional[int] = Field(default=None, index=True)

    action: str = Field(max_length=100)  # e.g. "login", "password_reset"
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_user_action", "user_id", "action"),
    )
