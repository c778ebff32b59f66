"""
UserRequest Entity

Personal data request (export or erasure) confirmed through an emailed key.
"""

from datetime import UTC, datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, SQLModel

from .enums import UserRequestStatus


class UserRequest(SQLModel, table=True):
    """
    UserRequest entity - confirmed by the confirmaction login action.

    Business Rules:
    - Only a hash of the confirm key is stored, with its issue time
    - Only pending or failed requests can be confirmed
    - Confirmation moves the request to request-confirmed
    """

    __tablename__ = "user_requests"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(max_length=100, index=True)
    action_name: str = Field(max_length=60)
    status: UserRequestStatus = Field(default=UserRequestStatus.pending)

    confirm_key_hash: Optional[str] = Field(default=None, max_length=64)
    key_issued_at: Optional[int] = None

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), sa_column=Column(DateTime)
    )
    confirmed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
