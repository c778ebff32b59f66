"""
UserOption Entity

Per-user option bag (use_ssl, default_password_nag, ...).
"""

from typing import Any, Optional

from sqlmodel import JSON, Column, Field, Index, SQLModel


class UserOption(SQLModel, table=True):
    __tablename__ = "user_options"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    option_key: str = Field(max_length=191)
    option_value: Any = Field(default=None, sa_column=Column(JSON))

    __table_args__ = (
        Index("idx_user_option_user_key", "user_id", "option_key", unique=True),
    )
