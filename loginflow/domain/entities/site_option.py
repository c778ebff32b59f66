"""
SiteOption Entity

Site-wide key/value settings (users_can_register, admin_email, ...).
"""

from typing import Any

from sqlmodel import JSON, Column, Field, SQLModel


class SiteOption(SQLModel, table=True):
    __tablename__ = "site_options"

    option_name: str = Field(primary_key=True, max_length=191)
    option_value: Any = Field(default=None, sa_column=Column(JSON))
