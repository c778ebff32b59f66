"""
ResetKey Entity

Hashed password reset key bound to a single user.
"""

from sqlmodel import Field, SQLModel


class ResetKey(SQLModel, table=True):
    """
    ResetKey entity - the one active password reset key of a user.

    Business Rules:
    - Keyed by user_id: a new request overwrites the previous record
    - Only the SHA-256 hash of the key is stored, never the plaintext
    - issued_at is a unix timestamp; the key expires at issued_at + TTL
    - Deleted in the same transaction that changes the password
    """

    __tablename__ = "reset_keys"

    user_id: int = Field(foreign_key="users.id", primary_key=True)
    key_hash: str = Field(max_length=64)
    issued_at: int
