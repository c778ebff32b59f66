"""
Reset Key Service

Issues and validates the one-time key mailed to a user who lost their
password. The plaintext key only ever exists in the email link and in the
reset cookie; the store holds its SHA-256 digest and the issue time.
"""

import logging

from loginflow.domain.entities import ResetKey, User
from loginflow.domain.errors import ExpiredKeyError, InvalidKeyError
from loginflow.libs.result import Result, Return

from .keys import generate_key, hash_key, keys_match, sanitize_key
from .settings import Clock, unix_now
from .unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

RESET_KEY_LENGTH = 20


class ResetKeyService:
    """
    Business Rules:
    - One key per user; issuing again overwrites the previous key
    - A key is valid while issued_at + ttl >= now
    - Lookups that fail for any reason other than expiry are reported as invalid
    - Callers own the transaction (commit happens in the use case)
    """

    def __init__(self, uow: UnitOfWork, ttl: int, clock: Clock = unix_now):
        self.uow = uow
        self.ttl = ttl
        self.clock = clock

    async def issue(self, user: User) -> str:
        key = generate_key(RESET_KEY_LENGTH)
        await self.uow.reset_keys.upsert(
            ResetKey(user_id=user.id, key_hash=hash_key(key), issued_at=self.clock())
        )
        logger.info(f"Issued password reset key for user {user.id}")
        return key

    async def validate(self, user_login: str, key: str) -> Result[User]:
        """
        Resolve the user a reset key belongs to.

        Errors:
            - invalid_key: unknown login, no active key, or digest mismatch
            - expired_key: key matched but its lifetime has passed
        """
        key = sanitize_key(key)
        if not key or not user_login:
            return Return.err(InvalidKeyError())

        user = await self.uow.users.find_by_login(user_login)
        if user is None:
            return Return.err(InvalidKeyError())

        record = await self.uow.reset_keys.get_by_user_id(user.id)
        if record is None or not keys_match(key, record.key_hash):
            return Return.err(InvalidKeyError())

        if record.issued_at + self.ttl < self.clock():
            return Return.err(ExpiredKeyError())

        return Return.ok(user)

    async def invalidate(self, user: User) -> bool:
        return await self.uow.reset_keys.delete_by_user_id(user.id)
