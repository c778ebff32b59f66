"""
Recovery Mode Service

Administrators locked out by a broken extension get an emailed link with a
token and a key. The pair is stored hashed in the ``recovery_keys`` site
option, is single use and expires after ``ttl`` seconds.
"""

import logging
import secrets
from typing import Tuple

from loginflow.domain.errors import ExpiredKeyError, InvalidKeyError
from loginflow.libs.result import Result, Return

from .keys import generate_key, hash_key, keys_match
from .settings import Clock, unix_now
from .unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

RECOVERY_KEYS_OPTION = "recovery_keys"


class RecoveryModeService:
    def __init__(self, uow: UnitOfWork, ttl: int, clock: Clock = unix_now):
        self.uow = uow
        self.ttl = ttl
        self.clock = clock

    async def _load(self) -> dict:
        keys = await self.uow.options.get(RECOVERY_KEYS_OPTION, {})
        return dict(keys) if isinstance(keys, dict) else {}

    async def issue(self) -> Tuple[str, str]:
        """
        Create a (token, key) pair for a recovery mode link, dropping stale pairs.

        Called by whatever emails administrators about a broken extension; the
        login flow only consumes the pair, from
        ``<login url>?action=enter_recovery_mode&rm_token=<token>&rm_key=<key>``.
        """
        now = self.clock()
        keys = {
            token: record
            for token, record in (await self._load()).items()
            if record.get("created_at", 0) + self.ttl >= now
        }

        token = secrets.token_hex(11)
        key = generate_key(24)
        keys[token] = {"hashed_key": hash_key(key), "created_at": now}
        await self.uow.options.set(RECOVERY_KEYS_OPTION, keys)
        return token, key

    async def validate(self, token: str, key: str) -> Result[str]:
        """
        Check a recovery link and consume it.

        Errors:
            - invalid_key: unknown token or key mismatch
            - expired_key: link older than the ttl
        """
        keys = await self._load()
        record = keys.get(token)
        if not record or not isinstance(record, dict):
            return Return.err(InvalidKeyError("Recovery Mode not initialized."))

        if not keys_match(key, record.get("hashed_key", "")):
            return Return.err(InvalidKeyError("Invalid recovery key."))

        # The link is spent once its key matched, expired or not
        del keys[token]
        await self.uow.options.set(RECOVERY_KEYS_OPTION, keys)

        if record.get("created_at", 0) + self.ttl < self.clock():
            return Return.err(ExpiredKeyError("Recovery key expired."))

        logger.info("Recovery mode link validated")
        return Return.ok(token)
