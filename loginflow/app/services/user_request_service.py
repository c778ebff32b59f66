"""
User Request Service

Confirm keys for personal data requests (export or erasure). A requester
proves control of the email address by following the emailed link.
"""

from datetime import UTC, datetime
from typing import Tuple

from loginflow.domain.entities import UserRequest, UserRequestStatus
from loginflow.domain.errors import ExpiredKeyError, InvalidKeyError
from loginflow.libs.result import Error, Result, Return

from .keys import generate_key, hash_key, keys_match
from .settings import Clock, unix_now
from .unit_of_work import UnitOfWork

CONFIRMABLE_STATUSES = (UserRequestStatus.pending, UserRequestStatus.failed)


class UserRequestService:
    def __init__(self, uow: UnitOfWork, ttl: int, clock: Clock = unix_now):
        self.uow = uow
        self.ttl = ttl
        self.clock = clock

    async def create_request(self, email: str, action_name: str) -> Tuple[UserRequest, str]:
        """
        Open a pending request and return it with the plaintext confirm key.

        Entry point for whatever sends the confirmation email; the login flow
        itself only confirms requests. The key belongs in
        ``<login url>?action=confirmaction&request_id=<id>&confirm_key=<key>``
        and is not stored anywhere in plain text.
        """
        user_request = await self.uow.user_requests.create(
            UserRequest(email=email, action_name=action_name, status=UserRequestStatus.pending)
        )
        key = await self.issue_confirm_key(user_request)
        return user_request, key

    async def issue_confirm_key(self, user_request: UserRequest) -> str:
        key = generate_key(20)
        user_request.confirm_key_hash = hash_key(key)
        user_request.key_issued_at = self.clock()
        await self.uow.user_requests.update(user_request)
        return key

    async def validate(self, request_id: int, key: str) -> Result[UserRequest]:
        """
        Errors:
            - user_request_error: no such request
            - expired_request: request is no longer awaiting confirmation
            - missing_key / invalid_key / expired_key: confirm key problems
        """
        user_request = await self.uow.user_requests.get_by_id(request_id)
        if user_request is None:
            return Return.err(Error("user_request_error", "Invalid user request."))

        if user_request.status not in CONFIRMABLE_STATUSES:
            return Return.err(Error("expired_request", "This link has expired."))

        if not key:
            return Return.err(
                Error(
                    "missing_key",
                    "The confirmation key is missing from this personal data request.",
                )
            )

        if not user_request.confirm_key_hash or not keys_match(key, user_request.confirm_key_hash):
            return Return.err(
                InvalidKeyError("The confirmation key is invalid for this personal data request.")
            )

        if (user_request.key_issued_at or 0) + self.ttl < self.clock():
            return Return.err(
                ExpiredKeyError("The confirmation key has expired for this personal data request.")
            )

        return Return.ok(user_request)

    async def confirm(self, user_request: UserRequest) -> UserRequest:
        user_request.status = UserRequestStatus.confirmed
        user_request.confirmed_at = datetime.now(UTC)
        user_request.confirm_key_hash = None
        return await self.uow.user_requests.update(user_request)
