"""
Nonce Service

Short-lived action tokens that tie a form or link to the current user and
session. A nonce is valid during the tick it was created in and the one
after it, so its lifetime is between half and all of ``nonce_life``.
"""

import hashlib
import hmac
import math

from .settings import Clock, unix_now


class NonceService:
    def __init__(self, secret: str, nonce_life: int, clock: Clock = unix_now):
        self.secret = secret
        self.nonce_life = nonce_life
        self.clock = clock

    def tick(self) -> int:
        return math.ceil(self.clock() / (self.nonce_life / 2))

    def _digest(self, tick: int, action: str, user_id: int, token: str) -> str:
        message = f"{tick}|{action}|{user_id}|{token}"
        digest = hmac.new(
            f"{self.secret}_nonce".encode(), message.encode(), hashlib.sha256
        ).hexdigest()
        return digest[-12:-2]

    def create(self, action: str, user_id: int = 0, token: str = "") -> str:
        return self._digest(self.tick(), action, user_id, token)

    def verify(self, nonce: str, action: str, user_id: int = 0, token: str = "") -> int:
        """
        Check a nonce.

        Returns:
            1 if created in the current tick, 2 if in the previous one, 0 if invalid
        """
        if not nonce or not isinstance(nonce, str):
            return 0

        tick = self.tick()
        for age, candidate_tick in ((1, tick), (2, tick - 1)):
            expected = self._digest(candidate_tick, action, user_id, token)
            if hmac.compare_digest(expected, nonce):
                return age
        return 0
