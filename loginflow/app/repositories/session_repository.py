from abc import ABC, abstractmethod
from typing import Optional

from loginflow.domain.entities import Session


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Create a new session"""
        pass

    @abstractmethod
    async def get_by_verifier(self, verifier: str) -> Optional[Session]:
        """Get session by sha256 verifier of its token"""
        pass

    @abstractmethod
    async def destroy(self, verifier: str) -> bool:
        """Delete one session. Returns True if it existed."""
        pass

    @abstractmethod
    async def destroy_all_by_user_id(self, user_id: int) -> int:
        """Delete every session of a user. Returns count of deleted sessions."""
        pass
