from abc import ABC, abstractmethod
from typing import Optional

from loginflow.domain.entities import ResetKey


class IResetKeyRepository(ABC):
    """ResetKey repository interface - application layer"""

    @abstractmethod
    async def upsert(self, record: ResetKey) -> ResetKey:
        """Store the record, overwriting any key already held by the user"""
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: int) -> Optional[ResetKey]:
        """Get the active reset key of a user"""
        pass

    @abstractmethod
    async def delete_by_user_id(self, user_id: int) -> bool:
        """Delete the reset key of a user. Returns True if one existed."""
        pass
