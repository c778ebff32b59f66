from abc import ABC, abstractmethod
from typing import Optional

from loginflow.domain.entities import UserRequest


class IUserRequestRepository(ABC):
    """UserRequest repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, request_id: int) -> Optional[UserRequest]:
        """Get user request by ID"""
        pass

    @abstractmethod
    async def create(self, request: UserRequest) -> UserRequest:
        """Create a new user request"""
        pass

    @abstractmethod
    async def update(self, request: UserRequest) -> UserRequest:
        """Update existing user request"""
        pass
