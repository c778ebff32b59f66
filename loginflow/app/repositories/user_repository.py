from abc import ABC, abstractmethod
from typing import Any, Optional

from loginflow.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - the credential store consumed by the login flow"""

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def find_by_login(self, user_login: str) -> Optional[User]:
        """Get user by login name (case-insensitive)"""
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Get user by email address (case-insensitive)"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def get_option(self, user_id: int, key: str, default: Any = None) -> Any:
        """Read a per-user option"""
        pass

    @abstractmethod
    async def set_option(self, user_id: int, key: str, value: Any) -> None:
        """Write a per-user option, replacing any previous value"""
        pass
