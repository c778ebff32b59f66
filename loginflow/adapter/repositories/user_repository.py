from typing import Any, Optional

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from loginflow.app.repositories.user_repository import IUserRepository
from loginflow.domain.entities import User, UserOption


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def find_by_login(self, user_login: str) -> Optional[User]:
        """Get user by login name (case-insensitive)"""
        stmt = select(User).where(func.lower(User.user_login) == user_login.lower())
        result = await self.session.exec(stmt)
        return result.first()

    async def find_by_email(self, email: str) -> Optional[User]:
        """Get user by email address (case-insensitive)"""
        stmt = select(User).where(func.lower(User.user_email) == email.lower())
        result = await self.session.exec(stmt)
        return result.first()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def _get_option_row(self, user_id: int, key: str) -> Optional[UserOption]:
        stmt = select(UserOption).where(
            UserOption.user_id == user_id, UserOption.option_key == key
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_option(self, user_id: int, key: str, default: Any = None) -> Any:
        """Read a per-user option"""
        row = await self._get_option_row(user_id, key)
        return default if row is None else row.option_value

    async def set_option(self, user_id: int, key: str, value: Any) -> None:
        """Write a per-user option, replacing any previous value"""
        row = await self._get_option_row(user_id, key)
        if row is None:
            row = UserOption(user_id=user_id, option_key=key, option_value=value)
        else:
            row.option_value = value
        self.session.add(row)
        await self.session.flush()
