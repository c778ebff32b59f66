from typing import Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from loginflow.app.repositories.user_request_repository import IUserRequestRepository
from loginflow.domain.entities import UserRequest


class UserRequestRepository(IUserRequestRepository):
    """UserRequest repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, request_id: int) -> Optional[UserRequest]:
        """Get user request by ID"""
        return await self.session.get(UserRequest, request_id)

    async def create(self, request: UserRequest) -> UserRequest:
        """Create a new user request"""
        self.session.add(request)
        await self.session.flush()
        await self.session.refresh(request)
        return request

    async def update(self, request: UserRequest) -> UserRequest:
        """Update existing user request"""
        self.session.add(request)
        await self.session.flush()
        await self.session.refresh(request)
        return request
