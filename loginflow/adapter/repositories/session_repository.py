from typing import Optional

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from loginflow.app.repositories.session_repository import ISessionRepository
from loginflow.domain.entities import Session


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, session_obj: Session) -> Session:
        """Create a new session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def get_by_verifier(self, verifier: str) -> Optional[Session]:
        """Get session by token verifier"""
        stmt = select(Session).where(Session.verifier == verifier)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def destroy(self, verifier: str) -> bool:
        """Delete one session by verifier"""
        stmt = delete(Session).where(Session.verifier == verifier)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def destroy_all_by_user_id(self, user_id: int) -> int:
        """Delete every session of a user"""
        stmt = delete(Session).where(Session.user_id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
