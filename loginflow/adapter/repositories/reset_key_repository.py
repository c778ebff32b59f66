from typing import Optional

from sqlalchemy import delete
from sqlmodel.ext.asyncio.session import AsyncSession

from loginflow.app.repositories.reset_key_repository import IResetKeyRepository
from loginflow.domain.entities import ResetKey


class ResetKeyRepository(IResetKeyRepository):
    """ResetKey repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def upsert(self, record: ResetKey) -> ResetKey:
        """Store the record keyed by user_id; the last write wins"""
        merged = await self.session.merge(record)
        await self.session.flush()
        return merged

    async def get_by_user_id(self, user_id: int) -> Optional[ResetKey]:
        """Get the active reset key of a user"""
        return await self.session.get(ResetKey, user_id)

    async def delete_by_user_id(self, user_id: int) -> bool:
        """Delete the reset key of a user"""
        stmt = delete(ResetKey).where(ResetKey.user_id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
