from typing import Any

from sqlmodel.ext.asyncio.session import AsyncSession

from loginflow.app.repositories.option_repository import IOptionRepository
from loginflow.domain.entities import SiteOption


class OptionRepository(IOptionRepository):
    """Site option repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, name: str, default: Any = None) -> Any:
        """Read a site option"""
        row = await self.session.get(SiteOption, name)
        return default if row is None else row.option_value

    async def set(self, name: str, value: Any) -> None:
        """Write a site option, replacing any previous value"""
        await self.session.merge(SiteOption(option_name=name, option_value=value))
        await self.session.flush()
