from abc import ABC, abstractmethod
from typing import Any


class IOptionRepository(ABC):
    """Site option repository interface - application layer"""

    @abstractmethod
    async def get(self, name: str, default: Any = None) -> Any:
        """Read a site option"""
        pass

    @abstractmethod
    async def set(self, name: str, value: Any) -> None:
        """Write a site option, replacing any previous value"""
        pass
