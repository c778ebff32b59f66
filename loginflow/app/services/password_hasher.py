from abc import ABC, abstractmethod


class IPasswordHasher(ABC):
    """One-way password hashing used for account passwords and post passwords"""

    @abstractmethod
    def hash(self, password: str) -> str:
        """Hash a plaintext password"""
        pass

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        """Check a plaintext password against a stored hash"""
        pass

    @abstractmethod
    def burn(self) -> None:
        """Spend the time of one verification, for lookups that found no user"""
        pass
