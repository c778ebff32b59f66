"""
Use Cases

- auth/: the login action dispatcher and one use case per action
"""

from .auth import LoginDispatcher, LoginHooks, LoginRequest

__all__ = [
    "LoginDispatcher",
    "LoginHooks",
    "LoginRequest",
]
