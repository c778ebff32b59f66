"""
Result type used by every use case.

A use case never raises for an expected failure; it returns
``Return.err(Error(code, message))`` and the caller branches on ``is_err()``.
"""

from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class Error:
    """Machine readable code plus a human readable message"""

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message

    def __eq__(self, other):
        if not isinstance(other, Error):
            return NotImplemented
        return self.code == other.code and self.message == other.message

    def __repr__(self):
        return f"{type(self).__name__}({self.code!r}, {self.message!r})"


class Result(Generic[T]):
    def __init__(self, value: Optional[T] = None, error: Optional[Error] = None):
        self.value = value
        self.error = error

    def is_ok(self) -> bool:
        return self.error is None

    def is_err(self) -> bool:
        return self.error is not None


class Return:
    @staticmethod
    def ok(value: T) -> Result[T]:
        return Result(value=value)

    @staticmethod
    def err(error: Error) -> Result:
        return Result(error=error)
