"""
Response builder.

Action handlers never touch the HTTP response. They record cookie writes
here and the API layer applies them in order once the dispatcher returns.
"""

from dataclasses import dataclass
from typing import List, Optional

YEAR_IN_SECONDS = 365 * 24 * 60 * 60


@dataclass(frozen=True)
class CookieInstruction:
    """One Set-Cookie header. ``expires`` is a unix timestamp, None for a browser-session cookie"""

    name: str
    value: str
    expires: Optional[int] = None
    path: str = "/"
    secure: bool = False
    httponly: bool = False
    domain: Optional[str] = None


class ResponseBuilder:
    def __init__(self, now: int):
        self.now = now
        self.cookies: List[CookieInstruction] = []

    def set_cookie(
        self,
        name: str,
        value: str,
        expires: Optional[int] = None,
        path: str = "/",
        secure: bool = False,
        httponly: bool = False,
    ) -> None:
        self.cookies.append(
            CookieInstruction(
                name=name,
                value=value,
                expires=expires,
                path=path,
                secure=secure,
                httponly=httponly,
            )
        )

    def expire_cookie(
        self, name: str, path: str = "/", secure: bool = False, httponly: bool = False
    ) -> None:
        self.set_cookie(
            name, " ", self.now - YEAR_IN_SECONDS, path=path, secure=secure, httponly=httponly
        )

    def cookie(self, name: str) -> Optional[CookieInstruction]:
        """Last instruction written for ``name``"""
        for instruction in reversed(self.cookies):
            if instruction.name == name:
                return instruction
        return None
