"""
Session Issuer

Creates and tears down the authenticated cookie pair.

Both cookies carry an HS256 JWT with the user id, the cookie scheme and a
random session token. The server keeps sha256(token) in the sessions table,
so a stolen database cannot be turned back into valid cookies and deleting
the row revokes the cookie immediately.
"""

import hashlib
import logging
import secrets
from dataclasses import dataclass
from typing import Mapping, Optional

from jose import JWTError, jwt
from pydantic import BaseModel, ConfigDict

from loginflow.domain.entities import CookieScheme, Session, User

from .cookies import CookieNames
from .response_builder import ResponseBuilder
from .settings import Clock, LoginSettings, unix_now
from .unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
# Persistent cookies outlive the session row by this much so the browser
# sends them long enough for the server to answer "expired".
COOKIE_GRACE_PERIOD = 12 * 60 * 60


class SessionToken(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: int
    token: str
    expiration: int
    remember: bool
    secure: bool


@dataclass(frozen=True)
class CurrentSession:
    """The user and session resolved from the request cookies"""

    user: User
    session: Session
    token: str


def token_verifier(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


class SessionIssuer:
    def __init__(self, uow: UnitOfWork, settings: LoginSettings, clock: Clock = unix_now):
        self.uow = uow
        self.settings = settings
        self.clock = clock
        self.names = CookieNames(settings.cookie_hash)

    def encode_cookie(self, user: User, token: str, scheme: CookieScheme, expiration: int) -> str:
        payload = {
            "sub": str(user.id),
            "login": user.user_login,
            "scheme": scheme.value,
            "token": token,
            "exp": expiration,
        }
        return self.encode_cookie_payload(payload)

    def encode_cookie_payload(self, payload: dict) -> str:
        return jwt.encode(payload, self.settings.auth_secret, algorithm=ALGORITHM)

    def decode_cookie(self, value: str, scheme: CookieScheme) -> Optional[dict]:
        if not value:
            return None
        try:
            # Expiry is enforced against the session row and the injected clock
            payload = jwt.decode(
                value,
                self.settings.auth_secret,
                algorithms=[ALGORITHM],
                options={"verify_exp": False},
            )
        except JWTError:
            return None
        if payload.get("scheme") != scheme.value:
            return None
        return payload

    async def issue_session(
        self, user: User, remember: bool, secure_only: bool, response: ResponseBuilder
    ) -> SessionToken:
        """
        Store a new session for ``user`` and write the auth cookie pair.

        ``remember`` selects the long lifetime and a persistent cookie;
        otherwise the cookies end with the browser session.
        """
        now = self.clock()
        ttl = self.settings.remember_ttl if remember else self.settings.session_ttl
        expiration = now + ttl
        cookie_expires = expiration + COOKIE_GRACE_PERIOD if remember else None

        token = secrets.token_urlsafe(32)
        await self.uow.sessions.create(
            Session(
                user_id=user.id,
                verifier=token_verifier(token),
                expiration=expiration,
                remember=remember,
                secure=secure_only,
            )
        )

        auth_scheme = CookieScheme.secure_auth if secure_only else CookieScheme.auth
        auth_name = self.names.secure_auth if secure_only else self.names.auth
        response.set_cookie(
            auth_name,
            self.encode_cookie(user, token, auth_scheme, expiration),
            expires=cookie_expires,
            path=self.settings.admin_cookie_path,
            secure=secure_only,
            httponly=True,
        )
        response.set_cookie(
            self.names.logged_in,
            self.encode_cookie(user, token, CookieScheme.logged_in, expiration),
            expires=cookie_expires,
            path=self.settings.cookie_path,
            secure=secure_only,
            httponly=True,
        )

        logger.info(f"Issued session for user {user.id} (remember={remember}, secure={secure_only})")
        return SessionToken(
            user_id=user.id,
            token=token,
            expiration=expiration,
            remember=remember,
            secure=secure_only,
        )

    async def current_session(self, cookies: Mapping[str, str]) -> Optional[CurrentSession]:
        payload = self.decode_cookie(cookies.get(self.names.logged_in, ""), CookieScheme.logged_in)
        if payload is None:
            return None

        token = payload.get("token") or ""
        session = await self.uow.sessions.get_by_verifier(token_verifier(token))
        if session is None or session.expiration < self.clock():
            return None
        if str(session.user_id) != payload.get("sub"):
            return None

        user = await self.uow.users.get_by_id(session.user_id)
        if user is None:
            return None

        return CurrentSession(user=user, session=session, token=token)

    async def clear_session(
        self, current: Optional[CurrentSession], response: ResponseBuilder
    ) -> None:
        """Destroy the current session if there is one and expire its cookies"""
        if current is not None:
            await self.uow.sessions.destroy(current.session.verifier)
            logger.info(f"Destroyed session for user {current.user.id}")
        self.clear_cookies(response)

    def clear_cookies(self, response: ResponseBuilder) -> None:
        response.expire_cookie(self.names.auth, path=self.settings.admin_cookie_path)
        response.expire_cookie(self.names.secure_auth, path=self.settings.admin_cookie_path)
        response.expire_cookie(self.names.logged_in, path=self.settings.cookie_path)

    async def destroy_all(self, user: User) -> int:
        return await self.uow.sessions.destroy_all_by_user_id(user.id)

    def secure_cookie_for(self, use_ssl: bool, request_is_secure: bool) -> bool:
        return bool(use_ssl or request_is_secure or self.settings.force_ssl_admin)
