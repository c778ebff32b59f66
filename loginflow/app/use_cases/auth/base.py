"""
Shared plumbing for the login action use cases.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode

from loginflow.app.services.cookies import CookieNames
from loginflow.app.services.nonce_service import NonceService
from loginflow.app.services.password_hasher import IPasswordHasher
from loginflow.app.services.recovery_mode_service import RecoveryModeService
from loginflow.app.services.redirects import RedirectGuard
from loginflow.app.services.reset_key_service import ResetKeyService
from loginflow.app.services.response_builder import ResponseBuilder
from loginflow.app.services.session_issuer import CurrentSession, SessionIssuer
from loginflow.app.services.settings import Clock, LoginSettings
from loginflow.app.services.unit_of_work import UnitOfWork
from loginflow.app.services.user_request_service import UserRequestService
from loginflow.domain.actions import LoginAction
from loginflow.domain.entities import AuditEvent, User

from .dtos import LoginRequest, Redirect
from .hooks import LoginHooks

logger = logging.getLogger(__name__)


@dataclass
class ActionContext:
    """Everything one action handler sees about the current request"""

    action: LoginAction
    request: LoginRequest
    response: ResponseBuilder
    current: Optional[CurrentSession]
    locale: str = ""


class LoginServices:
    """Services shared by every action, bound to one unit of work"""

    def __init__(
        self,
        uow: UnitOfWork,
        settings: LoginSettings,
        hasher: IPasswordHasher,
        hooks: LoginHooks,
        clock: Clock,
    ):
        self.uow = uow
        self.settings = settings
        self.hasher = hasher
        self.hooks = hooks
        self.clock = clock
        self.cookie_names = CookieNames(settings.cookie_hash)
        self.redirects = RedirectGuard(settings.site_host, settings.allowed_redirect_hosts)
        self.nonces = NonceService(settings.auth_secret, settings.nonce_life, clock)
        self.reset_keys = ResetKeyService(uow, settings.reset_key_ttl, clock)
        self.sessions = SessionIssuer(uow, settings, clock)
        self.recovery = RecoveryModeService(uow, settings.recovery_key_ttl, clock)
        self.user_requests = UserRequestService(uow, settings.user_request_key_ttl, clock)


class ActionUseCase:
    """Base class of the per-action use cases run by the dispatcher"""

    def __init__(self, uow: UnitOfWork, services: LoginServices):
        self.uow = uow
        self.services = services
        self.settings = services.settings
        self.hooks = services.hooks

    async def execute(self, ctx: ActionContext):
        raise NotImplementedError

    def safe_redirect(self, location: Optional[str], fallback: Optional[str] = None) -> Redirect:
        if fallback is None:
            fallback = self.settings.admin_url()
        return Redirect(self.services.redirects.validate(location or "", fallback))

    async def audit(self, action: str, user_id: Optional[int] = None, **metadata) -> None:
        await self.uow.audit_events.create(
            AuditEvent(user_id=user_id, action=action, event_metadata=metadata or None)
        )

    def reset_url(self, user: User, key: str) -> str:
        query = urlencode({"action": "rp", "key": key, "login": user.user_login})
        return f"{self.settings.login_url()}?{query}"
