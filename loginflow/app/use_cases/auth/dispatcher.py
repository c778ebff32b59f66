"""
Login Dispatcher

Entry point of the login flow. Resolves the action, runs exactly one action
use case inside a single unit of work and returns either a redirect or a
view, together with the cookies to write.
"""

import logging
from typing import Dict, Optional

from loginflow.app.services.cookies import LANG_COOKIE, TEST_COOKIE, TEST_COOKIE_VALUE
from loginflow.app.services.password_hasher import IPasswordHasher
from loginflow.app.services.response_builder import ResponseBuilder
from loginflow.app.services.settings import Clock, LoginSettings, unix_now
from loginflow.app.services.unit_of_work import UnitOfWork
from loginflow.domain.actions import LoginAction, resolve_action

from .base import ActionContext, ActionUseCase, LoginServices
from .check_email_use_case import CheckEmailUseCase
from .confirm_action_use_case import ConfirmActionUseCase
from .confirm_admin_email_use_case import ConfirmAdminEmailUseCase
from .dtos import DispatchResult, LoginRequest, Redirect
from .hooks import LoginHooks
from .login_use_case import LoginUseCase
from .logout_use_case import LogoutUseCase
from .lost_password_use_case import LostPasswordUseCase
from .post_password_use_case import PostPasswordUseCase
from .recovery_mode_use_case import RecoveryModeUseCase
from .register_use_case import RegisterUseCase
from .reset_password_use_case import ResetPasswordUseCase

logger = logging.getLogger(__name__)


class LoginDispatcher:
    """
    Runs one login request to completion.

    Business Rules:
    - Unknown actions are handled as login (decided while parsing)
    - Forced SSL redirects plain http requests before any action runs
    - The test cookie is written on every response
    - Every action maps to exactly one use case; the table is checked to be
      complete when the dispatcher is built
    """

    def __init__(
        self,
        uow: UnitOfWork,
        settings: LoginSettings,
        hasher: IPasswordHasher,
        hooks: Optional[LoginHooks] = None,
        clock: Clock = unix_now,
    ):
        self.uow = uow
        self.settings = settings
        self.clock = clock
        self.services = LoginServices(uow, settings, hasher, hooks or LoginHooks(), clock)

        login = LoginUseCase(uow, self.services)
        lost_password = LostPasswordUseCase(uow, self.services)
        reset_password = ResetPasswordUseCase(uow, self.services)

        self.handlers: Dict[LoginAction, ActionUseCase] = {
            LoginAction.login: login,
            LoginAction.entered_recovery_mode: login,
            LoginAction.logout: LogoutUseCase(uow, self.services),
            LoginAction.lostpassword: lost_password,
            LoginAction.retrievepassword: lost_password,
            LoginAction.resetpass: reset_password,
            LoginAction.rp: reset_password,
            LoginAction.register: RegisterUseCase(uow, self.services),
            LoginAction.confirm_admin_email: ConfirmAdminEmailUseCase(uow, self.services),
            LoginAction.postpass: PostPasswordUseCase(uow, self.services),
            LoginAction.checkemail: CheckEmailUseCase(uow, self.services),
            LoginAction.confirmaction: ConfirmActionUseCase(uow, self.services),
            LoginAction.enter_recovery_mode: RecoveryModeUseCase(uow, self.services, login),
        }
        missing = set(LoginAction) - set(self.handlers)
        if missing:
            raise RuntimeError(f"No handler for login actions: {sorted(a.value for a in missing)}")

    async def dispatch(self, request: LoginRequest) -> DispatchResult:
        """
        Execute one login request.

        Returns:
            DispatchResult holding a Redirect or a View plus cookie writes

        Raises:
            FatalRequestError: the request cannot continue (bad logout nonce,
            broken confirmation or recovery link)
        """
        response = ResponseBuilder(now=self.clock())
        action = resolve_action(request.query, request.form)

        if self.settings.force_ssl_admin and not request.is_secure:
            secure_url = "https://" + request.url.split("://", 1)[-1]
            return DispatchResult(outcome=Redirect(secure_url), cookies=response.cookies)

        response.set_cookie(
            TEST_COOKIE,
            TEST_COOKIE_VALUE,
            path=self.settings.cookie_path,
            secure=request.is_secure,
        )

        locale = request.query.get("wp_lang")
        if locale:
            response.set_cookie(
                LANG_COOKIE, locale, path=self.settings.cookie_path, secure=request.is_secure
            )

        async with self.uow:
            current = await self.services.sessions.current_session(request.cookies)
            if not locale:
                locale = request.cookies.get(LANG_COOKIE) or (
                    current.user.locale if current else ""
                )

            ctx = ActionContext(
                action=action,
                request=request,
                response=response,
                current=current,
                locale=locale,
            )
            logger.debug(f"Dispatching login action {action.value} ({request.method})")
            outcome = await self.handlers[action].execute(ctx)

        return DispatchResult(outcome=outcome, cookies=response.cookies)
