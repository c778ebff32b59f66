"""
Recovery Mode Use Case

Turns an emailed recovery link into a recovery mode cookie.
"""

import logging

from loginflow.app.services.redirects import add_query_args
from loginflow.domain.actions import LoginAction
from loginflow.domain.entities import CookieScheme
from loginflow.domain.errors import FatalRequestError

from .base import ActionContext, ActionUseCase
from .dtos import Redirect

logger = logging.getLogger(__name__)


class RecoveryModeUseCase(ActionUseCase):
    """
    Business Rules:
    - Without both rm_token and rm_key the request is a plain login
    - A bad or expired link ends the request
    - A good link is consumed, a signed recovery cookie is set and the user
      lands on the login screen with the recovery notice
    """

    def __init__(self, uow, services, login_use_case):
        super().__init__(uow, services)
        self.login_use_case = login_use_case

    async def execute(self, ctx: ActionContext):
        token = ctx.request.query.get("rm_token")
        key = ctx.request.query.get("rm_key")
        if not token or not key:
            return await self.login_use_case.execute(ctx)

        result = await self.services.recovery.validate(token, key)
        if result.is_err():
            await self.uow.commit()
            logger.warning(f"Rejected recovery mode link: {result.error.code}")
            raise FatalRequestError(result.error)

        await self.audit("recovery_mode_entered", None)
        await self.uow.commit()

        sessions = self.services.sessions
        now = self.services.clock()
        value = sessions.encode_cookie_payload(
            {"token": token, "scheme": CookieScheme.recovery_mode.value, "iat": now}
        )
        ctx.response.set_cookie(
            self.services.cookie_names.recovery_mode,
            value,
            path=self.settings.cookie_path,
            secure=ctx.request.is_secure,
            httponly=True,
        )

        logger.info("Recovery mode entered")
        return Redirect(
            add_query_args(
                self.settings.login_url(), action=LoginAction.entered_recovery_mode.value
            )
        )
