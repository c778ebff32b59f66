"""
Logout Use Case

Ends the current session and sends the user back to the login screen.
"""

import logging

from loginflow.app.services.redirects import add_query_args
from loginflow.domain.errors import FatalRequestError
from loginflow.libs.result import Error

from .base import ActionContext, ActionUseCase
from .hooks import call_hook

logger = logging.getLogger(__name__)

LOGOUT_NONCE_ACTION = "log-out"


class LogoutUseCase(ActionUseCase):
    """
    Business Rules:
    - With a live session the request must carry a valid log-out nonce;
      anything else is rejected outright
    - Without a session there is nothing to forge, so the call just clears
      cookies and redirects; logging out twice is harmless
    """

    async def execute(self, ctx: ActionContext):
        request = ctx.request
        current = ctx.current

        if current is not None:
            nonce = request.param("_wpnonce") or ""
            if not self.services.nonces.verify(
                nonce, LOGOUT_NONCE_ACTION, current.user.id, current.token
            ):
                logger.warning(f"Rejected logout with invalid nonce for user {current.user.id}")
                raise FatalRequestError(
                    Error("invalid_nonce", "The link you followed has expired."),
                    status_code=403,
                )

        user = current.user if current else None
        await self.services.sessions.clear_session(current, ctx.response)
        if user is not None:
            await self.audit("logout", user.id)
            await self.uow.commit()
            logger.info(f"User {user.id} logged out")
        await call_hook(self.hooks.on_logout, user)

        requested_redirect_to = request.param("redirect_to") or ""
        if requested_redirect_to:
            redirect_to = requested_redirect_to
        else:
            redirect_to = add_query_args(
                self.settings.login_url(),
                loggedout="true",
                wp_lang=(user.locale if user else ctx.locale) or None,
            )

        hooked = await call_hook(
            self.hooks.logout_redirect, redirect_to, requested_redirect_to, user
        )
        if hooked is not None:
            redirect_to = hooked

        return self.safe_redirect(redirect_to)
