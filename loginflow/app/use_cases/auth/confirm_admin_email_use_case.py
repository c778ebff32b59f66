"""
Confirm Admin Email Use Case

Periodic prompt asking an administrator to confirm the site admin email.
"""

import logging

from loginflow.app.services.redirects import add_query_args
from loginflow.domain.diagnostics import ErrorSet
from loginflow.domain.entities import Capability

from .base import ActionContext, ActionUseCase
from .dtos import View

logger = logging.getLogger(__name__)

CONFIRM_NONCE_ACTION = "confirm_admin_email"
REMIND_NONCE_ACTION = "remind_me_later_nonce"


class ConfirmAdminEmailUseCase(ActionUseCase):
    """
    Business Rules:
    - Anonymous users and users without manage_options are sent to the login
      screen; nothing about the admin email is disclosed to them
    - "Remind me later" pushes admin_email_lifespan by the remind interval
    - Confirming pushes admin_email_lifespan by the check interval
    - Both mutations need a valid nonce; a bad nonce goes back to login
    """

    async def execute(self, ctx: ActionContext):
        request = ctx.request
        login_url = self.settings.login_url()

        if ctx.current is None:
            return self.safe_redirect(login_url)

        user = ctx.current.user
        token = ctx.current.token
        redirect_to = request.param("redirect_to") or self.settings.admin_url()

        if not user.has_cap(Capability.manage_options):
            logger.warning(f"User {user.id} without manage_options reached confirm_admin_email")
            return self.safe_redirect(login_url)

        nonces = self.services.nonces
        now = self.services.clock()

        remind_me_later = request.query.get("remind_me_later")
        if remind_me_later:
            if not nonces.verify(remind_me_later, REMIND_NONCE_ACTION, user.id, token):
                return self.safe_redirect(login_url)
            if self.settings.admin_email_remind_interval > 0:
                await self.uow.options.set(
                    "admin_email_lifespan", now + self.settings.admin_email_remind_interval
                )
                await self.audit("admin_email_remind_later", user.id)
                await self.uow.commit()
            return self.safe_redirect(add_query_args(redirect_to, admin_email_remind_later=1))

        if request.form.get("correct-admin-email"):
            nonce = request.form.get("confirm_admin_email_nonce", "")
            if not nonces.verify(nonce, CONFIRM_NONCE_ACTION, user.id, token):
                return self.safe_redirect(login_url)
            if self.settings.admin_email_check_interval > 0:
                await self.uow.options.set(
                    "admin_email_lifespan", now + self.settings.admin_email_check_interval
                )
                await self.audit("admin_email_confirmed", user.id)
                await self.uow.commit()
            return self.safe_redirect(redirect_to)

        return View(
            name="confirm_admin_email",
            title="Confirm your administration email",
            errors=ErrorSet(),
            locale=ctx.locale,
            data={
                "admin_email": await self.uow.options.get("admin_email", ""),
                "redirect_to": redirect_to,
                "confirm_admin_email_nonce": nonces.create(CONFIRM_NONCE_ACTION, user.id, token),
                "remind_me_later_nonce": nonces.create(REMIND_NONCE_ACTION, user.id, token),
            },
        )
