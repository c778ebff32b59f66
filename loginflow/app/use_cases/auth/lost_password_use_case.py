"""
Lost Password Use Case

Handles the "Lost your password?" screen and issues reset keys.
"""

import logging

from loginflow.domain.diagnostics import ErrorSet

from .base import ActionContext, ActionUseCase
from .dtos import View
from .hooks import call_hook

logger = logging.getLogger(__name__)


class LostPasswordUseCase(ActionUseCase):
    """
    Use case for requesting a password reset.

    Business Rules:
    - Identifiers containing "@" are looked up by email, others by login
    - No account enumeration: an unknown identifier is answered exactly like
      a known one, it just never gets a key
    - Issuing a key overwrites any previous key of the user
    - The plaintext key leaves only through the send_reset_link hook
    """

    async def execute(self, ctx: ActionContext):
        request = ctx.request
        errors = ErrorSet()

        if request.is_post:
            errors = await self.retrieve_password(request.form.get("user_login", ""))
            if not errors.has_blocking():
                redirect_to = request.param("redirect_to") or (
                    self.settings.login_url() + "?checkemail=confirm"
                )
                return self.safe_redirect(redirect_to)

        error = request.query.get("error")
        if error == "invalidkey":
            errors.error(
                "invalidkey",
                "Your password reset link appears to be invalid. Please request a new link below.",
            )
        elif error == "expiredkey":
            errors.error(
                "expiredkey",
                "Your password reset link has expired. Please request a new link below.",
            )

        return View(
            name="lostpassword",
            title="Lost Password",
            errors=errors,
            locale=ctx.locale,
            data={
                "user_login": request.form.get("user_login", ""),
                "redirect_to": request.param("redirect_to") or "",
            },
        )

    async def retrieve_password(self, user_login: str) -> ErrorSet:
        errors = ErrorSet()
        user_login = (user_login or "").strip()

        if not user_login:
            return errors.error("empty_username", "Please enter a username or email address.")

        if "@" in user_login:
            user = await self.uow.users.find_by_email(user_login)
            if user is None:
                user = await self.uow.users.find_by_login(user_login)
        else:
            user = await self.uow.users.find_by_login(user_login)

        if user is None:
            logger.info("Password reset requested for unknown account")
            return errors

        allowed = await call_hook(self.hooks.allow_password_reset, user, default=True)
        if not allowed:
            return errors.error("no_password_reset", "Password reset is not allowed for this user")

        key = await self.services.reset_keys.issue(user)
        await self.audit("password_reset_requested", user.id)
        await self.uow.commit()

        sent = await call_hook(
            self.hooks.send_reset_link, user, key, self.reset_url(user, key), default=None
        )
        if sent is None:
            logger.warning(f"No mail transport configured; reset link for user {user.id} not sent")
        elif not sent:
            errors.error(
                "retrieve_password_email_failure",
                "The email could not be sent. "
                "Your site may not be correctly configured to send emails.",
            )
        return errors
