"""
Reset Password Use Case

Moves the emailed reset key into a cookie, then lets the holder choose a
new password.
"""

import hmac
import logging

from loginflow.domain.diagnostics import ErrorSet
from loginflow.domain.errors import ExpiredKeyError, InvalidKeyError
from loginflow.libs.result import Return

from .base import ActionContext, ActionUseCase
from .dtos import Redirect, View
from .hooks import call_hook

logger = logging.getLogger(__name__)


class ResetPasswordUseCase(ActionUseCase):
    """
    Use case for choosing a new password with a reset key.

    Business Rules:
    - A key/login pair in the query is stored in an HTTP-only cookie scoped
      to this path and the browser is redirected to the clean URL
    - The cookie key must match the stored hash and be unexpired; a POST
      must also echo the key in rp_key
    - The key is deleted before the password changes; if it is already gone
      the reset is refused, so a key can never be used twice
    - Password change, key deletion and session revocation commit together
    """

    async def execute(self, ctx: ActionContext):
        request = ctx.request
        response = ctx.response
        cookie_name = self.services.cookie_names.reset_pass
        rp_path = request.path

        if "key" in request.query and "login" in request.query:
            value = f"{request.query['login']}:{request.query['key']}"
            response.set_cookie(
                cookie_name, value, path=rp_path, secure=request.is_secure, httponly=True
            )
            return self.safe_redirect(request.url_without("key", "login"))

        raw = request.cookies.get(cookie_name, "")
        rp_key = ""
        if raw.find(":") > 0:
            rp_login, rp_key = raw.split(":", 1)
            result = await self.services.reset_keys.validate(rp_login, rp_key)
            if "pass1" in request.form and not hmac.compare_digest(
                rp_key.encode(), request.form.get("rp_key", "").encode()
            ):
                result = Return.err(InvalidKeyError())
        else:
            result = Return.err(InvalidKeyError())

        if result.is_err():
            response.expire_cookie(cookie_name, path=rp_path, secure=request.is_secure, httponly=True)
            code = "expiredkey" if isinstance(result.error, ExpiredKeyError) else "invalidkey"
            logger.info(f"Rejected password reset key: {result.error.code}")
            return Redirect(f"{self.settings.login_url()}?action=lostpassword&error={code}")

        user = result.value
        errors = ErrorSet()

        pass1 = request.form.get("pass1", "")
        if pass1:
            pass1 = pass1.strip()
            if not pass1:
                errors.error(
                    "password_reset_empty_space", "The password cannot be a space or all spaces."
                )

        if pass1 and request.form.get("pass2", "").strip() != pass1:
            errors.error("password_reset_mismatch", "The passwords do not match.")

        await call_hook(self.hooks.validate_password_reset, errors, user)

        if not errors.has_blocking() and pass1:
            if not await self.services.reset_keys.invalidate(user):
                # Another request consumed the key after it was validated
                response.expire_cookie(cookie_name, path=rp_path, secure=request.is_secure, httponly=True)
                logger.warning(f"Reset key for user {user.id} was already used")
                return Redirect(f"{self.settings.login_url()}?action=lostpassword&error=invalidkey")

            user.user_pass = self.services.hasher.hash(pass1)
            await self.uow.users.update(user)
            revoked = await self.services.sessions.destroy_all(user)
            await self.audit("password_reset", user.id, sessions_revoked=revoked)
            await self.uow.commit()

            response.expire_cookie(cookie_name, path=rp_path, secure=request.is_secure, httponly=True)
            logger.info(f"Password reset for user {user.id}")
            await call_hook(self.hooks.after_password_reset, user)

            return View(
                name="resetpass_complete",
                title="Password Reset",
                errors=ErrorSet().message("password_reset", "Your password has been reset."),
                locale=ctx.locale,
            )

        return View(
            name="resetpass",
            title="Reset Password",
            errors=errors,
            locale=ctx.locale,
            data={"user_login": user.user_login, "rp_key": rp_key},
        )
