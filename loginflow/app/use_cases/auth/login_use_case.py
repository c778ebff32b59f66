"""
Login Use Case

Handles the default login screen: credential checks, session issuance and the
choice of where to send the user afterwards.
"""

import logging
import re
from typing import Optional, Tuple

from loginflow.app.services.cookies import TEST_COOKIE
from loginflow.app.services.redirects import add_query_args
from loginflow.domain.actions import LoginAction
from loginflow.domain.diagnostics import ErrorSet
from loginflow.domain.entities import Capability, User

from .base import ActionContext, ActionUseCase
from .dtos import Redirect, View
from .hooks import call_hook

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "The username or password you entered is incorrect."


class LoginUseCase(ActionUseCase):
    """
    Use case for the login screen.

    Business Rules:
    - Unknown user and wrong password produce the same diagnostic
    - A POST attempt without the test cookie fails before any password check
    - Users with the use_ssl option get secure cookies and https admin redirects
    - A visit with a valid session and no credentials counts as logged in
    - Administrators whose admin email check is due are sent to confirm it
    - On a first GET the empty-field diagnostics are suppressed
    """

    async def execute(self, ctx: ActionContext):
        request = ctx.request
        interim_login = request.param("interim-login") is not None
        reauth = bool(request.param("reauth"))
        user_name = request.form.get("log", "")

        secure_cookie = False
        if user_name and not self.settings.force_ssl_admin:
            candidate = await self._find_user(user_name)
            if candidate is not None and await self.uow.users.get_option(candidate.id, "use_ssl"):
                secure_cookie = True

        requested_redirect_to = request.param("redirect_to")
        if requested_redirect_to is not None:
            redirect_to = requested_redirect_to
            if secure_cookie and "wp-admin" in redirect_to:
                redirect_to = re.sub(r"^http://", "https://", redirect_to)
        else:
            redirect_to = self.settings.admin_url()

        user, errors = await self._sign_on(ctx, secure_cookie)

        hooked = await call_hook(
            self.hooks.login_redirect, redirect_to, requested_redirect_to or "", user
        )
        if hooked is not None:
            redirect_to = hooked

        if user is not None and not reauth:
            if interim_login:
                return View(
                    name="interim_login",
                    title="Log In",
                    errors=ErrorSet().message("logged_in", "You have logged in successfully."),
                    locale=ctx.locale,
                    interim_login="success",
                )
            return await self._redirect_after_login(user, redirect_to)

        if request.query.get("loggedout") or reauth:
            errors = ErrorSet()

        # First paint of the form: nothing was submitted, so nothing is wrong yet
        if not request.form and errors.codes() == ["empty_username", "empty_password"]:
            errors = ErrorSet()

        if interim_login:
            if not errors:
                errors.message(
                    "expired",
                    "Your session has expired. Please log in to continue where you left off.",
                )
        elif request.query.get("loggedout"):
            errors.message("loggedout", "You are now logged out.")
        elif request.query.get("registration") == "disabled":
            errors.error("registerdisabled", "User registration is currently not allowed.")
        elif ctx.action == LoginAction.entered_recovery_mode:
            errors.message(
                "enter_recovery_mode", "Recovery Mode Initialized. Please log in to continue."
            )

        if reauth:
            self.services.sessions.clear_cookies(ctx.response)

        return View(
            name="login",
            title="Log In",
            errors=errors,
            locale=ctx.locale,
            interim_login="1" if interim_login else None,
            data={
                "user_login": user_name,
                "redirect_to": redirect_to,
                "rememberme": bool(request.form.get("rememberme")),
                "reauth": reauth,
            },
        )

    async def _find_user(self, user_name: str) -> Optional[User]:
        user = await self.uow.users.find_by_login(user_name)
        if user is None and "@" in user_name:
            user = await self.uow.users.find_by_email(user_name)
        return user

    async def _sign_on(
        self, ctx: ActionContext, secure_cookie: bool
    ) -> Tuple[Optional[User], ErrorSet]:
        request = ctx.request
        user_name = request.form.get("log", "")
        password = request.form.get("pwd", "")
        errors = ErrorSet()

        if not user_name and not password and ctx.current is not None:
            return ctx.current.user, errors

        if (
            request.is_post
            and not request.cookies.get(TEST_COOKIE)
            and not request.cookies.get(self.services.cookie_names.logged_in)
        ):
            errors.error(
                "test_cookie",
                "Cookies are blocked or not supported by your browser. "
                "You must enable cookies to use this site.",
            )
            return None, errors

        if not user_name or not password:
            if not user_name:
                errors.error("empty_username", "The username field is empty.")
            if not password:
                errors.error("empty_password", "The password field is empty.")
            return None, errors

        user = await self._find_user(user_name)
        if user is None:
            self.services.hasher.burn()
            valid = False
        else:
            valid = self.services.hasher.verify(password, user.user_pass)

        if not valid:
            logger.warning("Failed login attempt")
            await self.audit("login_failed", user.id if user else None, user_login=user_name)
            await self.uow.commit()
            errors.error("invalid_credentials", INVALID_CREDENTIALS_MESSAGE)
            return None, errors

        secure = self.services.sessions.secure_cookie_for(secure_cookie, request.is_secure)
        remember = bool(request.form.get("rememberme"))
        await self.services.sessions.issue_session(user, remember, secure, ctx.response)
        await self.audit("login", user.id, remember=remember, secure=secure)
        await self.uow.commit()

        logger.info(f"User {user.id} logged in")
        await call_hook(self.hooks.on_login, user)
        return user, errors

    async def _redirect_after_login(self, user: User, redirect_to: str) -> Redirect:
        if user.has_cap(Capability.manage_options):
            lifespan = int(await self.uow.options.get("admin_email_lifespan", 0) or 0)
            if (
                self.settings.admin_email_check_interval > 0
                and self.services.clock() > lifespan
            ):
                redirect_to = add_query_args(
                    self.settings.login_url(),
                    redirect_to=redirect_to,
                    action=LoginAction.confirm_admin_email.value,
                    wp_lang=user.locale or None,
                )

        admin_root = self.settings.admin_url()
        if not redirect_to or redirect_to in ("wp-admin/", admin_root):
            if not user.has_cap(Capability.edit_posts):
                if user.has_cap(Capability.read):
                    redirect_to = self.settings.admin_url("profile.php")
                else:
                    redirect_to = self.settings.home_url()
            return Redirect(redirect_to or admin_root)

        return self.safe_redirect(redirect_to)
