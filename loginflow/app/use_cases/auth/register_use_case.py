"""
Register Use Case

Self-service account creation from the login screen.
"""

import logging
import re

from pydantic import EmailStr, TypeAdapter, ValidationError

from loginflow.app.services.keys import generate_password
from loginflow.domain.diagnostics import ErrorSet
from loginflow.domain.entities import User
from loginflow.domain.errors import FieldValidationError
from loginflow.libs.result import Result, Return

from .base import ActionContext, ActionUseCase
from .dtos import Redirect, View
from .hooks import call_hook

logger = logging.getLogger(__name__)

USER_LOGIN_MAX_LENGTH = 60
_email_adapter = TypeAdapter(EmailStr)
_valid_login = re.compile(r"^[a-z0-9 _.\-@]+$", re.IGNORECASE)


def sanitize_user_login(user_login: str) -> str:
    return re.sub(r"\s+", " ", user_login or "").strip()


def is_email(value: str) -> bool:
    try:
        _email_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


class RegisterUseCase(ActionUseCase):
    """
    Use case for user registration.

    Business Rules:
    - Closed registration redirects with registration=disabled, nothing is created
    - Logins allow letters, digits, space, and _ . - @ (at most 60 characters)
    - Login and email must both be unused
    - The account starts with an unusable random password and a reset key
      so the user chooses their own password from the emailed link
    """

    async def execute(self, ctx: ActionContext):
        request = ctx.request

        can_register = await self.uow.options.get(
            "users_can_register", self.settings.users_can_register
        )
        if not can_register:
            return Redirect(f"{self.settings.login_url()}?registration=disabled")

        user_login = request.form.get("user_login", "")
        user_email = request.form.get("user_email", "")
        errors = ErrorSet()

        if request.is_post:
            result = await self.register_new_user(user_login, user_email)
            if result.is_ok():
                redirect_to = request.form.get("redirect_to") or (
                    self.settings.login_url() + "?checkemail=registered"
                )
                return self.safe_redirect(redirect_to)
            errors = result.error.errors

        return View(
            name="register",
            title="Registration Form",
            errors=errors,
            locale=ctx.locale,
            data={"user_login": user_login, "user_email": user_email},
        )

    async def register_new_user(self, user_login: str, user_email: str) -> Result[User]:
        """
        Returns:
            Result with the new User, or FieldValidationError carrying the
            blocking diagnostics
        """
        errors = ErrorSet()
        sanitized = sanitize_user_login(user_login)
        user_email = (user_email or "").strip()

        if not sanitized:
            errors.error("empty_username", "Please enter a username.")
        elif not _valid_login.match(sanitized):
            errors.error(
                "invalid_username",
                "This username is invalid because it uses illegal characters. "
                "Please enter a valid username.",
            )
        elif len(sanitized) > USER_LOGIN_MAX_LENGTH:
            errors.error(
                "user_login_too_long",
                f"Username may not be longer than {USER_LOGIN_MAX_LENGTH} characters.",
            )
        elif await self.uow.users.find_by_login(sanitized):
            errors.error(
                "username_exists", "This username is already registered. Please choose another one."
            )
        elif sanitized.lower() in {name.lower() for name in self.hooks.illegal_user_logins}:
            errors.error("invalid_username", "Sorry, that username is not allowed.")

        if not user_email:
            errors.error("empty_email", "Please type your email address.")
        elif not is_email(user_email):
            errors.error("invalid_email", "The email address is not correct.")
            user_email = ""
        elif await self.uow.users.find_by_email(user_email):
            errors.error(
                "email_exists",
                "This email address is already registered. Please choose another one.",
            )

        await call_hook(self.hooks.registration_errors, errors, sanitized, user_email)

        if errors.has_blocking():
            return Return.err(FieldValidationError(errors))

        user = await self.uow.users.create(
            User(
                user_login=sanitized,
                user_email=user_email,
                user_pass=self.services.hasher.hash(generate_password(12, special_chars=False)),
                capabilities=list(self.settings.default_capabilities),
            )
        )
        await self.uow.users.set_option(user.id, "default_password_nag", True)
        key = await self.services.reset_keys.issue(user)
        await self.audit("register", user.id)
        await self.uow.commit()
        logger.info(f"Registered user {user.id}")

        sent = await call_hook(
            self.hooks.send_new_user_notification, user, key, self.reset_url(user, key)
        )
        if sent is None:
            logger.warning(f"No mail transport configured; welcome mail for user {user.id} not sent")

        return Return.ok(user)
