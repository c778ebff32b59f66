"""
Check Email Use Case

Informational screen shown after a reset link or welcome mail went out.
"""

from loginflow.domain.diagnostics import ErrorSet

from .base import ActionContext, ActionUseCase
from .dtos import View


class CheckEmailUseCase(ActionUseCase):
    async def execute(self, ctx: ActionContext):
        errors = ErrorSet()
        check_email = ctx.request.query.get("checkemail")

        if check_email == "confirm":
            errors.message(
                "confirm", "Check your email for the confirmation link, then visit the login page."
            )
        elif check_email == "registered":
            errors.message(
                "registered",
                "Registration complete. Please check your email, then visit the login page.",
            )

        return View(name="checkemail", title="Check your email", errors=errors, locale=ctx.locale)
