"""
Confirm Action Use Case

Confirms a personal data request from the link mailed to the requester.
"""

import logging

from loginflow.domain.diagnostics import ErrorSet
from loginflow.domain.entities import UserRequest
from loginflow.domain.errors import FatalRequestError
from loginflow.libs.result import Error

from .base import ActionContext, ActionUseCase
from .dtos import View
from .hooks import call_hook

logger = logging.getLogger(__name__)


class ConfirmActionUseCase(ActionUseCase):
    """
    Business Rules:
    - request_id and confirm_key are both mandatory; there is no screen to
      fall back to, so a missing one ends the request
    - Every validation failure ends the request as well
    - Success marks the request confirmed and fires on_user_request_confirmed
    """

    async def execute(self, ctx: ActionContext):
        query = ctx.request.query

        if "request_id" not in query:
            raise FatalRequestError(Error("missing_request_id", "Missing request ID."))
        if "confirm_key" not in query:
            raise FatalRequestError(Error("missing_confirm_key", "Missing confirm key."))

        try:
            request_id = int(query["request_id"])
        except ValueError:
            request_id = 0
        key = query["confirm_key"].strip()

        result = await self.services.user_requests.validate(request_id, key)
        if result.is_err():
            logger.warning(f"Rejected confirmation of user request {request_id}: {result.error.code}")
            raise FatalRequestError(result.error)

        user_request = await self.services.user_requests.confirm(result.value)
        await self.audit(
            "user_request_confirmed", None, request_id=request_id, request_action=user_request.action_name
        )
        await self.uow.commit()
        await call_hook(self.hooks.on_user_request_confirmed, user_request)

        return View(
            name="confirmaction",
            title="User action confirmed.",
            errors=ErrorSet().message("request_confirmed", self._confirmed_message(user_request)),
            locale=ctx.locale,
            data={"request_id": request_id},
        )

    @staticmethod
    def _confirmed_message(user_request: UserRequest) -> str:
        if user_request.action_name == "export_personal_data":
            message = "Thanks for confirming your export request."
        elif user_request.action_name == "remove_personal_data":
            message = "Thanks for confirming your erasure request."
        else:
            message = "Thanks for confirming your request."
        return message + " The site administrator has been notified."
