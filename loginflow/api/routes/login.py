import logging

from fastapi import APIRouter, Depends, Request

from loginflow.api.error import ClientError
from loginflow.api.utils.http import build_login_request, to_http_response
from loginflow.app.use_cases.auth import LoginDispatcher
from loginflow.depends import get_login_dispatcher
from loginflow.domain.errors import FatalRequestError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Login"])


@router.api_route("/wp-login.php", methods=["GET", "POST"])
async def wp_login(request: Request, dispatcher: LoginDispatcher = Depends(get_login_dispatcher)):
    """
    Login endpoint - every login action goes through here.

    The ``action`` parameter picks the flow (login, logout, lostpassword,
    resetpass, register, confirm_admin_email, postpass, checkemail,
    confirmaction, enter_recovery_mode). Unknown actions fall back to login.

    Returns:
        - 302 Found: the action finished with a redirect
        - 200 OK: a rendered view (errors, messages and form data)

    Raises:
        - 400 Bad Request: broken confirmation or recovery link
        - 403 Forbidden: logout with an invalid nonce
    """
    login_request = await build_login_request(request)
    try:
        result = await dispatcher.dispatch(login_request)
    except FatalRequestError as exc:
        logger.error(f"Fatal login request: {exc.base_error.code}")
        raise ClientError(exc.base_error, exc.status_code)
    return to_http_response(result, request.app.state.renderer)
