"""
Translation between Starlette requests/responses and the dispatcher's
immutable request and DispatchResult.
"""

from datetime import UTC, datetime
from typing import Callable

from fastapi import Request
from fastapi.responses import JSONResponse, RedirectResponse, Response

from loginflow.app.use_cases.auth.dtos import DispatchResult, LoginRequest


def request_is_secure(request: Request) -> bool:
    if request.url.scheme == "https":
        return True
    return request.headers.get("x-forwarded-proto", "").lower() == "https"


async def build_login_request(request: Request) -> LoginRequest:
    form = {}
    if request.method == "POST":
        data = await request.form()
        # Uploaded files have no meaning for the login flow
        form = {key: value for key, value in data.items() if isinstance(value, str)}

    return LoginRequest(
        method=request.method,
        url=str(request.url),
        path=request.url.path,
        query=dict(request.query_params),
        form=form,
        cookies=dict(request.cookies),
        is_secure=request_is_secure(request),
        referer=request.headers.get("referer"),
    )


def to_http_response(result: DispatchResult, renderer: Callable) -> Response:
    if result.is_redirect:
        response = RedirectResponse(
            result.outcome.location, status_code=result.outcome.status_code
        )
    else:
        response = JSONResponse(content=renderer(result.outcome))

    for cookie in result.cookies:
        expires = None
        if cookie.expires is not None:
            expires = datetime.fromtimestamp(cookie.expires, UTC)
        response.set_cookie(
            key=cookie.name,
            value=cookie.value,
            expires=expires,
            path=cookie.path,
            domain=cookie.domain,
            secure=cookie.secure,
            httponly=cookie.httponly,
            samesite="lax",
        )
    return response
