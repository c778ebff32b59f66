"""
Login Hooks

Optional callbacks a deployment can plug into the login flow. Each one
replaces a fixed extension point; any of them may be a plain function or a
coroutine function.
"""

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional


@dataclass
class LoginHooks:
    # (redirect_to, requested_redirect_to, user_or_none) -> destination
    login_redirect: Optional[Callable[..., Any]] = None
    # (redirect_to, requested_redirect_to, user_or_none) -> destination
    logout_redirect: Optional[Callable[..., Any]] = None

    # (user) -> bool
    allow_password_reset: Optional[Callable[..., Any]] = None
    # (errors, user) -> None; may add blocking diagnostics
    validate_password_reset: Optional[Callable[..., Any]] = None
    # (errors, user_login, user_email) -> None; may add blocking diagnostics
    registration_errors: Optional[Callable[..., Any]] = None
    illegal_user_logins: List[str] = field(default_factory=list)

    # (user, key, reset_url) -> bool, False when the mail could not be sent
    send_reset_link: Optional[Callable[..., Any]] = None
    # (user, key, reset_url) -> bool
    send_new_user_notification: Optional[Callable[..., Any]] = None

    # (user) -> None
    on_login: Optional[Callable[..., Any]] = None
    # (user_or_none) -> None
    on_logout: Optional[Callable[..., Any]] = None
    # (user) -> None
    after_password_reset: Optional[Callable[..., Any]] = None
    # (user_request) -> None
    on_user_request_confirmed: Optional[Callable[..., Any]] = None


async def call_hook(hook: Optional[Callable[..., Any]], *args, default: Any = None) -> Any:
    if hook is None:
        return default
    result = hook(*args)
    if inspect.isawaitable(result):
        result = await result
    return result
