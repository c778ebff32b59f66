"""
Login Actions

The closed set of flows the login endpoint can run. Unknown action names are
folded into ``LoginAction.login`` while the request is parsed, so the
dispatcher only ever sees members of this enum.
"""

from enum import Enum
from typing import Mapping, Optional


class LoginAction(str, Enum):
    confirm_admin_email = "confirm_admin_email"
    postpass = "postpass"
    logout = "logout"
    lostpassword = "lostpassword"
    retrievepassword = "retrievepassword"
    resetpass = "resetpass"
    rp = "rp"
    register = "register"
    checkemail = "checkemail"
    confirmaction = "confirmaction"
    login = "login"
    enter_recovery_mode = "enter_recovery_mode"
    entered_recovery_mode = "entered_recovery_mode"


def parse_action(value: Optional[str]) -> LoginAction:
    """Map a raw ``action`` parameter onto the allow-list, defaulting to login"""
    if not isinstance(value, str):
        return LoginAction.login
    try:
        return LoginAction(value)
    except ValueError:
        return LoginAction.login


def resolve_action(query: Mapping[str, str], form: Mapping[str, str]) -> LoginAction:
    """
    Resolve the action of a request.

    ``action`` is read from the query string first and the form body second.
    A ``key`` query parameter always means resetpass and ``checkemail`` always
    means the check-email screen, whatever ``action`` says.
    """
    raw = query.get("action", form.get("action"))
    action = parse_action(raw)

    if "key" in query:
        action = LoginAction.resetpass
    if "checkemail" in query:
        action = LoginAction.checkemail

    return action
