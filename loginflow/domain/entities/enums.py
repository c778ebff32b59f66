"""
Login Flow Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class Capability(str, Enum):
    """Flat capability tokens checked by the login flow"""

    manage_options = "manage_options"
    edit_posts = "edit_posts"
    read = "read"


class UserRequestStatus(str, Enum):
    """Lifecycle of a personal data request awaiting email confirmation"""

    pending = "request-pending"
    failed = "request-failed"
    confirmed = "request-confirmed"
    completed = "request-completed"


class CookieScheme(str, Enum):
    """Which cookie of the session pair a signed value belongs to"""

    auth = "auth"
    secure_auth = "secure_auth"
    logged_in = "logged_in"
    recovery_mode = "recovery_mode"
