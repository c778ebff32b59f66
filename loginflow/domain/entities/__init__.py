"""
Login Flow Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import Capability, CookieScheme, UserRequestStatus

# Export all entities
from .user import User
from .user_option import UserOption
from .site_option import SiteOption
from .reset_key import ResetKey
from .session import Session
from .user_request import UserRequest
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "Capability",
    "CookieScheme",
    "UserRequestStatus",
    # Entities
    "User",
    "UserOption",
    "SiteOption",
    "ResetKey",
    "Session",
    "UserRequest",
    "AuditEvent",
]
