"""
Login Flow Use Cases

The action dispatcher and the use case behind each login action.
"""

from .dispatcher import LoginDispatcher
from .hooks import LoginHooks
from .login_use_case import LoginUseCase
from .logout_use_case import LogoutUseCase
from .lost_password_use_case import LostPasswordUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .register_use_case import RegisterUseCase
from .confirm_admin_email_use_case import ConfirmAdminEmailUseCase
from .post_password_use_case import PostPasswordUseCase
from .check_email_use_case import CheckEmailUseCase
from .confirm_action_use_case import ConfirmActionUseCase
from .recovery_mode_use_case import RecoveryModeUseCase
from .dtos import DispatchResult, LoginRequest, Redirect, View

__all__ = [
    # Dispatcher
    "LoginDispatcher",
    "LoginHooks",
    # Use Cases
    "LoginUseCase",
    "LogoutUseCase",
    "LostPasswordUseCase",
    "ResetPasswordUseCase",
    "RegisterUseCase",
    "ConfirmAdminEmailUseCase",
    "PostPasswordUseCase",
    "CheckEmailUseCase",
    "ConfirmActionUseCase",
    "RecoveryModeUseCase",
    # DTOs
    "LoginRequest",
    "DispatchResult",
    "Redirect",
    "View",
]
