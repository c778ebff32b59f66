"""
Login flow error kinds.

Everything except ``FatalRequestError`` is a value carried in a ``Result`` or
an ``ErrorSet``; ``FatalRequestError`` is the only exception that leaves the
dispatcher.
"""

from loginflow.libs.result import Error


class InvalidKeyError(Error):
    def __init__(self, message: str = "Your password reset link appears to be invalid."):
        super().__init__("invalid_key", message)


class ExpiredKeyError(Error):
    def __init__(self, message: str = "Your password reset link has expired."):
        super().__init__("expired_key", message)


class FatalRequestError(Exception):
    """Unrecoverable precondition failure; the request ends with an error page"""

    def __init__(self, error: Error, status_code: int = 400):
        self.base_error = error
        self.status_code = status_code
        super().__init__(error.message)


class FieldValidationError(Error):
    """One or more submitted fields were rejected; ``errors`` holds a diagnostic per field"""

    def __init__(self, errors):
        self.errors = errors
        super().__init__("validation_failed", " ".join(d.message for d in errors.blocking()))
