"""
Error Definitions

Defines custom exception classes used in the application for unified error handling.

Wrong passwords and bad session tokens are not errors here: they are
ordinary negative return values of the auth services.
"""

from typing import Any, Optional


class AppError(Exception):
    """
    Application Base Exception

    Base class for all custom exceptions, containing error message, type, and code.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "app_error",
        code: str = "internal_error",
        details: Optional[dict[str, Any]] = None,
        status_code: int = 500,
    ):
        """
        Initialize exception

        Args:
            message: Error message
            error_type: Error type
            code: Error code
            details: Extra error details
            status_code: HTTP status code
        """
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.code = code
        self.details = details or {}
        self.status_code = status_code

    def to_dict(self, include_details: bool = True) -> dict[str, Any]:
        """
        Convert to dictionary format (for API response)

        Args:
            include_details: Whether extra details are rendered

        Returns:
            dict: Error information dictionary
        """
        result = {
            "error": {
                "message": self.message,
                "type": self.error_type,
                "code": self.code,
            }
        }
        if include_details and self.details:
            result["error"]["details"] = self.details
        return result


class BackendUnavailable(AppError):
    """
    Backend Unavailable Error

    Raised when the database cannot be reached (connection refused, dropped,
    pool exhausted, timed out). Callers at a higher layer may retry.
    """

    def __init__(
        self,
        message: str = "Storage backend unavailable",
        code: str = "backend_unavailable",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="backend_unavailable",
            code=code,
            details=details,
            status_code=503,
        )


class BackendError(AppError):
    """
    Backend Error

    Raised when the database rejects a statement (malformed query,
    constraint violation, missing table). Not retryable as-is.
    """

    def __init__(
        self,
        message: str = "Storage backend error",
        code: str = "backend_error",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="backend_error",
            code=code,
            details=details,
            status_code=500,
        )


class AuthenticationError(AppError):
    """
    Authentication Error

    Raised by the HTTP layer for any failed login or missing/invalid session.
    The message never says which check failed.
    """

    def __init__(
        self,
        message: str = "Unauthorized",
        code: str = "unauthorized",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="authentication_error",
            code=code,
            details=details,
            status_code=401,
        )


class NotFoundError(AppError):
    """
    Resource Not Found Error

    Raised when requested resource (e.g., post) does not exist.
    """

    def __init__(
        self,
        message: str = "Resource not found",
        code: str = "not_found",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="not_found_error",
            code=code,
            details=details,
            status_code=404,
        )


class ValidationError(AppError):
    """
    Parameter Validation Error

    Raised when input does not meet requirements, including values that
    cannot be stored as JSON.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        code: str = "validation_error",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="validation_error",
            code=code,
            details=details,
            status_code=422,
        )
