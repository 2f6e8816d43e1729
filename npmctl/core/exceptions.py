"""
Custom Exceptions.

Closed set of error kinds raised by the client and commands. Each carries
structured context, plus an optional stage label added once by the command
that observed it.
"""

from typing import Any


class ApplicationError(Exception):
    """Base exception for all npmctl errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        self.stage: str | None = None
        super().__init__(self.message)

    def with_stage(self, stage: str) -> "ApplicationError":
        """Label the error with the step that failed. The first label wins."""
        if self.stage is None:
            self.stage = stage
        return self

    def __str__(self) -> str:
        if self.stage:
            return f"{self.stage}: {self.message}"
        return self.message


class ValidationError(ApplicationError):
    """Raised when command input is missing or invalid."""

    def __init__(self, message: str = "Validation failed", details: dict[str, Any] | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class AuthenticationError(ApplicationError):
    """Raised when the token exchange fails."""

    def __init__(self, message: str = "Authentication failed", status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message, code="AUTH_FAILED")


class APIError(ApplicationError):
    """Raised when a resource call returns an unexpected status or body."""

    def __init__(self, message: str, status_code: int, body: str | None = None) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message, code="API_ERROR")


class TransportError(ApplicationError):
    """Raised when the request never got a response (connect, timeout, bad URL)."""

    def __init__(self, message: str = "Request failed") -> None:
        super().__init__(message, code="TRANSPORT_ERROR")
