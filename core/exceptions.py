"""Custom exceptions and error handling."""

from typing import Any


class ContentScopeError(Exception):
    """Base exception for ContentScope."""

    def __init__(
        self,
        message: str,
        code: str = "error",
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to an error payload."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }


class ValidationError(ContentScopeError):
    """Inbound payload failed validation."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(
            message=message,
            code="validation_error",
            details=details,
        )


class ExternalServiceError(ContentScopeError):
    """External service error."""

    def __init__(self, service: str, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=f"{service} error: {message}",
            code="external_service_error",
            details={"service": service, **(details or {})},
        )
        self.service = service


class RevisionServiceError(ExternalServiceError):
    """Content revision could not be produced by the generative service."""

    def __init__(
        self,
        message: str,
        attempts: int = 0,
        retryable: bool = False,
        service: str = "revision",
    ):
        super().__init__(
            service=service,
            message=message,
            details={"attempts": attempts, "retryable": retryable},
        )
        self.code = "revision_failed"
        self.attempts = attempts
        self.retryable = retryable
