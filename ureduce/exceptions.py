"""Custom exceptions shared across the session and its services."""

from dataclasses import dataclass

VALIDATION_MESSAGE = "Please enter a valid URL starting with http:// or https://."
REQUEST_FAILED_MESSAGE = "Could not shorten the URL. Please try again."


@dataclass(eq=False)
class ServiceError(Exception):
    """Base exception for user-visible failures."""

    message: str
    code: str = "service_error"
    status_code: int | None = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


@dataclass(eq=False)
class ValidationError(ServiceError):
    """Raised when the input is empty or not an absolute http(s) URL."""

    message: str = VALIDATION_MESSAGE
    code: str = "validation_error"


@dataclass(eq=False)
class RequestError(ServiceError):
    """Raised when the shortening service fails to return a short URL."""

    message: str = REQUEST_FAILED_MESSAGE
    code: str = "request_error"
