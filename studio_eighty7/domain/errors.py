"""
Error taxonomy shared by the API, the components and the client library.

Every error carries the HTTP status it maps to, a short `error` label and a
public `message` that is safe to show to a visitor. Provider payloads,
credentials and stack traces never travel in these objects.

- ValidationError: field-scoped, user-correctable (400)
- PayloadTooLargeError: request body over the configured ceiling (413)
- RateLimitError: temporary, carries a retry-after hint (429)
- UpstreamUnavailableError: provider/credential failure, opaque (500)
- TransientNetworkError: network or timeout failure, caller may retry (500)
- ContentNotFound: content source lacks the endpoint; absorbed by the fetcher
"""

from __future__ import annotations

GENERIC_FAILURE_MESSAGE = "The signal is lost. Check your frequency."


class StudioError(Exception):
    """Base error with a stable client-facing contract."""

    status_code: int = 500
    error: str = "Internal server error"

    def __init__(self, message: str = GENERIC_FAILURE_MESSAGE) -> None:
        self.message = message
        super().__init__(message)

    def to_payload(self) -> dict[str, object]:
        return {"error": self.error, "message": self.message}


class ValidationError(StudioError):
    """A single field failed validation."""

    status_code = 400
    error = "Validation error"

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)

    def to_payload(self) -> dict[str, object]:
        return {"error": self.error, "field": self.field, "message": self.message}


class PayloadTooLargeError(StudioError):
    status_code = 413
    error = "Payload too large"

    def __init__(self, limit_bytes: int) -> None:
        self.limit_bytes = limit_bytes
        super().__init__(f"Request body must be {limit_bytes} bytes or less")


class RateLimitError(StudioError):
    """Too many accepted requests for this client within the window."""

    status_code = 429
    error = "Too many requests"

    def __init__(
        self,
        message: str = "Rate limit exceeded. Please try again later.",
        retry_after_seconds: int = 60,
        error: str | None = None,
    ) -> None:
        self.retry_after_seconds = retry_after_seconds
        if error is not None:
            self.error = error
        super().__init__(message)


class UpstreamUnavailableError(StudioError):
    error = "Service unavailable"


class TransientNetworkError(StudioError):
    error = "Upstream timeout"

    def __init__(self, message: str = "Request timed out. Please try again.") -> None:
        super().__init__(message)


class ContentNotFound(Exception):
    """The content source does not expose the requested resource."""

    def __init__(self, resource: str) -> None:
        self.resource = resource
        super().__init__(f"Content endpoint not found: {resource}")
