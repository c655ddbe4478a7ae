"""
Client for the studio API as the browser front end uses it.

Responses and transport failures come back as the shared error taxonomy so
controllers can pick the right inline message without looking at raw HTTP.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from studio_eighty7.domain.errors import (
    GENERIC_FAILURE_MESSAGE,
    RateLimitError,
    StudioError,
    TransientNetworkError,
    UpstreamUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER_SECONDS = 60


class ConnectionFailedError(TransientNetworkError):
    """The API could not be reached at all."""

    error = "Network error"

    def __init__(self, message: str = "Network request failed") -> None:
        super().__init__(message)


def _retry_after(response: httpx.Response) -> int:
    value = response.headers.get("Retry-After", "")
    try:
        return max(1, int(value))
    except ValueError:
        return DEFAULT_RETRY_AFTER_SECONDS


def _json_body(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def error_from_response(response: httpx.Response, default_field: str = "") -> StudioError:
    """Rebuild the server's error from a non-2xx response."""
    body = _json_body(response)
    message = str(body.get("message") or f"API Error: {response.status_code}")
    error_label = body.get("error")

    if response.status_code == 429:
        return RateLimitError(
            message=message,
            retry_after_seconds=_retry_after(response),
            error=str(error_label) if error_label else None,
        )
    if response.status_code in (400, 413):
        return ValidationError(str(body.get("field") or default_field), message)
    if error_label == TransientNetworkError.error:
        return TransientNetworkError(message)
    if response.status_code >= 500:
        return UpstreamUnavailableError(message or GENERIC_FAILURE_MESSAGE)
    return StudioError(message)


class StudioApiClient:
    def __init__(self, client: httpx.AsyncClient, *, debug: bool = False) -> None:
        self._client = client
        self._debug = debug

    async def _post(self, path: str, payload: dict[str, Any], default_field: str) -> dict[str, Any]:
        try:
            response = await self._client.post(
                path,
                json=payload,
                headers={"Accept": "application/json"},
            )
        except httpx.TimeoutException as e:
            self._log_error(path, e)
            raise TransientNetworkError() from e
        except httpx.TransportError as e:
            self._log_error(path, e)
            raise ConnectionFailedError() from e

        if response.is_error:
            error = error_from_response(response, default_field)
            self._log_error(path, error)
            raise error

        return _json_body(response)

    async def generate(self, topic: str) -> str:
        """POST /api/generate; returns the generated line."""
        body = await self._post("/api/generate", {"topic": topic}, "topic")
        text = body.get("data")
        if not body.get("success") or not isinstance(text, str) or not text:
            raise StudioError(str(body.get("message") or "Invalid response from server"))
        return text

    async def submit_contact(self, name: str, email: str, message: str) -> str:
        """POST /api/contact; returns the acknowledgement message."""
        body = await self._post(
            "/api/contact",
            {"name": name, "email": email, "message": message},
            "message",
        )
        if not body.get("success"):
            raise StudioError(str(body.get("message") or "Unable to send message. Please try again."))
        return str(body.get("message", ""))

    def _log_error(self, path: str, error: Exception) -> None:
        if self._debug:
            logger.error("[%s] %s: %s", path, type(error).__name__, error)
