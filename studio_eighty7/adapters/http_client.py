"""
httpx client builder.

Centralizes timeouts and headers so every outbound call to the content
source behaves the same way. Tests pass a `transport` to swap the network
for an `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

DEFAULT_USER_AGENT = "studio-eighty7/0.1 (+https://studioeighty7.com)"
DEFAULT_TIMEOUT_SECONDS = 10.0


def build_async_client(
    *,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    base_url: str = "",
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    headers: dict[str, str] = {
        "User-Agent": DEFAULT_USER_AGENT,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=httpx.Timeout(timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )
