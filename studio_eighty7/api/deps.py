import json
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import Any

from fastapi import Depends, Request

from studio_eighty7.adapters.dev_email import DevEmailAdapter
from studio_eighty7.adapters.gemini import GeminiTextGenerator, build_gemini_client
from studio_eighty7.adapters.http_client import build_async_client
from studio_eighty7.app_shell.config import Settings
from studio_eighty7.app_shell.rate_limit import RateLimiter
from studio_eighty7.components.contact import ContactConfig, ContactMailerPort
from studio_eighty7.components.content import ContentFetcher, ContentSourcePort
from studio_eighty7.components.generation import GenerationConfig, TextGeneratorPort
from studio_eighty7.domain.entities import EndpointClass
from studio_eighty7.domain.errors import (
    PayloadTooLargeError,
    RateLimitError,
    UpstreamUnavailableError,
    ValidationError,
)
from studio_eighty7.rules.loader import load_rules
from studio_eighty7.rules.models import Rules


# --- Settings ---
@lru_cache
def load_settings() -> Settings:
    return Settings()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


# --- Rules ---
@lru_cache
def load_rules_at(path: Path) -> Rules:
    return load_rules(path)


def get_rules(request: Request) -> Rules:
    return request.app.state.rules


# --- Request helpers ---
def get_client_ip(request: Request) -> str:
    """
    Client address used as the rate-limit key.

    X-Forwarded-For is only read when the socket peer is a configured trusted
    proxy; the nearest untrusted hop wins since entries to its left are
    supplied by the client.
    """
    peer = request.client.host if request.client else "unknown"
    trusted = request.app.state.settings.trusted_proxies
    if peer not in trusted:
        return peer

    hops = [h.strip() for h in request.headers.get("X-Forwarded-For", "").split(",") if h.strip()]
    for hop in reversed(hops):
        if hop not in trusted:
            return hop
    return peer


async def read_json_body(request: Request, rules: Rules = Depends(get_rules)) -> dict[str, Any]:
    """
    Read the JSON object body, enforcing the size ceiling before parsing.

    Raises:
        PayloadTooLargeError: body over the configured ceiling
        ValidationError: body is not a JSON object
    """
    limit = rules.requests.max_body_bytes

    declared = request.headers.get("Content-Length")
    if declared and declared.isdigit() and int(declared) > limit:
        raise PayloadTooLargeError(limit)

    # Chunked bodies carry no Content-Length; stop reading once over the ceiling
    chunks: list[bytes] = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > limit:
            raise PayloadTooLargeError(limit)
        chunks.append(chunk)
    raw = b"".join(chunks)

    try:
        payload = json.loads(raw) if raw else {}
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ValidationError("body", "Invalid request body") from e
    if not isinstance(payload, dict):
        raise ValidationError("body", "Invalid request body")
    return payload


# --- Rate limiting ---
def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


def rate_limited(endpoint_class: EndpointClass) -> Callable[..., None]:
    """Dependency that counts the request against the endpoint class policy."""

    def enforce(request: Request, limiter: RateLimiter = Depends(get_rate_limiter)) -> None:
        if limiter.is_exempt(request.url.path):
            return
        decision = limiter.check(endpoint_class, get_client_ip(request))
        if not decision.allowed:
            policy = limiter.policy(endpoint_class)
            raise RateLimitError(
                message=policy.message,
                retry_after_seconds=decision.retry_after_seconds,
                error=policy.error,
            )

    return enforce


# --- Generation ---
def get_generation_config(rules: Rules = Depends(get_rules)) -> GenerationConfig:
    return GenerationConfig(
        model=rules.generation.model,
        fallback_line=rules.generation.fallback_line,
        max_words=rules.generation.max_words,
        retry_after_seconds=rules.rate_limits.generate.window_seconds,
    )


def get_text_generator(
    request: Request,
    settings: Settings = Depends(get_settings),
    rules: Rules = Depends(get_rules),
) -> TextGeneratorPort:
    generator = getattr(request.app.state, "text_generator", None)
    if generator is None:
        if not settings.gemini_api_key:
            raise UpstreamUnavailableError()
        generator = GeminiTextGenerator(
            build_gemini_client(api_key=settings.gemini_api_key),
            model=settings.gemini_model or rules.generation.model,
        )
        request.app.state.text_generator = generator
    return generator


# --- Contact ---
def get_mailer(request: Request) -> ContactMailerPort:
    return request.app.state.mailer


def get_contact_config(settings: Settings = Depends(get_settings)) -> ContactConfig:
    return ContactConfig(recipient=settings.contact_recipient)


def build_mailer() -> ContactMailerPort:
    return DevEmailAdapter()


# --- Content ---
def get_content_source(
    request: Request,
    settings: Settings = Depends(get_settings),
    rules: Rules = Depends(get_rules),
) -> ContentSourcePort:
    fetcher = getattr(request.app.state, "content_source", None)
    if fetcher is None:
        client = build_async_client()
        request.app.state.http_client = client
        fetcher = ContentFetcher(
            client,
            rules=rules.content,
            base_url=settings.content_source_url,
            debug=settings.is_development,
        )
        request.app.state.content_source = fetcher
    return fetcher
