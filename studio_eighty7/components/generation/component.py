"""
GenerationService component.

Turns a visitor's topic into a short creative line using an external
text-generation model, and maps every provider failure onto the stable
client-facing error contract.

Key behaviors:
- Topic is re-sanitized server-side before any provider call
- Fixed producer-style prompt, under ~20 words of output
- Empty model output is replaced by a canned line
- Provider failures collapse into rate-limited / unavailable / transient /
  generic classes; raw provider detail and credentials never leave the server

Calls are not idempotent: the same topic may yield a different line each time.
"""

from __future__ import annotations

import logging

import httpx

from studio_eighty7.components.generation.models import (
    GenerateInput,
    GenerateOutput,
    GenerationConfig,
    ProviderError,
)
from studio_eighty7.components.generation.ports import TextGeneratorPort
from studio_eighty7.domain.errors import (
    RateLimitError,
    StudioError,
    TransientNetworkError,
    UpstreamUnavailableError,
)
from studio_eighty7.domain.sanitize import sanitize_topic
from studio_eighty7.rules.models import ValidationRules

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = (
    "You are a legendary music producer and lyricist for Studio Eighty7.\n"
    'The user needs a song concept, title, or a one-line lyric hook for: "{topic}".\n'
    "Provide a punchy, moody, or hard-hitting creative text snippet.\n"
    "Keep it under {max_words} words. Focus on rhythm, emotion, and grit."
)

CREDENTIAL_STATUSES = {401, 403}
TRANSIENT_STATUSES = {408, 502, 503, 504}


# --- Pure Functions ---


def build_prompt(topic: str, max_words: int = 20) -> str:
    return PROMPT_TEMPLATE.format(topic=topic, max_words=max_words)


def classify_provider_error(
    exc: Exception,
    retry_after_seconds: int = 60,
) -> StudioError:
    """Map any failure from the provider call onto the public error taxonomy."""
    if isinstance(exc, StudioError):
        return exc

    status: int | None = None
    detail = ""
    if isinstance(exc, ProviderError):
        status = exc.status_code
        detail = exc.message.lower()
    elif isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code

    if status == 429 or "rate limit" in detail or "rate limit" in str(exc).lower():
        return RateLimitError(
            message="Too many requests. Please try again later.",
            retry_after_seconds=retry_after_seconds,
            error="Rate limit exceeded",
        )

    if status in CREDENTIAL_STATUSES or (status == 400 and "api key" in detail):
        return UpstreamUnavailableError()

    if isinstance(exc, (httpx.TransportError, TimeoutError, ConnectionError)):
        return TransientNetworkError()
    if status in TRANSIENT_STATUSES:
        return TransientNetworkError()

    return StudioError()


# --- Service ---


class GenerationService:
    def __init__(
        self,
        generator: TextGeneratorPort,
        config: GenerationConfig | None = None,
    ) -> None:
        self._generator = generator
        self.config = config or GenerationConfig()

    async def generate(self, topic: str) -> GenerateOutput:
        """
        Generate a creative line for an already-sanitized topic.

        Raises:
            StudioError subclass describing the failure class
        """
        prompt = build_prompt(topic, self.config.max_words)
        logger.info('Generating creative idea for topic: "%s"', topic)

        try:
            text = await self._generator.generate_text(prompt)
        except Exception as e:
            mapped = classify_provider_error(e, self.config.retry_after_seconds)
            logger.error(
                "Error generating creative idea: %s mapped to %s",
                type(e).__name__,
                type(mapped).__name__,
            )
            raise mapped from e

        text = (text or "").strip()
        if not text:
            text = self.config.fallback_line

        logger.info('Generated idea: "%s"', text)
        return GenerateOutput(success=True, text=text)


# --- Component Entry Point ---


async def run(
    inp: GenerateInput,
    *,
    generator: TextGeneratorPort,
    config: GenerationConfig | None = None,
    rules: ValidationRules | None = None,
) -> GenerateOutput:
    """
    Validate the topic and generate a line.

    Raises:
        ValidationError: topic failed sanitization
        StudioError subclass: provider failure
    """
    topic = sanitize_topic(inp.topic, rules)
    return await GenerationService(generator, config).generate(topic)
