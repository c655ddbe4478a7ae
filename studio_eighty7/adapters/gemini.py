"""
Gemini text generator (TextGeneratorPort implementation).

Wraps the google-genai async client. SDK API errors are re-raised as
ProviderError with the status code only; transport errors propagate so the
generation component can classify them as transient.
"""

from __future__ import annotations

from google import genai
from google.genai import errors as genai_errors

from studio_eighty7.components.generation.models import ProviderError


def build_gemini_client(*, api_key: str) -> genai.Client:
    return genai.Client(api_key=api_key)


class GeminiTextGenerator:
    def __init__(self, client: genai.Client, model: str) -> None:
        self._client = client
        self.model = model

    async def generate_text(self, prompt: str) -> str:
        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
            )
        except genai_errors.APIError as e:
            raise ProviderError(status_code=e.code, message=e.message or "") from e

        return response.text or ""
