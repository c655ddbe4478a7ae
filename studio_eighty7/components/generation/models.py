"""
Generation component models.

Data models for the creative-text ("oracle") proxy.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GenerateInput:
    """Raw topic as received from the visitor."""

    topic: object


@dataclass(frozen=True)
class GenerateOutput:
    success: bool
    text: str


@dataclass(frozen=True)
class GenerationConfig:
    model: str = "gemini-3-flash-preview"
    fallback_line: str = "Listen to the silence. The beat will drop."
    max_words: int = 20
    retry_after_seconds: int = 60  # Hint sent when the provider throttles us


# --- Error Types ---


class ProviderError(Exception):
    """
    Failure reported by the text-generation provider.

    Carries only the status code and provider message for classification;
    neither is ever returned to the visitor.
    """

    def __init__(self, status_code: int | None, message: str = "") -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"Provider error (status={status_code})")
