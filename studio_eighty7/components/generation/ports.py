"""
Generation component ports.
"""

from __future__ import annotations

from typing import Protocol


class TextGeneratorPort(Protocol):
    """
    External text-generation model.

    Implementations raise ProviderError for provider-side HTTP failures and
    let transport errors (timeouts, connection failures) propagate.
    """

    async def generate_text(self, prompt: str) -> str:
        """Return the model's text for the prompt; may be empty."""
        ...
