"""
Generation component.

Creative-text proxy in front of the external text-generation model.
"""

from studio_eighty7.components.generation.component import (
    PROMPT_TEMPLATE,
    GenerationService,
    build_prompt,
    classify_provider_error,
    run,
)
from studio_eighty7.components.generation.models import (
    GenerateInput,
    GenerateOutput,
    GenerationConfig,
    ProviderError,
)
from studio_eighty7.components.generation.ports import TextGeneratorPort

__all__ = [
    # Component
    "run",
    "GenerationService",
    # Pure functions
    "build_prompt",
    "classify_provider_error",
    "PROMPT_TEMPLATE",
    # Models
    "GenerateInput",
    "GenerateOutput",
    "GenerationConfig",
    "ProviderError",
    # Ports
    "TextGeneratorPort",
]
