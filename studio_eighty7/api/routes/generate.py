"""
Creative-text generation endpoint.

Endpoints:
- POST /api/generate - Topic in, one generated line out
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from studio_eighty7.api.deps import (
    get_generation_config,
    get_rules,
    get_text_generator,
    rate_limited,
    read_json_body,
)
from studio_eighty7.components.generation import (
    GenerateInput,
    GenerationConfig,
    TextGeneratorPort,
    run,
)
from studio_eighty7.rules.models import Rules

router = APIRouter()


# --- Request/Response Models ---


class GenerateResponse(BaseModel):
    success: bool = Field(..., description="Always true on 200")
    data: str = Field(..., description="Generated creative line")


class ErrorResponse(BaseModel):
    error: str
    message: str


@router.post(
    "/generate",
    response_model=GenerateResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid topic"},
        413: {"model": ErrorResponse, "description": "Body too large"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
        500: {"model": ErrorResponse, "description": "Provider unavailable"},
    },
    summary="Generate a creative line for a topic",
)
async def generate(
    payload: dict[str, Any] = Depends(read_json_body),
    _: None = Depends(rate_limited("generate")),
    rules: Rules = Depends(get_rules),
    generator: TextGeneratorPort = Depends(get_text_generator),
    config: GenerationConfig = Depends(get_generation_config),
) -> GenerateResponse:
    result = await run(
        GenerateInput(topic=payload.get("topic")),
        generator=generator,
        config=config,
        rules=rules.validation,
    )
    return GenerateResponse(success=result.success, data=result.text)
