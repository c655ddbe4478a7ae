"""
Contact form endpoint.

Endpoints:
- POST /api/contact - Validate and deliver a visitor message
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from studio_eighty7.api.deps import (
    get_client_ip,
    get_contact_config,
    get_mailer,
    get_rules,
    rate_limited,
    read_json_body,
)
from studio_eighty7.components.contact import (
    ContactConfig,
    ContactInput,
    ContactMailerPort,
    run,
)
from studio_eighty7.rules.models import Rules

router = APIRouter()


class ContactResponse(BaseModel):
    success: bool
    message: str = Field(..., description="Acknowledgement shown to the visitor")


class ErrorResponse(BaseModel):
    error: str
    message: str
    field: str | None = None


@router.post(
    "/contact",
    response_model=ContactResponse,
    responses={
        400: {"model": ErrorResponse, "description": "A field failed validation"},
        413: {"model": ErrorResponse, "description": "Body too large"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
    },
    summary="Submit the contact form",
)
def submit_contact(
    request: Request,
    payload: dict[str, Any] = Depends(read_json_body),
    _: None = Depends(rate_limited("contact")),
    rules: Rules = Depends(get_rules),
    mailer: ContactMailerPort = Depends(get_mailer),
    config: ContactConfig = Depends(get_contact_config),
) -> ContactResponse:
    result = run(
        ContactInput(fields=payload, ip_address=get_client_ip(request)),
        mailer=mailer,
        config=config,
        rules=rules.validation,
    )
    return ContactResponse(success=result.success, message=result.message)
