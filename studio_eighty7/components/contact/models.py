"""
Contact component models.

Data models for contact form submissions.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from studio_eighty7.core.ports.email import EmailStatus

# --- Input Models ---


@dataclass(frozen=True)
class ContactInput:
    """Raw fields as received from the visitor."""

    fields: dict[str, object] = field(default_factory=dict)
    ip_address: str | None = None


# --- Output Models ---


@dataclass(frozen=True)
class ContactOutput:
    success: bool
    message: str
    delivery_status: EmailStatus | None = None  # Best-effort, not part of the public contract


# --- Configuration ---


@dataclass(frozen=True)
class ContactConfig:
    recipient: str = "info@studioeighty7.com"
    site_name: str = "Studio Eighty7"
    subject_template: str = "New Contact Form Message from {name}"
    acknowledgement: str = "Message received successfully"
