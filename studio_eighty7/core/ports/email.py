"""
Outbound mail port.

The contact component hands each validated submission to an EmailPort
implementation addressed to the studio inbox, with the visitor as reply-to.
Delivery outcome comes back as an EmailResult; implementations do not raise
for delivery failures.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class EmailStatus(Enum):
    SKIPPED = "skipped"  # Recorded and logged, nothing left the process
    FAILED = "failed"


@dataclass(frozen=True)
class EmailAddress:
    """Address with optional display name, e.g. the visitor as reply-to."""

    email: str
    name: str | None = None

    def __str__(self) -> str:
        if self.name:
            safe_name = self.name.replace('"', '\\"')
            return f'"{safe_name}" <{self.email}>'
        return self.email


@dataclass(frozen=True)
class EmailMessage:
    recipient: EmailAddress
    subject: str
    body_html: str
    body_text: str
    sender: EmailAddress | None = None  # None = mailer's default sender
    reply_to: EmailAddress | None = None

    def __post_init__(self) -> None:
        if not self.recipient.email:
            raise ValueError("Recipient email is required")
        if not self.subject:
            raise ValueError("Subject is required")
        if not self.body_html and not self.body_text:
            raise ValueError("At least one of body_html or body_text is required")


@dataclass(frozen=True)
class EmailResult:
    status: EmailStatus
    recipient: str = ""
    message_id: str | None = None
    error: str | None = None

    @classmethod
    def skipped(cls, recipient: str, message_id: str | None = None, reason: str = "Dev mode") -> EmailResult:
        return cls(status=EmailStatus.SKIPPED, recipient=recipient, message_id=message_id, error=reason)

    @classmethod
    def failed(cls, recipient: str, error: str) -> EmailResult:
        return cls(status=EmailStatus.FAILED, recipient=recipient, error=error)


class EmailPort(Protocol):
    def send(self, message: EmailMessage) -> EmailResult:
        """Deliver or record the message; report failure in the result."""
        ...
