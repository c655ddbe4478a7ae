"""
Dev Email Adapter (EmailPort implementation).

Logs emails instead of sending them. Used for local development, tests and
deployments where no mail provider is configured yet.

Key behaviors:
- Logs email details (body preview optional)
- Returns SKIPPED status (not SENT)
- Stores emails in memory for test assertions
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from studio_eighty7.core.ports.email import (
    EmailMessage,
    EmailResult,
)

logger = logging.getLogger(__name__)


@dataclass
class SentEmail:
    """Record of a logged email for test assertions."""

    id: str
    recipient: str
    subject: str
    body_html: str
    body_text: str
    sender: str | None
    reply_to: str | None
    logged_at: datetime


@dataclass
class DevEmailAdapter:
    """
    Dev email adapter that logs instead of sending.

    Emails are logged and kept in memory so tests can inspect them.
    """

    sent_emails: list[SentEmail] = field(default_factory=list)

    log_level: int = logging.INFO
    log_body: bool = False  # Visitor messages stay out of logs unless asked for
    body_preview_length: int = 100

    def send(self, message: EmailMessage) -> EmailResult:
        message_id = f"dev-{uuid4().hex[:12]}"

        self.sent_emails.append(
            SentEmail(
                id=message_id,
                recipient=str(message.recipient),
                subject=message.subject,
                body_html=message.body_html,
                body_text=message.body_text,
                sender=str(message.sender) if message.sender else None,
                reply_to=str(message.reply_to) if message.reply_to else None,
                logged_at=datetime.now(UTC),
            )
        )

        self._log_email(message, message_id)

        return EmailResult.skipped(
            str(message.recipient),
            message_id=message_id,
            reason="Dev mode - email logged, not sent",
        )

    def _log_email(self, message: EmailMessage, message_id: str) -> None:
        parts = [
            f"EMAIL (dev): To={message.recipient}",
            f"Subject={message.subject}",
        ]

        if message.reply_to:
            parts.append(f"ReplyTo={message.reply_to}")

        if self.log_body and message.body_text:
            preview = message.body_text[: self.body_preview_length]
            if len(message.body_text) > self.body_preview_length:
                preview += "..."
            parts.append(f"Body={preview}")

        parts.append(f"MessageID={message_id}")
        logger.log(self.log_level, ", ".join(parts))

    # --- Test Helper Methods ---

    def get_last_email(self) -> SentEmail | None:
        return self.sent_emails[-1] if self.sent_emails else None

    def clear(self) -> None:
        self.sent_emails.clear()

    @property
    def email_count(self) -> int:
        return len(self.sent_emails)
