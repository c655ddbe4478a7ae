"""
ContactService component.

Server-side handling of contact form submissions.

Key behaviors:
- Every field is re-validated here regardless of client-side checks
- First failing field wins (name, then email, then message)
- Valid submissions are handed to the mailer and acknowledged
- Delivery is best-effort: a mailer failure is logged and never reported to
  the visitor as a validation problem
"""

from __future__ import annotations

import logging

from studio_eighty7.components.contact.models import (
    ContactConfig,
    ContactInput,
    ContactOutput,
)
from studio_eighty7.components.contact.ports import ContactMailerPort
from studio_eighty7.core.ports.email import (
    EmailAddress,
    EmailMessage,
    EmailResult,
    EmailStatus,
)
from studio_eighty7.domain.entities import ContactSubmission
from studio_eighty7.domain.sanitize import validate_contact
from studio_eighty7.rules.models import ValidationRules

logger = logging.getLogger(__name__)


# --- Pure Functions ---


def build_contact_email(submission: ContactSubmission, config: ContactConfig) -> EmailMessage:
    """Compose the notification sent to the studio inbox."""
    body_text = (
        f"From: {submission.name} ({submission.email})\n\n"
        f"Message:\n{submission.message}"
    )
    body_html = (
        f"<p><strong>From:</strong> {submission.name} ({submission.email})</p>"
        f"<p>{submission.message}</p>"
    )
    return EmailMessage(
        recipient=EmailAddress(config.recipient, config.site_name),
        subject=config.subject_template.format(name=submission.name),
        body_html=body_html,
        body_text=body_text,
        reply_to=EmailAddress(submission.email, submission.name),
    )


def deliver(
    submission: ContactSubmission,
    mailer: ContactMailerPort,
    config: ContactConfig,
) -> EmailResult:
    """Hand the submission to the mailer without letting it fail the request."""
    message = build_contact_email(submission, config)
    try:
        result = mailer.send(message)
    except Exception as e:
        logger.exception("Contact delivery raised")
        return EmailResult.failed(config.recipient, type(e).__name__)

    if result.status == EmailStatus.FAILED:
        logger.warning("Contact delivery failed: %s", result.error)
    return result


# --- Component Entry Point ---


def run(
    inp: ContactInput,
    *,
    mailer: ContactMailerPort,
    config: ContactConfig | None = None,
    rules: ValidationRules | None = None,
) -> ContactOutput:
    """
    Validate and deliver a contact submission.

    Raises:
        ValidationError: first failing field
    """
    config = config or ContactConfig()
    submission = validate_contact(inp.fields, rules)

    logger.info("Contact form submission from: %s (%s)", submission.email, submission.name)

    result = deliver(submission, mailer, config)

    logger.info(
        "Contact form message received: from=%s name=%s message_length=%d delivery=%s",
        submission.email,
        submission.name,
        len(submission.message),
        result.status.value,
    )

    return ContactOutput(
        success=True,
        message=config.acknowledgement,
        delivery_status=result.status,
    )
