"""
Contact component unit tests.

Covers server-side validation order, the delivery hand-off and best-effort
delivery semantics.
"""

from __future__ import annotations

import pytest

from studio_eighty7.adapters.dev_email import DevEmailAdapter
from studio_eighty7.components.contact import (
    ContactConfig,
    ContactInput,
    build_contact_email,
    run,
)
from studio_eighty7.core.ports.email import EmailMessage, EmailResult, EmailStatus
from studio_eighty7.domain.entities import ContactSubmission
from studio_eighty7.domain.errors import ValidationError

VALID = {
    "name": "Jane Doe",
    "email": "Jane@Example.com",
    "message": "Looking to record an EP <soon> & mix it.",
}

# --- Fake Mailers ---


class FailingMailer:
    def send(self, message: EmailMessage) -> EmailResult:
        return EmailResult.failed(str(message.recipient), "provider down")


class RaisingMailer:
    def send(self, message: EmailMessage) -> EmailResult:
        raise ConnectionError("smtp unreachable")


@pytest.fixture
def mailer() -> DevEmailAdapter:
    return DevEmailAdapter()


class TestRun:
    def test_valid_submission_is_acknowledged_and_delivered(self, mailer: DevEmailAdapter) -> None:
        result = run(ContactInput(fields=VALID), mailer=mailer)

        assert result.success is True
        assert result.message == "Message received successfully"
        assert result.delivery_status == EmailStatus.SKIPPED

        sent = mailer.get_last_email()
        assert sent is not None
        assert sent.subject == "New Contact Form Message from Jane Doe"
        assert "jane@example.com" in sent.body_text
        assert "&lt;soon&gt; &amp; mix" in sent.body_html
        assert "<soon>" not in sent.body_html

    def test_short_message_is_field_error(self, mailer: DevEmailAdapter) -> None:
        with pytest.raises(ValidationError) as exc:
            run(ContactInput(fields={**VALID, "message": "Hi"}), mailer=mailer)

        assert exc.value.field == "message"
        assert exc.value.message == "Message must be at least 10 characters"
        assert mailer.email_count == 0

    def test_first_failing_field_wins(self, mailer: DevEmailAdapter) -> None:
        with pytest.raises(ValidationError) as exc:
            run(ContactInput(fields={"name": "Jane", "email": "nope", "message": "x"}), mailer=mailer)

        assert exc.value.field == "email"

    def test_failed_delivery_still_succeeds(self) -> None:
        result = run(ContactInput(fields=VALID), mailer=FailingMailer())

        assert result.success is True
        assert result.delivery_status == EmailStatus.FAILED

    def test_raising_mailer_still_succeeds(self, caplog: pytest.LogCaptureFixture) -> None:
        result = run(ContactInput(fields=VALID), mailer=RaisingMailer())

        assert result.success is True
        assert result.delivery_status == EmailStatus.FAILED
        assert "Contact delivery raised" in caplog.text

    def test_recipient_from_config(self, mailer: DevEmailAdapter) -> None:
        run(ContactInput(fields=VALID), mailer=mailer, config=ContactConfig(recipient="bookings@example.com"))

        sent = mailer.get_last_email()
        assert sent is not None
        assert "bookings@example.com" in sent.recipient


class TestBuildContactEmail:
    def test_reply_to_is_the_visitor(self) -> None:
        submission = ContactSubmission(name="Jane", email="jane@example.com", message="Hello there, studio!")

        message = build_contact_email(submission, ContactConfig())

        assert message.reply_to is not None
        assert message.reply_to.email == "jane@example.com"
        assert message.recipient.email == "info@studioeighty7.com"
