"""
Contact component ports.
"""

from __future__ import annotations

from typing import Protocol

from studio_eighty7.core.ports.email import EmailMessage, EmailResult


class ContactMailerPort(Protocol):
    """
    Delivery collaborator for validated submissions.

    Any EmailPort implementation satisfies it.
    """

    def send(self, message: EmailMessage) -> EmailResult:
        """Deliver the message; report failures in the result."""
        ...
