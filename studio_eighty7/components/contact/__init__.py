"""
Contact component.

Validation and best-effort delivery of contact form submissions.
"""

from studio_eighty7.components.contact.component import (
    build_contact_email,
    deliver,
    run,
)
from studio_eighty7.components.contact.models import (
    ContactConfig,
    ContactInput,
    ContactOutput,
)
from studio_eighty7.components.contact.ports import ContactMailerPort

__all__ = [
    "run",
    "build_contact_email",
    "deliver",
    "ContactConfig",
    "ContactInput",
    "ContactOutput",
    "ContactMailerPort",
]
