"""
Contact form controller.

Validates every field locally before any network call and shows the
server's field error inline when the API still rejects the submission.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from studio_eighty7.domain.errors import StudioError, ValidationError
from studio_eighty7.domain.sanitize import CONTACT_FIELDS, collect_contact_errors
from studio_eighty7.rules.models import ValidationRules

logger = logging.getLogger(__name__)

SUBMIT_FAILURE_MESSAGE = "Unable to send message. Please try again."


class FormStatus(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


def _blank_values() -> dict[str, str]:
    return {name: "" for name in CONTACT_FIELDS}


@dataclass
class ContactFormView:
    values: dict[str, str] = field(default_factory=_blank_values)
    errors: dict[str, str] = field(default_factory=dict)
    status: FormStatus = FormStatus.IDLE
    submit_error: str = ""
    success_message: str = ""


class ContactApi(Protocol):
    async def submit_contact(self, name: str, email: str, message: str) -> str: ...


class ContactFormController:
    def __init__(
        self,
        api: ContactApi,
        *,
        rules: ValidationRules | None = None,
        debug: bool = False,
    ) -> None:
        self._api = api
        self._rules = rules
        self._debug = debug
        self.view = ContactFormView()

    def update_field(self, name: str, value: str) -> None:
        if name not in CONTACT_FIELDS:
            raise KeyError(name)
        self.view.values[name] = value
        self.view.errors.pop(name, None)

    @property
    def is_form_valid(self) -> bool:
        """Quick check that enables the submit button."""
        values = self.view.values
        return len(values["name"]) >= 2 and "@" in values["email"] and len(values["message"]) >= 10

    def validate(self) -> dict[str, str]:
        return collect_contact_errors(dict(self.view.values), self._rules)

    async def submit(self) -> ContactFormView:
        view = self.view
        view.submit_error = ""

        errors = self.validate()
        if errors:
            view.errors = errors
            return view

        view.errors = {}
        view.status = FormStatus.SUBMITTING
        try:
            message = await self._api.submit_contact(
                view.values["name"],
                view.values["email"],
                view.values["message"],
            )
        except ValidationError as e:
            view.errors = {e.field: e.message}
            view.status = FormStatus.ERROR
            return view
        except StudioError as e:
            if self._debug:
                logger.error("Contact submission failed: %s", type(e).__name__)
            view.submit_error = e.message or SUBMIT_FAILURE_MESSAGE
            view.status = FormStatus.ERROR
            return view

        view.status = FormStatus.SUCCESS
        view.success_message = message
        view.values = _blank_values()
        return view

    def reset_status(self) -> None:
        """Return to idle after the success banner times out."""
        self.view.status = FormStatus.IDLE
        self.view.success_message = ""
