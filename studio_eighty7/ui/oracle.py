"""
Oracle form controller.

Drives the slogan generator: checks the topic locally, enforces the advisory
cooldown, calls the API and turns failures into one friendly line.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from studio_eighty7.domain.errors import (
    RateLimitError,
    StudioError,
    TransientNetworkError,
    ValidationError,
)
from studio_eighty7.domain.sanitize import sanitize_topic
from studio_eighty7.rules.loader import default_rules
from studio_eighty7.rules.models import ValidationRules
from studio_eighty7.ui.api_client import ConnectionFailedError
from studio_eighty7.ui.cooldown import ClientCooldown

logger = logging.getLogger(__name__)

EMPTY_TOPIC_MESSAGE = "Please enter a vibe or topic"
COOLDOWN_MESSAGE = "Please wait before making another request"


class OracleStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class OracleView:
    status: OracleStatus = OracleStatus.IDLE
    result: str = ""
    validation_error: str = ""
    cooldown_remaining: int = 0

    @property
    def quoted_result(self) -> str:
        if self.status != OracleStatus.SUCCESS:
            return ""
        return f'"{self.result}"'


class GenerationApi(Protocol):
    async def generate(self, topic: str) -> str: ...


def failure_message(error: StudioError) -> str:
    """One friendly line per failure class."""
    if isinstance(error, RateLimitError):
        return "Too many requests. Please wait a moment."
    if isinstance(error, ConnectionFailedError):
        return "Connection issue. Check your network."
    if isinstance(error, TransientNetworkError):
        return "Request timed out. Try again."
    return "Something went wrong. Please try again."


class OracleController:
    def __init__(
        self,
        api: GenerationApi,
        cooldown: ClientCooldown,
        *,
        rules: ValidationRules | None = None,
        debug: bool = False,
    ) -> None:
        self._api = api
        self._cooldown = cooldown
        self._rules = rules or default_rules().validation
        self._debug = debug
        self.view = OracleView()

    def tick(self) -> int:
        """Refresh the countdown; called once a second by the UI."""
        self.view.cooldown_remaining = self._cooldown.remaining_seconds()
        return self.view.cooldown_remaining

    async def consult(self, topic: str) -> OracleView:
        view = self.view
        view.validation_error = ""

        trimmed = topic.strip()
        if not trimmed:
            view.validation_error = EMPTY_TOPIC_MESSAGE
            return view

        max_length = self._rules.topic.max
        if len(trimmed) > max_length:
            view.validation_error = f"Topic must be {max_length} characters or less"
            return view

        remaining = self._cooldown.remaining_seconds()
        if remaining > 0:
            view.cooldown_remaining = remaining
            view.validation_error = COOLDOWN_MESSAGE
            return view

        try:
            sanitized = sanitize_topic(trimmed, self._rules)
        except ValidationError as e:
            view.validation_error = e.message
            return view

        if view.status == OracleStatus.LOADING:
            return view

        view.status = OracleStatus.LOADING
        view.result = ""

        self._cooldown.record_request()
        view.cooldown_remaining = self._cooldown.cooldown_seconds

        try:
            text = await self._api.generate(sanitized)
        except StudioError as e:
            if self._debug:
                logger.error("Oracle request failed: %s", type(e).__name__)
            view.result = failure_message(e)
            view.status = OracleStatus.ERROR
            return view

        view.result = text
        view.status = OracleStatus.SUCCESS
        return view
