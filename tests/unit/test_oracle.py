"""
Tests for the oracle (slogan generator) controller.
"""

from __future__ import annotations

import asyncio

import pytest

from studio_eighty7.adapters.clock import FrozenClock
from studio_eighty7.adapters.local_storage import InMemoryStorage
from studio_eighty7.domain.errors import (
    RateLimitError,
    StudioError,
    TransientNetworkError,
    UpstreamUnavailableError,
)
from studio_eighty7.ui.api_client import ConnectionFailedError
from studio_eighty7.ui.cooldown import ClientCooldown
from studio_eighty7.ui.oracle import (
    COOLDOWN_MESSAGE,
    EMPTY_TOPIC_MESSAGE,
    OracleController,
    OracleStatus,
    failure_message,
)


class FakeApi:
    def __init__(self, text: str = "Neon rain on a midnight verse.", error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.topics: list[str] = []

    async def generate(self, topic: str) -> str:
        self.topics.append(topic)
        if self.error:
            raise self.error
        return self.text


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def cooldown(clock) -> ClientCooldown:
    return ClientCooldown(InMemoryStorage(), cooldown_seconds=5, time_port=clock)


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def oracle(api, cooldown) -> OracleController:
    return OracleController(api, cooldown)


class TestLateNightScenario:
    def test_late_night_end_to_end(self, oracle, api, clock):
        view = asyncio.run(oracle.consult("Late Night"))

        assert api.topics == ["Late Night"]
        assert view.status == OracleStatus.SUCCESS
        assert view.quoted_result == '"Neon rain on a midnight verse."'
        assert view.cooldown_remaining == 5

        countdown = []
        for _ in range(5):
            clock.advance(1)
            countdown.append(oracle.tick())
        assert countdown == [4, 3, 2, 1, 0]


class TestLocalChecks:
    def test_empty_topic_blocks_without_call(self, oracle, api):
        view = asyncio.run(oracle.consult("   "))

        assert view.validation_error == EMPTY_TOPIC_MESSAGE
        assert api.topics == []

    def test_long_topic_blocks_without_call(self, oracle, api):
        view = asyncio.run(oracle.consult("x" * 201))

        assert view.validation_error == "Topic must be 200 characters or less"
        assert api.topics == []

    def test_markup_only_topic_blocks(self, oracle, api):
        view = asyncio.run(oracle.consult("<script>alert(1)</script>"))

        assert view.validation_error == "Please provide a valid topic"
        assert api.topics == []

    def test_topic_is_sanitized_before_sending(self, oracle, api):
        asyncio.run(oracle.consult("Late <b>Night</b>"))
        assert api.topics == ["Late Night"]

    def test_cooldown_blocks_second_request(self, oracle, api, clock):
        asyncio.run(oracle.consult("Late Night"))
        clock.advance(2)

        view = asyncio.run(oracle.consult("Early Morning"))

        assert view.validation_error == COOLDOWN_MESSAGE
        assert view.cooldown_remaining == 3
        assert api.topics == ["Late Night"]

    def test_after_cooldown_a_new_request_goes_through(self, oracle, api, clock):
        asyncio.run(oracle.consult("Late Night"))
        clock.advance(5)

        asyncio.run(oracle.consult("Early Morning"))

        assert api.topics == ["Late Night", "Early Morning"]


class TestFailures:
    @pytest.mark.parametrize(
        "error, message",
        [
            (RateLimitError(), "Too many requests. Please wait a moment."),
            (ConnectionFailedError(), "Connection issue. Check your network."),
            (TransientNetworkError(), "Request timed out. Try again."),
            (UpstreamUnavailableError(), "Something went wrong. Please try again."),
            (StudioError(), "Something went wrong. Please try again."),
        ],
    )
    def test_failure_lines(self, cooldown, error, message):
        oracle = OracleController(FakeApi(error=error), cooldown)

        view = asyncio.run(oracle.consult("Late Night"))

        assert view.status == OracleStatus.ERROR
        assert view.result == message
        assert view.quoted_result == ""

    def test_failure_message_never_echoes_server_text(self):
        assert "signal" not in failure_message(UpstreamUnavailableError("The signal is lost."))
