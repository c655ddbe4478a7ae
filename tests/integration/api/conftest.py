import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from studio_eighty7.adapters.clock import FrozenClock
from studio_eighty7.adapters.dev_email import DevEmailAdapter
from studio_eighty7.api.main import create_app
from studio_eighty7.app_shell.config import Settings
from studio_eighty7.components.content import ContentFetcher
from studio_eighty7.rules.models import Rules


class FakeGenerator:
    """Stands in for the Gemini client; records prompts, replays a script."""

    def __init__(self) -> None:
        self.text = "Steel strings, midnight sparks."
        self.error: Exception | None = None
        self.prompts: list[str] = []

    async def generate_text(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text


def content_not_found(request: httpx.Request) -> httpx.Response:
    return httpx.Response(404, json={"code": "rest_no_route"})


# --- Fixtures ---
@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def mailer() -> DevEmailAdapter:
    return DevEmailAdapter()


@pytest.fixture
def app(
    settings: Settings,
    rules: Rules,
    clock: FrozenClock,
    generator: FakeGenerator,
    mailer: DevEmailAdapter,
) -> FastAPI:
    app = create_app(settings, rules=rules, mailer=mailer, time_port=clock)
    app.state.text_generator = generator
    app.state.content_source = ContentFetcher(
        httpx.AsyncClient(transport=httpx.MockTransport(content_not_found)),
        rules=rules.content,
        time_port=clock,
    )
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
