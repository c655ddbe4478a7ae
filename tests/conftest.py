import pytest

from studio_eighty7.adapters.clock import FrozenClock
from studio_eighty7.app_shell.config import Settings
from studio_eighty7.rules.loader import default_rules
from studio_eighty7.rules.models import Rules

TEST_ENV = {
    "GEMINI_API_KEY": "test-key-do-not-leak",
    "STUDIO_ENV": "development",
    "FRONTEND_URL": "http://localhost:3000",
}


@pytest.fixture
def rules() -> Rules:
    return default_rules()


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def settings() -> Settings:
    return Settings(environ=TEST_ENV)
