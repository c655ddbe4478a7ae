"""
Tests for the health endpoint.
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from studio_eighty7.adapters.clock import FrozenClock
from studio_eighty7.shell.http.health import build_health_payload, create_health_router


@pytest.fixture
def app() -> FastAPI:
    app = FastAPI()
    app.include_router(create_health_router("studio-test", FrozenClock()))
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


class TestHealthEndpoint:
    def test_returns_ok(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "timestamp": "2025-01-01T12:00:00Z",
            "service": "studio-test",
        }

    def test_payload_builder(self) -> None:
        payload = build_health_payload("svc", FrozenClock())
        assert payload["status"] == "ok"
        assert payload["timestamp"].endswith("Z")
