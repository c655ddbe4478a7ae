import pytest
from fastapi.testclient import TestClient

from studio_eighty7.api.main import create_app
from studio_eighty7.app_shell.config import Settings
from studio_eighty7.domain.errors import GENERIC_FAILURE_MESSAGE


class ExplodingSource:
    async def fetch(self, resource):
        raise RuntimeError("disk on fire")


def test_unknown_route_is_json_404(client) -> None:
    response = client.get("/api/nope")

    assert response.status_code == 404
    assert response.json() == {
        "error": "Not found",
        "message": "The requested endpoint does not exist",
    }


def test_wrong_method(client) -> None:
    response = client.get("/api/generate")

    assert response.status_code == 405


def test_security_headers(client) -> None:
    response = client.get("/health")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "SAMEORIGIN"
    assert "default-src 'self'" in response.headers["Content-Security-Policy"]
    assert "max-age=31536000" in response.headers["Strict-Transport-Security"]


def test_cors_preflight_for_frontend(client) -> None:
    response = client.options(
        "/api/generate",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


def test_cors_rejects_other_origins(client) -> None:
    response = client.post(
        "/api/generate",
        json={"topic": "Neon"},
        headers={"Origin": "https://evil.example"},
    )

    assert "access-control-allow-origin" not in response.headers


def test_health_is_never_rate_limited(client) -> None:
    for _ in range(20):
        response = client.get("/health")
        assert response.status_code == 200

    assert response.json() == {
        "status": "ok",
        "timestamp": "2025-01-01T12:00:00Z",
        "service": "studio-eighty7-backend",
    }


def test_unhandled_error_is_generic(app) -> None:
    app.state.content_source = ExplodingSource()
    client = TestClient(app, raise_server_exceptions=False)

    response = client.get("/api/content/albums")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error", "message": GENERIC_FAILURE_MESSAGE}
    assert "disk on fire" not in response.text


def test_apps_do_not_share_rate_limits(app, settings, rules, clock) -> None:
    other = create_app(settings, rules=rules, time_port=clock)

    assert other.state.rate_limiter is not app.state.rate_limiter


class TestStartup:
    def test_key_in_injected_settings_is_enough(self, monkeypatch, rules, clock) -> None:
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        app = create_app(Settings(environ={"GEMINI_API_KEY": "configured-key"}), rules=rules, time_port=clock)

        with TestClient(app) as client:
            assert client.get("/health").status_code == 200

    def test_missing_key_in_injected_settings_is_fatal(self, monkeypatch, rules, caplog) -> None:
        monkeypatch.setenv("GEMINI_API_KEY", "process-key")
        app = create_app(Settings(environ={}), rules=rules)

        with pytest.raises(SystemExit) as exc, TestClient(app):
            pass

        assert exc.value.code == 1
        assert "Missing required environment variables: GEMINI_API_KEY" in caplog.text
