import logging
import os
from collections.abc import Mapping
from pathlib import Path

from studio_eighty7.rules.loader import DEFAULT_RULES_PATH
from studio_eighty7.rules.models import Rules

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3001
DEFAULT_FRONTEND_URL = "http://localhost:3000"
DEFAULT_CONTACT_RECIPIENT = "info@studioeighty7.com"


class ConfigurationError(RuntimeError):
    """Startup cannot continue with the current environment."""


class Settings:
    """Environment-driven settings, read once at startup."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        env = dict(os.environ if environ is None else environ)
        self.environ = env

        self.gemini_api_key = env.get("GEMINI_API_KEY", "")
        self.port = _parse_port(env.get("PORT", str(DEFAULT_PORT)))
        self.frontend_url = env.get("FRONTEND_URL", DEFAULT_FRONTEND_URL)
        self.gemini_model = env.get("GEMINI_MODEL") or None
        self.content_source_url = env.get("CONTENT_SOURCE_URL") or None
        self.environment = env.get("STUDIO_ENV", "development")
        rules_path = env.get("STUDIO_RULES_PATH")
        self.rules_path = Path(rules_path) if rules_path else DEFAULT_RULES_PATH
        self.contact_recipient = env.get("CONTACT_RECIPIENT", DEFAULT_CONTACT_RECIPIENT)
        # Peers whose X-Forwarded-For is believed; empty means use the socket peer
        self.trusted_proxies = frozenset(
            p.strip() for p in env.get("TRUSTED_PROXIES", "").split(",") if p.strip()
        )

    @property
    def is_development(self) -> bool:
        return self.environment != "production"

    def __repr__(self) -> str:
        # Never render the credential
        key_state = "set" if self.gemini_api_key else "missing"
        return (
            f"Settings(port={self.port}, frontend_url={self.frontend_url!r}, "
            f"environment={self.environment!r}, gemini_api_key=<{key_state}>)"
        )


def _parse_port(value: str) -> int:
    try:
        port = int(value)
    except ValueError as e:
        raise ConfigurationError(f"PORT must be an integer, got {value!r}") from e
    if not 0 < port < 65536:
        raise ConfigurationError(f"PORT out of range: {port}")
    return port


def validate_ops_rules(rules: Rules, environ: Mapping[str, str] | None = None) -> None:
    """
    Validate operational requirements before startup.

    Raises ConfigurationError listing every missing required variable.
    """
    env = os.environ if environ is None else environ

    missing = [name for name in rules.ops.required_env if not env.get(name)]
    if missing:
        raise ConfigurationError(
            f"Missing required environment variables: {', '.join(missing)}"
        )

    logger.info("Configuration validated.")
