"""
Per-client rate limiting for the API endpoints.

Each endpoint class has its own sliding window policy. Accepted request
timestamps live in a RateLimitStore owned by the application instance.

Check-and-record is atomic within one process. Several processes sharing one
limit would need a shared store with an atomic check-and-set.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from threading import Lock

from studio_eighty7.adapters.clock import SystemClock
from studio_eighty7.core.ports.time import TimePort
from studio_eighty7.rules.models import RateLimitRules, RateLimitWindow


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    retry_after_seconds: int = 0


class RateLimitStore:
    """Accepted request timestamps keyed by ``endpoint_class:client_key``."""

    def __init__(self) -> None:
        self._history: dict[str, list[datetime]] = {}

    def recent(self, key: str, cutoff: datetime) -> list[datetime]:
        """Drop entries at or before cutoff and return what is left."""
        kept = [t for t in self._history.get(key, []) if t > cutoff]
        if kept:
            self._history[key] = kept
        else:
            self._history.pop(key, None)
        return kept

    def record(self, key: str, at: datetime) -> None:
        self._history.setdefault(key, []).append(at)

    def clear(self) -> None:
        self._history.clear()

    def __len__(self) -> int:
        return len(self._history)


class RateLimiter:
    def __init__(
        self,
        rules: RateLimitRules,
        store: RateLimitStore | None = None,
        time_port: TimePort | None = None,
    ):
        self.rules = rules
        self.store = store if store is not None else RateLimitStore()
        self._time = time_port if time_port is not None else SystemClock()
        self._lock = Lock()

    def allow_request(self, key: str, window: int, limit: int) -> RateLimitDecision:
        """
        Check if request is allowed.
        If allowed, records the attempt.
        If denied, reports the seconds until the oldest attempt leaves the window.
        """
        if limit <= 0:
            return RateLimitDecision(allowed=False, retry_after_seconds=window)

        with self._lock:
            now = self._time.now_utc()
            recent = self.store.recent(key, now - timedelta(seconds=window))

            if len(recent) >= limit:
                frees_at = recent[0] + timedelta(seconds=window)
                wait = math.ceil((frees_at - now).total_seconds())
                return RateLimitDecision(allowed=False, retry_after_seconds=max(wait, 1))

            self.store.record(key, now)
            return RateLimitDecision(allowed=True)

    def policy(self, endpoint_class: str) -> RateLimitWindow:
        if endpoint_class == "generate":
            return self.rules.generate
        if endpoint_class == "contact":
            return self.rules.contact
        raise KeyError(f"No rate limit policy for endpoint class: {endpoint_class}")

    def check(self, endpoint_class: str, client_key: str) -> RateLimitDecision:
        cfg = self.policy(endpoint_class)
        return self.allow_request(
            f"{endpoint_class}:{client_key}", cfg.window_seconds, cfg.max_requests
        )

    def check_generate(self, ip: str) -> RateLimitDecision:
        return self.check("generate", ip)

    def check_contact(self, ip: str) -> RateLimitDecision:
        return self.check("contact", ip)

    def is_exempt(self, path: str) -> bool:
        return path in self.rules.exempt_paths
