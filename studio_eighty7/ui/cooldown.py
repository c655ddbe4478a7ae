"""
Advisory generation cooldown kept on the visitor's side.

One generation request per cooldown window. This is a UX guard only; the
API enforces the authoritative limit. When storage is missing or broken the
visitor is treated as not rate limited.
"""

from __future__ import annotations

import logging
import math
from datetime import UTC, datetime

from studio_eighty7.adapters.clock import SystemClock
from studio_eighty7.core.ports.storage import KeyValueStoragePort, StorageError
from studio_eighty7.core.ports.time import TimePort

logger = logging.getLogger(__name__)

STORAGE_KEY = "ai-oracle-last-request"


class ClientCooldown:
    def __init__(
        self,
        storage: KeyValueStoragePort | None,
        cooldown_seconds: int = 5,
        time_port: TimePort | None = None,
        debug: bool = False,
    ) -> None:
        self._storage = storage
        self.cooldown_seconds = cooldown_seconds
        self._time = time_port if time_port is not None else SystemClock()
        self._debug = debug

    def _log_storage_failure(self, action: str, error: Exception) -> None:
        if self._debug:
            logger.warning("Cooldown storage %s failed: %s", action, error)

    def _last_request_at(self) -> datetime | None:
        if self._storage is None:
            return None
        try:
            stored = self._storage.get_item(STORAGE_KEY)
        except StorageError as e:
            self._log_storage_failure("read", e)
            return None
        if not stored:
            return None
        try:
            return datetime.fromtimestamp(int(stored) / 1000, tz=UTC)
        except (ValueError, OverflowError, OSError):
            return None

    def remaining_seconds(self) -> int:
        """Whole seconds until the next request is allowed; 0 when allowed now."""
        last = self._last_request_at()
        if last is None:
            return 0

        elapsed = (self._time.now_utc() - last).total_seconds()
        if elapsed < self.cooldown_seconds:
            return math.ceil(self.cooldown_seconds - elapsed)

        self.clear()
        return 0

    def is_limited(self) -> bool:
        return self.remaining_seconds() > 0

    def record_request(self) -> None:
        if self._storage is None:
            return
        millis = int(self._time.now_utc().timestamp() * 1000)
        try:
            self._storage.set_item(STORAGE_KEY, str(millis))
        except StorageError as e:
            self._log_storage_failure("write", e)

    def clear(self) -> None:
        if self._storage is None:
            return
        try:
            self._storage.remove_item(STORAGE_KEY)
        except StorageError as e:
            self._log_storage_failure("clear", e)
