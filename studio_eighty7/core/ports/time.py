"""
Time port.

Rate limiting, the client cooldown and content defaults read the clock
through this protocol so tests can drive time deterministically.
All timestamps are timezone-aware UTC.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol


class TimePort(Protocol):
    """Protocol for time operations."""

    def now_utc(self) -> datetime:
        """Return current UTC time."""
        ...
