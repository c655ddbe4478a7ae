"""
Client key-value storage port.

Small persistent string storage on the visitor's side (the browser's local
storage, or a file for a desktop/CLI client). Implementations may be
unavailable at any time; callers must treat a StorageError as "no value".
"""

from __future__ import annotations

from typing import Protocol


class KeyValueStoragePort(Protocol):
    def get_item(self, key: str) -> str | None:
        """Return the stored value or None when absent."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""
        ...

    def remove_item(self, key: str) -> None:
        """Remove a value; missing keys are ignored."""
        ...


class StorageError(Exception):
    """Storage backend unavailable or unreadable."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Storage unavailable: {reason}")
