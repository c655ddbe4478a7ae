"""
Client storage adapters (KeyValueStoragePort implementations).

JsonFileStorage persists values as one JSON object on disk.
InMemoryStorage keeps them for the lifetime of the process.
"""

from __future__ import annotations

import json
from pathlib import Path

from studio_eighty7.core.ports.storage import StorageError


class JsonFileStorage:
    """
    Filesystem implementation of KeyValueStoragePort.

    Every operation reads the file fresh so several clients sharing a file see
    each other's writes. OS and decode failures surface as StorageError.
    """

    def __init__(self, path: str | Path, *, create_dirs: bool = True) -> None:
        self.path = Path(path)
        if create_dirs:
            self.path.parent.mkdir(parents=True, exist_ok=True)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise StorageError(str(e)) from e
        if not isinstance(data, dict):
            raise StorageError(f"{self.path} does not hold a JSON object")
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, data: dict[str, str]) -> None:
        try:
            self.path.write_text(json.dumps(data, sort_keys=True), encoding="utf-8")
        except OSError as e:
            raise StorageError(str(e)) from e

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)


class InMemoryStorage:
    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)
