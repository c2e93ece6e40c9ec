"""Durable key-value stores backing history persistence."""

from __future__ import annotations

import json
import logging
from pathlib import Path


class InMemoryKeyValueStore:
    """Process-local key-value store."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFileKeyValueStore:
    """Simple JSON-file-backed key-value persistence."""

    def __init__(self, file_path: str | Path, logger: logging.Logger | None = None) -> None:
        self._path = Path(file_path).expanduser()
        self._logger = logger or logging.getLogger("voice_action.storage")

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        values = self._read()
        values[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(values), encoding="utf-8")
        tmp_path.replace(self._path)

    def _read(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            values = json.loads(self._path.read_text(encoding="utf-8"))
        except ValueError:
            self._logger.warning("key_value_file_corrupt", extra={"path": str(self._path)})
            return {}
        return values if isinstance(values, dict) else {}
