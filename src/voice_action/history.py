"""Most-recent-first log of completed command records."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from datetime import datetime, timezone

from voice_action.interfaces import KeyValueStore
from voice_action.models import CommandRecord

DEFAULT_HISTORY_KEY = "voiceaction-history"


class HistoryStore:
    """Ordered command history with substring search and key-value persistence."""

    def __init__(
        self,
        storage: KeyValueStore,
        *,
        key: str = DEFAULT_HISTORY_KEY,
        logger: logging.Logger | None = None,
    ) -> None:
        self._storage = storage
        self._key = key
        self._logger = logger or logging.getLogger("voice_action.history")
        self._records: list[CommandRecord] = []

    @property
    def records(self) -> tuple[CommandRecord, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CommandRecord]:
        return iter(tuple(self._records))

    def append(self, record: CommandRecord) -> None:
        """Insert ``record`` ahead of all existing entries."""
        self._records = [record, *self._records]
        self._logger.info("history_appended", extra={"record_id": record.id, "size": len(self._records)})

    def get(self, record_id: str) -> CommandRecord:
        for record in self._records:
            if record.id == record_id:
                return record
        raise KeyError(f"Unknown command record id: {record_id}")

    def filter(self, query: str | None) -> list[CommandRecord]:
        """Return records whose command, title or type contains ``query``, case-insensitively."""
        if not query or not query.strip():
            return list(self._records)

        needle = query.lower()
        return [
            record
            for record in self._records
            if needle in (record.command or "").lower()
            or needle in (record.title or "").lower()
            or needle in (record.command_type or "").lower()
        ]

    def count_label(self) -> str:
        count = len(self._records)
        return f"{count} command{'' if count == 1 else 's'}"

    def load_all(self) -> list[CommandRecord]:
        """Replace in-memory records with the persisted sequence.

        A missing or malformed payload leaves the store empty.
        """
        raw = self._storage.get(self._key)
        self._records = []
        if raw is None:
            return []

        try:
            payload = json.loads(raw)
            if not isinstance(payload, list):
                raise ValueError("history payload is not a list")
            records = [_record_from_dict(item) for item in payload]
        except (ValueError, TypeError, KeyError) as exc:
            self._logger.warning("history_load_failed", extra={"key": self._key, "error": str(exc)})
            return []

        self._records = records
        self._logger.info("history_loaded", extra={"key": self._key, "size": len(records)})
        return list(records)

    def persist(self) -> bool:
        """Write the full ordered history. An empty store is never written."""
        snapshot = tuple(self._records)
        if not snapshot:
            return False

        self._storage.set(self._key, json.dumps([_record_to_dict(record) for record in snapshot]))
        self._logger.info("history_persisted", extra={"key": self._key, "size": len(snapshot)})
        return True


def _record_to_dict(record: CommandRecord) -> dict:
    return {
        "id": record.id,
        "command": record.command,
        "intent": record.intent,
        "title": record.title,
        "content": record.content,
        "commandType": record.command_type,
        "timestamp": record.timestamp.isoformat(),
    }


def _record_from_dict(item: dict) -> CommandRecord:
    if not isinstance(item, dict):
        raise TypeError("history entry is not an object")
    return CommandRecord(
        id=_required_text(item, "id"),
        command=_required_text(item, "command"),
        intent=_optional_text(item, "intent") or "assist",
        title=_optional_text(item, "title") or "Response",
        content=_optional_text(item, "content") or "",
        command_type=_optional_text(item, "commandType") or "Generate",
        timestamp=_parse_timestamp(item["timestamp"]),
    )


def _required_text(item: dict, key: str) -> str:
    value = item[key]
    if not isinstance(value, str):
        raise TypeError(f"history field {key!r} is not a string")
    return value


def _optional_text(item: dict, key: str) -> str | None:
    value = item.get(key)
    if value is not None and not isinstance(value, str):
        raise TypeError(f"history field {key!r} is not a string")
    return value


def _parse_timestamp(value: str) -> datetime:
    if not isinstance(value, str):
        raise TypeError("timestamp is not a string")
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
