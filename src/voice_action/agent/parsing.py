"""Lenient extraction of structured fields from agent result text."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from voice_action.agent.payloads import ParsedResult

_FENCE_RE = re.compile(r"^```(?:json|JSON)?\s*(.*?)\s*```$", re.DOTALL)


class JsonResultParser:
    """Turns whatever the agent returned into a :class:`ParsedResult`.

    Accepts mappings as-is, JSON text (optionally wrapped in a markdown code
    fence), or prose containing a single JSON object. Anything else yields
    ``None`` so callers fall back to defaults.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("voice_action.agent.parsing")

    def parse(self, raw: Any) -> ParsedResult | None:
        data = self._to_mapping(raw)
        if data is None:
            return None

        try:
            return ParsedResult.model_validate(data)
        except ValidationError:
            self._logger.debug("agent_result_partially_invalid", extra={"keys": sorted(data)})
            return ParsedResult.model_validate(
                {key: value for key, value in data.items() if isinstance(value, str)}
            )

    def _to_mapping(self, raw: Any) -> dict[str, Any] | None:
        if isinstance(raw, dict):
            return raw
        if not isinstance(raw, str):
            return None

        text = raw.strip()
        fenced = _FENCE_RE.match(text)
        if fenced:
            text = fenced.group(1)

        decoded = self._loads(text)
        if decoded is None:
            start, end = text.find("{"), text.rfind("}")
            if start >= 0 and end > start:
                decoded = self._loads(text[start : end + 1])

        if isinstance(decoded, str):
            decoded = self._loads(decoded)
        return decoded if isinstance(decoded, dict) else None

    @staticmethod
    def _loads(text: str) -> Any:
        try:
            return json.loads(text)
        except ValueError:
            return None
