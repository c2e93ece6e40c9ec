"""Contracts for the collaborators a voice command session depends on."""

from __future__ import annotations

from typing import Any, AsyncGenerator, Protocol

from voice_action.agent.payloads import AgentResponse, ParsedResult
from voice_action.models import CaptureEvent


class SpeechCapture(Protocol):
    """Streams transcript updates from a speech recognition source."""

    def start(self) -> AsyncGenerator[CaptureEvent, None]:
        """Begin capture and yield accumulated transcript updates and terminal signals."""

    async def stop(self) -> None:
        """Release the capture source and wait until it is free. Must be safe to call more than once."""


class AgentInvoker(Protocol):
    """Sends a natural-language command to the remote agent."""

    async def invoke(self, command_text: str, agent_id: str) -> AgentResponse:
        """Return the agent's response envelope for ``command_text``."""


class ResultParser(Protocol):
    """Extracts structured fields from the agent's raw result text."""

    def parse(self, raw: Any) -> ParsedResult | None:
        """Return parsed fields, or ``None`` when nothing usable was found."""


class Clipboard(Protocol):
    def copy(self, text: str) -> bool:
        """Write ``text`` to the clipboard and report success."""


class KeyValueStore(Protocol):
    """Durable string storage used for history persistence."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...
