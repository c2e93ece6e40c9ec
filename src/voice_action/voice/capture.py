"""In-process speech capture sources."""

from __future__ import annotations

import asyncio
from typing import AsyncGenerator, Iterable

from voice_action.models import CaptureEvent, CaptureEventKind


class ScriptedCapture:
    """Replays a fixed sequence of capture events.

    Useful for typed input and for driving sessions deterministically. After
    the script is exhausted the stream stays open until :meth:`stop` is called,
    mirroring a microphone that keeps listening.
    """

    def __init__(self, events: Iterable[CaptureEvent] = (), *, delay_seconds: float = 0.0) -> None:
        self._events = tuple(events)
        self._delay_seconds = delay_seconds
        self._stopped = asyncio.Event()
        self.start_count = 0
        self.stop_count = 0

    @classmethod
    def from_phrases(cls, *phrases: str, delay_seconds: float = 0.0) -> ScriptedCapture:
        """Build a capture that accumulates ``phrases`` into a growing transcript."""
        events = []
        transcript = ""
        for phrase in phrases:
            transcript = f"{transcript} {phrase}".strip()
            events.append(CaptureEvent.update(transcript))
        return cls(events, delay_seconds=delay_seconds)

    @classmethod
    def unsupported(cls) -> ScriptedCapture:
        return cls([CaptureEvent(kind=CaptureEventKind.UNSUPPORTED)])

    async def start(self) -> AsyncGenerator[CaptureEvent, None]:
        self.start_count += 1
        self._stopped = asyncio.Event()
        for event in self._events:
            if self._delay_seconds:
                await asyncio.sleep(self._delay_seconds)
            if self._stopped.is_set():
                return
            yield event
        await self._stopped.wait()

    async def stop(self) -> None:
        self.stop_count += 1
        self._stopped.set()
