"""Voice command session: capture, review, dispatch and present one command."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Callable, Union

from voice_action.agent.payloads import AgentResponse, ParsedResult
from voice_action.errors import CaptureUnavailableError
from voice_action.history import HistoryStore
from voice_action.interfaces import AgentInvoker, Clipboard, ResultParser, SpeechCapture
from voice_action.models import CaptureEventKind, CommandRecord
from voice_action.presentation import format_elapsed

AGENT_ERROR_MESSAGE = "Agent returned an error. Please try again."
NETWORK_ERROR_MESSAGE = "Network error. Please try again."


@dataclass(frozen=True, slots=True)
class Closed:
    transcript: str = ""


@dataclass(frozen=True, slots=True)
class Recording:
    transcript: str = ""
    elapsed_seconds: int = 0


@dataclass(frozen=True, slots=True)
class Preview:
    transcript: str = ""
    speech_supported: bool = True


@dataclass(frozen=True, slots=True)
class Processing:
    transcript: str
    generation: int


@dataclass(frozen=True, slots=True)
class Result:
    transcript: str
    record: CommandRecord


@dataclass(frozen=True, slots=True)
class Error:
    transcript: str
    message: str


SessionState = Union[Closed, Recording, Preview, Processing, Result, Error]


class VoiceCommandSession:
    """State machine for one voice command, from capture to result.

    All methods must be called from within a running event loop. Triggers that
    are not legal in the current state are ignored. Agent responses that arrive
    after the session was closed, reopened or regenerated are discarded.
    Capture is fully released before the session leaves ``Recording``.
    """

    def __init__(
        self,
        *,
        capture: SpeechCapture,
        agent: AgentInvoker,
        parser: ResultParser,
        history: HistoryStore,
        agent_id: str,
        tick_seconds: float = 1.0,
        clock: Callable[[], datetime] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._capture = capture
        self._agent = agent
        self._parser = parser
        self._history = history
        self._agent_id = agent_id
        self._tick_seconds = tick_seconds
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._logger = logger or logging.getLogger("voice_action.session")

        self._state: SessionState = Closed()
        self._generation = 0
        self._speech_supported = True
        self._copy_feedback = False
        self._capturing = False
        self._capture_task: asyncio.Task[None] | None = None
        self._timer_task: asyncio.Task[None] | None = None
        self._capture_lock = asyncio.Lock()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def closed(self) -> bool:
        return isinstance(self._state, Closed)

    @property
    def speech_supported(self) -> bool:
        return self._speech_supported

    @property
    def copy_feedback(self) -> bool:
        return self._copy_feedback

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def elapsed_label(self) -> str:
        if isinstance(self._state, Recording):
            return format_elapsed(self._state.elapsed_seconds)
        return format_elapsed(0)

    @property
    def header_label(self) -> str:
        state = self._state
        if isinstance(state, Recording):
            return "Listening..."
        if isinstance(state, Preview):
            return "Review Command"
        if isinstance(state, Processing):
            return "Processing..."
        if isinstance(state, Result):
            return state.record.title or "Result"
        if isinstance(state, Closed):
            return "Closed"
        return "Error"

    async def open(self, preset_text: str | None = None) -> SessionState:
        """Reset the session and start capture, or jump to review when text is preset."""
        self._generation += 1
        generation = self._generation
        await self._teardown_capture()
        if generation != self._generation:
            return self._state

        self._speech_supported = True
        self._copy_feedback = False
        if preset_text:
            self._state = Preview(transcript=preset_text, speech_supported=True)
        else:
            self._enter_recording()
        self._logger.info(
            "session_opened",
            extra={"preset": bool(preset_text), "state": type(self._state).__name__},
        )
        return self._state

    async def stop_recording(self) -> SessionState:
        """Release capture, then freeze the transcript captured so far and move to review."""
        if not isinstance(self._state, Recording):
            return self._ignore("stop_recording")

        generation = self._generation
        await self._teardown_capture()
        if generation != self._generation or not isinstance(self._state, Recording):
            return self._state

        self._state = Preview(transcript=self._state.transcript, speech_supported=self._speech_supported)
        return self._state

    def edit(self, transcript: str) -> SessionState:
        if not isinstance(self._state, Preview):
            return self._ignore("edit")

        self._state = replace(self._state, transcript=transcript)
        return self._state

    def rerecord(self) -> SessionState:
        """Discard the transcript and capture again."""
        if not isinstance(self._state, Preview) or not self._speech_supported:
            return self._ignore("rerecord")

        self._enter_recording()
        return self._state

    async def submit(self) -> SessionState:
        """Send the reviewed transcript to the agent. Blank transcripts are ignored."""
        if not isinstance(self._state, Preview):
            return self._ignore("submit")

        command = self._state.transcript.strip()
        if not command:
            return self._state
        return await self._process(command)

    async def regenerate(self) -> SessionState:
        """Ask the agent again with the same transcript. A success adds a new record."""
        if not isinstance(self._state, Result):
            return self._ignore("regenerate")

        return await self._process(self._state.transcript)

    def retry(self) -> SessionState:
        """Return from an error to an editable transcript without calling the agent."""
        if not isinstance(self._state, Error):
            return self._ignore("retry")

        self._state = Preview(transcript=self._state.transcript, speech_supported=self._speech_supported)
        return self._state

    def copy_result(self, clipboard: Clipboard) -> bool:
        """Copy the current result content. A failed copy leaves the state unchanged."""
        if not isinstance(self._state, Result) or not self._state.record.content:
            return False

        try:
            copied = bool(clipboard.copy(self._state.record.content))
        except Exception:  # noqa: BLE001 - clipboard failures only suppress the confirmation.
            self._logger.warning("clipboard_copy_failed", exc_info=True)
            copied = False
        self._copy_feedback = copied
        return copied

    async def close(self) -> None:
        """Invalidate any in-flight agent call, release capture and settle in ``Closed``."""
        if self.closed:
            return

        self._generation += 1
        generation = self._generation
        await self._teardown_capture()
        if generation != self._generation or self.closed:
            return

        self._logger.info("session_closed", extra={"state": type(self._state).__name__})
        self._state = Closed(transcript=self._state.transcript)

    async def _process(self, command: str) -> SessionState:
        self._generation += 1
        generation = self._generation
        self._copy_feedback = False
        self._state = Processing(transcript=command, generation=generation)
        self._logger.info("agent_call_started", extra={"generation": generation, "command": command})

        try:
            response = await self._agent.invoke(command, self._agent_id)
        except Exception as exc:  # noqa: BLE001 - transport faults become the error state.
            if self._is_stale(generation):
                return self._discard(generation)
            self._logger.warning("agent_call_failed", extra={"generation": generation, "error": str(exc)})
            self._state = Error(transcript=command, message=str(exc) or NETWORK_ERROR_MESSAGE)
            return self._state

        if self._is_stale(generation):
            return self._discard(generation)

        if not response.success:
            message = response.error or AGENT_ERROR_MESSAGE
            self._logger.warning("agent_call_unsuccessful", extra={"generation": generation, "error": message})
            self._state = Error(transcript=command, message=message)
            return self._state

        record = self._build_record(command, response)
        self._history.append(record)
        self._state = Result(transcript=command, record=record)
        self._logger.info(
            "agent_call_succeeded",
            extra={"generation": generation, "record_id": record.id, "command_type": record.command_type},
        )
        return self._state

    def _build_record(self, command: str, response: AgentResponse) -> CommandRecord:
        reply = response.response
        parsed = self._parse(reply.result if reply else None) or ParsedResult()
        return CommandRecord(
            command=command,
            intent=parsed.intent or "assist",
            title=parsed.title or "Response",
            content=parsed.content or (reply.message if reply else None) or "",
            command_type=parsed.command_type or "Generate",
            timestamp=self._clock(),
        )

    def _parse(self, raw: object) -> ParsedResult | None:
        try:
            return self._parser.parse(raw)
        except Exception:  # noqa: BLE001 - malformed payloads fall back to defaults.
            self._logger.warning("agent_result_unparseable", exc_info=True)
            return None

    def _is_stale(self, generation: int) -> bool:
        return self.closed or generation != self._generation

    def _discard(self, generation: int) -> SessionState:
        self._logger.info(
            "stale_agent_response_discarded",
            extra={"generation": generation, "current_generation": self._generation},
        )
        return self._state

    def _ignore(self, trigger: str) -> SessionState:
        self._logger.debug(
            "session_trigger_ignored",
            extra={"trigger": trigger, "state": type(self._state).__name__, "closed": self.closed},
        )
        return self._state

    def _enter_recording(self) -> None:
        self._state = Recording()
        self._capturing = True
        self._capture_task = asyncio.create_task(self._consume_capture(), name="voice-capture")
        self._timer_task = asyncio.create_task(self._tick_elapsed(), name="voice-capture-timer")

    async def _consume_capture(self) -> None:
        stream = self._capture.start()
        try:
            async for event in stream:
                if not isinstance(self._state, Recording):
                    return
                if event.kind == CaptureEventKind.TRANSCRIPT:
                    self._state = replace(self._state, transcript=event.transcript)
                else:
                    await self._fall_back_to_manual_entry(event.kind.value)
                    return
        except CaptureUnavailableError as exc:
            await self._fall_back_to_manual_entry(str(exc) or "unavailable")
        except Exception as exc:  # noqa: BLE001 - capture is best-effort.
            await self._fall_back_to_manual_entry(f"{type(exc).__name__}: {exc}")
        finally:
            await stream.aclose()

    async def _fall_back_to_manual_entry(self, reason: str) -> None:
        if not isinstance(self._state, Recording):
            return

        self._logger.warning("speech_capture_unavailable", extra={"reason": reason})
        generation = self._generation
        self._speech_supported = False
        await self._teardown_capture()
        if generation != self._generation or not isinstance(self._state, Recording):
            return
        self._state = Preview(transcript=self._state.transcript, speech_supported=False)

    async def _tick_elapsed(self) -> None:
        while True:
            await asyncio.sleep(self._tick_seconds)
            if not isinstance(self._state, Recording):
                return
            self._state = replace(self._state, elapsed_seconds=self._state.elapsed_seconds + 1)

    async def _teardown_capture(self) -> None:
        async with self._capture_lock:
            current = asyncio.current_task()
            owned = (self._capture_task, self._timer_task)
            tasks = [task for task in owned if task is not None and task is not current]
            self._capture_task = None
            self._timer_task = None
            for task in tasks:
                task.cancel()
            if tasks:
                await asyncio.gather(*tasks, return_exceptions=True)

            if self._capturing:
                self._capturing = False
                await self._capture.stop()
