"""Speech capture backend powered by ``speech_recognition``."""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import AsyncGenerator

from voice_action.models import CaptureEvent, CaptureEventKind


class SpeechRecognitionCapture:
    """Capture microphone phrases and transcribe them with speech_recognition.

    Each recognized phrase is appended to the running transcript and emitted
    as a transcript update. Missing library or microphone support is reported
    as an ``unsupported`` signal, and an inaccessible device as
    ``permission_denied``.

    Listening happens on a worker thread that holds the microphone. Cancelling
    the consumer does not interrupt it; :meth:`stop` waits for the worker to
    hand the device back, and :meth:`start` does the same before reopening it.
    """

    def __init__(
        self,
        *,
        language: str = "en-US",
        phrase_time_limit: float = 15.0,
        listen_timeout: float = 1.0,
        adjust_noise_seconds: float = 0.2,
        logger: logging.Logger | None = None,
    ) -> None:
        self._language = language
        self._phrase_time_limit = phrase_time_limit
        self._listen_timeout = listen_timeout
        self._adjust_noise_seconds = max(0.0, adjust_noise_seconds)
        self._logger = logger or logging.getLogger("voice_action.voice.stt")
        self._stopped = threading.Event()
        self._listening: asyncio.Future[str] | None = None

    async def start(self) -> AsyncGenerator[CaptureEvent, None]:
        await self._wait_released()
        self._stopped = threading.Event()
        try:
            import speech_recognition as sr
        except ImportError:
            self._logger.warning("speech_backend_missing", extra={"hint": "pip install 'voice-action[voice]'"})
            yield CaptureEvent(kind=CaptureEventKind.UNSUPPORTED)
            return

        try:
            microphone = sr.Microphone()
        except (AttributeError, OSError) as exc:
            self._logger.warning("microphone_unavailable", extra={"error": str(exc)})
            yield CaptureEvent(kind=CaptureEventKind.UNSUPPORTED)
            return

        recognizer = sr.Recognizer()
        loop = asyncio.get_running_loop()
        stopped = self._stopped
        transcript = ""
        while not stopped.is_set():
            listening = loop.run_in_executor(None, self._listen_once, sr, recognizer, microphone, stopped)
            self._listening = listening
            try:
                # Shielded so a cancelled consumer leaves the worker for stop() to await.
                phrase = await asyncio.shield(listening)
            except OSError as exc:
                self._logger.warning("microphone_access_denied", extra={"error": str(exc)})
                yield CaptureEvent(kind=CaptureEventKind.PERMISSION_DENIED)
                return
            except sr.RequestError as exc:
                self._logger.warning("speech_service_unavailable", extra={"error": str(exc)})
                yield CaptureEvent(kind=CaptureEventKind.UNSUPPORTED)
                return
            finally:
                if listening.done() and self._listening is listening:
                    self._listening = None

            if phrase and not stopped.is_set():
                transcript = f"{transcript} {phrase}".strip()
                yield CaptureEvent.update(transcript)

    async def stop(self) -> None:
        self._stopped.set()
        await self._wait_released()

    async def _wait_released(self) -> None:
        listening, self._listening = self._listening, None
        if listening is None:
            return
        try:
            await listening
        except Exception as exc:  # noqa: BLE001 - the worker's outcome no longer has a consumer.
            self._logger.debug("abandoned_listen_failed", extra={"error": str(exc)})
        self._logger.debug("microphone_released")

    def _listen_once(self, sr, recognizer, microphone, stopped: threading.Event) -> str:
        with microphone as source:
            if self._adjust_noise_seconds > 0:
                recognizer.adjust_for_ambient_noise(source, duration=self._adjust_noise_seconds)
            try:
                audio = recognizer.listen(
                    source,
                    timeout=self._listen_timeout,
                    phrase_time_limit=self._phrase_time_limit,
                )
            except sr.WaitTimeoutError:
                return ""
        if stopped.is_set():
            return ""
        try:
            return recognizer.recognize_google(audio, language=self._language)
        except sr.UnknownValueError:
            return ""
