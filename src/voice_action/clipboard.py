"""Clipboard collaborators."""

from __future__ import annotations

import logging
import shutil
import subprocess

from rich.console import Console

# Tried in order; the first tool found on PATH wins.
CLIPBOARD_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("pbcopy",),
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
)


class ConsoleClipboard:
    """Prints the text so it can be copied by hand. Never reports a copy."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def copy(self, text: str) -> bool:
        if text:
            self._console.print(text, markup=False, highlight=False)
        return False


class SystemClipboard:
    """Pipes text into the platform clipboard tool and reports whether it took it.

    When no clipboard tool is installed the text is handed to ``fallback``
    (a :class:`ConsoleClipboard` by default), which does not count as a copy.
    """

    def __init__(
        self,
        *,
        commands: tuple[tuple[str, ...], ...] = CLIPBOARD_COMMANDS,
        fallback: ConsoleClipboard | None = None,
        timeout_seconds: float = 5.0,
        logger: logging.Logger | None = None,
    ) -> None:
        self._commands = commands
        self._fallback = fallback or ConsoleClipboard()
        self._timeout_seconds = timeout_seconds
        self._logger = logger or logging.getLogger("voice_action.clipboard")

    def command(self) -> tuple[str, ...] | None:
        for candidate in self._commands:
            if shutil.which(candidate[0]):
                return candidate
        return None

    def copy(self, text: str) -> bool:
        if not text:
            return False

        command = self.command()
        if command is None:
            self._logger.info("clipboard_tool_missing", extra={"tried": [c[0] for c in self._commands]})
            return self._fallback.copy(text)

        try:
            subprocess.run(
                list(command),
                input=text,
                check=True,
                text=True,
                capture_output=True,
                timeout=self._timeout_seconds,
            )
        except (FileNotFoundError, subprocess.CalledProcessError, subprocess.TimeoutExpired) as exc:
            self._logger.warning("clipboard_copy_failed", extra={"command": command[0], "error": str(exc)})
            return False
        self._logger.debug("clipboard_copied", extra={"command": command[0], "chars": len(text)})
        return True
