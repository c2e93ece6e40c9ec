from __future__ import annotations

import io
import subprocess

import pytest
from rich.console import Console

from voice_action import clipboard as clipboard_module
from voice_action.clipboard import ConsoleClipboard, SystemClipboard


def _console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, width=80), buffer


def test_console_clipboard_prints_but_never_reports_a_copy() -> None:
    console, buffer = _console()

    assert ConsoleClipboard(console).copy("# Title") is False
    assert "# Title" in buffer.getvalue()


def test_system_clipboard_pipes_text_into_first_available_tool(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[list[str], dict]] = []

    def fake_run(command, **kwargs):
        calls.append((command, kwargs))
        return subprocess.CompletedProcess(command, 0, "", "")

    monkeypatch.setattr(clipboard_module.shutil, "which", lambda name: f"/usr/bin/{name}" if name == "xclip" else None)
    monkeypatch.setattr(clipboard_module.subprocess, "run", fake_run)

    assert SystemClipboard().copy("hello") is True
    assert calls[0][0] == ["xclip", "-selection", "clipboard"]
    assert calls[0][1]["input"] == "hello"
    assert calls[0][1]["check"] is True


def test_system_clipboard_reports_failed_tool(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(command, **kwargs):
        raise subprocess.CalledProcessError(1, command, stderr="Can't open display")

    monkeypatch.setattr(clipboard_module.shutil, "which", lambda name: "/usr/bin/pbcopy" if name == "pbcopy" else None)
    monkeypatch.setattr(clipboard_module.subprocess, "run", fake_run)

    assert SystemClipboard().copy("hello") is False


def test_system_clipboard_without_tool_falls_back_to_console(monkeypatch: pytest.MonkeyPatch) -> None:
    console, buffer = _console()
    monkeypatch.setattr(clipboard_module.shutil, "which", lambda name: None)

    def fail_run(command, **kwargs):
        raise AssertionError("no tool should be run")

    monkeypatch.setattr(clipboard_module.subprocess, "run", fail_run)

    clipboard = SystemClipboard(fallback=ConsoleClipboard(console))

    assert clipboard.command() is None
    assert clipboard.copy("manual copy") is False
    assert "manual copy" in buffer.getvalue()
    assert clipboard.copy("") is False
