from __future__ import annotations

import importlib
import json
from pathlib import Path

import pytest

typer_testing = pytest.importorskip("typer.testing")


def _app():
    return importlib.import_module("voice_action.main").app


def test_console_entrypoint_exposes_app() -> None:
    assert _app() is not None


def test_ask_with_text_records_result_in_history_file(tmp_path: Path) -> None:
    history_file = tmp_path / "history.json"
    runner = typer_testing.CliRunner()

    result = runner.invoke(
        _app(),
        ["ask", "Write a haiku about autumn", "--history-file", str(history_file)],
        input="\nd\n",
        catch_exceptions=False,
    )

    assert result.exit_code == 0
    stored = json.loads(json.loads(history_file.read_text(encoding="utf-8"))["voiceaction-history"])
    assert [entry["command"] for entry in stored] == ["Write a haiku about autumn"]
    assert stored[0]["commandType"] == "Generate"

    listing = runner.invoke(_app(), ["history", "--history-file", str(history_file), "--search", "HAIKU"])
    assert listing.exit_code == 0
    assert "1 command" in listing.stdout
    assert "Write a haiku about autumn" in listing.stdout


def test_ask_regenerate_adds_second_record(tmp_path: Path) -> None:
    history_file = tmp_path / "history.json"

    result = typer_testing.CliRunner().invoke(
        _app(),
        ["ask", "Create a PRD for a todo app", "--history-file", str(history_file)],
        input="\nr\nd\n",
        catch_exceptions=False,
    )

    assert result.exit_code == 0
    stored = json.loads(json.loads(history_file.read_text(encoding="utf-8"))["voiceaction-history"])
    assert [entry["command"] for entry in stored] == ["Create a PRD for a todo app"] * 2
    assert stored[0]["id"] != stored[1]["id"]


def test_ask_without_voice_falls_back_to_typed_command(tmp_path: Path) -> None:
    history_file = tmp_path / "history.json"

    result = typer_testing.CliRunner().invoke(
        _app(),
        ["ask", "--no-voice", "--history-file", str(history_file)],
        input=":q\n",
        catch_exceptions=False,
    )

    assert result.exit_code == 0
    assert "Speech recognition not available" in result.stdout
    assert not history_file.exists()


def test_history_sample_and_empty_states(tmp_path: Path) -> None:
    runner = typer_testing.CliRunner()

    sample = runner.invoke(_app(), ["history", "--sample", "--search", "ai"])
    empty = runner.invoke(_app(), ["history", "--history-file", str(tmp_path / "missing.json")])

    assert sample.exit_code == 0
    assert "AI Trends 2025" in sample.stdout
    assert "Formal Rephrasing" not in sample.stdout
    assert "Help me write a professional email" in empty.stdout


def test_rerun_unknown_record_exits_with_error(tmp_path: Path) -> None:
    result = typer_testing.CliRunner().invoke(
        _app(), ["rerun", "nope", "--history-file", str(tmp_path / "history.json")]
    )

    assert result.exit_code == 1
    assert "Unknown command record id" in result.stdout


class _RecordingClipboard:
    def __init__(self, succeed: bool) -> None:
        self.succeed = succeed
        self.copied: list[str] = []

    def copy(self, text: str) -> bool:
        self.copied.append(text)
        return self.succeed


@pytest.mark.parametrize(("succeed", "message"), [(True, "Copied!"), (False, "Nothing copied to the clipboard.")])
def test_copy_sends_past_result_through_clipboard(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, succeed: bool, message: str
) -> None:
    history_file = tmp_path / "history.json"
    runner = typer_testing.CliRunner()
    runner.invoke(
        _app(),
        ["ask", "Research the latest AI trends", "--history-file", str(history_file)],
        input="\nd\n",
        catch_exceptions=False,
    )
    stored = json.loads(json.loads(history_file.read_text(encoding="utf-8"))["voiceaction-history"])
    clipboard = _RecordingClipboard(succeed)
    monkeypatch.setattr(importlib.import_module("voice_action.main"), "_build_clipboard", lambda console: clipboard)

    result = runner.invoke(_app(), ["copy", stored[0]["id"], "--history-file", str(history_file)])

    assert result.exit_code == 0
    assert clipboard.copied == [stored[0]["content"]]
    assert message in result.stdout
    if not succeed:
        assert "Copied!" not in result.stdout


def test_copy_unknown_record_exits_with_error(tmp_path: Path) -> None:
    result = typer_testing.CliRunner().invoke(
        _app(), ["copy", "nope", "--history-file", str(tmp_path / "history.json")]
    )

    assert result.exit_code == 1
    assert "Unknown command record id" in result.stdout
