"""CLI startup entrypoint for VoiceAction."""

from __future__ import annotations

import asyncio
import logging

import typer
from rich import print
from rich.text import Text

from voice_action.agent import EchoAgentInvoker, HttpAgentInvoker, JsonResultParser
from voice_action.clipboard import ConsoleClipboard, SystemClipboard
from voice_action.config import settings
from voice_action.console import make_console, print_history, result_panel
from voice_action.history import HistoryStore
from voice_action.samples import EXAMPLE_COMMANDS, sample_history
from voice_action.session import Error, Preview, Recording, Result, VoiceCommandSession
from voice_action.storage import InMemoryKeyValueStore, JsonFileKeyValueStore
from voice_action.voice import ScriptedCapture

app = typer.Typer(help="VoiceAction: speak or type a command, get an AI-generated artifact")
CAPTURE_SETTLE_SECONDS = 0.1


@app.callback()
def main(log_level: str = typer.Option(None, help="Override VOICE_ACTION_LOG_LEVEL")) -> None:
    logging.basicConfig(level=(log_level or settings.log_level).upper())


def _build_history(history_file: str | None) -> HistoryStore:
    history = HistoryStore(JsonFileKeyValueStore(history_file or settings.history_path), key=settings.history_key)
    history.load_all()
    return history


def _build_agent():
    if settings.agent_endpoint:
        return HttpAgentInvoker(
            settings.agent_endpoint,
            api_key=settings.agent_api_key,
            timeout_seconds=settings.agent_timeout_seconds,
        )
    return EchoAgentInvoker()


def _build_clipboard(console) -> SystemClipboard:
    return SystemClipboard(fallback=ConsoleClipboard(console))


def _build_capture(voice: bool):
    if not voice:
        return ScriptedCapture.unsupported()
    from voice_action.voice.stt_speechrecognition import SpeechRecognitionCapture

    return SpeechRecognitionCapture(language=settings.speech_language, phrase_time_limit=settings.phrase_time_limit)


async def _run_session(session: VoiceCommandSession, history: HistoryStore, preset: str | None) -> None:
    console = make_console()
    clipboard = _build_clipboard(console)
    await session.open(preset)

    while not session.closed:
        await asyncio.sleep(0)
        if isinstance(session.state, Recording):
            # Give the capture a moment to report an unavailable microphone before prompting.
            await asyncio.sleep(CAPTURE_SETTLE_SECONDS)
        state = session.state
        console.rule(Text(session.header_label))

        if isinstance(state, Recording):
            await asyncio.to_thread(input, "Speak now, press Enter to stop ...")
            await session.stop_recording()

        elif isinstance(state, Preview):
            if not state.speech_supported:
                console.print("Speech recognition not available. Type your command below.", style="yellow")
            answer = typer.prompt(
                "Command (:r re-record, :q quit)",
                default=state.transcript or "",
                show_default=bool(state.transcript),
            )
            if answer.strip() == ":q":
                await session.close()
            elif answer.strip() == ":r":
                if session.rerecord() is state:
                    console.print("Re-recording needs speech recognition.", style="yellow")
            else:
                session.edit(answer)
                if isinstance(await session.submit(), Preview):
                    console.print("Nothing to send.", style="dim")

        elif isinstance(state, Result):
            history.persist()
            console.print(result_panel(state.record))
            action = typer.prompt("[c]opy, [r]egenerate, [d]ismiss", default="d").strip().lower()
            if action.startswith("c"):
                if not session.copy_result(clipboard):
                    console.print("Nothing copied to the clipboard.", style="dim")
                else:
                    console.print("Copied!", style="green")
            elif action.startswith("r"):
                await session.regenerate()
            else:
                await session.close()

        elif isinstance(state, Error):
            console.print(state.message, style="red")
            if typer.confirm("Try again?", default=True):
                session.retry()
            else:
                await session.close()

        else:
            break


def _ask(text: str | None, voice: bool, history_file: str | None) -> None:
    history = _build_history(history_file)
    session = VoiceCommandSession(
        capture=_build_capture(voice),
        agent=_build_agent(),
        parser=JsonResultParser(),
        history=history,
        agent_id=settings.agent_id,
    )
    asyncio.run(_run_session(session, history, text))
    history.persist()


@app.command()
def start() -> None:
    """Show runtime configuration."""
    print(
        {
            "app_name": settings.app_name,
            "agent_id": settings.agent_id,
            "agent_endpoint": settings.agent_endpoint or "offline echo agent",
            "history_path": settings.history_path,
        }
    )


@app.command()
def ask(
    text: str = typer.Argument(None, help="Command text; skips speech capture when given"),
    voice: bool = typer.Option(True, help="Use the microphone when no text is given"),
    history_file: str = typer.Option(None, help="History file (defaults to VOICE_ACTION_HISTORY_PATH)"),
) -> None:
    """Run one command session."""
    _ask(text, voice, history_file)


@app.command()
def rerun(
    record_id: str,
    history_file: str = typer.Option(None, help="History file (defaults to VOICE_ACTION_HISTORY_PATH)"),
) -> None:
    """Reopen a past command for review and resend."""
    history = _build_history(history_file)
    try:
        record = history.get(record_id)
    except KeyError as exc:
        print({"error": str(exc.args[0])})
        raise typer.Exit(code=1)
    _ask(record.command, False, history_file)


@app.command()
def copy(
    record_id: str,
    history_file: str = typer.Option(None, help="History file (defaults to VOICE_ACTION_HISTORY_PATH)"),
) -> None:
    """Copy a past result's content to the clipboard."""
    history = _build_history(history_file)
    try:
        record = history.get(record_id)
    except KeyError as exc:
        print({"error": str(exc.args[0])})
        raise typer.Exit(code=1)

    console = make_console()
    if _build_clipboard(console).copy(record.content):
        console.print("Copied!", style="green")
    else:
        console.print("Nothing copied to the clipboard.", style="dim")


@app.command("history")
def show_history(
    search: str = typer.Option(None, help="Case-insensitive filter over command, title and type"),
    expand: str = typer.Option(None, help="Record id to show in full"),
    sample: bool = typer.Option(False, help="Show demonstration records instead of saved history"),
    history_file: str = typer.Option(None, help="History file (defaults to VOICE_ACTION_HISTORY_PATH)"),
) -> None:
    """List past commands, newest first."""
    console = make_console()
    if sample:
        history = HistoryStore(InMemoryKeyValueStore())
        for record in reversed(sample_history()):
            history.append(record)
    else:
        history = _build_history(history_file)

    if not len(history):
        console.print("No commands yet. Try one of:", style="bold")
        for example in EXAMPLE_COMMANDS:
            console.print(f"  {example.label}: {example.text}", markup=False)
        return

    print_history(console, history.filter(search), count_label=history.count_label(), expanded_id=expand)


@app.command()
def examples() -> None:
    """List starter commands."""
    for example in EXAMPLE_COMMANDS:
        print({"type": example.label, "command": example.text})


if __name__ == "__main__":
    app()
