"""Presentation helpers: relative timestamps and command-type styling."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import NamedTuple

from rich.theme import Theme

KNOWN_COMMAND_TYPES = ("generate", "rephrase", "research")
DEFAULT_COMMAND_TYPE = "assist"

THEME = Theme(
    {
        "command.generate": "bold #a78bfa",
        "command.generate.badge": "#a78bfa on #2a2440",
        "command.rephrase": "bold #f0abfc",
        "command.rephrase.badge": "#f0abfc on #3a2440",
        "command.research": "bold #67e8f9",
        "command.research.badge": "#67e8f9 on #1c3640",
        "command.assist": "bold #ff5cb8",
        "command.assist.badge": "#ff5cb8 on #40203a",
        "history.timestamp": "dim",
        "history.command": "italic",
    }
)


class CommandTypeStyle(NamedTuple):
    text: str
    background: str


def command_type_style(command_type: str | None) -> CommandTypeStyle:
    """Map a free-text command category onto a theme style pair."""
    lowered = (command_type or "").lower()
    bucket = lowered if lowered in KNOWN_COMMAND_TYPES else DEFAULT_COMMAND_TYPE
    return CommandTypeStyle(text=f"command.{bucket}", background=f"command.{bucket}.badge")


def relative_time(timestamp: datetime, now: datetime | None = None) -> str:
    """Describe the age of ``timestamp`` as a coarse human-readable bucket."""
    now = now or datetime.now(timezone.utc)
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    seconds = max(0, int((now - timestamp).total_seconds()))
    if seconds < 60:
        return "just now"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    return f"{hours // 24}d ago"


def format_elapsed(seconds: int) -> str:
    """Render a recording duration as ``M:SS``."""
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes}:{secs:02d}"
