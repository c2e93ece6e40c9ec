from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Union
from uuid import uuid4


def new_record_id() -> str:
    """Return a time-prefixed random identifier for a command record."""
    return f"{time.time_ns():x}{uuid4().hex[:12]}"


@dataclass(frozen=True, slots=True)
class CommandRecord:
    """Immutable summary of one successful command round-trip."""

    command: str
    intent: str = "assist"
    title: str = "Response"
    content: str = ""
    command_type: str = "Generate"
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: str = field(default_factory=new_record_id)


class CaptureEventKind(str, Enum):
    """Signals emitted by a speech capture stream."""

    TRANSCRIPT = "transcript"
    UNSUPPORTED = "unsupported"
    PERMISSION_DENIED = "permission_denied"


@dataclass(frozen=True, slots=True)
class CaptureEvent:
    kind: CaptureEventKind
    transcript: str = ""

    @classmethod
    def update(cls, transcript: str) -> CaptureEvent:
        return cls(kind=CaptureEventKind.TRANSCRIPT, transcript=transcript)


@dataclass(frozen=True, slots=True)
class Plain:
    text: str


@dataclass(frozen=True, slots=True)
class Bold:
    text: str


Span = Union[Plain, Bold]


@dataclass(frozen=True, slots=True)
class Heading:
    level: int
    text: str


@dataclass(frozen=True, slots=True)
class ListItem:
    ordered: bool
    spans: tuple[Span, ...]


@dataclass(frozen=True, slots=True)
class Paragraph:
    spans: tuple[Span, ...]


@dataclass(frozen=True, slots=True)
class Spacer:
    pass


DisplayBlock = Union[Heading, ListItem, Paragraph, Spacer]
