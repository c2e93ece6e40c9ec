"""Rich terminal rendering for results and history cards."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.text import Text

from voice_action.markdown import preview, render_markdown
from voice_action.models import Bold, CommandRecord, DisplayBlock, Heading, ListItem, Paragraph, Span
from voice_action.presentation import THEME, command_type_style, relative_time

_HEADING_STYLES = {1: "bold underline", 2: "bold", 3: "bold italic"}


def make_console(**kwargs) -> Console:
    return Console(theme=THEME, **kwargs)


def spans_to_text(spans: Iterable[Span], prefix: str = "") -> Text:
    text = Text(prefix)
    for span in spans:
        text.append(span.text, style="bold" if isinstance(span, Bold) else None)
    return text


def render_blocks(blocks: list[DisplayBlock]) -> Group:
    """Convert display blocks into rich renderables, numbering ordered list runs."""
    lines: list[RenderableType] = []
    ordinal = 0
    for block in blocks:
        if isinstance(block, ListItem) and block.ordered:
            ordinal += 1
            lines.append(spans_to_text(block.spans, prefix=f"  {ordinal}. "))
            continue
        ordinal = 0
        if isinstance(block, Heading):
            lines.append(Text(block.text, style=_HEADING_STYLES.get(block.level, "bold")))
        elif isinstance(block, ListItem):
            lines.append(spans_to_text(block.spans, prefix="  • "))
        elif isinstance(block, Paragraph):
            lines.append(spans_to_text(block.spans))
        else:
            lines.append(Text(""))
    return Group(*lines)


def command_badge(command_type: str | None) -> Text:
    style = command_type_style(command_type)
    return Text(f" {command_type or 'Generate'} ", style=style.background)


def result_panel(record: CommandRecord) -> Panel:
    body = render_blocks(render_markdown(record.content))
    return Panel(body, title=Text.assemble(record.title, " ", command_badge(record.command_type)), title_align="left")


def history_card(record: CommandRecord, *, expanded: bool = False, now: datetime | None = None) -> Panel:
    style = command_type_style(record.command_type)
    header = Text.assemble(
        (record.title, style.text),
        "  ",
        command_badge(record.command_type),
        "  ",
        (relative_time(record.timestamp, now), "history.timestamp"),
    )
    command = Text(f'"{record.command}"', style="history.command")
    if expanded:
        body: RenderableType = Group(command, Text(""), render_blocks(render_markdown(record.content)))
    else:
        body = Group(command, Text(preview(record.content), style="dim"))
    return Panel(body, title=header, title_align="left", subtitle=record.id, subtitle_align="right")


def print_history(
    console: Console,
    records: list[CommandRecord],
    *,
    count_label: str,
    expanded_id: str | None = None,
    now: datetime | None = None,
) -> None:
    console.print(Text(count_label, style="bold"))
    if not records:
        console.print("No commands found matching your search.", style="dim")
        return
    for record in records:
        console.print(history_card(record, expanded=record.id == expanded_id, now=now))
