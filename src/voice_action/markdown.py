"""Line-based markdown subset rendered into display blocks."""

from __future__ import annotations

import re

from voice_action.models import Bold, DisplayBlock, Heading, ListItem, Paragraph, Plain, Spacer, Span

_BOLD_RE = re.compile(r"\*\*(.*?)\*\*")
_ORDERED_RE = re.compile(r"^\d+\.\s")
_HEADINGS = (("### ", 3), ("## ", 2), ("# ", 1))


def format_inline(text: str) -> tuple[Span, ...]:
    """Split ``text`` on paired ``**`` markers into plain and bold spans.

    Unpaired markers are left in place as literal text.
    """
    parts = _BOLD_RE.split(text)
    if len(parts) == 1:
        return (Plain(text),)
    return tuple(
        Bold(part) if index % 2 == 1 else Plain(part)
        for index, part in enumerate(parts)
        if index % 2 == 1 or part
    )


def render_block(line: str) -> DisplayBlock:
    for prefix, level in _HEADINGS:
        if line.startswith(prefix):
            return Heading(level=level, text=line[len(prefix) :])
    if line.startswith(("- ", "* ")):
        return ListItem(ordered=False, spans=format_inline(line[2:]))
    ordered = _ORDERED_RE.match(line)
    if ordered:
        return ListItem(ordered=True, spans=format_inline(line[ordered.end() :]))
    if not line.strip():
        return Spacer()
    return Paragraph(spans=format_inline(line))


def render_markdown(text: str | None) -> list[DisplayBlock]:
    """Render ``text`` into one block per line, preserving line order."""
    if not text:
        return []
    return [render_block(line) for line in text.split("\n")]


def plain_text(blocks: list[DisplayBlock]) -> str:
    lines: list[str] = []
    for block in blocks:
        if isinstance(block, Heading):
            lines.append(block.text)
        elif isinstance(block, (ListItem, Paragraph)):
            lines.append("".join(span.text for span in block.spans))
        else:
            lines.append("")
    return "\n".join(lines)


def preview(content: str | None, limit: int = 200) -> str:
    """Collapsed excerpt of ``content`` as shown on a history card."""
    return (content or "")[:limit]
