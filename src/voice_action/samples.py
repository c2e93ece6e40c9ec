"""Demonstration history and starter commands."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from voice_action.models import CommandRecord


@dataclass(frozen=True, slots=True)
class ExampleCommand:
    label: str
    text: str


EXAMPLE_COMMANDS: tuple[ExampleCommand, ...] = (
    ExampleCommand(label="Generate", text="Create a PRD for a social media app"),
    ExampleCommand(label="Rephrase", text="Rephrase this paragraph more formally"),
    ExampleCommand(label="Research", text="Research the latest trends in AI"),
    ExampleCommand(label="Assist", text="Help me write a professional email"),
)


def sample_history(now: datetime | None = None) -> list[CommandRecord]:
    """Return a fixed set of records, newest first, relative to ``now``."""
    now = now or datetime.now(timezone.utc)
    return [
        CommandRecord(
            id="sample-1",
            command="Create a PRD for a social media app",
            intent="generate",
            title="Social Media App PRD",
            content=(
                "# Product Requirements Document\n\n"
                "## Overview\n"
                "A next-generation social media platform focused on authentic connections.\n\n"
                "## Key Features\n"
                "- **Story-first feed**: Prioritizes ephemeral content\n"
                "- **Interest-based discovery**: AI-powered content matching\n"
                "- **Privacy controls**: Granular audience selection\n"
                "- **Creator monetization**: Built-in tipping and subscriptions\n\n"
                "## Success Metrics\n"
                "1. Daily Active Users (DAU)\n"
                "2. Average session length > 8 minutes\n"
                "3. Content creation rate > 30%"
            ),
            command_type="Generate",
            timestamp=now - timedelta(minutes=2),
        ),
        CommandRecord(
            id="sample-2",
            command="Rephrase this paragraph more formally",
            intent="rephrase",
            title="Formal Rephrasing",
            content=(
                "The proposed initiative seeks to **establish a comprehensive framework** for "
                "cross-departmental collaboration, thereby enhancing operational efficiency and "
                "fostering a culture of continuous improvement across the organization."
            ),
            command_type="Rephrase",
            timestamp=now - timedelta(hours=1),
        ),
        CommandRecord(
            id="sample-3",
            command="Research the latest trends in AI",
            intent="research",
            title="AI Trends 2025",
            content=(
                "## Top AI Trends\n\n"
                "1. **Agentic AI**: Autonomous agents that plan and execute multi-step tasks\n"
                "2. **Multimodal models**: Unified text, image and audio understanding\n"
                "3. **Small language models**: Efficient on-device inference\n\n"
                "### Outlook\n"
                "Enterprise adoption continues to accelerate."
            ),
            command_type="Research",
            timestamp=now - timedelta(days=1),
        ),
    ]
