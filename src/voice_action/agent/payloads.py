"""Lenient payload models for agent responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class AgentReply(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    result: Any = None
    message: str | None = None


class AgentResponse(BaseModel):
    """Envelope returned by an agent invocation."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    success: bool = False
    response: AgentReply | None = None
    error: str | None = None


class ParsedResult(BaseModel):
    """Structured fields the agent may declare in its result. All optional."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    intent: str | None = None
    title: str | None = None
    content: str | None = None
    command_type: str | None = None
