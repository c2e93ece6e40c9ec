"""Offline agent used when no agent endpoint is configured."""

from __future__ import annotations

import json

from voice_action.agent.payloads import AgentReply, AgentResponse

_KEYWORDS: tuple[tuple[str, str, str], ...] = (
    ("rephrase", "rephrase", "Rephrase"),
    ("rewrite", "rephrase", "Rephrase"),
    ("research", "research", "Research"),
    ("trends", "research", "Research"),
    ("create", "generate", "Generate"),
    ("write", "generate", "Generate"),
)


class EchoAgentInvoker:
    """Classifies commands by keyword and echoes them back as a markdown artifact."""

    async def invoke(self, command_text: str, agent_id: str) -> AgentResponse:
        lowered = command_text.lower()
        intent, command_type = "assist", "Assist"
        for keyword, matched_intent, matched_type in _KEYWORDS:
            if keyword in lowered:
                intent, command_type = matched_intent, matched_type
                break

        title = command_text.strip().rstrip(".?!")[:60] or "Response"
        content = "\n".join(
            [
                f"# {title}",
                "",
                f"**Command:** {command_text.strip()}",
                f"- Intent: {intent}",
                f"- Agent: {agent_id}",
                "",
                "Configure VOICE_ACTION_AGENT_ENDPOINT to reach a live agent.",
            ]
        )
        result = json.dumps({"intent": intent, "title": title, "content": content, "command_type": command_type})
        return AgentResponse(success=True, response=AgentReply(result=result))
