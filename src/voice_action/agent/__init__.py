"""Agent invocation and result parsing."""

from .echo import EchoAgentInvoker
from .http import HttpAgentInvoker
from .parsing import JsonResultParser
from .payloads import AgentReply, AgentResponse, ParsedResult

__all__ = [
    "AgentReply",
    "AgentResponse",
    "EchoAgentInvoker",
    "HttpAgentInvoker",
    "JsonResultParser",
    "ParsedResult",
]
