from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from voice_action.agent import AgentResponse, EchoAgentInvoker, HttpAgentInvoker, JsonResultParser
from voice_action.errors import AgentInvocationError


def test_parser_accepts_mappings_json_and_fenced_json() -> None:
    parser = JsonResultParser()
    expected = {"intent": "research", "title": "AI", "content": "# AI", "command_type": "Research"}

    for raw in (
        expected,
        json.dumps(expected),
        "```json\n" + json.dumps(expected) + "\n```",
        "Here you go: " + json.dumps(expected) + " Enjoy!",
        json.dumps(json.dumps(expected)),
    ):
        parsed = parser.parse(raw)
        assert parsed is not None
        assert parsed.model_dump() == expected


def test_parser_returns_none_for_unusable_payloads() -> None:
    parser = JsonResultParser()

    assert parser.parse(None) is None
    assert parser.parse("just some prose") is None
    assert parser.parse("[1, 2, 3]") is None
    assert parser.parse(42) is None


def test_parser_keeps_valid_fields_when_others_are_malformed() -> None:
    parsed = JsonResultParser().parse({"title": "Kept", "content": ["not", "a", "string"], "extra": 1})

    assert parsed is not None
    assert parsed.title == "Kept"
    assert parsed.content is None


def _invoke(handler, **kwargs) -> AgentResponse:
    invoker = HttpAgentInvoker("https://agent.example/chat", transport=httpx.MockTransport(handler), **kwargs)
    return asyncio.run(invoker.invoke("Research AI", "agent-1"))


def test_http_invoker_posts_command_and_decodes_envelope() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"success": True, "response": {"result": "{}", "message": "ok"}})

    response = _invoke(handler, api_key="secret")

    assert seen == {"body": {"message": "Research AI", "agent_id": "agent-1"}, "auth": "Bearer secret"}
    assert response.success is True
    assert response.response is not None
    assert response.response.message == "ok"


def test_http_invoker_passes_through_unsuccessful_envelope() -> None:
    response = _invoke(lambda request: httpx.Response(200, json={"success": False, "error": "rate limited"}))

    assert response.success is False
    assert response.error == "rate limited"


def test_http_invoker_accepts_numeric_message_and_error() -> None:
    ok = _invoke(lambda request: httpx.Response(200, json={"success": True, "response": {"message": 42}}))
    failed = _invoke(lambda request: httpx.Response(200, json={"success": False, "error": 429}))

    assert ok.success is True
    assert ok.response is not None
    assert ok.response.message == "42"
    assert failed.error == "429"


@pytest.mark.parametrize(
    ("handler", "fragment"),
    [
        (lambda request: httpx.Response(502, text="bad gateway"), "502"),
        (lambda request: httpx.Response(200, text="<html>"), "non-JSON"),
        (lambda request: httpx.Response(200, json={"success": "maybe"}), "unrecognized"),
    ],
)
def test_http_invoker_raises_agent_invocation_error(handler, fragment: str) -> None:
    with pytest.raises(AgentInvocationError, match=fragment):
        _invoke(handler)


def test_http_invoker_maps_transport_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(AgentInvocationError, match="Network error"):
        _invoke(handler)


def test_echo_agent_classifies_by_keyword() -> None:
    parser = JsonResultParser()
    response = asyncio.run(EchoAgentInvoker().invoke("Research the latest trends in AI", "agent-1"))

    parsed = parser.parse(response.response.result)

    assert response.success is True
    assert parsed.command_type == "Research"
    assert parsed.title == "Research the latest trends in AI"
    assert "**Command:**" in parsed.content
