"""Agent invocation over HTTP using ``httpx``."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from voice_action.agent.payloads import AgentResponse
from voice_action.errors import AgentInvocationError


class HttpAgentInvoker:
    """POSTs a command to the agent service and decodes its response envelope."""

    def __init__(
        self,
        endpoint: str,
        *,
        api_key: str | None = None,
        timeout_seconds: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._api_key = api_key
        self._timeout_seconds = timeout_seconds
        self._transport = transport
        self._logger = logger or logging.getLogger("voice_action.agent.http")

    async def invoke(self, command_text: str, agent_id: str) -> AgentResponse:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"

        self._logger.info("agent_request_sent", extra={"agent_id": agent_id, "endpoint": self._endpoint})
        try:
            async with httpx.AsyncClient(timeout=self._timeout_seconds, transport=self._transport) as client:
                response = await client.post(
                    self._endpoint,
                    json={"message": command_text, "agent_id": agent_id},
                    headers=headers,
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.TimeoutException as exc:
            raise AgentInvocationError(f"Agent request timed out after {self._timeout_seconds} seconds") from exc
        except httpx.HTTPStatusError as exc:
            raise AgentInvocationError(
                f"Agent request failed: {exc.response.status_code} {exc.response.reason_phrase}"
            ) from exc
        except httpx.RequestError as exc:
            raise AgentInvocationError(f"Network error contacting agent: {exc}") from exc
        except ValueError as exc:
            raise AgentInvocationError("Agent returned a non-JSON response") from exc

        try:
            return AgentResponse.model_validate(payload)
        except ValidationError as exc:
            raise AgentInvocationError("Agent returned an unrecognized response envelope") from exc
