"""AI-assisted component generation through an OpenAI-compatible proxy.

Sends the Figma node JSON plus a generation prompt to the proxy and turns the
completion into component source. The POST goes through RequestExecutor like
every other remote call; by default it is a single attempt
(AI_PROXY_MAX_ATTEMPTS=1).

Usage:
    async with AIProxyClient() as ai:
        code = await ai.generate_component(node, "mui-tsx", "LoginCard", "", model)
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Optional

import httpx

from ..codegen.models import BaseNode, node_to_dict
from ..codegen.prompts import AI_SYSTEM_PROMPT, build_user_prompt
from ..config import AI_PROXY_URL, AI_PROXY_USERNAME
from ..errors import MalformedResponseError
from ..settings import AI_MAX_TOKENS, AI_PROXY_MAX_ATTEMPTS, AI_PROXY_TIMEOUT, AI_TEMPERATURE
from .request_executor import AttemptObserver, RequestExecutor

logger = logging.getLogger(__name__)

_CODE_BLOCK_RE = re.compile(r"```[\w+-]*[^\S\n]*\n(.*?)\n```", re.DOTALL)


def extract_code_block(content: str) -> str:
    """Inner text of the first fenced code block, else the content itself; trimmed."""
    match = _CODE_BLOCK_RE.search(content or "")
    if match:
        return match.group(1).strip()
    return (content or "").strip()


def build_payload(
    node_data: Dict[str, Any],
    framework: str,
    component_name: str,
    additional_instructions: Optional[str],
    model: str,
) -> Dict[str, Any]:
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": AI_SYSTEM_PROMPT},
            {
                "role": "user",
                "content": build_user_prompt(
                    node_data, framework, component_name, additional_instructions,
                ),
            },
        ],
        "temperature": AI_TEMPERATURE,
        "max_tokens": AI_MAX_TOKENS,
        "username": AI_PROXY_USERNAME,
        "playbook_id": None,
    }


def parse_completion(data: Any) -> str:
    """Pull choices[0].message.content out of a completion response.

    Raises:
        MalformedResponseError if the response has no first choice message.
    """
    choices = data.get("choices") if isinstance(data, dict) else None
    first = choices[0] if isinstance(choices, list) and choices else None
    message = first.get("message") if isinstance(first, dict) else None
    if not isinstance(message, dict):
        raise MalformedResponseError("Invalid response from AI model")
    return message.get("content") or ""


class AIProxyClient:
    """Async client for the AI completion proxy.

    Args:
        url: Proxy endpoint. Falls back to AI_PROXY_URL.
        timeout: HTTP request timeout in seconds.
        executor: Retry policy; defaults to AI_PROXY_MAX_ATTEMPTS attempts.
        on_attempt: Observer for every request attempt.
    """

    def __init__(
        self,
        url: str = AI_PROXY_URL,
        timeout: float = AI_PROXY_TIMEOUT,
        executor: Optional[RequestExecutor] = None,
        on_attempt: Optional[AttemptObserver] = None,
    ):
        self._url = url
        self._timeout = timeout
        self._executor = executor or RequestExecutor(max_attempts=AI_PROXY_MAX_ATTEMPTS)
        self._on_attempt = on_attempt
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "AIProxyClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def generate_component(
        self,
        node: BaseNode,
        framework: str,
        component_name: str,
        additional_instructions: Optional[str],
        model: str,
    ) -> str:
        """Ask the model for the component source; returns the unwrapped code."""
        payload = build_payload(
            node_to_dict(node), framework, component_name, additional_instructions, model,
        )
        client = await self._get_client()
        logger.info(
            f"generate_component: name={component_name}, framework={framework}, model={model}"
        )
        data = await self._executor.execute(
            client,
            "POST",
            self._url,
            headers={"Content-Type": "application/json"},
            json=payload,
            on_attempt=self._on_attempt,
        )
        return extract_code_block(parse_completion(data))
