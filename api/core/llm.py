"""
OpenAI-compatible chat completion client (Groq by default).

Used endpoint:
- POST {base_url}/chat/completions -> {"choices": [{"message": {"content": "..."}}]}
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


# LLM failures are explicit and separable from other runtime errors.
class LLMError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None, body: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def _normalize_base_url(base_url: str) -> str:
    base_url = (base_url or "").strip()
    if not base_url:
        raise LLMError("LLM_BASE_URL is empty.")
    return base_url.rstrip("/")


def _error_body(resp: httpx.Response) -> Any:
    # Avoid dumping huge bodies; keep structured errors when the API sends JSON.
    try:
        return resp.json()
    except ValueError:
        return resp.text[:500]


def _extract_content(data: Any) -> str:
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    if not isinstance(first, dict):
        return ""
    message = first.get("message")
    if not isinstance(message, dict):
        return ""
    content = message.get("content")
    return content if isinstance(content, str) else ""


async def chat_completion(
    *,
    base_url: str,
    api_key: str,
    model: str,
    messages: list[dict[str, str]],
    temperature: float | None = None,
    max_tokens: int | None = None,
    timeout_s: float = 60.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """
    Send a message list and return the first choice's content ("" if absent).
    """
    base_url = _normalize_base_url(base_url)
    model = (model or "").strip()
    if not model:
        raise LLMError("LLM model name is empty.")
    if not messages:
        raise LLMError("Messages list is empty.")

    payload: dict[str, Any] = {"messages": messages, "model": model, "stream": False}
    if temperature is not None:
        payload["temperature"] = float(temperature)
    if max_tokens is not None:
        payload["max_tokens"] = int(max_tokens)

    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }

    logger.debug("llm_request model=%s messages=%s", model, len(messages))
    try:
        async with httpx.AsyncClient(base_url=base_url, timeout=timeout_s, transport=transport) as client:
            resp = await client.post("/chat/completions", json=payload, headers=headers)
    except httpx.HTTPError as exc:
        raise LLMError(f"LLM request failed: {exc}") from exc

    if resp.status_code != 200:
        body = _error_body(resp)
        raise LLMError(
            f"LLM chat request failed: {resp.status_code}",
            status_code=resp.status_code,
            body=body,
        )

    try:
        data = resp.json()
    except ValueError as exc:
        raise LLMError("LLM returned a non-JSON response.", status_code=resp.status_code) from exc

    content = _extract_content(data)
    if not content:
        logger.warning("llm_empty_reply model=%s", model)
    return content
