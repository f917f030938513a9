from __future__ import annotations

import json

import httpx
import pytest

from core import llm

MESSAGES = [{"role": "user", "content": "hi"}]


def _transport(handler) -> httpx.MockTransport:
    return httpx.MockTransport(handler)


@pytest.mark.asyncio
async def test_chat_completion_sends_openai_payload() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": "Hello!"}}]})

    text = await llm.chat_completion(
        base_url="https://llm.test/openai/v1/",
        api_key="secret",
        model="llama-test",
        messages=MESSAGES,
        temperature=0.4,
        max_tokens=150,
        transport=_transport(handler),
    )

    assert text == "Hello!"
    assert seen["url"] == "https://llm.test/openai/v1/chat/completions"
    assert seen["auth"] == "Bearer secret"
    assert seen["body"] == {
        "messages": MESSAGES,
        "model": "llama-test",
        "stream": False,
        "temperature": 0.4,
        "max_tokens": 150,
    }


@pytest.mark.asyncio
async def test_chat_completion_returns_empty_string_without_choices() -> None:
    text = await llm.chat_completion(
        base_url="https://llm.test",
        api_key="k",
        model="m",
        messages=MESSAGES,
        transport=_transport(lambda request: httpx.Response(200, json={"choices": []})),
    )
    assert text == ""


@pytest.mark.asyncio
async def test_chat_completion_raises_with_status_and_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, json={"error": {"message": "rate limited"}})

    with pytest.raises(llm.LLMError) as info:
        await llm.chat_completion(
            base_url="https://llm.test",
            api_key="k",
            model="m",
            messages=MESSAGES,
            transport=_transport(handler),
        )
    assert info.value.status_code == 429
    assert info.value.body == {"error": {"message": "rate limited"}}


@pytest.mark.asyncio
async def test_chat_completion_truncates_text_error_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="x" * 2000)

    with pytest.raises(llm.LLMError) as info:
        await llm.chat_completion(
            base_url="https://llm.test",
            api_key="k",
            model="m",
            messages=MESSAGES,
            transport=_transport(handler),
        )
    assert info.value.body == "x" * 500


@pytest.mark.asyncio
async def test_chat_completion_wraps_transport_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    with pytest.raises(llm.LLMError):
        await llm.chat_completion(
            base_url="https://llm.test",
            api_key="k",
            model="m",
            messages=MESSAGES,
            transport=_transport(handler),
        )


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("base_url", "model", "messages"),
    [
        ("", "m", MESSAGES),
        ("https://llm.test", " ", MESSAGES),
        ("https://llm.test", "m", []),
    ],
)
async def test_chat_completion_validates_arguments(base_url: str, model: str, messages: list) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    with pytest.raises(llm.LLMError):
        await llm.chat_completion(
            base_url=base_url,
            api_key="k",
            model=model,
            messages=messages,
            transport=_transport(handler),
        )
