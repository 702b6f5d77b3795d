"""Tests for the OpenAI adapter, run against an in-process HTTP transport."""

from __future__ import annotations

import json

import httpx
import pytest

from lyrics_generator.domain.entities import GenerationOutcome
from lyrics_generator.domain.exceptions import LlmError
from lyrics_generator.infrastructure.openai_adapter import OpenAIAdapter
from lyrics_generator.services.generate_lyrics import GenerationController

_MESSAGES = [
    {"role": "system", "content": "persona"},
    {"role": "user", "content": "Write hip-hop lyrics about: money"},
]


def _completion(*contents: str | None) -> dict[str, object]:
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gpt-3.5-turbo",
        "choices": [
            {
                "index": i,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
            for i, content in enumerate(contents)
        ],
    }


def _adapter(handler) -> tuple[OpenAIAdapter, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def _record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(_record))
    return OpenAIAdapter(api_key="sk-test", http_client=client), seen


async def test_sends_single_chat_completion_request():
    adapter, seen = _adapter(lambda r: httpx.Response(200, json=_completion("Verse 1:\nyo")))

    text = await adapter.complete(_MESSAGES, temperature=0.7, max_tokens=500)

    assert text == "Verse 1:\nyo"
    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert request.url.path.endswith("/chat/completions")
    assert request.headers["authorization"] == "Bearer sk-test"
    body = json.loads(request.content)
    assert body["model"] == "gpt-3.5-turbo"
    assert body["temperature"] == 0.7
    assert body["max_tokens"] == 500
    assert body["messages"] == _MESSAGES
    await adapter.close()


async def test_reads_only_first_choice():
    adapter, _ = _adapter(lambda r: httpx.Response(200, json=_completion("first", "second")))

    assert await adapter.complete(_MESSAGES, temperature=0.7, max_tokens=500) == "first"


@pytest.mark.parametrize("payload", [_completion(), _completion(None), _completion("")])
async def test_missing_text_returns_none(payload):
    adapter, _ = _adapter(lambda r: httpx.Response(200, json=payload))

    assert await adapter.complete(_MESSAGES, temperature=0.7, max_tokens=500) is None


async def test_authentication_error_wrapped():
    adapter, _ = _adapter(
        lambda r: httpx.Response(401, json={"error": {"message": "bad key", "type": "invalid_request_error"}})
    )

    with pytest.raises(LlmError, match="Invalid OpenAI API key"):
        await adapter.complete(_MESSAGES, temperature=0.7, max_tokens=500)


async def test_server_error_is_not_retried():
    adapter, seen = _adapter(lambda r: httpx.Response(500, json={"error": {"message": "oops"}}))

    with pytest.raises(LlmError):
        await adapter.complete(_MESSAGES, temperature=0.7, max_tokens=500)
    assert len(seen) == 1


async def test_network_failure_wrapped():
    def _boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    adapter, _ = _adapter(_boom)

    with pytest.raises(LlmError, match="LLM call failed"):
        await adapter.complete(_MESSAGES, temperature=0.7, max_tokens=500)


async def test_malformed_body_wrapped():
    adapter, _ = _adapter(lambda r: httpx.Response(200, content=b"not json", headers={"content-type": "application/json"}))

    with pytest.raises(LlmError):
        await adapter.complete(_MESSAGES, temperature=0.7, max_tokens=500)


async def test_rate_limit_wrapped_without_logging(caplog):
    adapter, _ = _adapter(
        lambda r: httpx.Response(429, json={"error": {"message": "quota exceeded", "type": "insufficient_quota"}})
    )

    with caplog.at_level("DEBUG", logger="lyrics_generator"):
        with pytest.raises(LlmError, match="rate limit"):
            await adapter.complete(_MESSAGES, temperature=0.7, max_tokens=500)

    assert [r for r in caplog.records if r.name.startswith("lyrics_generator")] == []


async def test_provider_failure_logged_once_by_controller(caplog):
    adapter, _ = _adapter(
        lambda r: httpx.Response(429, json={"error": {"message": "quota exceeded", "type": "insufficient_quota"}})
    )
    controller = GenerationController(adapter)

    with caplog.at_level("WARNING", logger="lyrics_generator"):
        result = await controller.submit("money")

    assert result.outcome is GenerationOutcome.TRANSPORT_ERROR
    errors = [
        r for r in caplog.records
        if r.name.startswith("lyrics_generator") and r.levelname == "ERROR"
    ]
    assert len(errors) == 1
    assert isinstance(errors[0].exc_info[1], LlmError)
