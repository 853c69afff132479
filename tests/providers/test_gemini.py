import json

import httpx
import pytest

from chainlens.providers.llm import (
    GeminiProvider,
    LLMMessage,
    LLMProviderAuthError,
    LLMProviderError,
    LLMProviderRateLimitError,
)

REPLY = {
    "candidates": [
        {"content": {"parts": [{"text": "Hello"}, {"text": " world"}]}, "finishReason": "STOP"}
    ],
    "usageMetadata": {"totalTokenCount": 12},
}


def _provider(status_code=200, payload=None, seen=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, json=payload if payload is not None else REPLY)

    return GeminiProvider(api_key="g-key", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_generate_response_request_shape():
    seen = []
    provider = _provider(seen=seen)

    response = await provider.generate_response(
        [LLMMessage(role="system", content="be brief"), LLMMessage(role="user", content="hi")],
        max_tokens=64,
        temperature=0.2,
    )
    await provider.close()

    request = seen[0]
    body = json.loads(request.content)
    assert request.url.path == "/v1beta/models/gemini-2.5-flash:generateContent"
    assert request.headers["x-goog-api-key"] == "g-key"
    assert body["contents"] == [{"role": "user", "parts": [{"text": "hi"}]}]
    assert body["systemInstruction"] == {"parts": [{"text": "be brief"}]}
    assert body["generationConfig"] == {"maxOutputTokens": 64, "temperature": 0.2}
    assert response.content == "Hello world"
    assert response.tokens_used == 12
    assert response.finish_reason == "STOP"


@pytest.mark.asyncio
async def test_generate_text_returns_reply():
    provider = _provider()
    assert await provider.generate_text("hi") == "Hello world"
    await provider.close()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status_code,error",
    [(401, LLMProviderAuthError), (403, LLMProviderAuthError), (429, LLMProviderRateLimitError), (500, LLMProviderError)],
)
async def test_http_errors_are_mapped(status_code, error):
    provider = _provider(status_code=status_code, payload={"error": {"message": "nope"}})

    with pytest.raises(error):
        await provider.generate_text("hi")
    await provider.close()


@pytest.mark.asyncio
async def test_blocked_prompt_has_no_candidates():
    provider = _provider(payload={"promptFeedback": {"blockReason": "SAFETY"}})

    with pytest.raises(LLMProviderError, match="SAFETY"):
        await provider.generate_text("hi")
    await provider.close()


@pytest.mark.asyncio
async def test_empty_reply_is_an_error():
    provider = _provider(payload={"candidates": [{"content": {"parts": []}}]})

    with pytest.raises(LLMProviderError, match="empty response"):
        await provider.generate_text("hi")
    health = await provider.health_check()
    await provider.close()

    assert health["status"] == "error"


@pytest.mark.asyncio
async def test_generation_config_comes_from_constructor():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(200, json=REPLY)

    provider = GeminiProvider(
        api_key="g-key",
        transport=httpx.MockTransport(handler),
        max_tokens=256,
        temperature=0.3,
    )
    await provider.generate_text("hi")
    await provider.generate_response([LLMMessage(role="user", content="hi")])
    await provider.close()

    assert seen[0]["generationConfig"] == {"maxOutputTokens": 256, "temperature": 0.3}
    assert seen[1]["generationConfig"] == {"maxOutputTokens": 256, "temperature": 0.3}


@pytest.mark.asyncio
async def test_call_arguments_override_configured_generation():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(200, json=REPLY)

    provider = GeminiProvider(
        api_key="g-key", transport=httpx.MockTransport(handler), max_tokens=256, temperature=0.3
    )
    await provider.generate_text("hi", max_tokens=8, temperature=0.0)
    await provider.close()

    assert seen[0]["generationConfig"] == {"maxOutputTokens": 8, "temperature": 0.0}
