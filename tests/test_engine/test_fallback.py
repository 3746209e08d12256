"""Tests for the LLM fallback and the full generate_game_content flow (no real LLM calls)."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest
from pydantic import ValidationError

from findit.content import generate_game_content
from findit.models import GameContent
from findit.providers.llm_provider import FallbackConfig, _parse_response, generate_remote
from tests.conftest import CHERRY_BLOSSOM, DOG, ROSE, TULIP


def _config(provider: str = "openai") -> FallbackConfig:
    config = FallbackConfig()
    config.enabled = True
    config.model = "gpt-4o-mini" if provider == "openai" else "claude-haiku-4-5"
    config.openai_api_key = "test-key" if provider == "openai" else ""
    config.anthropic_api_key = "test-key" if provider == "anthropic" else ""
    return config


def _openai_reply(content: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


async def _remote(word, config, handler):
    async with _client(handler) as client:
        return await generate_remote(word, config, client)


# ---------------------------------------------------------------------------
# GameContent validation
# ---------------------------------------------------------------------------

def test_game_content_wire_shape():
    content = GameContent.model_validate(
        {"type": "emoji", "targetValue": DOG, "distractors": ["🦁", "🐻", "🦓"]}
    )
    assert content.distractors == ["🦁", "🐻"]
    assert content.model_dump(by_alias=True) == {
        "type": "emoji",
        "targetValue": DOG,
        "distractors": ["🦁", "🐻"],
    }


def test_game_content_rejects_short_or_blank():
    with pytest.raises(ValidationError):
        GameContent.model_validate({"type": "emoji", "targetValue": DOG, "distractors": ["🦁"]})
    with pytest.raises(ValidationError):
        GameContent.model_validate({"type": "emoji", "targetValue": "  ", "distractors": ["a", "b"]})
    with pytest.raises(ValidationError):
        GameContent.model_validate({"type": "shape", "targetValue": "x", "distractors": ["a", "b"]})


def test_game_content_rejects_repeated_options():
    with pytest.raises(ValidationError):
        GameContent.model_validate({"type": "emoji", "targetValue": "🦖", "distractors": ["🦖", "🦕"]})
    with pytest.raises(ValidationError):
        GameContent.model_validate({"type": "emoji", "targetValue": "🦖", "distractors": ["🦕", "🦕"]})
    with pytest.raises(ValidationError):
        GameContent.model_validate({"type": "emoji", "targetValue": "\u263a\ufe0f", "distractors": ["\u263a", "🦕"]})
    with pytest.raises(ValidationError):
        GameContent.model_validate({"type": "color", "targetValue": "red", "distractors": ["Red", "blue"]})


# ---------------------------------------------------------------------------
# Response parsing
# ---------------------------------------------------------------------------

def test_parse_response_strips_fences():
    raw = '```json\n{"type": "color", "targetValue": "blue", "distractors": ["red", "yellow"]}\n```'
    content = _parse_response(raw)
    assert content.type == "color"
    assert content.target_value == "blue"


def test_parse_response_rejects_garbage():
    assert _parse_response("I cannot help with that") is None
    assert _parse_response('{"type": "emoji", "targetValue": ') is None
    assert _parse_response('{"type": "emoji", "targetValue": "🐕", "distractors": []}') is None


# ---------------------------------------------------------------------------
# Provider calls
# ---------------------------------------------------------------------------

def test_provider_selection():
    assert _config("openai").provider == "openai"
    assert _config("anthropic").provider == "anthropic"
    config = _config("openai")
    config.openai_api_key = ""
    assert config.provider == "none"


def test_openai_request_and_answer():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        answer = {"type": "emoji", "targetValue": "🦒", "distractors": ["🐘", "🦛"]}
        return httpx.Response(200, json=_openai_reply(json.dumps(answer)))

    content = asyncio.run(_remote("giraffe", _config("openai"), handler))

    assert content.target_value == "🦒"
    assert seen["url"].endswith("/v1/chat/completions")
    assert seen["auth"] == "Bearer test-key"
    assert 'giraffe' in seen["body"]["messages"][1]["content"]


def test_anthropic_request_and_answer():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["key"] = request.headers["x-api-key"]
        answer = '{"type": "color", "targetValue": "red", "distractors": ["blue", "green"]}'
        return httpx.Response(200, json={"content": [{"type": "text", "text": answer}]})

    content = asyncio.run(_remote("rouge", _config("anthropic"), handler))

    assert content.type == "color"
    assert seen["url"].endswith("/v1/messages")
    assert seen["key"] == "test-key"


def test_http_error_returns_none():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="upstream exploded")

    assert asyncio.run(_remote("giraffe", _config(), handler)) is None


def test_timeout_returns_none():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    assert asyncio.run(_remote("giraffe", _config(), handler)) is None


def test_malformed_answer_returns_none():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=_openai_reply("giraffe is 🦒"))

    assert asyncio.run(_remote("giraffe", _config(), handler)) is None


def test_repeated_options_answer_returns_none():
    def handler(request: httpx.Request) -> httpx.Response:
        answer = {"type": "emoji", "targetValue": "🦖", "distractors": ["🦖", "🦖"]}
        return httpx.Response(200, json=_openai_reply(json.dumps(answer)))

    assert asyncio.run(_remote("dinosaur", _config(), handler)) is None


def test_disabled_fallback_makes_no_request():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    config = _config()
    config.enabled = False
    assert asyncio.run(_remote("giraffe", config, handler)) is None


# ---------------------------------------------------------------------------
# generate_game_content
# ---------------------------------------------------------------------------

async def _generate(word, database, config, handler, rng=None):
    async with _client(handler) as client:
        return await generate_game_content(word, database, config, client, rng)


def test_local_hit_skips_fallback(database, rng):
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    content = asyncio.run(_generate("dog", database, _config(), handler, rng))
    assert content.target_value == DOG


def test_blank_word_returns_none(database):
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    assert asyncio.run(_generate("   ", database, _config(), handler)) is None


def test_unknown_word_without_fallback(database):
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    config = _config()
    config.enabled = False
    assert asyncio.run(_generate("xyznonexistent", database, config, handler)) is None


def test_fallback_answer_is_corrected(database, rng):
    def handler(request: httpx.Request) -> httpx.Response:
        answer = {"type": "emoji", "targetValue": CHERRY_BLOSSOM, "distractors": [ROSE, TULIP]}
        return httpx.Response(200, json=_openai_reply(json.dumps(answer)))

    content = asyncio.run(_generate("sakura", database, _config(), handler, rng))

    assert content.target_value == CHERRY_BLOSSOM
    assert ROSE not in content.distractors
    assert TULIP not in content.distractors


def test_fallback_failure_returns_none(database):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="busy")

    assert asyncio.run(_generate("sakura", database, _config(), handler)) is None
