"""LLM fallback for words the local database cannot handle.

Model-agnostic: supports OpenAI and Anthropic via async httpx. The model
must answer with one JSON object matching GameContent; anything else counts
as a failed fallback.
"""

from __future__ import annotations

import json
import logging
import os
import re

import httpx
from pydantic import ValidationError

from findit.models import GameContent

logger = logging.getLogger("findit.fallback")

_OPENAI_URL = "https://api.openai.com/v1/chat/completions"
_ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"
_MAX_TOKENS = 300

# Strip markdown code fences from model responses
_FENCE_RE = re.compile(r"```(?:json)?\s*", re.IGNORECASE)

_SYSTEM_PROMPT = """\
You are a helpful assistant for a children's educational game called "Find It!".
A parent has entered a word, and you need to generate game content for their child to find.

Rules:
1. If the word is a COLOR (like "red", "blue", "verde", "rot", etc. in any language):
   - Set type to "color"
   - Set targetValue to a valid CSS color name (e.g., "red", "blue", "green")
   - Set distractors to 2 OTHER distinct CSS color names that are visually different

2. If the word is ANYTHING ELSE (animal, shape, object, food, etc.):
   - Set type to "emoji"
   - Set targetValue to a single emoji representing the word
   - Set distractors to 2 OTHER related but different emojis from the same category

Important:
- Accept input in ANY language and translate to appropriate content
- Keep emojis simple and recognizable for young children (ages 2-5)
- Make sure all 3 options (target + 2 distractors) are visually distinct
- For colors, use only basic CSS color names children can see clearly

Respond with a single JSON object (no markdown fences) of this exact shape:
{"type": "color" | "emoji", "targetValue": "...", "distractors": ["...", "..."]}
Return ONLY the JSON object, no other text.
"""


class FallbackConfig:
    """Configuration from environment variables (FI_ prefix)."""

    def __init__(self) -> None:
        self.enabled: bool = os.environ.get("FI_FALLBACK_ENABLED", "1").lower() in (
            "1",
            "true",
            "yes",
        )
        self.model: str = os.environ.get("FI_FALLBACK_MODEL", "gpt-4o-mini")
        self.openai_api_key: str = os.environ.get("FI_OPENAI_API_KEY", "")
        self.anthropic_api_key: str = os.environ.get("FI_ANTHROPIC_API_KEY", "")
        self.timeout_seconds: float = float(
            os.environ.get("FI_FALLBACK_TIMEOUT_SECONDS", "15")
        )

    @property
    def provider(self) -> str:
        """Return 'openai', 'anthropic' or 'none'."""
        if "claude" in self.model.lower() and self.anthropic_api_key:
            return "anthropic"
        if self.openai_api_key:
            return "openai"
        if self.anthropic_api_key:
            return "anthropic"
        return "none"

    def to_dict(self) -> dict:
        return {
            "enabled": self.enabled,
            "provider": self.provider,
            "model": self.model,
            "timeout_seconds": self.timeout_seconds,
        }


def _build_prompt(word: str) -> str:
    return f'Generate game content for the word: "{word.strip()}"'


def _parse_response(content: str) -> GameContent | None:
    """Parse a model answer into GameContent; None if it is not valid."""
    cleaned = _FENCE_RE.sub("", content).strip()

    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end == -1 or start >= end:
        logger.warning("Could not find JSON object in fallback response")
        return None

    try:
        data = json.loads(cleaned[start:end + 1])
    except json.JSONDecodeError as exc:
        logger.warning("Failed to parse fallback JSON: %s", exc)
        return None

    try:
        return GameContent.model_validate(data)
    except ValidationError as exc:
        logger.warning("Fallback response failed validation: %s", exc.errors()[:3])
        return None


async def generate_remote(
    word: str,
    config: FallbackConfig | None = None,
    client: httpx.AsyncClient | None = None,
) -> GameContent | None:
    """Ask the configured LLM for a round. Returns None on any failure."""
    config = config or FallbackConfig()
    provider = config.provider
    if not config.enabled or provider == "none":
        logger.info("Fallback unavailable (enabled=%s, provider=%s)", config.enabled, provider)
        return None

    own_client = client is None
    if own_client:
        client = httpx.AsyncClient(timeout=config.timeout_seconds)

    try:
        if provider == "openai":
            content = await _call_openai(client, config, word)
        else:
            content = await _call_anthropic(client, config, word)
        return _parse_response(content)
    except httpx.HTTPStatusError as exc:
        logger.error(
            "%s HTTP %d: %s", provider, exc.response.status_code, exc.response.text[:200]
        )
        return None
    except httpx.TimeoutException:
        logger.error("%s request timed out after %.1fs", provider, config.timeout_seconds)
        return None
    except Exception as exc:
        logger.error("%s request failed: %s", provider, exc)
        return None
    finally:
        if own_client:
            await client.aclose()


async def _call_openai(
    client: httpx.AsyncClient,
    config: FallbackConfig,
    word: str,
) -> str:
    payload = {
        "model": config.model,
        "messages": [
            {"role": "system", "content": _SYSTEM_PROMPT},
            {"role": "user", "content": _build_prompt(word)},
        ],
        "temperature": 0.3,
        "max_tokens": _MAX_TOKENS,
        "response_format": {"type": "json_object"},
    }
    headers = {
        "Authorization": f"Bearer {config.openai_api_key}",
        "Content-Type": "application/json",
    }
    resp = await client.post(
        _OPENAI_URL, json=payload, headers=headers, timeout=config.timeout_seconds
    )
    resp.raise_for_status()
    data = resp.json()
    return data["choices"][0]["message"]["content"]


async def _call_anthropic(
    client: httpx.AsyncClient,
    config: FallbackConfig,
    word: str,
) -> str:
    model = config.model if "claude" in config.model.lower() else "claude-haiku-4-5"
    payload = {
        "model": model,
        "max_tokens": _MAX_TOKENS,
        "system": _SYSTEM_PROMPT,
        "messages": [{"role": "user", "content": _build_prompt(word)}],
    }
    headers = {
        "x-api-key": config.anthropic_api_key,
        "anthropic-version": "2023-06-01",
        "Content-Type": "application/json",
    }
    resp = await client.post(
        _ANTHROPIC_URL, json=payload, headers=headers, timeout=config.timeout_seconds
    )
    resp.raise_for_status()
    data = resp.json()
    return data["content"][0]["text"]
