"""Game content for a word: local database first, LLM fallback second."""

from __future__ import annotations

import logging
import random

import httpx

from findit.corrector import fix_similar_symbols
from findit.engine import generate_local
from findit.models import GameContent
from findit.providers.llm_provider import FallbackConfig, generate_remote
from findit.symbols import Database

logger = logging.getLogger("findit.content")


async def generate_game_content(
    word: str,
    database: Database,
    config: FallbackConfig | None = None,
    client: httpx.AsyncClient | None = None,
    rng: random.Random | None = None,
) -> GameContent | None:
    """Return a round for `word`, or None when neither path can produce one."""
    if not word or not word.strip():
        return None

    local = generate_local(word, database, rng)
    if local is not None:
        return local

    config = config or FallbackConfig()
    if not config.enabled:
        return None

    logger.info("No local match for %r, asking fallback", word.strip())
    remote = await generate_remote(word, config, client)
    if remote is None:
        return None

    # LLM output is never trusted to keep symbols distinct
    return fix_similar_symbols(remote, database, rng)
