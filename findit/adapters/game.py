"""Game routes: one round for a word, and input suggestions."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Request

from findit.content import generate_game_content
from findit.db import get_database
from findit.models import GameContent, GenerateIn, SuggestionsOut
from findit.suggestions import get_random_suggestions

router = APIRouter(prefix="/api/v1", tags=["game"])


@router.post("/generate", response_model=GameContent)
async def generate(body: GenerateIn, request: Request):
    """Target + two distractors for the word, from the database or the LLM fallback."""
    word = body.word.strip()
    if not word:
        raise HTTPException(status_code=400, detail="Word must not be blank")

    content = await generate_game_content(
        word,
        get_database(),
        config=request.app.state.fallback_config,
    )
    if content is None:
        raise HTTPException(status_code=404, detail=f"No game found for '{word}'")
    return content


@router.get("/suggestions", response_model=SuggestionsOut)
async def suggestions(count: int = Query(4, ge=1, le=20)):
    return SuggestionsOut(suggestions=get_random_suggestions(get_database(), count))
