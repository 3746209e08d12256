"""Pydantic models for findit-engine request/response shapes."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from findit.symbols import normalize_symbol


# ---------------------------------------------------------------------------
# Game content (wire contract with the game UI)
# ---------------------------------------------------------------------------

class GameContent(BaseModel):
    """One round: a target plus exactly two distractors.

    Also the schema the LLM fallback must satisfy; extra distractors are
    dropped, fewer than two is a validation error.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    type: Literal["color", "emoji"]
    target_value: str = Field(alias="targetValue", min_length=1)
    distractors: list[str]

    @field_validator("target_value")
    @classmethod
    def _strip_target(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("targetValue must not be blank")
        return value

    @field_validator("distractors")
    @classmethod
    def _two_distractors(cls, value: list[str]) -> list[str]:
        cleaned = [v.strip() for v in value if v and v.strip()]
        if len(cleaned) < 2:
            raise ValueError("at least 2 distractors are required")
        return cleaned[:2]

    @model_validator(mode="after")
    def _distinct_options(self) -> GameContent:
        options = [normalize_symbol(v).casefold() for v in (self.target_value, *self.distractors)]
        if len(set(options)) != len(options):
            raise ValueError("targetValue and distractors must be distinct")
        return self


class GenerateIn(BaseModel):
    word: str


# ---------------------------------------------------------------------------
# Suggestions
# ---------------------------------------------------------------------------

class SuggestionsOut(BaseModel):
    suggestions: list[str]


# ---------------------------------------------------------------------------
# Symbol database inspection
# ---------------------------------------------------------------------------

class SymbolOut(BaseModel):
    symbol: str
    category: str
    names: list[str]
    keywords: list[str]
    aliases: list[str] = []


class SymbolLookupOut(BaseModel):
    name: str
    symbol: SymbolOut


class CategoryOut(BaseModel):
    name: str
    count: int


class CategoriesOut(BaseModel):
    categories: list[CategoryOut]
    total: int


class SimilarityOut(BaseModel):
    a: str
    b: str
    similar: bool
