"""Tests for repairing LLM rounds with look-alike symbols."""

from __future__ import annotations

import random

from findit.corrector import fix_similar_symbols, needs_fix
from findit.models import GameContent
from findit.similarity import any_similar
from findit.symbols import Database, SymbolEntry
from tests.conftest import (
    BICYCLE,
    BUBBLE_TEA,
    CACTUS,
    CHERRY_BLOSSOM,
    CLOVER,
    DOG,
    DOG_FACE,
    LION,
    MILK,
    ROSE,
    SEEDLING,
    TREE,
    TROPICAL_DRINK,
    TULIP,
)


def _emoji(target, *distractors):
    return GameContent(type="emoji", targetValue=target, distractors=list(distractors))


def test_color_content_untouched(database, rng):
    content = GameContent(type="color", targetValue="red", distractors=["pink", "orange"])
    assert fix_similar_symbols(content, database, rng) is content


def test_distinct_emoji_content_untouched(database, rng):
    content = _emoji(DOG, LION, BICYCLE)
    assert not needs_fix(content, database)
    assert fix_similar_symbols(content, database, rng) is content


def test_flower_distractors_replaced_from_category(database):
    allowed = {CLOVER, CACTUS, TREE, SEEDLING}
    content = _emoji(CHERRY_BLOSSOM, ROSE, TULIP)
    assert needs_fix(content, database)

    for seed in range(30):
        fixed = fix_similar_symbols(content, database, random.Random(seed))
        assert fixed.target_value == CHERRY_BLOSSOM
        assert set(fixed.distractors) <= allowed
        assert set(fixed.distractors) != {CACTUS, SEEDLING}
        assert not any_similar(database, [fixed.target_value, *fixed.distractors])


def test_fix_is_idempotent(database, rng):
    content = _emoji(CHERRY_BLOSSOM, ROSE, TULIP)
    fixed = fix_similar_symbols(content, database, rng)
    assert fix_similar_symbols(fixed, database, rng) == fixed


def test_unknown_target_keeps_distinct_distractors(database, rng):
    # 🦖 is not in the database, so its category is unknown
    content = _emoji("🦖", DOG, DOG_FACE)
    fixed = fix_similar_symbols(content, database, rng)
    assert fixed == content


def test_unrepairable_content_returned_as_is(database, rng):
    # drinks cannot supply two symbols unlike 🥛
    content = _emoji(MILK, BUBBLE_TEA, TROPICAL_DRINK)
    assert needs_fix(content, database)
    assert fix_similar_symbols(content, database, rng) is content


def _hands_database():
    entries = [
        SymbolEntry("👋", ("waving hand",), ("hand", "wave"), "internal:hands"),
        SymbolEntry("🤚", ("raised back of hand",), ("backhand", "wave"), "internal:hands"),
        SymbolEntry("👌", ("ok hand",), ("ok",), "internal:hands"),
        SymbolEntry("✌", ("victory hand",), ("victory",), "internal:hands"),
    ]
    return Database(
        categories=[("internal:hands", entries)],
        name_to_symbol={},
        symbol_to_keywords={e.symbol: e.keywords for e in entries},
        symbol_to_category={e.symbol: e.category for e in entries},
        shortest_names=[],
    )


def test_internal_category_never_supplies_replacements(rng):
    database = _hands_database()
    content = _emoji("👋", "🤚", "👌")
    assert needs_fix(content, database)

    fixed = fix_similar_symbols(content, database, rng)
    assert "✌" not in fixed.distractors
    assert fixed is content
