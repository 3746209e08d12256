"""Local content generator: pure functions on the in-memory symbol database.

No network, no I/O. A miss returns None so the caller can try the fallback.
"""

from __future__ import annotations

import random

from findit.colors import color_distractors, lookup_color
from findit.models import GameContent
from findit.similarity import are_similar
from findit.symbols import Database, normalize_name, normalize_symbol


def pick_distractors(
    database: Database,
    target: str,
    category: str,
    count: int = 2,
    rng: random.Random | None = None,
) -> list[str]:
    """Random symbols from `category` that are not similar to the target or each other.

    Returns fewer than `count` when the category cannot supply enough.
    """
    rng = rng or random
    target_key = normalize_symbol(target)
    candidates = [
        item.symbol
        for item in database.items_in(category)
        if normalize_symbol(item.symbol) != target_key
        and not are_similar(database, target, item.symbol)
    ]
    rng.shuffle(candidates)

    chosen: list[str] = []
    for symbol in candidates:
        if any(are_similar(database, symbol, picked) for picked in chosen):
            continue
        chosen.append(symbol)
        if len(chosen) == count:
            break
    return chosen


def generate_local(
    word: str,
    database: Database,
    rng: random.Random | None = None,
) -> GameContent | None:
    """Build a round from the color dictionary or the symbol database."""
    normalized = normalize_name(word)
    if not normalized:
        return None

    color = lookup_color(normalized)
    if color:
        return GameContent(
            type="color",
            target_value=color,
            distractors=color_distractors(color, 2, rng),
        )

    entry = database.find_by_name(normalized)
    if entry is None:
        return None

    distractors = pick_distractors(database, entry.symbol, entry.category, 2, rng)
    # Not enough distinct options in this category; the fallback gets a turn
    if len(distractors) < 2:
        return None

    return GameContent(
        type="emoji",
        target_value=entry.symbol,
        distractors=distractors,
    )
