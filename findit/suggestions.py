"""Random word suggestions for the input screen."""

from __future__ import annotations

import random

from findit.colors import BASIC_COLOR_NAMES
from findit.symbols import Database


def get_random_suggestions(
    database: Database,
    count: int = 4,
    rng: random.Random | None = None,
) -> list[str]:
    """Return `count` unique suggestions mixing color names and symbol names."""
    rng = rng or random
    pool = list(dict.fromkeys([*BASIC_COLOR_NAMES, *database.shortest_names]))
    return rng.sample(pool, min(count, len(pool)))
