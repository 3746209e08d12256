"""Similarity oracle: do two symbols look too alike to share a round?

Two symbols are similar when their similarity keywords intersect. All fuzzy
matching happened at build time; this is exact set intersection.
"""

from __future__ import annotations

from findit.symbols import Database, normalize_symbol


def are_similar(database: Database, a: str, b: str) -> bool:
    """Return True if `a` and `b` should not appear together in one round.

    Symbols missing from the database are never similar to anything,
    themselves included.
    """
    keywords_a = database.keywords_of(a)
    keywords_b = database.keywords_of(b)
    if keywords_a is None or keywords_b is None:
        return False
    if normalize_symbol(a) == normalize_symbol(b):
        return True
    return not keywords_a.isdisjoint(keywords_b)


def any_similar(database: Database, symbols: list[str]) -> bool:
    """True if any pair in `symbols` is similar."""
    for i, first in enumerate(symbols):
        for second in symbols[i + 1:]:
            if are_similar(database, first, second):
                return True
    return False
