"""Color dictionary: basic CSS colors, translated aliases and similarity groups."""

from __future__ import annotations

import random

# Word (any supported language) -> canonical CSS color name
CSS_COLORS: dict[str, str] = {
    "red": "red",
    "blue": "blue",
    "green": "green",
    "yellow": "yellow",
    "orange": "orange",
    "purple": "purple",
    "pink": "pink",
    "brown": "brown",
    "black": "black",
    "white": "white",
    "gray": "gray",
    "grey": "gray",
    "cyan": "cyan",
    "magenta": "magenta",
    "lime": "lime",
    "navy": "navy",
    "teal": "teal",
    "maroon": "maroon",
    "olive": "olive",
    "aqua": "aqua",
    "gold": "gold",
    "silver": "silver",
    # Spanish
    "rojo": "red",
    "azul": "blue",
    "verde": "green",
    "amarillo": "yellow",
    "naranja": "orange",
    "morado": "purple",
    "rosa": "pink",
    # French
    "rouge": "red",
    "bleu": "blue",
    "vert": "green",
    "jaune": "yellow",
    # German
    "rot": "red",
    "blau": "blue",
    "grün": "green",
    "gelb": "yellow",
}

# Colors a toddler could confuse; a color may sit in several groups
COLOR_GROUPS: list[frozenset[str]] = [
    frozenset({"red", "orange", "pink", "maroon"}),
    frozenset({"blue", "cyan", "navy", "teal"}),
    frozenset({"green", "lime", "olive", "teal"}),
    frozenset({"yellow", "gold", "orange", "lime"}),
    frozenset({"purple", "magenta", "pink", "navy"}),
    frozenset({"brown", "maroon", "orange", "olive"}),
    frozenset({"black", "gray", "navy", "brown"}),
    frozenset({"white", "silver", "gray", "cyan"}),
]

PALETTE: list[str] = list(dict.fromkeys(CSS_COLORS.values()))

# Shown as suggestions next to symbol names
BASIC_COLOR_NAMES: list[str] = [
    "red", "blue", "green", "yellow", "orange", "purple",
    "pink", "brown", "black", "white", "gray",
]


def lookup_color(word: str) -> str | None:
    """Map a (normalized) word to its canonical color name."""
    return CSS_COLORS.get(word.lower().strip())


def colors_similar(a: str, b: str) -> bool:
    if a == b:
        return True
    return any(a in group and b in group for group in COLOR_GROUPS)


def color_distractors(
    target: str,
    count: int = 2,
    rng: random.Random | None = None,
) -> list[str]:
    """Pick `count` colors none of which shares a group with the target or each other.

    Falls back to any palette color other than the target when the grouped
    palette cannot supply enough.
    """
    rng = rng or random
    candidates = [c for c in PALETTE if not colors_similar(target, c)]
    rng.shuffle(candidates)

    chosen: list[str] = []
    for color in candidates:
        if any(colors_similar(color, picked) for picked in chosen):
            continue
        chosen.append(color)
        if len(chosen) == count:
            return chosen

    others = [c for c in PALETTE if c != target]
    return rng.sample(others, min(count, len(others)))
