"""Turn the raw sources into one record per kept symbol, plus word frequencies.

Skin-tone variants whose stripped form is itself listed are folded into that
base symbol as aliases; they are neither counted nor promoted.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from findit.build.categories import display_name, map_category
from findit.build.errors import BuildError
from findit.build.sources import SourceSnapshot, strip_skin_tone
from findit.symbols import is_internal_category, normalize_symbol

logger = logging.getLogger("findit.build.normalizer")

ENGLISH = "en"

_WORD_RE = re.compile(r"\w+")


def tokenize(text: str) -> list[str]:
    """Lowercased Unicode word tokens: "flag: Côte d'Ivoire" → flag, côte, d, ivoire."""
    return _WORD_RE.findall(text.lower())


def _unique(values, key=str.lower) -> tuple[str, ...]:
    seen: set[str] = set()
    result = []
    for value in values:
        k = key(value)
        if k in seen:
            continue
        seen.add(k)
        result.append(value)
    return tuple(result)


@dataclass(frozen=True)
class NormalizedSymbol:
    symbol: str
    label: str
    category: str
    raw_names: tuple[str, ...]
    names: tuple[str, ...]
    keywords: tuple[str, ...]
    aliases: tuple[str, ...] = ()

    @property
    def internal(self) -> bool:
        return is_internal_category(self.category)

    @property
    def raw_names_lower(self) -> frozenset[str]:
        return frozenset(n.lower() for n in self.raw_names)


@dataclass
class SourceCorpus:
    symbols: list[NormalizedSymbol]
    # word -> number of distinct symbols using it in a name or keyword
    word_counts: dict[str, int] = field(default_factory=dict)
    # keyword -> number of distinct symbols listing it as a keyword
    keyword_counts: dict[str, int] = field(default_factory=dict)
    locales: tuple[str, ...] = ()
    urls: tuple[str, ...] = ()


def normalize_sources(snapshot: SourceSnapshot, locales: tuple[str, ...]) -> SourceCorpus:
    """Classify, name and count every kept symbol in source order."""
    if ENGLISH not in locales or ENGLISH not in snapshot.locale_data:
        raise BuildError("English annotations are required for keyword promotion")

    base_by_key: dict[str, str] = {}
    for entry in snapshot.entries:
        base_by_key.setdefault(normalize_symbol(entry.symbol), entry.symbol)

    aliases: dict[str, list[str]] = {}
    kept = []
    seen: set[str] = set()
    for entry in snapshot.entries:
        key = normalize_symbol(entry.symbol)
        base = base_by_key.get(normalize_symbol(strip_skin_tone(entry.symbol)))
        if base is not None and normalize_symbol(base) != key:
            aliases.setdefault(base, []).append(entry.symbol)
            continue
        if key in seen:
            continue
        seen.add(key)
        kept.append(entry)

    english = snapshot.locale_data[ENGLISH]
    word_symbols: dict[str, set[str]] = {}
    keyword_symbols: dict[str, set[str]] = {}
    symbols: list[NormalizedSymbol] = []

    for entry in kept:
        category = map_category(entry.group, entry.subgroup)

        raw_names: list[str] = []
        for locale in locales:
            data = snapshot.locale_data.get(locale)
            if data is None:
                continue
            raw_names.extend(data.names(entry.symbol))
            for keyword in data.keywords(entry.symbol):
                lower = keyword.lower()
                word_symbols.setdefault(lower, set()).add(entry.symbol)
                keyword_symbols.setdefault(lower, set()).add(entry.symbol)

        label = english.label(entry.symbol) or entry.name
        if not raw_names:
            raw_names.append(label)
        raw_names = list(_unique(raw_names))

        for name in raw_names:
            for word in tokenize(name):
                word_symbols.setdefault(word, set()).add(entry.symbol)

        symbols.append(
            NormalizedSymbol(
                symbol=entry.symbol,
                label=label,
                category=category,
                raw_names=tuple(raw_names),
                names=_unique(display_name(n, category) for n in raw_names),
                keywords=_unique(english.keywords(entry.symbol)),
                aliases=tuple(aliases.get(entry.symbol, ())),
            )
        )

    logger.info(
        "Normalized %d symbols (%d skin-tone aliases folded)",
        len(symbols),
        sum(len(v) for v in aliases.values()),
    )
    return SourceCorpus(
        symbols=symbols,
        word_counts={w: len(s) for w, s in word_symbols.items()},
        keyword_counts={k: len(s) for k, s in keyword_symbols.items()},
        locales=tuple(locales),
        urls=tuple(snapshot.urls),
    )
