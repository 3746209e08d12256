"""Symbol database: immutable lookup tables built by the offline compiler.

The compiler (findit.build.compiler) produces one Database; the service loads
it once at startup and only reads from it afterwards.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Sequence

INTERNAL_PREFIX = "internal:"

_VARIATION_SELECTOR_RE = re.compile("[\ufe0e\ufe0f]")

# Words that should resolve to a specific symbol regardless of the name index
NAME_OVERRIDES: dict[str, str] = {"puppy": "\U0001F436"}


def normalize_symbol(symbol: str) -> str:
    """Strip text/emoji presentation selectors so both spellings share a key."""
    return _VARIATION_SELECTOR_RE.sub("", symbol)


def normalize_name(name: str) -> str:
    return name.lower().strip()


def is_internal_category(category: str) -> bool:
    return category.startswith(INTERNAL_PREFIX)


@dataclass(frozen=True)
class SymbolEntry:
    symbol: str
    names: tuple[str, ...]
    keywords: tuple[str, ...]
    category: str
    aliases: tuple[str, ...] = field(default=())

    @property
    def primary_name(self) -> str:
        return self.names[0]

    @property
    def shortest_name(self) -> str:
        # min() keeps the first of several equally short names
        return min(self.names, key=len)

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "names": list(self.names),
            "keywords": list(self.keywords),
            "aliases": list(self.aliases),
        }


class Database:
    """Categorized symbols plus the derived name/keyword/category tables."""

    def __init__(
        self,
        categories: Sequence[tuple[str, Sequence[SymbolEntry]]],
        name_to_symbol: Mapping[str, str],
        symbol_to_keywords: Mapping[str, Sequence[str]],
        symbol_to_category: Mapping[str, str],
        shortest_names: Iterable[str],
        sources: Mapping[str, object] | None = None,
    ) -> None:
        self._categories: tuple[tuple[str, tuple[SymbolEntry, ...]], ...] = tuple(
            (name, tuple(items)) for name, items in categories
        )
        self._items_by_category = MappingProxyType(dict(self._categories))
        self._entries = MappingProxyType({
            normalize_symbol(item.symbol): item
            for _, items in self._categories
            for item in items
        })
        self._name_to_symbol = MappingProxyType(dict(name_to_symbol))
        self._symbol_to_keywords = MappingProxyType({
            normalize_symbol(symbol): tuple(keywords)
            for symbol, keywords in symbol_to_keywords.items()
        })
        # Case-folded sets used by the similarity oracle
        self._keyword_sets = MappingProxyType({
            key: frozenset(k.casefold() for k in keywords)
            for key, keywords in self._symbol_to_keywords.items()
        })
        self._symbol_to_category = MappingProxyType({
            normalize_symbol(symbol): category
            for symbol, category in symbol_to_category.items()
        })
        self._shortest_names: tuple[str, ...] = tuple(shortest_names)
        self._sources = MappingProxyType(dict(sources or {}))

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def categories(self) -> tuple[tuple[str, tuple[SymbolEntry, ...]], ...]:
        return self._categories

    @property
    def name_to_symbol(self) -> Mapping[str, str]:
        return self._name_to_symbol

    @property
    def symbol_to_keywords(self) -> Mapping[str, tuple[str, ...]]:
        return self._symbol_to_keywords

    @property
    def symbol_to_category(self) -> Mapping[str, str]:
        return self._symbol_to_category

    @property
    def shortest_names(self) -> tuple[str, ...]:
        return self._shortest_names

    @property
    def sources(self) -> Mapping[str, object]:
        return self._sources

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and normalize_symbol(symbol) in self._entries

    def public_categories(self) -> list[tuple[str, int]]:
        """(category, item count) for every category visible to players."""
        return [
            (name, len(items))
            for name, items in self._categories
            if not is_internal_category(name)
        ]

    def items_in(self, category: str) -> tuple[SymbolEntry, ...]:
        return self._items_by_category.get(category, ())

    def entry_for(self, symbol: str) -> SymbolEntry | None:
        return self._entries.get(normalize_symbol(symbol))

    def category_of(self, symbol: str) -> str | None:
        return self._symbol_to_category.get(normalize_symbol(symbol))

    def keywords_of(self, symbol: str) -> frozenset[str] | None:
        """Case-folded similarity keywords, or None for unknown symbols."""
        return self._keyword_sets.get(normalize_symbol(symbol))

    def find_by_name(self, name: str) -> SymbolEntry | None:
        """Resolve a player-typed word to a public symbol entry."""
        normalized = normalize_name(name)
        if not normalized:
            return None
        override = NAME_OVERRIDES.get(normalized)
        if override is not None and override in self:
            return self.entry_for(override)
        symbol = self._name_to_symbol.get(normalized)
        if symbol is None:
            return None
        return self.entry_for(symbol)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        return {
            "sources": dict(self._sources),
            "categories": [
                {"category": name, "items": [item.to_dict() for item in items]}
                for name, items in self._categories
            ],
            "name_to_symbol": dict(self._name_to_symbol),
            "symbol_to_keywords": {k: list(v) for k, v in self._symbol_to_keywords.items()},
            "symbol_to_category": dict(self._symbol_to_category),
            "shortest_names": list(self._shortest_names),
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> Database:
        categories = [
            (
                block["category"],
                [
                    SymbolEntry(
                        symbol=item["symbol"],
                        names=tuple(item["names"]),
                        keywords=tuple(item.get("keywords", ())),
                        category=block["category"],
                        aliases=tuple(item.get("aliases", ())),
                    )
                    for item in block["items"]
                ],
            )
            for block in data["categories"]
        ]
        return cls(
            categories=categories,
            name_to_symbol=data["name_to_symbol"],
            symbol_to_keywords=data["symbol_to_keywords"],
            symbol_to_category=data["symbol_to_category"],
            shortest_names=data["shortest_names"],
            sources=data.get("sources"),
        )
