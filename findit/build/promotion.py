"""Keyword promotion: decide which symbol a shared CLDR keyword should name.

"cake" is a keyword of both 🎂 "birthday cake" and 🥮 "moon cake". Every
candidate for a keyword is collected first, using the complete frequency
counts, then exactly one winner is picked per keyword:

1. the keyword is already one of the symbol's names
2. higher semantic score against the label
3. shorter label
4. earlier in source order
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from findit.build.config import BuildConfig
from findit.build.normalizer import SourceCorpus
from findit.symbols import SymbolEntry

logger = logging.getLogger("findit.build.promotion")


class Scorer(Protocol):
    def score(self, a: str, b: str) -> float: ...


@dataclass(frozen=True)
class PromotionCandidate:
    symbol: str
    label: str
    is_name_match: bool
    score: float


def singularize(word: str) -> str:
    if len(word) > 4 and word.endswith("ies"):
        return word[:-3] + "y"
    if len(word) > 4 and word.endswith(("ses", "xes", "zes", "ches", "shes")):
        return word[:-2]
    if len(word) > 3 and word.endswith("s") and not word.endswith("ss"):
        return word[:-1]
    return word


def is_inflection(keyword: str, label: str) -> bool:
    """True for plural/singular pairs such as cherry / cherries."""
    keyword = keyword.lower().strip()
    label = label.lower().strip()
    if not keyword or not label or keyword == label:
        return False
    return singularize(keyword) == singularize(label)


def collect_candidates(
    corpus: SourceCorpus,
    scorer: Scorer,
    config: BuildConfig,
) -> dict[str, list[PromotionCandidate]]:
    """Every (keyword, symbol) pair eligible for promotion, in source order."""
    candidates: dict[str, list[PromotionCandidate]] = {}
    for sym in corpus.symbols:
        if sym.internal:
            continue
        label = sym.label.lower()
        existing = sym.raw_names_lower
        for keyword in sym.keywords:
            lower = keyword.lower()
            if corpus.keyword_counts.get(lower, 0) > config.max_keyword_frequency:
                continue

            is_name_match = lower in existing
            score = scorer.score(lower, label)
            if not (
                is_name_match
                or is_inflection(lower, label)
                or score >= config.semantic_threshold
            ):
                continue

            candidates.setdefault(lower, []).append(
                PromotionCandidate(
                    symbol=sym.symbol,
                    label=sym.label,
                    is_name_match=is_name_match,
                    score=score,
                )
            )
    return candidates


def rank_candidates(candidates: list[PromotionCandidate]) -> list[PromotionCandidate]:
    # sorted() is stable, so equal keys keep source order
    return sorted(
        candidates,
        key=lambda c: (not c.is_name_match, -c.score, len(c.label)),
    )


def pick_winners(candidates: dict[str, list[PromotionCandidate]]) -> dict[str, str]:
    return {
        keyword: rank_candidates(group)[0].symbol
        for keyword, group in candidates.items()
        if group
    }


def promote_names(
    corpus: SourceCorpus,
    winners: dict[str, str],
    config: BuildConfig,
) -> list[SymbolEntry]:
    """Build the final entries: display names plus promoted keywords."""
    entries: list[SymbolEntry] = []
    promoted = 0
    for sym in corpus.symbols:
        names = list(sym.names)
        lower_names = {n.lower() for n in names}

        for keyword in sym.keywords:
            lower = keyword.lower()
            if lower in lower_names:
                continue
            # unique keywords cannot conflict with anything
            if winners.get(lower) == sym.symbol or corpus.word_counts.get(lower) == 1:
                names.append(keyword)
                lower_names.add(lower)
                promoted += 1

        similarity_keywords = tuple(
            k for k in sym.keywords
            if 1 < corpus.word_counts.get(k.lower(), 0) <= config.max_similarity_frequency
        )

        entries.append(
            SymbolEntry(
                symbol=sym.symbol,
                names=tuple(names),
                keywords=similarity_keywords,
                category=sym.category,
                aliases=sym.aliases,
            )
        )

    logger.info("Promoted %d keywords to names (%d contested)", promoted, len(winners))
    return entries
