"""Second promotion pass driven by a thesaurus.

Promotes a similarity keyword when one of its synonyms is already a name of
the same symbol (sheep ↔ ewe), or a word of one of its multi-word names
(juice → beverage matches 🧃 "beverage box"). Runs over the finished first
pass and never changes it; promotions only extend the name index.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Protocol

from findit.build.errors import BuildError
from findit.symbols import SymbolEntry, is_internal_category

logger = logging.getLogger("findit.build.synonyms")

MIN_COMPOUND_WORD_LENGTH = 3


class Thesaurus(Protocol):
    def synonyms(self, word: str) -> frozenset[str]: ...


class WordNetThesaurus:
    """Synonyms from WordNet: lemma names of the word's synsets and their direct hypernyms."""

    def __init__(self, corpus=None) -> None:
        import nltk

        if corpus is None:
            from nltk.corpus import wordnet as corpus

        try:
            corpus.synsets("test")
        except LookupError:
            logger.info("Downloading WordNet data...")
            nltk.download("wordnet", quiet=True)
            nltk.download("omw-1.4", quiet=True)
            try:
                corpus.synsets("test")
            except LookupError as exc:
                raise BuildError(
                    "WordNet data not available. Run: python -m nltk.downloader wordnet omw-1.4"
                ) from exc
        self._wn = corpus
        self._cache: dict[str, frozenset[str]] = {}

    def synonyms(self, word: str) -> frozenset[str]:
        word = word.lower().strip()
        if word in self._cache:
            return self._cache[word]

        lemmas: set[str] = set()
        for synset in self._wn.synsets(word.replace(" ", "_")):
            for related in [synset, *synset.hypernyms()]:
                for name in related.lemma_names():
                    lemmas.add(name.replace("_", " ").lower())
        lemmas.discard(word)

        result = frozenset(lemmas)
        self._cache[word] = result
        return result


def compound_name_words(names: Iterable[str]) -> set[str]:
    words: set[str] = set()
    for name in names:
        parts = name.lower().split()
        if len(parts) >= 2:
            words.update(p for p in parts if len(p) >= MIN_COMPOUND_WORD_LENGTH)
    return words


def expand_with_synonyms(
    categories: list[tuple[str, list[SymbolEntry]]],
    name_index: Mapping[str, str],
    thesaurus: Thesaurus,
) -> dict[str, str]:
    """Return keyword → symbol promotions not already present in `name_index`.

    Database order decides; the first symbol to claim a keyword keeps it.
    """
    promotions: dict[str, str] = {}
    for category, items in categories:
        if is_internal_category(category):
            continue
        for item in items:
            existing = {n.lower() for n in item.names}
            compound = compound_name_words(item.names)

            for keyword in item.keywords:
                lower = keyword.lower()
                if lower in existing or lower in name_index or lower in promotions:
                    continue

                synonyms = {s.lower().strip() for s in thesaurus.synonyms(lower)}
                if not synonyms:
                    continue
                if synonyms & existing or synonyms & compound:
                    promotions[lower] = item.symbol
                    logger.debug("Synonym promotion %r → %s", lower, item.symbol)

    logger.info("Synonym pass promoted %d keywords", len(promotions))
    return promotions
