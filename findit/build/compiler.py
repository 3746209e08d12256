"""Database compiler: normalized sources → promoted names → derived tables → JSON.

Output is deterministic: the same cached sources always produce the same
bytes. Nothing is written unless the whole build succeeds.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

import httpx

from findit.build.config import BuildConfig
from findit.build.errors import EmptyNamesError
from findit.build.normalizer import SourceCorpus, normalize_sources
from findit.build.promotion import Scorer, collect_candidates, pick_winners, promote_names
from findit.build.sources import load_sources
from findit.build.semantic import SemanticScorer
from findit.build.synonyms import Thesaurus, WordNetThesaurus, expand_with_synonyms
from findit.symbols import (
    Database,
    SymbolEntry,
    is_internal_category,
    normalize_name,
    normalize_symbol,
)

logger = logging.getLogger("findit.build.compiler")


def group_by_category(entries: list[SymbolEntry]) -> list[tuple[str, list[SymbolEntry]]]:
    """Category lists in order of first appearance."""
    groups: dict[str, list[SymbolEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.category, []).append(entry)
    return list(groups.items())


def build_name_index(categories: list[tuple[str, list[SymbolEntry]]]) -> dict[str, str]:
    """Lowercased name → symbol; the first public symbol to use a name keeps it."""
    index: dict[str, str] = {}
    for category, items in categories:
        if is_internal_category(category):
            continue
        for item in items:
            for name in item.names:
                key = normalize_name(name)
                if key:
                    index.setdefault(key, item.symbol)
    return index


def compile_database(
    corpus: SourceCorpus,
    scorer: Scorer,
    thesaurus: Thesaurus,
    config: BuildConfig,
) -> Database:
    candidates = collect_candidates(corpus, scorer, config)
    winners = pick_winners(candidates)
    entries = promote_names(corpus, winners, config)

    for entry in entries:
        if not entry.names:
            raise EmptyNamesError(entry.symbol)

    categories = group_by_category(entries)
    name_to_symbol = build_name_index(categories)

    # the synonym pass reads a frozen copy of the first-pass index
    promotions = expand_with_synonyms(categories, dict(name_to_symbol), thesaurus)
    for keyword, symbol in promotions.items():
        name_to_symbol.setdefault(keyword, symbol)

    shortest_names = list(dict.fromkeys(
        item.shortest_name
        for category, items in categories
        if not is_internal_category(category)
        for item in items
    ))

    database = Database(
        categories=categories,
        name_to_symbol=name_to_symbol,
        symbol_to_keywords={normalize_symbol(e.symbol): e.keywords for e in entries},
        symbol_to_category={normalize_symbol(e.symbol): e.category for e in entries},
        shortest_names=shortest_names,
        sources={"urls": list(corpus.urls), "locales": list(corpus.locales)},
    )
    logger.info(
        "Compiled %d symbols in %d categories, %d names (%d from synonyms)",
        len(database),
        len(categories),
        len(name_to_symbol),
        len(promotions),
    )
    return database


def dump_database(database: Database) -> str:
    return json.dumps(database.to_dict(), ensure_ascii=False, indent=2) + "\n"


def write_database(database: Database, path: Path) -> None:
    """Atomically replace `path` with the serialized database."""
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = dump_database(database)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(payload)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.info("Wrote %s (%d bytes)", path, len(payload.encode("utf-8")))


def build_database(
    config: BuildConfig,
    scorer: Scorer | None = None,
    thesaurus: Thesaurus | None = None,
    client: httpx.Client | None = None,
) -> Database:
    """Run the full pipeline: sources → normalize → promote → synonyms → Database."""
    snapshot = load_sources(config.cache_dir, config.locales, config.offline, client)
    corpus = normalize_sources(snapshot, config.locales)

    if scorer is None:
        scorer = SemanticScorer.from_spacy(config.spacy_model)
    if thesaurus is None:
        thesaurus = WordNetThesaurus()

    return compile_database(corpus, scorer, thesaurus, config)
