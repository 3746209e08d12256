"""Shared test fixtures.

The build runs offline against a small warm cache in tests/fixtures, with a
word-overlap scorer and a dictionary thesaurus standing in for spaCy and
WordNet so results are exact.
"""

from __future__ import annotations

import random
from pathlib import Path

import pytest

from findit.build.compiler import build_database
from findit.build.config import BuildConfig
from findit.build.normalizer import normalize_sources
from findit.build.sources import load_sources

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# Symbols from the fixture cache

GRINNING = "😀"
SLIGHTLY_SMILING = "🙂"
SMILING = "\u263a\ufe0f"
GRINNING_CAT = "😺"
WAVING_HAND = "👋"
WAVING_HAND_LIGHT = "👋🏻"
HAND_SPLAYED = "\U0001f590\ufe0f"
LIGHT_SKIN_TONE = "🏻"
DOG_FACE = "🐶"
DOG = "🐕"
CAT_FACE = "🐱"
CAT = "🐈"
LION = "🦁"
TIGER_FACE = "🐯"
BEAR = "🐻"
HORSE_FACE = "🐴"
ZEBRA = "🦓"
CHERRY_BLOSSOM = "🌸"
ROSE = "🌹"
TULIP = "🌷"
SUNFLOWER = "🌻"
BLOSSOM = "🌼"
CLOVER = "🍀"
CACTUS = "🌵"
TREE = "🌳"
SEEDLING = "🌱"
BEVERAGE_BOX = "🧃"
BUBBLE_TEA = "🧋"
MILK = "🥛"
TROPICAL_DRINK = "🍹"
GLOBE_ASIA = "🌏"
POLICE_CAR = "🚓"
AUTOMOBILE = "🚗"
BICYCLE = "🚲"
SCOOTER = "🛴"
FLAG_AU = "🇦🇺"
FLAG_JP = "🇯🇵"
FLAG_FR = "🇫🇷"

FIXTURE_ENTRY_COUNT = 38
FIXTURE_SYMBOL_COUNT = 37

THESAURUS = {
    "juice": ["beverage", "drink", "liquid"],
}


class WordOverlapScorer:
    """1.0 for equal texts, 0.5 when the keyword is a word of the label."""

    OVERRIDES = {("car", "automobile"): 0.7}

    def score(self, a: str, b: str) -> float:
        a, b = a.lower().strip(), b.lower().strip()
        if a == b:
            return 1.0
        if (a, b) in self.OVERRIDES:
            return self.OVERRIDES[(a, b)]
        if a in b.split():
            return 0.5
        return 0.0


class DictThesaurus:
    def __init__(self, table: dict[str, list[str]]) -> None:
        self._table = table

    def synonyms(self, word: str) -> frozenset[str]:
        return frozenset(self._table.get(word.lower(), ()))


@pytest.fixture
def build_config(tmp_path) -> BuildConfig:
    config = BuildConfig()
    config.cache_dir = FIXTURES_DIR
    config.output_path = tmp_path / "symbols.json"
    config.locales = ("en", "vi")
    config.offline = True
    config.max_keyword_frequency = 6
    config.max_similarity_frequency = 10
    config.semantic_threshold = 0.45
    return config


@pytest.fixture
def snapshot(build_config):
    return load_sources(build_config.cache_dir, build_config.locales, offline=True)


@pytest.fixture
def corpus(snapshot, build_config):
    return normalize_sources(snapshot, build_config.locales)


@pytest.fixture
def scorer() -> WordOverlapScorer:
    return WordOverlapScorer()


@pytest.fixture
def thesaurus() -> DictThesaurus:
    return DictThesaurus(THESAURUS)


@pytest.fixture
def database(build_config, scorer, thesaurus):
    return build_database(build_config, scorer=scorer, thesaurus=thesaurus)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
