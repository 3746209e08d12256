"""Build configuration from environment variables (FI_BUILD_ prefix)."""

from __future__ import annotations

import os
from pathlib import Path

from findit.db import DEFAULT_DATABASE_PATH


class BuildConfig:
    """Settings for one database build.

    The three thresholds are empirically tuned against the real Unicode/CLDR
    data:
    - max_keyword_frequency: "party" (73) still promotes to 🎉 while
      "heart" (84), "face" (162) and "hand" (138) are filtered as generic.
    - max_similarity_frequency: keywords on more symbols than this would
      mark unrelated symbols as similar.
    - semantic_threshold: 0.45 accepts "clover" vs "four leaf clover" (0.49).
    """

    def __init__(self) -> None:
        self.cache_dir: Path = Path(
            os.environ.get("FI_BUILD_CACHE_DIR", ".cache/symbol-data")
        )
        self.output_path: Path = Path(
            os.environ.get("FI_BUILD_OUTPUT", str(DEFAULT_DATABASE_PATH))
        )
        self.locales: tuple[str, ...] = tuple(
            loc.strip()
            for loc in os.environ.get("FI_BUILD_LOCALES", "en,vi").split(",")
            if loc.strip()
        )
        self.spacy_model: str = os.environ.get("FI_BUILD_SPACY_MODEL", "en_core_web_md")
        self.offline: bool = os.environ.get("FI_BUILD_OFFLINE", "").lower() in (
            "1",
            "true",
            "yes",
        )
        self.max_keyword_frequency: int = int(
            os.environ.get("FI_BUILD_MAX_KEYWORD_FREQUENCY", "75")
        )
        self.max_similarity_frequency: int = int(
            os.environ.get("FI_BUILD_MAX_SIMILARITY_FREQUENCY", "10")
        )
        self.semantic_threshold: float = float(
            os.environ.get("FI_BUILD_SEMANTIC_THRESHOLD", "0.45")
        )

    def to_dict(self) -> dict:
        return {
            "cache_dir": str(self.cache_dir),
            "output_path": str(self.output_path),
            "locales": list(self.locales),
            "spacy_model": self.spacy_model,
            "offline": self.offline,
            "max_keyword_frequency": self.max_keyword_frequency,
            "max_similarity_frequency": self.max_similarity_frequency,
            "semantic_threshold": self.semantic_threshold,
        }
