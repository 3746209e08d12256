"""Word-vector similarity between a keyword and a symbol's label.

Lets "car" promote to 🚗 "automobile" and "clover" to 🍀 "four leaf clover"
without an exact word match. Vectors come from a spaCy model's vocabulary.
"""

from __future__ import annotations

import logging
from typing import Callable

import numpy as np

from findit.build.errors import BuildError

logger = logging.getLogger("findit.build.semantic")

VectorLookup = Callable[[str], "np.ndarray | None"]


def cosine(a: np.ndarray, b: np.ndarray) -> float:
    norm = float(np.linalg.norm(a) * np.linalg.norm(b))
    if norm == 0.0:
        return 0.0
    return float(np.dot(a, b) / norm)


class SemanticScorer:
    """Cosine similarity of text vectors; texts without a vector score 0."""

    def __init__(self, vector_for: VectorLookup) -> None:
        self._vector_for = vector_for
        self._cache: dict[str, np.ndarray | None] = {}

    def vector(self, text: str) -> np.ndarray | None:
        text = text.lower().strip()
        if text not in self._cache:
            self._cache[text] = self._vector_for(text) if text else None
        return self._cache[text]

    def score(self, a: str, b: str) -> float:
        va = self.vector(a)
        vb = self.vector(b)
        if va is None or vb is None:
            return 0.0
        return cosine(va, vb)

    @classmethod
    def from_spacy(cls, model_name: str) -> SemanticScorer:
        """Load a spaCy model with word vectors (e.g. en_core_web_md)."""
        import spacy

        try:
            nlp = spacy.load(model_name, exclude=["parser", "ner", "lemmatizer"])
        except OSError as exc:
            raise BuildError(
                f"spaCy model {model_name!r} not found. "
                f"Run: python -m spacy download {model_name}"
            ) from exc

        if not nlp.vocab.vectors.shape[0]:
            raise BuildError(f"spaCy model {model_name!r} has no word vectors")
        logger.info("Loaded spaCy model %s (%d vectors)", model_name, nlp.vocab.vectors.shape[0])

        def vector_for(text: str) -> np.ndarray | None:
            # mean of token vectors for multi-word labels
            vectors = [tok.vector for tok in nlp.tokenizer(text) if tok.has_vector]
            if not vectors:
                return None
            return np.mean(vectors, axis=0)

        return cls(vector_for)
