"""Repair LLM-generated rounds whose symbols look too much alike."""

from __future__ import annotations

import logging
import random

from findit.engine import pick_distractors
from findit.models import GameContent
from findit.similarity import any_similar, are_similar
from findit.symbols import Database, is_internal_category

logger = logging.getLogger("findit.corrector")


def needs_fix(content: GameContent, database: Database) -> bool:
    if content.type != "emoji":
        return False
    return any_similar(database, [content.target_value, *content.distractors])


def fix_similar_symbols(
    content: GameContent,
    database: Database,
    rng: random.Random | None = None,
) -> GameContent:
    """Replace distractors that are similar to the target or to each other.

    Color rounds pass through untouched. When no valid replacement exists the
    original round is returned as-is: a near-duplicate is preferred over
    failing the round.
    """
    if not needs_fix(content, database):
        return content

    target = content.target_value

    # internal categories never supply distractors
    category = database.category_of(target)
    if category and not is_internal_category(category):
        replacements = pick_distractors(database, target, category, 2, rng)
        if len(replacements) == 2:
            logger.info("Replaced similar distractors for %s from %s", target, category)
            return content.model_copy(update={"distractors": replacements})

    kept = [
        d for d in content.distractors
        if d != target and not are_similar(database, target, d)
    ]
    if len(kept) >= 2:
        return content.model_copy(update={"distractors": kept[:2]})

    logger.warning("Could not repair similar distractors for %s; keeping original", target)
    return content
