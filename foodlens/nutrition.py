from __future__ import annotations

"""
Nutrition lookup against the local catalog.

Matching is a three-tier heuristic tuned to short food names:

    exact     the normalised names are equal
    contains  one normalised name contains the other
    overlap   n query words occur inside the catalog description (n > 0)

A higher tier always wins, whatever the overlap count. Within the overlap
tier the raw count decides, without normalising by length, so a long
description sharing two words with the query outranks a shorter one
sharing a single word. Remaining ties keep the first record in catalog
order. Catalog content is tuned against this ordering.
"""

import math
from typing import Optional, Sequence, Tuple

from loguru import logger

from .config import PORTION_DESCRIPTION_TEMPLATE
from .normalize import normalize_text
from .pipeline_types import NutritionRecord, ResolvedItem

TIER_NONE = 0
TIER_OVERLAP = 1
TIER_CONTAINS = 2
TIER_EXACT = 3

MatchScore = Tuple[int, int]
NO_MATCH: MatchScore = (TIER_NONE, 0)


def match_score(query: str, query_words: Sequence[str], normalized_description: str) -> MatchScore:
    """(tier, overlapping word count); compare as a tuple."""
    if normalized_description == query:
        return (TIER_EXACT, 0)
    if query in normalized_description or normalized_description in query:
        return (TIER_CONTAINS, 0)
    overlap = sum(1 for word in query_words if word in normalized_description)
    return (TIER_OVERLAP, overlap) if overlap > 0 else NO_MATCH


class NutritionMatcher:
    """Read-only view over the catalog; safe to share between requests."""

    def __init__(self, records: Sequence[NutritionRecord]):
        self._records = tuple(records)

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> Sequence[NutritionRecord]:
        return self._records

    def match(self, name: str | None) -> Optional[NutritionRecord]:
        """Best catalog record for an already-translated food name, or None."""
        query = normalize_text(name)
        if not query:
            return None

        query_words = query.split(" ")
        best: Optional[NutritionRecord] = None
        best_score = NO_MATCH
        for record in self._records:
            score = match_score(query, query_words, record.normalized_description)
            # strict '>' keeps the first record on ties
            if score > best_score:
                best, best_score = record, score
                if score[0] == TIER_EXACT:
                    break

        if best is None:
            logger.warning(
                "No catalog food found for {!r} (normalized query: {!r})", name, query
            )
            return None

        logger.debug(
            "Nutrition match: {!r} -> {!r} | {:.1f} kcal/100g (score {})",
            name,
            best.description,
            best.calories_per_100g,
            best_score,
        )
        return best


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def resolve_item(display_name: str, confidence: float, record: NutritionRecord) -> ResolvedItem:
    """Build the output item for a matched candidate.

    The calorie value is the catalog kcal/100g, rounded; the portion size
    only feeds the description text.
    """
    return ResolvedItem(
        name=display_name,
        calories_per_portion=round_half_up(record.calories_per_100g),
        portion_description=PORTION_DESCRIPTION_TEMPLATE.format(grams=record.portion_grams),
        confidence=confidence,
    )
