from __future__ import annotations

"""
End-to-end food analysis for one image.

    classifier output
      -> food gate          (short-circuits: no translation calls when it fails)
      -> candidate ranking  (capped at MAX_CANDIDATES)
      -> translation        (one concurrent call per candidate)
      -> phrase filter
      -> nutrition match
      -> dedupe by food key
      -> items + user-facing message
"""

import asyncio
from typing import List, Optional, Sequence

from loguru import logger

from .config import (
    FOOD_UNMAPPED_MESSAGE,
    ITEMS_FOUND_MESSAGE,
    MAX_CANDIDATES,
    NO_FOOD_MESSAGE,
    TARGET_LANGUAGE,
)
from .dedupe import dedupe
from .food_gate import is_food
from .nutrition import NutritionMatcher, resolve_item
from .phrase_filter import looks_like_phrase
from .pipeline_types import (
    DetectionCandidate,
    LabelAnnotation,
    ObjectAnnotation,
    PipelineResult,
    ResolvedItem,
    ResultStatus,
)
from .ranking import rank_candidates
from .translation import Translator
from .vision_client import VisionClient


async def translate_or_fallback(translator: Translator, text: str, target_language: str) -> str:
    """Translation failures degrade to the untranslated name."""
    try:
        translated = await translator.translate(text, target_language)
    except Exception as e:
        logger.warning("Translation failed for {!r}; keeping source name: {}", text, e)
        return text
    return translated if (translated or "").strip() else text


async def resolve_candidate(
    candidate: DetectionCandidate,
    translator: Translator,
    matcher: NutritionMatcher,
    target_language: str = TARGET_LANGUAGE,
) -> Optional[ResolvedItem]:
    display_name = await translate_or_fallback(translator, candidate.name, target_language)

    if looks_like_phrase(display_name):
        logger.debug("Skipping phrase-like translation: {!r} -> {!r}", candidate.name, display_name)
        return None

    record = matcher.match(display_name)
    if record is None:
        return None

    item = resolve_item(display_name, candidate.score, record)
    logger.debug(
        "Processed item: {!r} -> {!r} | {} kcal | {}",
        candidate.name,
        display_name,
        item.calories_per_portion,
        item.portion_description,
    )
    return item


async def analyze(
    labels: Sequence[LabelAnnotation],
    objects: Sequence[ObjectAnnotation],
    translator: Translator,
    matcher: NutritionMatcher,
    target_language: str = TARGET_LANGUAGE,
) -> PipelineResult:
    if not is_food(labels, objects):
        logger.info("Food gate rejected image ({} labels, {} objects)", len(labels), len(objects))
        return PipelineResult(items=[], message=NO_FOOD_MESSAGE, status=ResultStatus.no_food)

    candidates = rank_candidates(labels, objects, limit=MAX_CANDIDATES)

    # gather cancels the remaining translations if this coroutine is cancelled
    resolved = await asyncio.gather(
        *(resolve_candidate(c, translator, matcher, target_language) for c in candidates)
    )
    items: List[ResolvedItem] = dedupe(item for item in resolved if item is not None)

    logger.info(
        "Analysis finished: {} candidates -> {} items", len(candidates), len(items)
    )
    if items:
        return PipelineResult(items=items, message=ITEMS_FOUND_MESSAGE, status=ResultStatus.found)
    return PipelineResult(items=[], message=FOOD_UNMAPPED_MESSAGE, status=ResultStatus.unmapped)


async def analyze_image(
    image_bytes: bytes,
    vision: VisionClient,
    translator: Translator,
    matcher: NutritionMatcher,
) -> PipelineResult:
    """Classify the image, then run the analysis pipeline on the result."""
    annotations = await vision.annotate(image_bytes)
    return await analyze(annotations.labels, annotations.objects, translator, matcher)
