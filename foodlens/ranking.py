from __future__ import annotations

"""
Candidate ranking.

Merges the classifier's localized objects and whole-image labels into a
single score-ordered list of detection candidates:

- objects above the candidate threshold are kept as-is (they are already
  specific, e.g. "Pizza", "Banana");
- labels above the threshold are kept unless they are generic/noise terms
  ("tableware", "snack", "cup", ...).
"""

from typing import List, Optional, Sequence

from loguru import logger

from .config import CANDIDATE_MIN_SCORE
from .constants import GENERIC_LABELS
from .normalize import normalize_text
from .pipeline_types import DetectionCandidate, LabelAnnotation, ObjectAnnotation


def candidates_from_objects(objects: Sequence[ObjectAnnotation]) -> List[DetectionCandidate]:
    return [
        DetectionCandidate(name=(o.name or "").strip(), score=o.score)
        for o in objects
        if o.score >= CANDIDATE_MIN_SCORE
    ]


def candidates_from_labels(labels: Sequence[LabelAnnotation]) -> List[DetectionCandidate]:
    out: List[DetectionCandidate] = []
    for label in labels:
        if label.score < CANDIDATE_MIN_SCORE:
            continue
        name = (label.description or "").strip()
        desc = normalize_text(name)
        if not desc or desc in GENERIC_LABELS:
            continue
        out.append(DetectionCandidate(name=name, score=label.score))
    return out


def rank_candidates(
    labels: Sequence[LabelAnnotation],
    objects: Sequence[ObjectAnnotation],
    limit: Optional[int] = None,
) -> List[DetectionCandidate]:
    """
    Objects first, then labels, sorted by score descending.

    ``sorted`` is stable, so equal scores keep that relative order. ``limit``
    truncates after sorting; callers pass MAX_CANDIDATES.
    """
    merged = candidates_from_objects(objects) + candidates_from_labels(labels)
    ranked = sorted(merged, key=lambda c: c.score, reverse=True)
    if limit is not None:
        ranked = ranked[: max(limit, 0)]
    logger.debug(
        "Ranked {} candidates: {}",
        len(ranked),
        ", ".join(f"{c.name} ({c.score:.2f})" for c in ranked),
    )
    return ranked
