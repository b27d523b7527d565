"""Typed containers shared across pipeline modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping


def _clamp_score(value: Any) -> float:
    try:
        score = float(value)
    except (TypeError, ValueError):
        return 0.0
    if score != score:  # NaN
        return 0.0
    return min(max(score, 0.0), 1.0)


@dataclass(frozen=True)
class LabelAnnotation:
    """Whole-image label reported by the image classifier."""

    description: str
    score: float

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "LabelAnnotation":
        return cls(
            description=str(raw.get("description") or ""),
            score=_clamp_score(raw.get("score")),
        )


@dataclass(frozen=True)
class ObjectAnnotation:
    """Localized object reported by the image classifier."""

    name: str
    score: float

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "ObjectAnnotation":
        return cls(
            name=str(raw.get("name") or ""),
            score=_clamp_score(raw.get("score")),
        )


@dataclass(frozen=True)
class DetectionCandidate:
    """Untranslated food guess with its classifier score."""

    name: str
    score: float


@dataclass(frozen=True)
class NutritionRecord:
    """Catalog entry; calories are per 100 g."""

    description: str
    normalized_description: str
    calories_per_100g: float
    portion_grams: int = 100


@dataclass
class ResolvedItem:
    name: str
    calories_per_portion: int
    portion_description: str
    confidence: float


class ResultStatus(str, Enum):
    no_food = "no_food"
    unmapped = "unmapped"
    found = "found"


@dataclass
class PipelineResult:
    items: List[ResolvedItem] = field(default_factory=list)
    message: str = ""
    status: ResultStatus = ResultStatus.unmapped
