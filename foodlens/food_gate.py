from __future__ import annotations

"""Accept/reject decision: does the image plausibly contain food?"""

from typing import Sequence

from .config import FOOD_GATE_MIN_SCORE
from .constants import FOOD_GATE_LABELS, NON_FOOD_OBJECTS
from .normalize import normalize_text
from .pipeline_types import LabelAnnotation, ObjectAnnotation


def label_gate(labels: Sequence[LabelAnnotation]) -> bool:
    """A generic food label ("food", "dish", ...) with a high score."""
    return any(
        normalize_text(label.description) in FOOD_GATE_LABELS
        and label.score >= FOOD_GATE_MIN_SCORE
        for label in labels
    )


def object_gate(objects: Sequence[ObjectAnnotation]) -> bool:
    """A confident object detection that is not an obvious non-food entity.

    Vision reports specific objects ("Apple", "Pizza") that the label gate
    would miss; there is no finite list of foods, so only known non-food
    objects are blocked.
    """
    for obj in objects:
        if obj.score < FOOD_GATE_MIN_SCORE:
            continue
        if normalize_text(obj.name) in NON_FOOD_OBJECTS:
            continue
        return True
    return False


def is_food(
    labels: Sequence[LabelAnnotation],
    objects: Sequence[ObjectAnnotation],
) -> bool:
    return label_gate(labels) or object_gate(objects)
