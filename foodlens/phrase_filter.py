from __future__ import annotations

"""
Reject translated names that read as descriptive phrases.

Translating a generic label (e.g. "Finger food") can produce a whole
description ("comidinhas para comer com as mãos") instead of a dish name.
Such strings never match the nutrition catalog, so they are dropped before
matching is attempted.
"""

from .config import PHRASE_MAX_TOKENS
from .constants import PHRASE_CONNECTIVES
from .normalize import normalize_text


def has_connective(normalized: str) -> bool:
    return any(conn in normalized for conn in PHRASE_CONNECTIVES)


def looks_like_phrase(translated_name: str | None) -> bool:
    text = normalize_text(translated_name)
    if has_connective(text):
        return True
    # very long names tend to be descriptions
    return len(text.split(" ")) >= PHRASE_MAX_TOKENS
