from __future__ import annotations

"""
Text normalisation helpers shared by every stage that compares strings.

Keeping a single definition here means the food gate, the ranker, the
phrase filter, the nutrition matcher and the deduplicator all agree on
what "the same name" means.

Public helpers:

* normalize_text(text) -> str
    Lowercase, accent-free, punctuation-free, single-spaced text.

* food_key(name) -> str
    Coarse grouping key (first token) used for deduplication.
"""

import re
import unicodedata

_NON_WORD_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_text(text: str | None) -> str:
    """Canonical form used for every string comparison in the pipeline.

    >>> normalize_text("Arroz Branco!!")
    'arroz branco'
    """
    if not text:
        return ""
    if not isinstance(text, str):
        text = str(text)

    norm = _strip_accents(text.lower())
    norm = _NON_WORD_RE.sub(" ", norm)
    norm = _WHITESPACE_RE.sub(" ", norm).strip()
    return norm


def food_key(name: str | None) -> str:
    """First word of the normalised name ("arroz branco" -> "arroz").

    Falls back to the whole normalised string, so it never fails.
    """
    normalized = normalize_text(name)
    first, _, _ = normalized.partition(" ")
    return first or normalized
