from __future__ import annotations

from typing import Dict, Iterable, List

from .normalize import food_key
from .pipeline_types import ResolvedItem


def dedupe(items: Iterable[ResolvedItem]) -> List[ResolvedItem]:
    """
    Collapse items sharing a food key ("arroz branco" and "arroz" -> "arroz").

    Keeps the most confident item per key (first one on ties) and returns
    keys in first-seen order.
    """
    by_key: Dict[str, ResolvedItem] = {}
    for item in items:
        key = food_key(item.name)
        existing = by_key.get(key)
        if existing is None or item.confidence > existing.confidence:
            by_key[key] = item
    return list(by_key.values())
