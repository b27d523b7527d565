# foodlens/_singletons.py
from functools import lru_cache

from .catalog_build import load_nutrition_catalog
from .nutrition import NutritionMatcher


@lru_cache(maxsize=1)
def get_matcher() -> NutritionMatcher:
    # loaded once per process; read-only afterwards
    return NutritionMatcher(load_nutrition_catalog())
