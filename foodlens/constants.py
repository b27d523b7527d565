from __future__ import annotations

"""Fixed vocabularies used by the food gate, ranker and phrase filter.

All terms are stored in their normalized form (see ``normalize_text``) so
lookups can compare against normalized classifier output directly.
"""

# Generic "this is food" labels that open the label gate.
FOOD_GATE_LABELS = frozenset(
    [
        "food",
        "dish",
        "meal",
        "cuisine",
        "ingredient",
        "recipe",
        "produce",
    ]
)

# High-confidence objects that never count as food for the object gate.
NON_FOOD_OBJECTS = frozenset(
    [
        "person",
        "human",
        "vehicle",
        "car",
        "phone",
        "electronics",
    ]
)

# Labels that are food-adjacent but useless as an item name.
GENERIC_LABELS = frozenset(
    [
        "food",
        "produce",
        "ingredient",
        "fried food",
        "vegetable",
        "cuisine",
        "dish",
        "meal",
        "recipe",
        "tableware",
        "dinnerware",
        "fast food",
        "natural foods",
        "staple food",
        "garnish",
        "lunch",
        "breakfast",
        "dinner",
        "cup",
        "coffee cup",
        "mug",
        "serveware",
        "drinkware",
        "cookware and bakeware",
        "dishware",
        "kitchen utensil",
        "food group",
        "finger food",
        "snack",
        "snack food",
    ]
)

# Space-padded connectives (pt-BR) that show up in descriptive translations
# such as "comidinhas para comer com as mãos".
PHRASE_CONNECTIVES = (
    " para ",
    " com as ",
    " com a ",
    " comer ",
    " feito ",
    " feitos ",
    " tipo ",
    " em ",
)
