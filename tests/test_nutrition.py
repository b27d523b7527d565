from foodlens.normalize import normalize_text
from foodlens.nutrition import NutritionMatcher, match_score, resolve_item
from foodlens.pipeline_types import NutritionRecord


def _rec(description: str, kcal: float = 100.0, grams: int = 100) -> NutritionRecord:
    return NutritionRecord(description, normalize_text(description), kcal, grams)


def test_exact_match_beats_containment_listed_earlier():
    matcher = NutritionMatcher([_rec("Pizza de queijo"), _rec("Pizza")])
    assert matcher.match("pizza").description == "Pizza"


def test_exact_beats_containment_beats_overlap():
    overlap = _rec("limão com frango grelhado assado")   # 4 shared words
    contains = _rec("Frango")
    exact = _rec("Frango grelhado com limão")
    query = "frango grelhado com limao"

    assert NutritionMatcher([overlap, contains]).match(query) is contains
    assert NutritionMatcher([overlap, contains, exact]).match(query) is exact


def test_overlap_uses_raw_word_counts():
    short = _rec("Salada de frutas")
    long = _rec("Mista verde salada completa")
    assert NutritionMatcher([short, long]).match("salada verde mista") is long


def test_ties_keep_catalog_order():
    first = _rec("Arroz branco cozido")
    second = _rec("Arroz branco frito")
    assert NutritionMatcher([first, second]).match("arroz branco") is first


def test_no_match_returns_none():
    matcher = NutritionMatcher([_rec("Banana prata")])
    assert matcher.match("sushi") is None


def test_empty_query_and_empty_catalog():
    assert NutritionMatcher([_rec("Banana")]).match("!!!") is None
    assert NutritionMatcher([]).match("banana") is None


def test_match_score_tiers():
    assert match_score("pizza", ["pizza"], "pizza") > match_score("pizza", ["pizza"], "pizza de queijo")
    assert match_score("a b", ["a", "b"], "zzz") == (0, 0)


def test_resolve_item_rounds_and_describes_portion():
    item = resolve_item("arroz", 0.9, _rec("Arroz", kcal=128.5))
    assert item.calories_per_portion == 129
    assert item.portion_description == "100g (porção padrão)"
    assert item.confidence == 0.9

    assert resolve_item("arroz", 0.9, _rec("Arroz", kcal=128.49)).calories_per_portion == 128


def test_resolve_item_keeps_kcal_per_100g_for_custom_portion():
    item = resolve_item("sopa", 0.7, _rec("Sopa", kcal=50.0, grams=250))
    assert item.calories_per_portion == 50
    assert item.portion_description == "250g (porção padrão)"
