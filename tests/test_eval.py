import json

import pandas as pd

from foodlens import eval as eval_mod
from foodlens.eval import _read_any, evaluate, match_accuracy
from foodlens.normalize import normalize_text
from foodlens.nutrition import NutritionMatcher
from foodlens.pipeline_types import NutritionRecord


def _matcher():
    return NutritionMatcher(
        [
            NutritionRecord(d, normalize_text(d), 100.0)
            for d in ["Arroz, tipo 1, cozido", "Banana, prata, crua"]
        ]
    )


def test_match_accuracy_basic():
    expected = ["Arroz", "Banana", ""]
    predicted = ["arroz", "Maçã", None]
    # arroz ok, banana wrong, empty expectation met
    assert abs(match_accuracy(expected, predicted) - (2 / 3)) < 1e-6


def test_evaluate_reports_accuracy_and_coverage():
    gold = pd.DataFrame(
        {
            "name": ["arroz", "banana", "sushi"],
            "expected": ["Arroz, tipo 1, cozido", "Banana, prata, crua", ""],
        }
    )
    scores = evaluate(_matcher(), gold)
    assert scores["accuracy"] == 1.0
    assert abs(scores["coverage"] - (2 / 3)) < 1e-6


def test_read_any_requires_columns(tmp_path):
    path = tmp_path / "gold.csv"
    path.write_text("Name,Expected\nfeijão,Feijão preto\n", encoding="utf-8")
    df = _read_any(path)
    assert df["name"].tolist() == ["feijão"]
    assert df["expected"].tolist() == ["Feijão preto"]


def test_main_predicts_once_and_writes_rows(tmp_path, monkeypatch):
    catalog = tmp_path / "alimentos.json"
    catalog.write_text(
        json.dumps([{"description": "Arroz, tipo 1, cozido", "energy_kcal": 128}]),
        encoding="utf-8",
    )
    gold = tmp_path / "gold.csv"
    gold.write_text("name,expected\narroz,\"Arroz, tipo 1, cozido\"\nsushi,\n", encoding="utf-8")
    out = tmp_path / "out" / "predictions.csv"

    calls = []
    real_predict = eval_mod.predict

    def counting_predict(matcher, names):
        calls.append(names)
        return real_predict(matcher, names)

    monkeypatch.setattr(eval_mod, "predict", counting_predict)
    eval_mod.main(["--gold", str(gold), "--catalog", str(catalog), "--out", str(out)])

    assert len(calls) == 1
    rows = pd.read_csv(out).fillna("")
    assert rows["predicted"].tolist() == ["Arroz, tipo 1, cozido", ""]
