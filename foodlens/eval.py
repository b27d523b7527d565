# foodlens/eval.py
from __future__ import annotations

"""
Offline check of the nutrition matcher against hand-labelled names.

Gold file (CSV or XLSX) columns: ``name`` (translated display name) and
``expected`` (catalog description it should resolve to; empty when the
name should not match anything).
"""

import argparse
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from .catalog_build import load_nutrition_catalog
from .config import NUTRITION_CATALOG_PATH
from .normalize import normalize_text
from .nutrition import NutritionMatcher

# ---------- IO helpers ----------

def _read_any(path: Path) -> pd.DataFrame:
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    ext = path.suffix.lower()
    if ext in [".xlsx", ".xls"]:
        df = pd.read_excel(path)
    else:
        df = pd.read_csv(path, encoding="utf-8")
    cols = {str(c).lower(): c for c in df.columns}
    ncol, ecol = cols.get("name"), cols.get("expected")
    if not ncol or not ecol:
        raise ValueError(f"Expected columns 'name' and 'expected'. Found: {list(df.columns)}")
    df = df.rename(columns={ncol: "name", ecol: "expected"})
    df["name"] = df["name"].fillna("").astype(str)
    df["expected"] = df["expected"].fillna("").astype(str)
    return df

# ---------- metrics ----------

def predict(matcher: NutritionMatcher, names: List[str]) -> List[Optional[str]]:
    out: List[Optional[str]] = []
    for name in names:
        record = matcher.match(name)
        out.append(record.description if record else None)
    return out


def match_accuracy(expected: List[str], predicted: List[Optional[str]]) -> float:
    """Share of rows whose prediction equals the expected description
    (compared normalised; an empty expectation means "no match")."""
    if not expected:
        return 0.0
    hits = 0
    for exp, pred in zip(expected, predicted):
        if normalize_text(exp) == normalize_text(pred or ""):
            hits += 1
    return hits / float(len(expected))


def evaluate(
    matcher: NutritionMatcher,
    gold: pd.DataFrame,
    predicted: Optional[List[Optional[str]]] = None,
) -> Dict[str, float]:
    expected = gold["expected"].tolist()
    if predicted is None:
        predicted = predict(matcher, gold["name"].tolist())
    coverage = sum(1 for p in predicted if p) / float(len(predicted)) if predicted else 0.0
    return {
        "accuracy": match_accuracy(expected, predicted),
        "coverage": coverage,
    }


def write_predictions(gold: pd.DataFrame, predicted: List[Optional[str]], path: Path) -> None:
    df = pd.DataFrame(
        {"name": gold["name"], "expected": gold["expected"], "predicted": [p or "" for p in predicted]}
    )
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False, encoding="utf-8")

# ---------- CLI ----------

def main(argv: Optional[List[str]] = None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--gold", type=Path, required=True,
                    help="CSV/XLSX with columns name, expected")
    ap.add_argument("--catalog", type=Path, default=NUTRITION_CATALOG_PATH)
    ap.add_argument("--out", type=Path, default=None,
                    help="Optional CSV to write per-row predictions")
    args = ap.parse_args(argv)

    matcher = NutritionMatcher(load_nutrition_catalog(args.catalog))
    gold = _read_any(args.gold)

    predicted = predict(matcher, gold["name"].tolist())
    scores = evaluate(matcher, gold, predicted)
    print(f"Accuracy: {scores['accuracy']:.4f}")
    print(f"Coverage: {scores['coverage']:.4f}")

    if args.out is not None:
        write_predictions(gold, predicted, args.out)

if __name__ == "__main__":
    main()
