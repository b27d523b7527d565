from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

import pandas as pd
from loguru import logger

from .config import DEFAULT_PORTION_GRAMS, NUTRITION_CATALOG_PATH
from .errors import CatalogLoadError
from .normalize import normalize_text
from .nutrition import NutritionMatcher
from .pipeline_types import NutritionRecord


# ---------------------------
# Column detection / standardization
# ---------------------------

# The bundled table uses TACO-style keys, but exports from other tools
# spell them differently; accept the likely variants.
COLUMN_CANDIDATES: Dict[str, List[str]] = {
    "description": [
        "description",
        "Description",
        "descricao",
        "Descrição",
        "nome",
        "name",
    ],
    "energy_raw": [
        "energy_kcal",
        "energyKcal",
        "energia_kcal",
        "Energia (kcal)",
        "kcal",
        "calories",
    ],
    "portion_raw": [
        "portion_grams",
        "default_portion_grams",
        "porcao_g",
    ],
}

CATALOG_COLUMNS = [
    "description",
    "normalized_description",
    "calories_per_100g",
    "portion_grams",
]


def _standardize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Rename columns from the raw catalog to the canonical internal names:

    - description
    - energy_raw
    - portion_raw
    """
    col_map: Dict[str, str] = {}
    lower_to_original = {str(c).lower(): c for c in df.columns}

    for canon, candidates in COLUMN_CANDIDATES.items():
        for candidate in candidates:
            # Try exact, then case-insensitive
            if candidate in df.columns:
                col_map[candidate] = canon
                break
            cand_lower = candidate.lower()
            if cand_lower in lower_to_original:
                col_map[lower_to_original[cand_lower]] = canon
                break

    logger.debug("Standardizing catalog columns with map: {}", col_map)
    return df.rename(columns=col_map)


# ---------------------------
# Field parsing helpers
# ---------------------------

def coerce_energy_kcal(values: pd.Series) -> pd.Series:
    """
    Numeric kcal per 100 g.

    Numbers pass through, numeric strings are parsed, anything else
    ("NA", "Tr", "", None) becomes 0. Negative values are clipped to 0.
    """
    numeric = pd.to_numeric(values, errors="coerce")
    return numeric.fillna(0.0).astype(float).clip(lower=0.0)


def coerce_portion_grams(values: pd.Series) -> pd.Series:
    numeric = pd.to_numeric(values, errors="coerce")
    numeric = numeric.where(numeric > 0, DEFAULT_PORTION_GRAMS)
    return numeric.fillna(DEFAULT_PORTION_GRAMS).round().astype(int)


def extract_records(payload: Any) -> List[Dict[str, Any]]:
    """
    Accept either ``[{...}, ...]`` or ``{"alimentos": [{...}, ...]}``.

    Any other shape yields an empty list (logged as a warning) so the app
    still starts and simply matches nothing.
    """
    if isinstance(payload, list):
        rows = payload
    elif isinstance(payload, dict) and isinstance(payload.get("alimentos"), list):
        rows = payload["alimentos"]
    else:
        logger.warning(
            "Nutrition catalog has unexpected structure ({}); using an empty catalog",
            type(payload).__name__,
        )
        return []

    records = [r for r in rows if isinstance(r, dict)]
    skipped = len(rows) - len(records)
    if skipped:
        logger.warning("Skipped {} non-object entries in nutrition catalog", skipped)
    return records


# ---------------------------
# Catalog normalization
# ---------------------------

def normalize_catalog_df(df_raw: pd.DataFrame) -> pd.DataFrame:
    """
    Turn raw catalog rows into the canonical schema:

    - description (str, as displayed in the catalog)
    - normalized_description (str; see normalize_text)
    - calories_per_100g (float, >= 0)
    - portion_grams (int, > 0)

    Catalog order is preserved; the matcher relies on it for tie-breaks.
    """
    df = _standardize_columns(df_raw.copy())

    if df.empty or "description" not in df.columns:
        if not df.empty:
            logger.warning("Nutrition catalog has no description column; using an empty catalog")
        return pd.DataFrame(columns=CATALOG_COLUMNS)

    df["description"] = df["description"].fillna("").astype(str).str.strip()
    df["normalized_description"] = df["description"].apply(normalize_text)

    empty = df["normalized_description"] == ""
    if empty.any():
        logger.warning("Dropping {} catalog rows without a usable description", int(empty.sum()))
        df = df[~empty].copy()

    if "energy_raw" in df.columns:
        df["calories_per_100g"] = coerce_energy_kcal(df["energy_raw"])
    else:
        logger.warning("Nutrition catalog has no energy column; calories default to 0")
        df["calories_per_100g"] = 0.0

    if "portion_raw" in df.columns:
        df["portion_grams"] = coerce_portion_grams(df["portion_raw"])
    else:
        df["portion_grams"] = DEFAULT_PORTION_GRAMS

    return df[CATALOG_COLUMNS].reset_index(drop=True)


def records_from_df(df: pd.DataFrame) -> Tuple[NutritionRecord, ...]:
    return tuple(
        NutritionRecord(
            description=str(description),
            normalized_description=str(normalized),
            calories_per_100g=float(kcal),
            portion_grams=int(grams),
        )
        for description, normalized, kcal, grams in df[CATALOG_COLUMNS].itertuples(
            index=False, name=None
        )
    )


# ---------------------------
# IO helpers
# ---------------------------

def read_catalog_payload(path: Path) -> Any:
    """Read and parse the catalog JSON; unreadable files are fatal."""
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogLoadError(f"Cannot read nutrition catalog at {path}: {e}") from e
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise CatalogLoadError(f"Nutrition catalog at {path} is not valid JSON: {e}") from e


def load_nutrition_catalog(path: Path = NUTRITION_CATALOG_PATH) -> Tuple[NutritionRecord, ...]:
    """
    Load the nutrition catalog once at startup.

    Raises CatalogLoadError when the file is missing or not JSON; a
    well-formed file with the wrong shape degrades to an empty catalog.
    """
    logger.info("Loading nutrition catalog from {}", path)
    payload = read_catalog_payload(path)
    df_raw = pd.DataFrame(extract_records(payload))
    records = records_from_df(normalize_catalog_df(df_raw))
    logger.info("Loaded {} foods from nutrition catalog", len(records))
    return records


# ---------------------------
# CLI entrypoint
# ---------------------------

def main(argv: Sequence[str] | None = None) -> None:
    # python -m foodlens.catalog_build --lookup "arroz branco" banana
    ap = argparse.ArgumentParser(description="Inspect the nutrition catalog")
    ap.add_argument("--catalog", type=Path, default=NUTRITION_CATALOG_PATH)
    ap.add_argument("--lookup", nargs="*", default=[], help="Names to match against the catalog")
    args = ap.parse_args(argv)

    records = load_nutrition_catalog(args.catalog)
    print(f"Catalog: {args.catalog} ({len(records)} foods)")

    matcher = NutritionMatcher(records)
    for name in args.lookup:
        record = matcher.match(name)
        if record is None:
            print(f"{name!r}: no match")
        else:
            print(f"{name!r}: {record.description} ({record.calories_per_100g:.1f} kcal/100g)")


if __name__ == "__main__":
    main()
