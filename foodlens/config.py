from __future__ import annotations

import os
from pathlib import Path
from typing import List

from pydantic import BaseModel, Field


# ---------------------------
# Paths
# ---------------------------

PACKAGE_DIR = Path(__file__).resolve().parent

# bundled as package data (pyproject.toml)
DATA_DIR = PACKAGE_DIR / "data"
NUTRITION_CATALOG_PATH = Path(
    os.getenv("FOODLENS_CATALOG_PATH", str(DATA_DIR / "alimentos.json"))
)


# ---------------------------
# Food gate & candidate selection
# ---------------------------

FOOD_GATE_MIN_SCORE = 0.75    # label gate and object gate share this
CANDIDATE_MIN_SCORE = 0.60    # objects and labels kept as candidates
MAX_CANDIDATES = 12           # cap applied by the orchestrator


# ---------------------------
# Phrase filter / nutrition matching
# ---------------------------

PHRASE_MAX_TOKENS = 5         # >= this many tokens reads as a description
DEFAULT_PORTION_GRAMS = 100
PORTION_DESCRIPTION_TEMPLATE = "{grams}g (porção padrão)"


# ---------------------------
# External providers (Google Cloud Vision / Translate)
# ---------------------------

GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY", "")

# Service account credentials; used instead of the API key when present.
# The _JSON variant holds the key file contents (hosted deploys paste it in).
GOOGLE_APPLICATION_CREDENTIALS_JSON = os.getenv("GOOGLE_APPLICATION_CREDENTIALS_JSON", "")
GOOGLE_APPLICATION_CREDENTIALS = os.getenv("GOOGLE_APPLICATION_CREDENTIALS", "")
GOOGLE_AUTH_SCOPES = ["https://www.googleapis.com/auth/cloud-platform"]

VISION_ENDPOINT = os.getenv(
    "FOODLENS_VISION_ENDPOINT", "https://vision.googleapis.com/v1/images:annotate"
)
VISION_MAX_RESULTS = 25

TRANSLATE_ENDPOINT = os.getenv(
    "FOODLENS_TRANSLATE_ENDPOINT",
    "https://translation.googleapis.com/language/translate/v2",
)
TARGET_LANGUAGE = os.getenv("FOODLENS_TARGET_LANGUAGE", "pt")

HTTP_CONNECT_TIMEOUT = 3.0
HTTP_READ_TIMEOUT = float(os.getenv("FOODLENS_HTTP_READ_TIMEOUT", "15"))

MAX_UPLOAD_BYTES = int(os.getenv("FOODLENS_MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))


# ---------------------------
# User-facing messages
# ---------------------------

NO_FOOD_MESSAGE = (
    "A imagem não parece conter alimentos (ou não foi possível detectar comida "
    "com confiança). Tente uma foto mais próxima e nítida do prato."
)
FOOD_UNMAPPED_MESSAGE = (
    "Detectei que há comida na imagem, mas não consegui mapear para alimentos "
    "da sua base. Tente uma foto mais próxima ou ajuste o item manualmente."
)
ITEMS_FOUND_MESSAGE = (
    "Itens estimados via Vision + tradução + base local. Confirme o que faz "
    "sentido e ajuste a porção."
)


# ---------------------------
# Logging / observability
# ---------------------------

LOG_DIR = Path(os.getenv("FOODLENS_LOG_DIR", "logs"))
LOG_LEVEL = os.getenv("FOODLENS_LOG_LEVEL", "INFO")
LOG_ROTATION = "10 MB"
LOG_RETENTION = "14 days"


# ---------------------------
# Pydantic models shared around the app
# ---------------------------

class FoodItemOut(BaseModel):
    """
    A single resolved food item as sent over the wire.
    Field names are part of the existing client contract.
    """

    nome: str
    caloriasPorPorcao: int = Field(ge=0)
    porcaoDescricao: str
    confianca: float = Field(ge=0.0, le=1.0)


class AnalysisResponse(BaseModel):
    """
    Response body for POST /food/analyze.
    """

    itens: List[FoodItemOut]
    mensagem: str


class HealthResponse(BaseModel):
    """
    Response body for GET /health.
    """

    status: str
