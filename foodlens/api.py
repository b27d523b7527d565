from __future__ import annotations

"""
FastAPI application for food photo analysis.

- Loads the nutrition catalog once at startup (fails fast if it is missing)
- Fails fast at startup when no Google credentials are configured
- POST /food/analyze: image upload -> Vision -> analysis pipeline
- Response field names (itens / mensagem / ...) follow the client contract
"""

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .config import MAX_UPLOAD_BYTES, AnalysisResponse, HealthResponse
from ._singletons import get_matcher
from .credentials import GoogleAuth
from .errors import VisionError
from .logging_setup import configure_logging
from .mapping import to_analysis_response
from .nutrition import NutritionMatcher
from .pipeline import analyze_image
from .translation import GoogleTranslator
from .vision_client import VisionClient


# -----------------------
# FastAPI app + startup
# -----------------------

app = FastAPI(title="foodlens")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

_matcher: NutritionMatcher | None = None
_vision: VisionClient | None = None
_translator: GoogleTranslator | None = None


@app.on_event("startup")
def startup_event() -> None:
    global _matcher, _vision, _translator
    configure_logging()
    logger.info("Starting app warmup...")
    # CatalogLoadError propagates: the app cannot serve without its catalog
    _matcher = get_matcher()
    # CredentialsError too: every Vision call would fail without them
    auth = GoogleAuth.from_env()
    auth.ensure_configured()
    _vision = VisionClient(auth=auth)
    _translator = GoogleTranslator(auth=auth)
    logger.info("Warmup complete ({} foods in catalog).", len(_matcher))


@app.on_event("shutdown")
async def shutdown_event() -> None:
    for client in (_vision, _translator):
        if client is not None:
            await client.aclose()


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="healthy")


@app.post("/food/analyze", response_model=AnalysisResponse)
async def analyze_food(file: UploadFile | None = File(None)) -> AnalysisResponse:
    if file is None:
        raise HTTPException(status_code=400, detail="Image file is required")
    if file.content_type and not file.content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="Uploaded file must be an image")

    # one byte past the limit is enough to reject oversized uploads
    content = await file.read(MAX_UPLOAD_BYTES + 1)
    if not content:
        raise HTTPException(status_code=400, detail="Image file is empty")
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="Image file is too large")

    if _matcher is None or _vision is None or _translator is None:
        raise HTTPException(status_code=500, detail="Service not initialised")

    try:
        result = await analyze_image(content, _vision, _translator, _matcher)
    except VisionError as e:
        logger.error("Vision call failed: {}", e)
        raise HTTPException(status_code=502, detail="Image classification service unavailable")

    return to_analysis_response(result)
