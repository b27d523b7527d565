import asyncio

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from foodlens import api
from foodlens.api import app
from foodlens.config import ITEMS_FOUND_MESSAGE, NO_FOOD_MESSAGE
from foodlens.errors import CredentialsError, VisionError
from foodlens.normalize import normalize_text
from foodlens.nutrition import NutritionMatcher
from foodlens.pipeline_types import LabelAnnotation, NutritionRecord, ObjectAnnotation
from foodlens.vision_client import VisionAnnotations


client = TestClient(app)

IMAGE = ("plate.jpg", b"\xff\xd8\xff fake jpeg", "image/jpeg")


class DummyVision:
    def __init__(self, annotations=None, error=None):
        self.annotations = annotations or VisionAnnotations()
        self.error = error

    async def annotate(self, image_bytes):
        if self.error:
            raise self.error
        return self.annotations


class DummyTranslator:
    async def translate(self, text, target_language="pt"):
        return {"Pizza": "pizza"}.get(text, text)


def _install(monkeypatch, vision):
    matcher = NutritionMatcher([NutritionRecord("Pizza", normalize_text("Pizza"), 100.0)])
    monkeypatch.setattr("foodlens.api._matcher", matcher)
    monkeypatch.setattr("foodlens.api._vision", vision)
    monkeypatch.setattr("foodlens.api._translator", DummyTranslator())


def test_health_endpoint():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy"}


def test_analyze_returns_wire_fields(monkeypatch):
    vision = DummyVision(
        VisionAnnotations(
            labels=[LabelAnnotation("food", 0.9)],
            objects=[ObjectAnnotation("Pizza", 0.85)],
        )
    )
    _install(monkeypatch, vision)

    resp = client.post("/food/analyze", files={"file": IMAGE})
    assert resp.status_code == 200
    data = resp.json()
    assert data["mensagem"] == ITEMS_FOUND_MESSAGE
    assert data["itens"] == [
        {
            "nome": "pizza",
            "caloriasPorPorcao": 100,
            "porcaoDescricao": "100g (porção padrão)",
            "confianca": 0.85,
        }
    ]


def test_analyze_no_food(monkeypatch):
    vision = DummyVision(VisionAnnotations(labels=[LabelAnnotation("person", 0.95)]))
    _install(monkeypatch, vision)

    resp = client.post("/food/analyze", files={"file": IMAGE})
    assert resp.status_code == 200
    assert resp.json() == {"itens": [], "mensagem": NO_FOOD_MESSAGE}


def test_analyze_requires_file(monkeypatch):
    _install(monkeypatch, DummyVision())
    resp = client.post("/food/analyze")
    assert resp.status_code == 400


def test_analyze_rejects_non_images(monkeypatch):
    _install(monkeypatch, DummyVision())
    resp = client.post(
        "/food/analyze", files={"file": ("notes.txt", b"hello", "text/plain")}
    )
    assert resp.status_code == 400


def test_analyze_rejects_empty_upload(monkeypatch):
    _install(monkeypatch, DummyVision())
    resp = client.post("/food/analyze", files={"file": ("a.jpg", b"", "image/jpeg")})
    assert resp.status_code == 400


def test_analyze_rejects_large_upload(monkeypatch):
    _install(monkeypatch, DummyVision())
    monkeypatch.setattr("foodlens.api.MAX_UPLOAD_BYTES", 4)
    resp = client.post("/food/analyze", files={"file": IMAGE})
    assert resp.status_code == 413


def test_vision_failure_is_bad_gateway(monkeypatch):
    _install(monkeypatch, DummyVision(error=VisionError("down")))
    resp = client.post("/food/analyze", files={"file": IMAGE})
    assert resp.status_code == 502


class RecordingUpload:
    content_type = "image/jpeg"

    def __init__(self, data):
        self.data = data
        self.sizes = []

    async def read(self, size=-1):
        self.sizes.append(size)
        return self.data if size < 0 else self.data[:size]


def test_oversized_upload_is_read_only_up_to_limit(monkeypatch):
    _install(monkeypatch, DummyVision())
    monkeypatch.setattr("foodlens.api.MAX_UPLOAD_BYTES", 4)
    upload = RecordingUpload(b"x" * 1000)

    with pytest.raises(HTTPException) as exc:
        asyncio.run(api.analyze_food(upload))

    assert exc.value.status_code == 413
    assert upload.sizes == [5]


def test_startup_fails_without_google_credentials(monkeypatch):
    monkeypatch.setattr("foodlens.api._matcher", None)
    monkeypatch.setattr("foodlens.api._vision", None)
    monkeypatch.setattr("foodlens.api._translator", None)
    monkeypatch.setattr("foodlens.api.configure_logging", lambda: None)
    monkeypatch.setattr("foodlens.api.get_matcher", lambda: NutritionMatcher([]))
    monkeypatch.setattr(
        "foodlens.api.GoogleAuth.from_env", classmethod(lambda cls: cls(api_key=""))
    )

    with pytest.raises(CredentialsError):
        api.startup_event()
    assert api._vision is None
