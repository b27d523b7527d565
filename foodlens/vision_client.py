from __future__ import annotations

"""
Google Cloud Vision client (REST, ``images:annotate``).

Only label detection and object localization are requested; the response
is reduced to the (description, score) / (name, score) pairs the pipeline
consumes.
"""

import base64
from dataclasses import dataclass, field
from typing import Any, Dict, List

import httpx
from loguru import logger

from .config import (
    GOOGLE_API_KEY,
    HTTP_CONNECT_TIMEOUT,
    HTTP_READ_TIMEOUT,
    VISION_ENDPOINT,
    VISION_MAX_RESULTS,
)
from .credentials import GoogleAuth
from .errors import CredentialsError, VisionError
from .pipeline_types import LabelAnnotation, ObjectAnnotation


@dataclass
class VisionAnnotations:
    labels: List[LabelAnnotation] = field(default_factory=list)
    objects: List[ObjectAnnotation] = field(default_factory=list)


def build_annotate_request(image_bytes: bytes, max_results: int = VISION_MAX_RESULTS) -> Dict[str, Any]:
    return {
        "requests": [
            {
                "image": {"content": base64.b64encode(image_bytes).decode("ascii")},
                "features": [
                    {"type": "LABEL_DETECTION", "maxResults": max_results},
                    {"type": "OBJECT_LOCALIZATION", "maxResults": max_results},
                ],
            }
        ]
    }


def parse_annotate_response(payload: Dict[str, Any]) -> VisionAnnotations:
    """
    Pull labels and objects out of an ``images:annotate`` response.

    Missing arrays are treated as empty; a per-image ``error`` entry is
    raised as VisionError.
    """
    responses = payload.get("responses") or [{}]
    result = responses[0] or {}
    if result.get("error"):
        message = result["error"].get("message", "unknown error")
        raise VisionError(f"Vision API error: {message}")

    labels = [LabelAnnotation.from_dict(raw) for raw in result.get("labelAnnotations") or []]
    objects = [
        ObjectAnnotation.from_dict(raw) for raw in result.get("localizedObjectAnnotations") or []
    ]
    return VisionAnnotations(labels=labels, objects=objects)


class VisionClient:
    def __init__(
        self,
        api_key: str = GOOGLE_API_KEY,
        endpoint: str = VISION_ENDPOINT,
        client: httpx.AsyncClient | None = None,
        auth: GoogleAuth | None = None,
    ) -> None:
        self.auth = auth or GoogleAuth(api_key=api_key)
        self.endpoint = endpoint
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(HTTP_READ_TIMEOUT, connect=HTTP_CONNECT_TIMEOUT)
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def annotate(self, image_bytes: bytes) -> VisionAnnotations:
        logger.info("Sending image to Google Cloud Vision ({} bytes)", len(image_bytes))
        try:
            auth_kwargs = await self.auth.request_kwargs()
        except CredentialsError as e:
            raise VisionError(str(e)) from e

        try:
            r = await self._client.post(
                self.endpoint,
                json=build_annotate_request(image_bytes),
                **auth_kwargs,
            )
        except httpx.HTTPError as e:
            raise VisionError(f"Vision request failed: {e}") from e

        if r.status_code >= 400:
            raise VisionError(f"Vision returned HTTP {r.status_code}")

        try:
            payload = r.json()
        except ValueError as e:
            raise VisionError(f"Vision returned invalid JSON: {e}") from e

        annotations = parse_annotate_response(payload)
        logger.debug(
            "Labels: {}",
            ", ".join(f"{lab.description} ({lab.score:.2f})" for lab in annotations.labels),
        )
        logger.debug(
            "Objects: {}",
            ", ".join(f"{o.name} ({o.score:.2f})" for o in annotations.objects),
        )
        return annotations
