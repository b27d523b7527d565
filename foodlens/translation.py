from __future__ import annotations

import html
from typing import Protocol

import httpx
from loguru import logger

from .config import (
    GOOGLE_API_KEY,
    HTTP_CONNECT_TIMEOUT,
    HTTP_READ_TIMEOUT,
    TARGET_LANGUAGE,
    TRANSLATE_ENDPOINT,
)
from .credentials import GoogleAuth
from .errors import CredentialsError, TranslationError


class Translator(Protocol):
    async def translate(self, text: str, target_language: str = TARGET_LANGUAGE) -> str:
        ...


class GoogleTranslator:
    """
    Google Cloud Translation (v2 REST) client.

    ``translate`` never raises for provider problems: on any failure it
    logs and returns the original text so one bad candidate cannot abort
    an analysis run.
    """

    def __init__(
        self,
        api_key: str = GOOGLE_API_KEY,
        endpoint: str = TRANSLATE_ENDPOINT,
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

    async def request_translation(self, text: str, target_language: str) -> str:
        """Raw provider call; raises TranslationError on any failure."""
        try:
            auth_kwargs = await self.auth.request_kwargs()
        except CredentialsError as e:
            raise TranslationError(str(e)) from e

        try:
            r = await self._client.post(
                self.endpoint,
                json={"q": text, "target": target_language, "format": "text"},
                **auth_kwargs,
            )
        except httpx.HTTPError as e:
            raise TranslationError(f"Translate request failed: {e}") from e

        if r.status_code >= 400:
            raise TranslationError(f"Translate returned HTTP {r.status_code}")

        try:
            translated = r.json()["data"]["translations"][0]["translatedText"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise TranslationError(f"Unexpected Translate payload: {e}") from e
        return html.unescape(str(translated))

    async def translate(self, text: str, target_language: str = TARGET_LANGUAGE) -> str:
        value = (text or "").strip()
        if not value:
            return value

        try:
            return await self.request_translation(value, target_language)
        except TranslationError as e:
            logger.error("Failed to translate {!r} to {}: {}", value, target_language, e)
            return value
