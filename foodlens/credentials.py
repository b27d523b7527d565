from __future__ import annotations

"""
Authentication for the Google Cloud REST calls (Vision, Translate).

Two modes:

* service account: ``GOOGLE_APPLICATION_CREDENTIALS_JSON`` holds the key
  file contents (or ``GOOGLE_APPLICATION_CREDENTIALS`` its path); every
  request carries an OAuth bearer token refreshed through google-auth.
* API key: ``GOOGLE_API_KEY`` sent as the ``key`` query parameter.

The service account wins when both are configured.
"""

import asyncio
import json
from typing import Any, Callable, Dict, Optional

import google.auth.exceptions
from google.auth.transport.requests import Request
from google.oauth2 import service_account
from loguru import logger

from .config import (
    GOOGLE_API_KEY,
    GOOGLE_APPLICATION_CREDENTIALS,
    GOOGLE_APPLICATION_CREDENTIALS_JSON,
    GOOGLE_AUTH_SCOPES,
)
from .errors import CredentialsError


def parse_credentials_json(raw: str) -> Dict[str, Any]:
    """Parse a service account key pasted into an environment variable.

    Outer quotes (``"{...}"`` or ``'{...}'``) are stripped first.
    """
    text = (raw or "").strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ("'", '"'):
        text = text[1:-1]

    try:
        info = json.loads(text)
    except json.JSONDecodeError as e:
        raise CredentialsError(
            "GOOGLE_APPLICATION_CREDENTIALS_JSON is not valid JSON; "
            "paste the service account key file without outer quotes"
        ) from e
    if not isinstance(info, dict):
        raise CredentialsError("GOOGLE_APPLICATION_CREDENTIALS_JSON must be a JSON object")
    return info


def load_service_account_credentials(
    credentials_json: str = GOOGLE_APPLICATION_CREDENTIALS_JSON,
    credentials_path: str = GOOGLE_APPLICATION_CREDENTIALS,
) -> Optional[service_account.Credentials]:
    """Service account credentials from the environment, or None if unset."""
    if credentials_json:
        info = parse_credentials_json(credentials_json)
        try:
            return service_account.Credentials.from_service_account_info(
                info, scopes=GOOGLE_AUTH_SCOPES
            )
        except ValueError as e:
            raise CredentialsError(f"Invalid service account key: {e}") from e

    if credentials_path:
        try:
            return service_account.Credentials.from_service_account_file(
                credentials_path, scopes=GOOGLE_AUTH_SCOPES
            )
        except (OSError, ValueError) as e:
            raise CredentialsError(
                f"Cannot load service account key from {credentials_path}: {e}"
            ) from e

    return None


class GoogleAuth:
    """Produces the per-request auth arguments for the Google REST clients."""

    def __init__(
        self,
        api_key: str = "",
        credentials: Any = None,
        request_factory: Callable[[], Any] = Request,
    ) -> None:
        self.api_key = api_key
        self.credentials = credentials
        self._request_factory = request_factory
        self._refresh_lock = asyncio.Lock()

    @classmethod
    def from_env(cls) -> "GoogleAuth":
        credentials = load_service_account_credentials()
        if credentials is not None:
            logger.info(
                "Using service account {} for Google APIs",
                getattr(credentials, "service_account_email", "<unknown>"),
            )
        elif GOOGLE_API_KEY:
            logger.info("Using API key for Google APIs")
        return cls(api_key=GOOGLE_API_KEY, credentials=credentials)

    @property
    def configured(self) -> bool:
        return self.credentials is not None or bool(self.api_key)

    def ensure_configured(self) -> None:
        if not self.configured:
            raise CredentialsError(
                "No Google credentials configured: set GOOGLE_APPLICATION_CREDENTIALS_JSON, "
                "GOOGLE_APPLICATION_CREDENTIALS or GOOGLE_API_KEY"
            )

    async def _access_token(self) -> str:
        # one refresh at a time; concurrent translations share the new token
        async with self._refresh_lock:
            if not self.credentials.valid:
                logger.debug("Refreshing Google access token")
                try:
                    await asyncio.to_thread(self.credentials.refresh, self._request_factory())
                except google.auth.exceptions.GoogleAuthError as e:
                    raise CredentialsError(f"Could not refresh Google access token: {e}") from e
            return self.credentials.token

    async def request_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``httpx.AsyncClient.post`` that authenticate it."""
        if self.credentials is not None:
            token = await self._access_token()
            return {"headers": {"Authorization": f"Bearer {token}"}}
        return {"params": {"key": self.api_key}}
