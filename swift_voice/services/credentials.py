"""Bearer credentials for the text-to-speech service."""

import asyncio
import logging
import os
from typing import Optional, Protocol

from google.auth.transport.requests import Request
from google.oauth2 import service_account

from swift_voice.services.errors import ConfigurationError
from swift_voice.utils import config
from swift_voice.utils.config import TtsAuth

logger = logging.getLogger(__name__)


class TokenProvider(Protocol):
    async def get_token(self) -> str:
        """Return a bearer token for the ``Authorization`` header."""


class StaticKeyProvider:
    """Hands out a fixed API key from configuration."""

    def __init__(self, api_key: Optional[str]):
        if not api_key:
            raise ConfigurationError("GOOGLE_API_KEY is not set")
        self._api_key = api_key

    async def get_token(self) -> str:
        return self._api_key


class ServiceAccountTokenProvider:
    """
    Fetches OAuth2 access tokens with a service-account key file.

    The credentials object keeps the token until it expires, so only the
    first call (and calls after expiry) reach Google's token endpoint.
    """

    def __init__(self, credentials_path: Optional[str], scope: str = config.GOOGLE_CLOUD_SCOPE):
        if not credentials_path or not os.path.exists(credentials_path):
            raise ConfigurationError(f"Service account file not found: {credentials_path}")
        self._credentials = service_account.Credentials.from_service_account_file(
            credentials_path, scopes=[scope]
        )

    def _refresh(self) -> None:
        self._credentials.refresh(Request())
        logger.debug("Refreshed service account access token")

    async def get_token(self) -> str:
        if not self._credentials.valid:
            await asyncio.to_thread(self._refresh)
        return self._credentials.token


def get_token_provider(auth: Optional[str] = None) -> TokenProvider:
    auth = auth or config.TTS_AUTH
    if auth == TtsAuth.API_KEY:
        return StaticKeyProvider(config.GOOGLE_API_KEY)
    if auth == TtsAuth.SERVICE_ACCOUNT:
        return ServiceAccountTokenProvider(config.GOOGLE_APPLICATION_CREDENTIALS)
    raise ConfigurationError(f"Unknown TTS auth strategy: {auth}")
