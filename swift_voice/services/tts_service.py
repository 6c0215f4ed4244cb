import base64
import binascii
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Optional

import httpx
from google.auth.exceptions import GoogleAuthError

from swift_voice.services.credentials import TokenProvider, get_token_provider
from swift_voice.services.errors import ConfigurationError, SynthesisError
from swift_voice.utils import config
from swift_voice.utils.config import TtsBackend

logger = logging.getLogger(__name__)

AUDIO_ENCODINGS = {
    TtsBackend.BINARY: ("MP3", "audio/mp3"),
    TtsBackend.JSON: ("LINEAR16", "audio/wav"),
}


@dataclass(frozen=True)
class SynthesizedAudio:
    content: bytes
    media_type: str


def _backend(name: Optional[str] = None) -> TtsBackend:
    name = name or config.TTS_BACKEND
    try:
        return TtsBackend(name)
    except ValueError:
        raise ConfigurationError(f"Unknown TTS backend: {name}") from None


def build_payload(text: str, backend: TtsBackend) -> Dict[str, Any]:
    encoding, _ = AUDIO_ENCODINGS[backend]
    return {
        "input": {"text": text},
        "voice": {
            "languageCode": config.TTS_LANGUAGE_CODE,
            "name": config.TTS_VOICE_NAME,
            "ssmlGender": config.TTS_VOICE_GENDER,
        },
        "audioConfig": {
            "audioEncoding": encoding,
            "sampleRateHertz": config.TTS_SAMPLE_RATE,
            "speakingRate": 1.0,
            "pitch": 0.0,
            "volumeGainDb": 0.0,
        },
    }


def _extract_audio(response: httpx.Response, backend: TtsBackend) -> bytes:
    if backend == TtsBackend.BINARY:
        return response.content

    try:
        return base64.b64decode(response.json()["audioContent"], validate=True)
    except (ValueError, KeyError, TypeError, binascii.Error) as e:
        raise SynthesisError(f"Malformed synthesis response: {e}", response.status_code, response.text) from e


@lru_cache(maxsize=None)
def _default_token_provider() -> TokenProvider:
    return get_token_provider()


async def text_to_speech(
    text: str,
    *,
    backend: Optional[str] = None,
    token_provider: Optional[TokenProvider] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> SynthesizedAudio:
    """
    Synthesize ``text`` with the configured voice.

    Raises ``SynthesisError`` on a non-success status, a transport failure,
    or a JSON envelope without audio. The error carries the service's
    response body for server-side logging.
    """
    tts_backend = _backend(backend)
    token_provider = token_provider or _default_token_provider()
    _, media_type = AUDIO_ENCODINGS[tts_backend]

    try:
        token = await token_provider.get_token()
    except GoogleAuthError as e:
        raise SynthesisError(f"Could not obtain TTS access token: {e}") from e

    headers = {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
    }
    payload = build_payload(text, tts_backend)

    try:
        if client is not None:
            response = await client.post(config.TTS_URL, headers=headers, json=payload)
        else:
            async with httpx.AsyncClient(timeout=config.HTTP_TIMEOUT_SECONDS) as http_client:
                response = await http_client.post(config.TTS_URL, headers=headers, json=payload)
    except httpx.HTTPError as e:
        raise SynthesisError(f"TTS request failed: {e}") from e

    if not response.is_success:
        raise SynthesisError("TTS request rejected", response.status_code, response.text)

    audio = _extract_audio(response, tts_backend)
    logger.debug(f"Synthesized {len(audio)} bytes of {media_type}")
    return SynthesizedAudio(content=audio, media_type=media_type)
