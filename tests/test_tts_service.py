"""
Tests for the text-to-speech client.

HTTP traffic goes through httpx.MockTransport, so the request the service
builds and the way each backend variant decodes the reply are both visible.
"""

import base64
import json

import httpx
import pytest
from google.auth.exceptions import RefreshError

from swift_voice.services.credentials import StaticKeyProvider
from swift_voice.services.errors import ConfigurationError, SynthesisError
from swift_voice.services.tts_service import build_payload, text_to_speech
from swift_voice.utils import config
from swift_voice.utils.config import TtsBackend

MP3 = b"ID3\x04\x00\x00fake-mp3-frames"
WAV = b"RIFF\x24\x00\x00\x00WAVEfmt fake-pcm"


class RecordingTransport:
    """Answers every request with ``response`` and keeps the requests it saw."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error:
            raise self.error
        return self.response


async def synthesize(transport, backend="binary", token_provider=None, text="Hello there"):
    async with httpx.AsyncClient(transport=httpx.MockTransport(transport)) as client:
        return await text_to_speech(
            text,
            backend=backend,
            token_provider=token_provider or StaticKeyProvider("secret-key"),
            client=client,
        )


class FailingTokenProvider:
    async def get_token(self) -> str:
        raise RefreshError("invalid_grant")


def test_payload_shape():
    payload = build_payload("Hi", TtsBackend.JSON)

    assert payload["input"] == {"text": "Hi"}
    assert payload["voice"] == {
        "languageCode": config.TTS_LANGUAGE_CODE,
        "name": config.TTS_VOICE_NAME,
        "ssmlGender": config.TTS_VOICE_GENDER,
    }
    assert payload["audioConfig"]["audioEncoding"] == "LINEAR16"
    assert build_payload("Hi", TtsBackend.BINARY)["audioConfig"]["audioEncoding"] == "MP3"


class TestBinaryBackend:
    @pytest.mark.asyncio
    async def test_returns_raw_body_as_mp3(self):
        transport = RecordingTransport(httpx.Response(200, content=MP3))

        audio = await synthesize(transport)

        assert audio.content == MP3
        assert audio.media_type == "audio/mp3"

    @pytest.mark.asyncio
    async def test_request_carries_bearer_token_and_text(self):
        transport = RecordingTransport(httpx.Response(200, content=MP3))

        await synthesize(transport, text="Ça va? ☕")

        request = transport.requests[0]
        assert request.method == "POST"
        assert str(request.url) == config.TTS_URL
        assert request.headers["Authorization"] == "Bearer secret-key"
        assert json.loads(request.content)["input"]["text"] == "Ça va? ☕"


class TestJsonBackend:
    @pytest.mark.asyncio
    async def test_decodes_base64_audio_as_wav(self):
        body = {"audioContent": base64.b64encode(WAV).decode("ascii")}
        transport = RecordingTransport(httpx.Response(200, json=body))

        audio = await synthesize(transport, backend="json")

        assert audio.content == WAV
        assert audio.media_type == "audio/wav"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, json={}),
            httpx.Response(200, json={"audioContent": "not base64!"}),
            httpx.Response(200, content=b"<html>oops</html>"),
        ],
    )
    async def test_malformed_envelope_is_failure(self, response):
        with pytest.raises(SynthesisError):
            await synthesize(RecordingTransport(response), backend="json")


class TestFailures:
    @pytest.mark.asyncio
    async def test_error_status_keeps_body_for_logging(self):
        body = '{"error": {"code": 403, "status": "PERMISSION_DENIED"}}'
        transport = RecordingTransport(httpx.Response(403, text=body))

        with pytest.raises(SynthesisError) as exc_info:
            await synthesize(transport)

        assert exc_info.value.status_code == 403
        assert exc_info.value.body == body

    @pytest.mark.asyncio
    async def test_transport_error(self):
        transport = RecordingTransport(error=httpx.ConnectError("connection refused"))

        with pytest.raises(SynthesisError, match="connection refused"):
            await synthesize(transport)

    @pytest.mark.asyncio
    async def test_token_refresh_failure(self):
        transport = RecordingTransport(httpx.Response(200, content=MP3))

        with pytest.raises(SynthesisError):
            await synthesize(transport, token_provider=FailingTokenProvider())

        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_unknown_backend(self):
        with pytest.raises(ConfigurationError):
            await synthesize(RecordingTransport(httpx.Response(200, content=MP3)), backend="ogg")
