"""
pytest fixtures for the Swift backend.

Pins provider configuration so tests do not depend on the local .env, and
clears cached SDK clients between tests.
"""

import pytest
from fastapi.testclient import TestClient

from swift_voice.main import app
from swift_voice.services import llm_service, stt_service, tts_service
from swift_voice.utils import config


@pytest.fixture(autouse=True)
def pinned_config(monkeypatch):
    monkeypatch.setattr(config, "STT_PROVIDER", "groq")
    monkeypatch.setattr(config, "LLM_PROVIDER", "groq")
    monkeypatch.setattr(config, "TTS_BACKEND", "binary")
    monkeypatch.setattr(config, "TTS_AUTH", "api_key")
    monkeypatch.setattr(config, "GOOGLE_API_KEY", "test-google-key")
    monkeypatch.setattr(config, "GROQ_COMPLETION_MODEL", "llama3-8b-8192")
    monkeypatch.setattr(config, "GROQ_TRANSCRIPTION_MODEL", "whisper-large-v3")
    monkeypatch.setattr(config, "GEMINI_MODEL", "gemini-2.5-flash")
    yield
    stt_service._groq_client.cache_clear()
    llm_service._groq_client.cache_clear()
    llm_service._gemini_client.cache_clear()
    tts_service._default_token_provider.cache_clear()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def sample_audio():
    """A few bytes standing in for an uploaded webm clip."""
    return b"\x1a\x45\xdf\xa3" + b"\x00" * 64
