import asyncio
import io
from functools import lru_cache

import assemblyai as aai
from groq import AsyncGroq

from swift_voice.services.errors import ConfigurationError, TranscriptionError
from swift_voice.utils import config
from swift_voice.utils.config import SttProvider


@lru_cache(maxsize=None)
def _groq_client() -> AsyncGroq:
    return AsyncGroq(api_key=config.GROQ_API_KEY, max_retries=0)


async def _transcribe_with_groq(audio_bytes: bytes, filename: str) -> str:
    result = await _groq_client().audio.transcriptions.create(
        file=(filename, audio_bytes),
        model=config.GROQ_TRANSCRIPTION_MODEL,
    )
    return result.text or ""


def _transcribe_with_assemblyai(audio_bytes: bytes) -> str:
    aai.settings.api_key = config.ASSEMBLYAI_API_KEY
    transcript = aai.Transcriber().transcribe(io.BytesIO(audio_bytes))
    if transcript.status == aai.TranscriptStatus.error:
        raise TranscriptionError(transcript.error or "AssemblyAI transcription failed")
    return transcript.text or ""


async def transcribe_audio(audio_bytes: bytes, filename: str = "audio.webm") -> str:
    """
    Transcribe an uploaded clip with the configured recognizer.

    Returns the trimmed text. Raises ``TranscriptionError`` when the clip is
    empty, the service fails, or nothing intelligible was heard.
    """
    if not audio_bytes:
        raise TranscriptionError("empty audio file")

    provider = config.STT_PROVIDER
    try:
        if provider == SttProvider.GROQ:
            text = await _transcribe_with_groq(audio_bytes, filename)
        elif provider == SttProvider.ASSEMBLYAI:
            text = await asyncio.to_thread(_transcribe_with_assemblyai, audio_bytes)
        else:
            raise ConfigurationError(f"Unknown STT provider: {provider}")
    except (TranscriptionError, ConfigurationError):
        raise
    except Exception as e:
        raise TranscriptionError(str(e)) from e

    text = text.strip()
    if not text:
        raise TranscriptionError("no speech recognized")
    return text
