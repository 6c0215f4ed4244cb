import os
from enum import Enum
from dotenv import load_dotenv

load_dotenv()


class SttProvider(str, Enum):
    GROQ = "groq"
    ASSEMBLYAI = "assemblyai"


class LlmProvider(str, Enum):
    GROQ = "groq"
    GEMINI = "gemini"


class TtsBackend(str, Enum):
    BINARY = "binary"  # raw mp3 body
    JSON = "json"      # base64 wav inside {"audioContent": ...}


class TtsAuth(str, Enum):
    API_KEY = "api_key"
    SERVICE_ACCOUNT = "service_account"


GROQ_API_KEY = os.getenv("GROQ_API_KEY")
ASSEMBLYAI_API_KEY = os.getenv("AssemblyAI_API_KEY")
GEMINI_API_KEY = os.getenv("Gemini_API_KEY")
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")
GOOGLE_APPLICATION_CREDENTIALS = os.getenv("GOOGLE_APPLICATION_CREDENTIALS")

STT_PROVIDER = os.getenv("STT_PROVIDER", SttProvider.GROQ.value)
LLM_PROVIDER = os.getenv("LLM_PROVIDER", LlmProvider.GROQ.value)

GROQ_TRANSCRIPTION_MODEL = os.getenv("GROQ_TRANSCRIPTION_MODEL", "whisper-large-v3")
GROQ_COMPLETION_MODEL = os.getenv("GROQ_COMPLETION_MODEL", "llama3-8b-8192")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

TTS_BACKEND = os.getenv("TTS_BACKEND", TtsBackend.BINARY.value)
TTS_AUTH = os.getenv("TTS_AUTH", TtsAuth.API_KEY.value)
TTS_URL = os.getenv("TTS_URL", "https://texttospeech.googleapis.com/v1/text:synthesize")
TTS_LANGUAGE_CODE = os.getenv("TTS_LANGUAGE_CODE", "en-US")
TTS_VOICE_NAME = os.getenv("TTS_VOICE_NAME", "en-US-Standard-A")
TTS_VOICE_GENDER = os.getenv("TTS_VOICE_GENDER", "MALE")
TTS_SAMPLE_RATE = int(os.getenv("TTS_SAMPLE_RATE", "24000"))

GOOGLE_CLOUD_SCOPE = "https://www.googleapis.com/auth/cloud-platform"

HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))
