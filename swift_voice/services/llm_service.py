from functools import lru_cache
from typing import Dict, List, Optional, Sequence

from google import genai
from google.genai import types
from groq import AsyncGroq

from swift_voice.schemas.chat_schemas import ChatMessage
from swift_voice.services.errors import CompletionError, ConfigurationError
from swift_voice.utils import config
from swift_voice.utils.config import LlmProvider

SYSTEM_PROMPT = """- You are Swift, a friendly and helpful voice assistant.
- Respond briefly to the user's request, and do not provide unnecessary information.
- If you don't understand the user's request, ask for clarification.
- You do not have access to up-to-date information, so you should not provide real-time data.
- You are not capable of performing actions other than responding to the user.
- Do not use markdown, emojis, or other formatting in your responses. Respond in a way easily spoken by text-to-speech software.
- User location is {location}.
- The current time is {time}.
- Your large language model is {model_description}
- Your text-to-speech model is Google Cloud Text-to-Speech.
- You are built with FastAPI and served by Uvicorn."""

MODEL_DESCRIPTIONS = {
    LlmProvider.GROQ: "{model}, hosted on Groq, an AI infrastructure company that builds fast inference technology.",
    LlmProvider.GEMINI: "{model}, created and hosted by Google.",
}


def completion_model(provider: Optional[str] = None) -> str:
    provider = provider or config.LLM_PROVIDER
    if provider == LlmProvider.GROQ:
        return config.GROQ_COMPLETION_MODEL
    if provider == LlmProvider.GEMINI:
        return config.GEMINI_MODEL
    raise ConfigurationError(f"Unknown LLM provider: {provider}")


def system_prompt(location: str, time: str, provider: Optional[str] = None) -> str:
    provider = provider or config.LLM_PROVIDER
    model = completion_model(provider)
    model_description = MODEL_DESCRIPTIONS[LlmProvider(provider)].format(model=model)
    return SYSTEM_PROMPT.format(location=location, time=time, model_description=model_description)


def build_messages(persona: str, history: Sequence[ChatMessage], transcript: str) -> List[Dict[str, str]]:
    """System persona first, the caller's history in order, then the new user turn."""
    return [
        {"role": "system", "content": persona},
        *({"role": m.role, "content": m.content} for m in history),
        {"role": "user", "content": transcript},
    ]


@lru_cache(maxsize=None)
def _groq_client() -> AsyncGroq:
    return AsyncGroq(api_key=config.GROQ_API_KEY, max_retries=0)


@lru_cache(maxsize=None)
def _gemini_client() -> genai.Client:
    return genai.Client(api_key=config.GEMINI_API_KEY)


async def _complete_with_groq(messages: List[Dict[str, str]]) -> Optional[str]:
    completion = await _groq_client().chat.completions.create(
        model=config.GROQ_COMPLETION_MODEL,
        messages=messages,
    )
    return completion.choices[0].message.content


async def _complete_with_gemini(messages: List[Dict[str, str]]) -> Optional[str]:
    system, *conversation = messages
    contents = [
        types.Content(
            role="model" if m["role"] == "assistant" else "user",
            parts=[types.Part(text=m["content"])],
        )
        for m in conversation
    ]
    response = await _gemini_client().aio.models.generate_content(
        model=config.GEMINI_MODEL,
        contents=contents,
        config=types.GenerateContentConfig(system_instruction=system["content"]),
    )
    return response.text


async def generate_llm_response(messages: List[Dict[str, str]]) -> Optional[str]:
    """
    Send the prompt to the configured completion service.

    Returns the first candidate's text, which may be ``None`` when the model
    produced no content. Any service failure is raised as ``CompletionError``.
    """
    provider = config.LLM_PROVIDER
    try:
        if provider == LlmProvider.GROQ:
            return await _complete_with_groq(messages)
        if provider == LlmProvider.GEMINI:
            return await _complete_with_gemini(messages)
    except Exception as e:
        raise CompletionError(str(e)) from e
    raise ConfigurationError(f"Unknown LLM provider: {provider}")
