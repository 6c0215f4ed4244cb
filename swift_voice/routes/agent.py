from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse, Response
from starlette.background import BackgroundTask
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException
from typing import Optional, Union
import logging

from swift_voice.schemas.chat_schemas import parse_turn_form
from swift_voice.services.errors import CompletionError, SynthesisError, TranscriptionError
from swift_voice.services.stt_service import transcribe_audio
from swift_voice.services.llm_service import build_messages, generate_llm_response, system_prompt
from swift_voice.services.tts_service import text_to_speech
from swift_voice.utils.context import (
    encode_header_value,
    location_from_headers,
    request_id,
    time_from_headers,
)
from swift_voice.utils.logger import start_timer, stop_timer, timer

router = APIRouter()
logger = logging.getLogger(__name__)


async def get_transcript(value: Union[str, UploadFile]) -> Optional[str]:
    """Typed text passes through; audio goes to speech recognition, ``None`` if nothing usable came back."""
    if isinstance(value, str):
        return value

    try:
        audio_bytes = await value.read()
        return await transcribe_audio(audio_bytes, value.filename or "audio.webm")
    except TranscriptionError:
        return None


@router.post("", response_class=Response)
async def voice_turn(request: Request):
    rid = request_id(request.headers)

    with timer("transcribe", rid):
        try:
            raw_form = await request.form()
        except HTTPException:
            return PlainTextResponse("Invalid request", status_code=400)

        # uploads are spooled to temp files until the form is closed
        try:
            try:
                form = parse_turn_form(raw_form)
            except ValueError:
                return PlainTextResponse("Invalid request", status_code=400)
            transcript = await get_transcript(form.input)
        finally:
            await raw_form.close()

        if not transcript:
            return PlainTextResponse("Invalid audio", status_code=400)

    with timer("text completion", rid):
        persona = system_prompt(location_from_headers(request.headers), time_from_headers(request.headers))
        messages = build_messages(persona, form.message, transcript)
        try:
            reply = await generate_llm_response(messages)
        except CompletionError as e:
            logger.error(f"Text completion failed for {rid}: {e}")
            return PlainTextResponse("Text completion failed", status_code=500)

    if not reply:
        logger.error(f"Text completion for {rid} returned no content")
        return PlainTextResponse("Voice synthesis failed", status_code=500)

    with timer("tts request", rid):
        try:
            audio = await text_to_speech(reply)
        except SynthesisError as e:
            logger.error(f"Voice synthesis failed for {rid}: {e} {e.body or ''}")
            return PlainTextResponse("Voice synthesis failed", status_code=500)

    started = start_timer()
    return Response(
        content=audio.content,
        media_type=audio.media_type,
        headers={
            "X-Transcript": encode_header_value(transcript),
            "X-Response": encode_header_value(reply),
        },
        background=BackgroundTask(stop_timer, "stream", rid, started),
    )
