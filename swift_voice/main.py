from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
import uvicorn

from swift_voice.services.errors import ConfigurationError
from swift_voice.utils import config
from swift_voice.utils.logger import setup_logger
from swift_voice.routes import agent

logger = setup_logger()

app = FastAPI(title="Swift Voice Assistant")

app.include_router(agent.router, prefix="/api", tags=["Agent"])


@app.exception_handler(ConfigurationError)
async def configuration_error(request: Request, exc: ConfigurationError):
    logger.error(f"Misconfigured service: {exc}")
    return PlainTextResponse("Internal server error", status_code=500)


def run() -> None:
    logger.info(f"Starting Swift on {config.HOST}:{config.PORT} (stt={config.STT_PROVIDER}, llm={config.LLM_PROVIDER}, tts={config.TTS_BACKEND}/{config.TTS_AUTH})")
    uvicorn.run(app, host=config.HOST, port=config.PORT)
