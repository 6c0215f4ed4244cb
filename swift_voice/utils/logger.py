import logging
import time
from contextlib import contextmanager

from swift_voice.utils import config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

timing_logger = logging.getLogger("swift_voice.timing")


def setup_logger() -> logging.Logger:
    logging.basicConfig(level=config.LOG_LEVEL.upper(), format=LOG_FORMAT)
    return logging.getLogger("swift_voice")


def start_timer() -> float:
    return time.perf_counter()


def stop_timer(label: str, request_id: str, started: float) -> None:
    """Log the time elapsed since ``started`` under ``"<label> <request id>"``."""
    elapsed_ms = (time.perf_counter() - started) * 1000
    timing_logger.info(f"{label} {request_id}: {elapsed_ms:.3f}ms")


@contextmanager
def timer(label: str, request_id: str):
    # logs on error exits too
    started = start_timer()
    try:
        yield
    finally:
        stop_timer(label, request_id, started)
