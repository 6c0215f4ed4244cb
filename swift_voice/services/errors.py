from typing import Optional


class ConfigurationError(Exception):
    """Unknown provider name or missing credential material."""


class TranscriptionError(Exception):
    """Speech recognition failed or produced no usable text."""


class CompletionError(Exception):
    """The completion service call failed."""


class SynthesisError(Exception):
    """The text-to-speech service rejected the request or returned no audio."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
