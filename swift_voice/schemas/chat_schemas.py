from pydantic import BaseModel, ConfigDict, field_validator
from starlette.datastructures import FormData, UploadFile
from typing import List, Literal, Union


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class TurnForm(BaseModel):
    """One voice-assistant turn: typed text or an audio upload, plus prior history."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    input: Union[str, UploadFile]
    message: List[ChatMessage] = []

    @field_validator("input")
    @classmethod
    def text_must_not_be_blank(cls, value):
        if isinstance(value, str) and not value.strip():
            raise ValueError("input text is empty")
        return value


def parse_turn_form(form: FormData) -> TurnForm:
    """
    Validate a multipart form into a ``TurnForm``.

    Raises ``ValueError`` (pydantic's ``ValidationError`` included) when
    ``input`` is missing or repeated, or a ``message`` entry is not a JSON
    object with an allowed role.
    """
    inputs = form.getlist("input")
    if len(inputs) != 1:
        raise ValueError(f"expected exactly one input, got {len(inputs)}")

    history = []
    for raw in form.getlist("message"):
        if not isinstance(raw, str):
            raise ValueError("message entries must be JSON text fields")
        history.append(ChatMessage.model_validate_json(raw))

    return TurnForm(input=inputs[0], message=history)
