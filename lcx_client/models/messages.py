"""
Inbound realtime message models.

Everything a subscription callback receives is one of these variants,
discriminated by ``type``:

    - DataMessage: a frame that decoded as JSON
    - ErrorMessage: a frame that failed to decode, or a transport failure
    - StatusMessage: a plain-text frame passed through verbatim
    - ClosedMessage: the remote side closed the connection
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field


class DataMessage(BaseModel):
    """Decoded structured frame."""

    model_config = {"frozen": True}

    type: Literal["data"] = "data"
    payload: Any = Field(..., description="Decoded JSON object or array")


class ErrorMessage(BaseModel):
    """
    Decode failure or connection failure.

    Attributes:
        message: Short description.
        cause: The original exception, kept for the caller to inspect.
    """

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    type: Literal["error"] = "error"
    message: str
    cause: Optional[BaseException] = None


class StatusMessage(BaseModel):
    """Non-JSON frame such as an acknowledgement or ping text."""

    model_config = {"frozen": True}

    type: Literal["status"] = "status"
    message: str


class ClosedMessage(BaseModel):
    """Remote close of the connection."""

    model_config = {"frozen": True}

    type: Literal["closed"] = "closed"
    code: Optional[int] = None
    reason: str = ""


InboundMessage = Annotated[
    Union[DataMessage, ErrorMessage, StatusMessage, ClosedMessage],
    Field(discriminator="type"),
]
