"""
Inbound frame decoder for LCX realtime streams.

LCX sends JSON objects or arrays for data and plain text for acknowledgements
and pings. A frame is only parsed as JSON when its first non-whitespace
character opens an object or array; everything else is passed through as a
status message. Parse failures come back as error messages rather than
exceptions, so one bad frame never ends a stream.
"""

import json
from typing import Union

import structlog

from lcx_client.models.messages import (
    DataMessage,
    ErrorMessage,
    InboundMessage,
    StatusMessage,
)

logger = structlog.get_logger(__name__)

PARSE_ERROR_MESSAGE = "Failed to parse JSON message"


def decode_frame(raw: Union[str, bytes]) -> InboundMessage:
    """
    Decode one inbound frame.

    Args:
        raw: Frame as received; bytes are decoded as UTF-8.

    Returns:
        InboundMessage: DataMessage, ErrorMessage or StatusMessage.

    Example:
        >>> decode_frame('{"a":1}').payload
        {'a': 1}
        >>> decode_frame("PING").message
        'PING'
    """
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = bytes(raw).decode("utf-8")
        except UnicodeDecodeError as e:
            logger.warning("websocket_frame_not_utf8", exchange="lcx", size=len(raw))
            return ErrorMessage(message=PARSE_ERROR_MESSAGE, cause=e)

    if raw.lstrip()[:1] not in ("{", "["):
        return StatusMessage(message=raw)

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(
            "websocket_invalid_json",
            exchange="lcx",
            error=str(e),
            message=raw[:100],
        )
        return ErrorMessage(message=PARSE_ERROR_MESSAGE, cause=e)

    return DataMessage(payload=payload)
