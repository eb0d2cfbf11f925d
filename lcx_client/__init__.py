"""
Async client for the LCX exchange.

Signs private REST requests with HMAC-SHA256, exposes the REST endpoint
catalogue and manages realtime WebSocket subscriptions.

Example:
    >>> from lcx_client import LcxClient, load_config, setup_logging
    >>>
    >>> config = load_config()
    >>> setup_logging(config.logging)
    >>> async with LcxClient(config) as client:
    ...     balances = await client.rest.get_balances()
"""

from lcx_client.adapters.lcx import (
    LcxClient,
    LcxRestClient,
    LcxWebSocketClient,
    decode_frame,
)
from lcx_client.auth import Credentials, build_signed_request, sign
from lcx_client.config import ClientConfig, load_config
from lcx_client.exceptions import (
    AuthenticationError,
    ConfigLoadError,
    ConnectionStateError,
    LcxError,
    PayloadValidationError,
    PreconditionError,
)
from lcx_client.logging_setup import setup_logging
from lcx_client.models import (
    ClosedMessage,
    ConnectionState,
    DataMessage,
    ErrorMessage,
    StatusMessage,
    Topic,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Clients
    "LcxClient",
    "LcxRestClient",
    "LcxWebSocketClient",
    # Auth
    "Credentials",
    "build_signed_request",
    "sign",
    # Config
    "ClientConfig",
    "load_config",
    "setup_logging",
    # Messages
    "decode_frame",
    "DataMessage",
    "ErrorMessage",
    "StatusMessage",
    "ClosedMessage",
    "ConnectionState",
    "Topic",
    # Errors
    "LcxError",
    "PreconditionError",
    "AuthenticationError",
    "PayloadValidationError",
    "ConnectionStateError",
    "ConfigLoadError",
]
