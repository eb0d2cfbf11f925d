"""
Request authentication for the LCX client.

Modules:
    credentials: Immutable API key / secret key pair
    signer: Deterministic HMAC-SHA256 signature over method, path and body
    builder: Signed request and auth header construction
"""

from lcx_client.auth.builder import (
    SignedRequest,
    build_signed_request,
    now_millis,
    to_api_format,
)
from lcx_client.auth.credentials import (
    REST_AUTH_ERROR,
    WEBSOCKET_AUTH_ERROR,
    Credentials,
)
from lcx_client.auth.signer import canonical_serialization, sign

__all__: list[str] = [
    "Credentials",
    "REST_AUTH_ERROR",
    "WEBSOCKET_AUTH_ERROR",
    "SignedRequest",
    "build_signed_request",
    "canonical_serialization",
    "now_millis",
    "sign",
    "to_api_format",
]
