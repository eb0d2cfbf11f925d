"""
Authenticated request builder.

Composes the signer output, the API key and a fresh millisecond timestamp
into the header set private endpoints expect. The credential check runs
before anything else, so a client without credentials never signs and never
reaches the network.

Example:
    >>> creds = Credentials(api_key="key", secret_key="secret")
    >>> request = build_signed_request("GET", "/api/balances", None, creds)
    >>> sorted(request.headers())[:3]
    ['accept', 'content-type', 'x-access-key']
"""

import time
from typing import Any, Callable, Dict, Mapping, Optional

from pydantic import BaseModel, Field

from lcx_client.auth.credentials import REST_AUTH_ERROR, Credentials
from lcx_client.auth.signer import canonical_serialization, sign

Clock = Callable[[], int]

JSON_HEADERS: Dict[str, str] = {
    "accept": "application/json",
    "content-type": "application/json;charset=UTF-8",
}


def now_millis() -> int:
    """Wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def _to_pascal(key: str) -> str:
    # orderType -> OrderType, client_order_id -> ClientOrderId
    return "".join(part[:1].upper() + part[1:] for part in key.split("_") if part)


def to_api_format(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Rename payload keys to the PascalCase the trading API expects.

    Values are not touched. Keys whose value is ``None`` are dropped, which
    mirrors how absent optional fields never reach the wire.
    """
    return {_to_pascal(key): value for key, value in payload.items() if value is not None}


class SignedRequest(BaseModel):
    """
    A request whose authentication tag has been computed.

    Attributes:
        method: HTTP verb.
        path: Endpoint path that was signed.
        body: Payload that was signed.
        serialized_body: Exact signed text; transmitted as-is for POST/PUT.
        signature: Base64 HMAC-SHA256 tag.
        timestamp_millis: Build time, sent beside the signature, not signed.
        api_key: Key sent as ``x-access-key``.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    method: str = Field(..., min_length=1)
    path: str = Field(..., min_length=1)
    body: Dict[str, Any] = Field(default_factory=dict)
    serialized_body: str = Field(default="{}")
    signature: str = Field(..., min_length=1)
    timestamp_millis: int = Field(..., ge=0)
    api_key: str = Field(..., min_length=1)

    @property
    def has_body(self) -> bool:
        """Only POST and PUT requests carry the signed body on the wire."""
        return self.method in ("POST", "PUT")

    def headers(self) -> Dict[str, str]:
        """Return the auth headers plus the JSON content headers."""
        return {
            "x-access-key": self.api_key,
            "x-access-sign": self.signature,
            "x-access-timestamp": str(self.timestamp_millis),
            **JSON_HEADERS,
        }


def build_signed_request(
    method: str,
    path: str,
    body: Optional[Mapping[str, Any]],
    credentials: Credentials,
    *,
    clock: Optional[Clock] = None,
) -> SignedRequest:
    """
    Build a signed request or fail closed.

    Args:
        method: HTTP verb, upper-cased before signing.
        path: Endpoint path only.
        body: Payload to sign and send; ``None`` means ``{}``.
        credentials: Client credentials.
        clock: Millisecond clock, ``now_millis`` by default.

    Returns:
        SignedRequest: Signature, timestamp and the serialized body.

    Raises:
        AuthenticationError: If either credential is absent.
    """
    api_key, secret_key = credentials.require(REST_AUTH_ERROR)

    method = method.upper()
    payload = dict(body) if body else {}
    serialized = canonical_serialization(payload)
    signature = sign(method, path, payload, secret_key)
    timestamp = (clock or now_millis)()

    return SignedRequest(
        method=method,
        path=path,
        body=payload,
        serialized_body=serialized,
        signature=signature,
        timestamp_millis=timestamp,
        api_key=api_key,
    )
