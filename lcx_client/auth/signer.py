"""
HMAC-SHA256 request signer.

The signed string is ``method + path + canonical_serialization(body)``; the
digest is Base64 encoded. The canonical serialization is the exact text that
goes on the wire, so callers must transmit ``canonical_serialization(body)``
rather than re-encoding the body themselves.
"""

import base64
import hashlib
import hmac
import json
from typing import Any, Mapping, Optional

from lcx_client.exceptions import PreconditionError


def canonical_serialization(body: Optional[Mapping[str, Any]]) -> str:
    """
    Serialize a payload the way it is signed and transmitted.

    Keys keep their insertion order and no whitespace is emitted, matching
    JavaScript's ``JSON.stringify``. ``None`` serializes as ``{}``.
    """
    if body is None:
        body = {}
    return json.dumps(body, separators=(",", ":"), ensure_ascii=False)


def sign(
    method: str,
    path: str,
    body: Optional[Mapping[str, Any]],
    secret: Optional[str],
) -> str:
    """
    Compute the request signature.

    Args:
        method: HTTP verb token, e.g. "GET".
        path: Endpoint path only, without host or query string.
        body: Payload that is also sent on the wire; ``{}`` for reads.
        secret: Account secret key.

    Returns:
        str: Base64 encoded HMAC-SHA256 digest.

    Raises:
        PreconditionError: If ``secret`` is empty or missing.

    Example:
        >>> sig = sign("GET", "/api/balances", {}, "secret")
        >>> sig == sign("GET", "/api/balances", {}, "secret")
        True
    """
    if not secret:
        raise PreconditionError("A secret key is required to sign a request.")

    request_string = method + path + canonical_serialization(body)
    digest = hmac.new(
        secret.encode("utf-8"),
        request_string.encode("utf-8"),
        hashlib.sha256,
    ).digest()
    return base64.b64encode(digest).decode("ascii")
