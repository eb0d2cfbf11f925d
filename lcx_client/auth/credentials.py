"""
API credential pair.

Credentials are set once when a client is built and never mutated. Absence of
both values means the client runs in public-only mode. A partial pair is
accepted at construction and rejected when a private call needs it.
"""

from typing import Any, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from lcx_client.exceptions import AuthenticationError

REST_AUTH_ERROR = (
    "Authentication error: 'API-KEY' and 'SECRET-KEY' are required for this request."
)
WEBSOCKET_AUTH_ERROR = (
    "Authentication error: 'API-KEY' and 'SECRET-KEY' are required to connect "
    "to this WebSocket."
)


class Credentials(BaseModel):
    """
    Immutable API key / secret key pair.

    Attributes:
        api_key: Public API key sent as ``x-access-key``.
        secret_key: Secret used as the HMAC key. Never sent, never in repr.

    Example:
        >>> creds = Credentials(api_key="key", secret_key="secret")
        >>> creds.is_complete
        True
        >>> Credentials().is_complete
        False
    """

    model_config = {"frozen": True, "extra": "forbid"}

    api_key: Optional[str] = Field(
        default=None,
        description="Account API key",
    )
    secret_key: Optional[str] = Field(
        default=None,
        description="Account secret key",
        repr=False,
    )

    @field_validator("api_key", "secret_key", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Optional[str]:
        """Treat empty or whitespace-only strings as absent."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_complete(self) -> bool:
        """True when both the API key and the secret key are present."""
        return self.api_key is not None and self.secret_key is not None

    def require(self, message: str = REST_AUTH_ERROR) -> Tuple[str, str]:
        """
        Return ``(api_key, secret_key)`` or fail closed.

        Args:
            message: Error text to raise with when a credential is missing.

        Raises:
            AuthenticationError: If either credential is absent.
        """
        if self.api_key is None or self.secret_key is None:
            raise AuthenticationError(message)
        return self.api_key, self.secret_key
