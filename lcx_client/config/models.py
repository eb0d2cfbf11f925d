"""
Pydantic models for client configuration.

The configuration is immutable once built. A ``ClientConfig()`` with no
arguments is a valid public-only configuration for the production endpoints.

Example:
    >>> from lcx_client.config.models import ClientConfig
    >>> config = ClientConfig()
    >>> config.endpoints.ws_url
    'wss://exchange-api.lcx.com'
    >>> config.credentials.is_complete
    False
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from lcx_client.auth.credentials import Credentials


# =============================================================================
# ENUMS
# =============================================================================


class LcxEnvironment(str, Enum):
    """Deployment the client talks to."""

    PRODUCTION = "production"


class LogFormat(str, Enum):
    """Logging format options."""

    JSON = "json"
    TEXT = "text"


class LogLevel(str, Enum):
    """Logging level options."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# =============================================================================
# ENDPOINTS
# =============================================================================


_BASE_URLS: Dict[LcxEnvironment, Dict[str, str]] = {
    LcxEnvironment.PRODUCTION: {
        "exchange_url": "https://exchange-api.lcx.com",
        "kline_url": "https://api-kline-staging.lcx.com",
        "ws_url": "wss://exchange-api.lcx.com",
    },
}


class EndpointConfig(BaseModel):
    """Base URLs for REST, candle and realtime traffic."""

    model_config = {"frozen": True, "extra": "forbid"}

    exchange_url: str = Field(
        default=_BASE_URLS[LcxEnvironment.PRODUCTION]["exchange_url"],
        description="REST API base URL for market, trading and account endpoints",
    )
    kline_url: str = Field(
        default=_BASE_URLS[LcxEnvironment.PRODUCTION]["kline_url"],
        description="REST API base URL for candle data",
    )
    ws_url: str = Field(
        default=_BASE_URLS[LcxEnvironment.PRODUCTION]["ws_url"],
        description="WebSocket base URL",
    )

    @field_validator("exchange_url", "kline_url", "ws_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Paths are appended verbatim, so drop a trailing slash."""
        return v.rstrip("/")

    @field_validator("ws_url")
    @classmethod
    def check_ws_scheme(cls, v: str) -> str:
        if not v.startswith(("ws://", "wss://")):
            raise ValueError(f"ws_url must use ws:// or wss://, got {v}")
        return v

    @classmethod
    def for_environment(cls, environment: LcxEnvironment) -> "EndpointConfig":
        """Default endpoints of an environment."""
        return cls(**_BASE_URLS[environment])


# =============================================================================
# CONNECTION / LOGGING
# =============================================================================


class ConnectionSettings(BaseModel):
    """Transport settings. ``None`` leaves the library default in place."""

    model_config = {"frozen": True, "extra": "forbid"}

    timeout_seconds: Optional[float] = Field(
        default=None,
        description="Total HTTP request timeout; aiohttp default when unset",
        gt=0,
    )
    ping_interval_seconds: Optional[float] = Field(
        default=20,
        description="WebSocket keepalive ping interval; None disables pings",
        gt=0,
    )
    ping_timeout_seconds: Optional[float] = Field(
        default=20,
        description="WebSocket pong wait",
        gt=0,
    )
    close_timeout_seconds: float = Field(
        default=10,
        description="Wait for the closing handshake",
        gt=0,
    )
    max_message_size: int = Field(
        default=2**20,
        description="Largest accepted inbound frame in bytes",
        ge=1024,
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = {"frozen": True, "extra": "forbid"}

    format: LogFormat = Field(
        default=LogFormat.JSON,
        description="Log output format",
    )
    level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Default log level",
    )


# =============================================================================
# ROOT CONFIGURATION
# =============================================================================


class ClientConfig(BaseModel):
    """
    Root client configuration.

    When ``endpoints`` is not given, the defaults of ``environment`` apply.
    Credentials default to empty, which means public-only mode.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    environment: LcxEnvironment = Field(
        default=LcxEnvironment.PRODUCTION,
        description="Target deployment",
    )
    credentials: Credentials = Field(
        default_factory=Credentials,
        description="API key pair; empty for public-only use",
    )
    endpoints: Optional[EndpointConfig] = Field(
        default=None,
        description="Endpoint overrides",
    )
    connection: ConnectionSettings = Field(
        default_factory=ConnectionSettings,
        description="Transport settings",
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration",
    )

    @model_validator(mode="before")
    @classmethod
    def fill_endpoints(cls, data: Any) -> Any:
        """Resolve endpoints from the environment when not overridden."""
        if isinstance(data, dict) and data.get("endpoints") is None:
            environment = LcxEnvironment(data.get("environment", LcxEnvironment.PRODUCTION))
            data = {**data, "endpoints": EndpointConfig.for_environment(environment)}
        return data

    @property
    def is_authenticated(self) -> bool:
        """True when private endpoints and topics can be used."""
        return self.credentials.is_complete
