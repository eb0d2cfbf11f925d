"""
Configuration management for the LCX client.

Configuration is built from an optional YAML file plus environment
variables and validated with Pydantic models.

Environment variables:
    - LCX_API_KEY / LCX_SECRET_KEY: API credentials
    - LCX_ENVIRONMENT: Deployment name
    - LOG_LEVEL: Application log level

Example:
    >>> from lcx_client.config import load_config
    >>> config = load_config()
    >>> config.endpoints.exchange_url
    'https://exchange-api.lcx.com'

Modules:
    loader: YAML and environment loading
    models: Pydantic models for configuration validation
"""

from lcx_client.config.loader import ConfigLoader, load_config
from lcx_client.config.models import (
    ClientConfig,
    ConnectionSettings,
    EndpointConfig,
    LcxEnvironment,
    LogFormat,
    LoggingConfig,
    LogLevel,
)
from lcx_client.exceptions import ConfigLoadError

__all__: list[str] = [
    # Loader
    "load_config",
    "ConfigLoader",
    "ConfigLoadError",
    # Enums
    "LcxEnvironment",
    "LogFormat",
    "LogLevel",
    # Models
    "EndpointConfig",
    "ConnectionSettings",
    "LoggingConfig",
    "ClientConfig",
]
