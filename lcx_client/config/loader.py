"""
Configuration loader for the LCX client.

Reads an optional YAML file and applies environment overrides. All values are
validated through the Pydantic models in ``lcx_client.config.models``.

YAML layout (every section optional):

    environment: production
    credentials:
      api_key: ...
      secret_key: ...
    endpoints:
      exchange_url: https://exchange-api.lcx.com
      kline_url: https://api-kline-staging.lcx.com
      ws_url: wss://exchange-api.lcx.com
    connection:
      timeout_seconds: 30
      ping_interval_seconds: 20
    logging:
      format: json
      level: INFO

Environment variables override the file:
    - LCX_API_KEY: API key
    - LCX_SECRET_KEY: Secret key
    - LCX_ENVIRONMENT: Deployment name
    - LOG_LEVEL: Application log level

Example:
    >>> from lcx_client.config import load_config
    >>> config = load_config("config/lcx.yaml")
    >>> config.is_authenticated
    True
"""

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import structlog
import yaml
from pydantic import ValidationError

from lcx_client.config.models import ClientConfig, LogLevel
from lcx_client.exceptions import ConfigLoadError

logger = structlog.get_logger(__name__)

_SECTIONS = ("environment", "credentials", "endpoints", "connection", "logging")


class ConfigLoader:
    """
    Loads and validates client configuration.

    Example:
        >>> loader = ConfigLoader("config/lcx.yaml")
        >>> config = loader.load()
        >>> print(config.endpoints.exchange_url)
        https://exchange-api.lcx.com
    """

    def __init__(
        self,
        config_file: Optional[Path | str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize config loader.

        Args:
            config_file: YAML file to read. ``None`` uses defaults plus env.
            environ: Environment mapping, ``os.environ`` by default.

        Raises:
            ConfigLoadError: If a file was given and does not exist.
        """
        self.config_file = Path(config_file) if config_file is not None else None
        self.environ = environ if environ is not None else os.environ

        if self.config_file is not None and not self.config_file.is_file():
            raise ConfigLoadError(
                f"Configuration file not found: {self.config_file}",
                file_path=self.config_file,
            )

    def _load_yaml(self) -> Dict[str, Any]:
        """
        Parse the YAML file.

        Raises:
            ConfigLoadError: If the file is empty, unreadable or not a mapping.
        """
        if self.config_file is None:
            return {}

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigLoadError(
                f"Invalid YAML syntax in {self.config_file}: {e}",
                file_path=self.config_file,
                cause=e,
            ) from e
        except OSError as e:
            raise ConfigLoadError(
                f"Error reading {self.config_file}: {e}",
                file_path=self.config_file,
                cause=e,
            ) from e

        if data is None:
            raise ConfigLoadError(
                f"Configuration file is empty: {self.config_file}",
                file_path=self.config_file,
            )
        if not isinstance(data, dict):
            raise ConfigLoadError(
                f"Configuration root must be a mapping in {self.config_file}",
                file_path=self.config_file,
            )

        unknown = set(data) - set(_SECTIONS)
        if unknown:
            raise ConfigLoadError(
                f"Unknown configuration sections in {self.config_file}: {sorted(unknown)}",
                file_path=self.config_file,
            )
        return data

    def _apply_env(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Overlay environment variables on the file data."""
        merged = dict(data)

        credentials = dict(merged.get("credentials") or {})
        if self.environ.get("LCX_API_KEY"):
            credentials["api_key"] = self.environ["LCX_API_KEY"]
        if self.environ.get("LCX_SECRET_KEY"):
            credentials["secret_key"] = self.environ["LCX_SECRET_KEY"]
        if credentials:
            merged["credentials"] = credentials

        if self.environ.get("LCX_ENVIRONMENT"):
            merged["environment"] = self.environ["LCX_ENVIRONMENT"].lower()

        level = self.environ.get("LOG_LEVEL")
        if level:
            logging_data = dict(merged.get("logging") or {})
            try:
                logging_data["level"] = LogLevel(level.upper())
            except ValueError:
                logger.warning("config_invalid_log_level", value=level)
            else:
                merged["logging"] = logging_data

        return merged

    def load(self) -> ClientConfig:
        """
        Load and validate the configuration.

        Returns:
            ClientConfig: Validated client configuration.

        Raises:
            ConfigLoadError: If any value is invalid.
        """
        data = self._apply_env(self._load_yaml())

        try:
            config = ClientConfig(**data)
        except ValidationError as e:
            raise ConfigLoadError(
                f"Configuration validation failed: {e}",
                file_path=self.config_file,
                cause=e,
            ) from e

        logger.debug(
            "config_loaded",
            file=str(self.config_file) if self.config_file else None,
            environment=config.environment.value,
            authenticated=config.is_authenticated,
        )
        return config


def load_config(config_file: Optional[Path | str] = None) -> ClientConfig:
    """
    Convenience function to load client configuration.

    Args:
        config_file: Optional YAML file path.

    Returns:
        ClientConfig: Validated configuration.

    Raises:
        ConfigLoadError: If configuration loading fails.
    """
    return ConfigLoader(config_file).load()
