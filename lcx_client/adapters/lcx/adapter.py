"""
LCX client facade.

Builds the REST and WebSocket clients from one ClientConfig so both share
the same endpoints and credentials, and closes them together.

Without credentials the client runs in public-only mode: market endpoints
and public topics work, private calls raise AuthenticationError before any
I/O.

Example:
    >>> from lcx_client import LcxClient
    >>>
    >>> async with LcxClient.from_config_file("config/lcx.yaml") as client:
    ...     book = await client.rest.get_order_book("LCX/USDC")
    ...     await client.ws.subscribe_trade("LCX/USDC", print)
    ...     await client.ws.wait_closed()
"""

from pathlib import Path
from typing import Optional, Union

import aiohttp
import structlog

from lcx_client.adapters.lcx.rest import LcxRestClient
from lcx_client.adapters.lcx.websocket import Connector, LcxWebSocketClient
from lcx_client.config.loader import load_config
from lcx_client.config.models import ClientConfig
from lcx_client.models.connection import ConnectionState

logger = structlog.get_logger(__name__)


class LcxClient:
    """
    REST and realtime access to LCX behind one configuration.

    Attributes:
        config: Validated client configuration.
        rest: REST endpoint catalogue.
        ws: Realtime connection manager.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        connector: Optional[Connector] = None,
    ):
        """
        Initialize LCX client.

        Args:
            config: Client configuration; public-only defaults when omitted.
            session: Shared aiohttp session for REST calls.
            connector: Socket factory for the realtime client.
        """
        self.config = config or ClientConfig()
        endpoints = self.config.endpoints

        self.rest = LcxRestClient(
            endpoints,
            self.config.credentials,
            session=session,
            timeout_seconds=self.config.connection.timeout_seconds,
        )
        self.ws = LcxWebSocketClient(
            endpoints.ws_url,
            self.config.credentials,
            settings=self.config.connection,
            connector=connector,
        )

        logger.info(
            "lcx_client_initialized",
            environment=self.config.environment.value,
            authenticated=self.config.is_authenticated,
        )

    @classmethod
    def from_config_file(cls, path: Union[str, Path], **kwargs) -> "LcxClient":
        """Build a client from a YAML file plus environment overrides."""
        return cls(load_config(path), **kwargs)

    @property
    def connection_state(self) -> ConnectionState:
        """State of the realtime connection."""
        return self.ws.state

    async def close(self) -> None:
        """Close the realtime connection and the HTTP session."""
        await self.ws.close()
        await self.rest.close()
        logger.info("lcx_client_closed")

    async def __aenter__(self) -> "LcxClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"LcxClient(environment={self.config.environment.value}, "
            f"state={self.ws.state.value})"
        )
