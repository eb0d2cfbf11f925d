"""
LCX exchange adapter.

This package provides LCX REST and realtime access on top of the signing
core in ``lcx_client.auth``.

Components:
    - LcxWebSocketClient: Realtime connection manager, one topic per connection
    - decode_frame: Inbound frame decoder
    - LcxRestClient: REST endpoint catalogue
    - LcxClient: Facade owning one of each, built from ClientConfig

Example:
    >>> from lcx_client.adapters.lcx import LcxClient
    >>>
    >>> client = LcxClient()
    >>> tickers = await client.rest.get_tickers()
    >>> await client.ws.subscribe_orderbook("LCX/USDC", print)
"""

from lcx_client.adapters.lcx.adapter import LcxClient
from lcx_client.adapters.lcx.decoder import decode_frame
from lcx_client.adapters.lcx.rest import LcxRestClient
from lcx_client.adapters.lcx.websocket import LcxWebSocketClient

__all__ = [
    "LcxClient",
    "LcxRestClient",
    "LcxWebSocketClient",
    "decode_frame",
]
