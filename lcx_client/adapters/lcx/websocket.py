"""
LCX WebSocket client.

Owns at most one live socket per client instance and drives its state
machine:

    idle -> connecting -> open -> subscribed -> closed | errored

Each subscribe call opens a new connection scoped to a single topic. A
previously held connection is closed first, and its callback receives
nothing further. On open, exactly one subscribe message is sent; there is no
acknowledgement handshake. Every inbound frame is decoded and handed to the
caller's callback until the connection ends.

Connection outcomes after open are delivered through the same callback:
    - remote close: ClosedMessage, state ``closed``
    - transport failure: ErrorMessage, state ``errored``
    - local close (``close()`` or replacement): nothing, state ``closed``

There is no reconnection; a terminal connection stays terminal until the
next subscribe call.

LCX-Specific Details:
    - Public topics: ``{ws_url}/ws``
    - Private topics: ``{ws_url}/api/auth/ws`` with ``x-access-key``,
      ``x-access-sign`` and ``x-access-timestamp`` query parameters, the
      signature being computed over ``GET /api/auth/ws {}``
    - Subscribe message: ``{"Topic": "subscribe", "Type": ..., "Pair": ...}``

Example:
    >>> client = LcxWebSocketClient("wss://exchange-api.lcx.com")
    >>> await client.subscribe_orderbook("LCX/USDC", print)
    >>> await client.wait_closed()
"""

import asyncio
import inspect
from collections import deque
from typing import Any, Awaitable, Callable, Deque, Optional, Tuple, Union
from urllib.parse import urlencode

import structlog
import websockets
from websockets.exceptions import WebSocketException

from lcx_client.adapters.lcx.decoder import decode_frame
from lcx_client.auth.builder import Clock, now_millis
from lcx_client.auth.credentials import WEBSOCKET_AUTH_ERROR, Credentials
from lcx_client.auth.signer import sign
from lcx_client.config.models import ConnectionSettings
from lcx_client.exceptions import ConnectionStateError, PayloadValidationError
from lcx_client.models.connection import ConnectionState, Subscription, Topic
from lcx_client.models.messages import ClosedMessage, ErrorMessage, InboundMessage

logger = structlog.get_logger(__name__)

PUBLIC_PATH = "/ws"
AUTH_PATH = "/api/auth/ws"

MessageCallback = Callable[[InboundMessage], Union[None, Awaitable[None]]]
Connector = Callable[..., Awaitable[Any]]


def _redact(url: str) -> str:
    # auth query parameters must not reach the logs
    return url.split("?", 1)[0]


class LcxWebSocketClient:
    """
    Async realtime client for LCX.

    Attributes:
        url: WebSocket base URL.
        state: Current ConnectionState.
        subscription: Subscription of the current or last connection.

    Example:
        >>> client = LcxWebSocketClient(
        ...     ws_url="wss://exchange-api.lcx.com",
        ...     credentials=Credentials(api_key="key", secret_key="secret"),
        ... )
        >>> await client.subscribe_wallets(handle_wallet_event)
    """

    def __init__(
        self,
        ws_url: str,
        credentials: Optional[Credentials] = None,
        *,
        settings: Optional[ConnectionSettings] = None,
        connector: Optional[Connector] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize WebSocket client.

        Args:
            ws_url: WebSocket base URL, e.g. "wss://exchange-api.lcx.com".
            credentials: API credentials; needed only for private topics.
            settings: Ping, close timeout and frame size settings.
            connector: Awaitable socket factory, ``websockets.connect`` by default.
            clock: Millisecond clock for the auth timestamp.
        """
        self.url = ws_url.rstrip("/")
        self._credentials = credentials or Credentials()
        self._settings = settings or ConnectionSettings()
        self._connector: Connector = connector or websockets.connect
        self._clock = clock or now_millis

        self._ws: Optional[Any] = None
        self._reader: Optional[asyncio.Task] = None
        self._state = ConnectionState.IDLE
        self._subscription: Optional[Subscription] = None
        self._history: Deque[ConnectionState] = deque([ConnectionState.IDLE], maxlen=64)
        self._lock = asyncio.Lock()

        logger.info("websocket_client_initialized", exchange="lcx", url=self.url)

    @property
    def state(self) -> ConnectionState:
        """Current connection state."""
        return self._state

    @property
    def state_history(self) -> Tuple[ConnectionState, ...]:
        """Recent state transitions, oldest first."""
        return tuple(self._history)

    @property
    def subscription(self) -> Optional[Subscription]:
        """Subscription of the current or last connection."""
        return self._subscription

    @property
    def topic(self) -> Optional[Topic]:
        """Topic of the current or last connection."""
        return self._subscription.topic if self._subscription else None

    @property
    def is_connected(self) -> bool:
        """Check if a subscribed socket is held."""
        return self._state is ConnectionState.SUBSCRIBED and self._ws is not None

    # ------------------------------------------------------------------
    # Public topics
    # ------------------------------------------------------------------

    async def subscribe_ticker(self, on_message: MessageCallback) -> None:
        """Stream tickers for all pairs."""
        await self._subscribe(Subscription(topic=Topic.TICKER), on_message)

    async def subscribe_orderbook(self, pair: str, on_message: MessageCallback) -> None:
        """
        Stream order book updates for one pair.

        Args:
            pair: Trading pair, e.g. "LCX/USDC".
            on_message: Called with every InboundMessage.

        Raises:
            PayloadValidationError: If ``pair`` is empty or not a string.
            ConnectionError: If the socket cannot be opened.
        """
        subscription = Subscription(topic=Topic.ORDERBOOK, pair=self._check_pair(pair))
        await self._subscribe(subscription, on_message)

    async def subscribe_trade(self, pair: str, on_message: MessageCallback) -> None:
        """Stream public trades for one pair."""
        subscription = Subscription(topic=Topic.TRADE, pair=self._check_pair(pair))
        await self._subscribe(subscription, on_message)

    # ------------------------------------------------------------------
    # Private topics
    # ------------------------------------------------------------------

    async def subscribe_wallets(self, on_message: MessageCallback) -> None:
        """
        Stream wallet balance events for the account.

        Raises:
            AuthenticationError: If credentials are missing. Raised before
                any connection attempt.
            ConnectionError: If the socket cannot be opened.
        """
        await self._subscribe(Subscription(topic=Topic.USER_WALLETS), on_message)

    async def subscribe_orders(self, on_message: MessageCallback) -> None:
        """Stream order events for the account."""
        await self._subscribe(Subscription(topic=Topic.USER_ORDERS), on_message)

    async def subscribe_trades(self, on_message: MessageCallback) -> None:
        """Stream own trade events for the account."""
        await self._subscribe(Subscription(topic=Topic.USER_TRADES), on_message)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def close(self) -> None:
        """
        Close the current connection, if any.

        The callback is not told about a local close. Safe to call multiple
        times.
        """
        async with self._lock:
            await self._release()

    async def wait_closed(self) -> None:
        """Wait until the current connection ends, from either side."""
        reader = self._reader
        if reader is None:
            return
        try:
            await asyncio.shield(reader)
        except asyncio.CancelledError:
            if reader.cancelled():
                return
            raise

    def auth_url(self) -> str:
        """
        Build the private socket URL with fresh auth query parameters.

        Raises:
            AuthenticationError: If either credential is absent.
        """
        api_key, secret_key = self._credentials.require(WEBSOCKET_AUTH_ERROR)
        signature = sign("GET", AUTH_PATH, {}, secret_key)
        query = urlencode(
            {
                "x-access-key": api_key,
                "x-access-sign": signature,
                "x-access-timestamp": self._clock(),
            }
        )
        return f"{self.url}{AUTH_PATH}?{query}"

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _check_pair(pair: Any) -> str:
        if not pair:
            raise PayloadValidationError("Validation Error: 'pair' is required.", field="pair")
        if not isinstance(pair, str):
            raise PayloadValidationError(
                f"Validation Error: Expected 'pair' to be a string, "
                f"but received {type(pair).__name__}",
                field="pair",
            )
        return pair

    def _set_state(self, state: ConnectionState) -> None:
        self._state = state
        self._history.append(state)
        logger.debug(
            "websocket_state_changed",
            exchange="lcx",
            state=state.value,
            topic=self._subscription.topic.value if self._subscription else None,
        )

    async def _subscribe(self, subscription: Subscription, on_message: MessageCallback) -> None:
        """Replace the current connection with one scoped to ``subscription``."""
        if subscription.topic.is_private:
            url = self.auth_url()
        else:
            url = f"{self.url}{PUBLIC_PATH}"

        async with self._lock:
            await self._release()

            self._subscription = subscription
            self._set_state(ConnectionState.CONNECTING)

            try:
                ws = await self._connector(
                    url,
                    ping_interval=self._settings.ping_interval_seconds,
                    ping_timeout=self._settings.ping_timeout_seconds,
                    close_timeout=self._settings.close_timeout_seconds,
                    max_size=self._settings.max_message_size,
                )
            except Exception as e:
                self._set_state(ConnectionState.ERRORED)
                logger.error(
                    "websocket_connection_failed",
                    exchange="lcx",
                    url=_redact(url),
                    topic=subscription.topic.value,
                    error=str(e),
                )
                raise ConnectionError(f"Failed to connect to LCX WebSocket: {e}") from e

            self._ws = ws
            self._set_state(ConnectionState.OPEN)
            logger.info(
                "websocket_connected",
                exchange="lcx",
                url=_redact(url),
                topic=subscription.topic.value,
            )

            await self._send_subscription(subscription)
            self._set_state(ConnectionState.SUBSCRIBED)

            self._reader = asyncio.create_task(
                self._read_frames(ws, on_message),
                name=f"lcx-ws-{subscription.topic.value}",
            )

    async def _send_subscription(self, subscription: Subscription) -> None:
        """
        Send the subscribe message on the open socket.

        Raises:
            ConnectionStateError: If the connection is not open. Nothing is
                queued for later.
            ConnectionError: If the transport rejects the send.
        """
        if self._state is not ConnectionState.OPEN or self._ws is None:
            raise ConnectionStateError(
                f"WebSocket is not open. Cannot subscribe to {subscription.topic.value}."
            )

        ws = self._ws
        try:
            await ws.send(subscription.encode())
        except (WebSocketException, OSError) as e:
            self._ws = None
            self._set_state(ConnectionState.ERRORED)
            await self._close_socket(ws)
            logger.error(
                "websocket_subscription_failed",
                exchange="lcx",
                topic=subscription.topic.value,
                error=str(e),
            )
            raise ConnectionError(f"Failed to subscribe: {e}") from e

        logger.info(
            "websocket_subscribed",
            exchange="lcx",
            topic=subscription.topic.value,
            pair=subscription.pair,
        )

    async def _read_frames(self, ws: Any, on_message: MessageCallback) -> None:
        """Deliver frames until the socket ends. Runs as a background task."""
        try:
            async for raw in ws:
                await self._dispatch(on_message, decode_frame(raw))
                if ws is not self._ws:
                    # released by the callback itself
                    return
        except (WebSocketException, OSError) as e:
            if not self._finish(ws, ConnectionState.ERRORED):
                return
            logger.error("websocket_error", exchange="lcx", url=self.url, error=str(e))
            await self._dispatch(
                on_message,
                ErrorMessage(message=f"WebSocket error: {e}", cause=e),
            )
            return

        code = getattr(ws, "close_code", None)
        reason = getattr(ws, "close_reason", None) or ""
        if not self._finish(ws, ConnectionState.CLOSED):
            return
        logger.warning(
            "websocket_connection_closed",
            exchange="lcx",
            url=self.url,
            code=code,
            reason=reason,
        )
        await self._dispatch(on_message, ClosedMessage(code=code, reason=reason))

    def _finish(self, ws: Any, state: ConnectionState) -> bool:
        """Record the end of ``ws``; False when it was already released locally."""
        if ws is not self._ws:
            return False
        self._ws = None
        self._set_state(state)
        return True

    async def _dispatch(self, on_message: MessageCallback, message: InboundMessage) -> None:
        try:
            result = on_message(message)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.error(
                "websocket_callback_failed",
                exchange="lcx",
                message_type=message.type,
                error=str(e),
                error_type=type(e).__name__,
            )

    async def _release(self) -> None:
        """Drop the current connection without notifying its callback."""
        reader, ws = self._reader, self._ws
        self._reader = None
        self._ws = None

        # a callback may close or resubscribe from inside the reader task
        if reader is not None and not reader.done() and reader is not asyncio.current_task():
            reader.cancel()
            try:
                await reader
            except asyncio.CancelledError:
                pass

        if ws is not None:
            await self._close_socket(ws)
            logger.info("websocket_disconnected", exchange="lcx", url=self.url)

        if self._state.is_live:
            self._set_state(ConnectionState.CLOSED)

    async def _close_socket(self, ws: Any) -> None:
        try:
            await ws.close()
        except (WebSocketException, OSError) as e:
            logger.warning("websocket_close_error", exchange="lcx", url=self.url, error=str(e))

    def __repr__(self) -> str:
        """Return string representation."""
        topic = self._subscription.topic.value if self._subscription else None
        return f"LcxWebSocketClient(url={self.url}, state={self._state.value}, topic={topic})"
