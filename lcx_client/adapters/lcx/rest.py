"""
LCX REST API client.

Thin catalogue over the signing core: every method validates its payload,
builds the request and returns the decoded JSON body unmodified, or the raw
text when the body is not JSON. Responses are not wrapped in models; the
exchange's field names come back as sent.

Endpoints:
    Exchange base URL: https://exchange-api.lcx.com
    Candle base URL: https://api-kline-staging.lcx.com

    Market (public):
        Order Book: GET /api/book?pair={pair}
        Candles: POST /v2/market/kline (on the candle base URL)
        Trades: GET /api/trades?pair={pair}&offset={offset}
        Pairs: GET /api/pairs, GET /api/pair?pair={pair}
        Tickers: GET /api/tickers, GET /api/ticker?pair={pair}

    Trading (private):
        Create: POST /api/create
        Modify: PUT /api/modify
        Cancel: DELETE /api/cancel?orderId={id}
        Cancel All: DELETE /order/cancel-all?orderIds={id}&orderIds={id}
        Open Orders: GET /api/open
        Order: GET /api/order?OrderId={id}
        Order History: GET /api/orderHistory
        Trade History: GET /api/uHistory

    Account (private):
        Balances: GET /api/balances
        Balance: GET /api/balance?coin={coin}

Authentication:
    Private requests carry ``x-access-key``, ``x-access-sign`` and
    ``x-access-timestamp`` headers. POST/PUT sign their PascalCase JSON body;
    GET/DELETE sign ``{}`` and put their parameters in the query string.
    The credential check always runs before payload validation.

Errors:
    Non-2xx responses raise ``aiohttp.ClientResponseError``; transport
    failures raise ``aiohttp.ClientError`` or ``asyncio.TimeoutError``. All
    are logged and re-raised unchanged. There are no retries and no rate
    limiting.
"""

import asyncio
import json
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import aiohttp
import structlog

from lcx_client.auth.builder import (
    JSON_HEADERS,
    Clock,
    build_signed_request,
    to_api_format,
)
from lcx_client.auth.credentials import REST_AUTH_ERROR, Credentials
from lcx_client.auth.signer import canonical_serialization
from lcx_client.config.models import EndpointConfig
from lcx_client.models.payloads import (
    CoinBalanceDetailsPayload,
    MarketKlinePayload,
    MarketPairPayload,
    MarketTickerPayload,
    OpenOrdersPayload,
    OrderBookPayload,
    OrderCancelAllPayload,
    OrderCancelPayload,
    OrderCreatePayload,
    OrderDetailsPayload,
    OrderHistoryPayload,
    OrderModifyPayload,
    TradeHistoryPayload,
    TradesPayload,
    validate_payload,
)

logger = structlog.get_logger(__name__)

QueryParams = Union[Dict[str, Any], Sequence[Tuple[str, Any]]]


class LcxRestClient:
    """
    Async REST API client for LCX.

    Attributes:
        endpoints: Base URLs for exchange and candle traffic.
        timeout_seconds: Total request timeout; aiohttp default when None.

    Example:
        >>> client = LcxRestClient(credentials=Credentials(api_key="k", secret_key="s"))
        >>> book = await client.get_order_book("LCX/USDC")
        >>> order = await client.create_order("LCX/USDC", 100, "LIMIT", "BUY", price=0.05)
        >>> await client.close()
    """

    def __init__(
        self,
        endpoints: Optional[EndpointConfig] = None,
        credentials: Optional[Credentials] = None,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        timeout_seconds: Optional[float] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize REST client.

        Args:
            endpoints: Base URLs; production defaults when omitted.
            credentials: API key pair; only private methods need it.
            session: Shared aiohttp session. Not closed by ``close()``.
            timeout_seconds: Total request timeout for a self-created session.
            clock: Millisecond clock for auth timestamps.
        """
        self.endpoints = endpoints or EndpointConfig()
        self.timeout_seconds = timeout_seconds

        self._credentials = credentials or Credentials()
        self._clock = clock
        self._session = session
        self._owns_session = session is None

        logger.info(
            "rest_client_initialized",
            exchange="lcx",
            base_url=self.endpoints.exchange_url,
            authenticated=self._credentials.is_complete,
        )

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure aiohttp session is created."""
        if self._session is None or self._session.closed:
            kwargs: Dict[str, Any] = {"headers": {"User-Agent": "lcx-exchange-client/0.1"}}
            if self.timeout_seconds is not None:
                kwargs["timeout"] = aiohttp.ClientTimeout(total=self.timeout_seconds)
            self._session = aiohttp.ClientSession(**kwargs)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
            logger.debug("rest_client_session_closed", exchange="lcx")

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[QueryParams] = None,
        data: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        Make HTTP request and decode the JSON response.

        Args:
            method: HTTP method.
            url: Absolute URL.
            params: Query parameters.
            data: Raw body bytes, sent exactly as given.
            headers: Request headers.

        Returns:
            Any: Decoded JSON body, or the raw text when the body is not JSON.

        Raises:
            aiohttp.ClientResponseError: If the status is 400 or above.
            aiohttp.ClientError: If the request fails.
            asyncio.TimeoutError: If the configured timeout elapses.
        """
        session = await self._ensure_session()

        try:
            async with session.request(
                method, url, params=params, data=data, headers=headers
            ) as response:
                if response.status >= 400:
                    error_text = await response.text()
                    logger.error(
                        "rest_request_failed",
                        exchange="lcx",
                        method=method,
                        url=url,
                        status=response.status,
                        error=error_text,
                    )
                    response.raise_for_status()

                text = await response.text()
                try:
                    result = json.loads(text)
                except json.JSONDecodeError:
                    # non-JSON bodies go back to the caller as text
                    logger.warning(
                        "rest_response_not_json",
                        exchange="lcx",
                        method=method,
                        url=url,
                        status=response.status,
                        body=text[:100],
                    )
                    result = text
                logger.debug(
                    "rest_response_received",
                    exchange="lcx",
                    method=method,
                    url=url,
                    status=response.status,
                )
                return result

        except aiohttp.ClientResponseError:
            raise
        except aiohttp.ClientError as e:
            logger.error("rest_client_error", exchange="lcx", method=method, url=url, error=str(e))
            raise
        except asyncio.TimeoutError:
            logger.error(
                "rest_timeout",
                exchange="lcx",
                method=method,
                url=url,
                timeout=self.timeout_seconds,
            )
            raise

    async def _public(
        self,
        method: str,
        path: str,
        *,
        params: Optional[QueryParams] = None,
        body: Optional[Dict[str, Any]] = None,
        base_url: Optional[str] = None,
    ) -> Any:
        url = f"{base_url or self.endpoints.exchange_url}{path}"
        data = None
        headers = None
        if body is not None:
            data = canonical_serialization(body).encode("utf-8")
            headers = dict(JSON_HEADERS)
        return await self._request(method, url, params=params, data=data, headers=headers)

    async def _signed(
        self,
        method: str,
        path: str,
        *,
        body: Optional[Dict[str, Any]] = None,
        params: Optional[QueryParams] = None,
    ) -> Any:
        """Sign and send a private request; the sent body is the signed text."""
        request = build_signed_request(method, path, body, self._credentials, clock=self._clock)
        data = request.serialized_body.encode("utf-8") if request.has_body else None
        return await self._request(
            request.method,
            f"{self.endpoints.exchange_url}{path}",
            params=params,
            data=data,
            headers=request.headers(),
        )

    def _require_credentials(self) -> None:
        self._credentials.require(REST_AUTH_ERROR)

    # ------------------------------------------------------------------
    # Market
    # ------------------------------------------------------------------

    async def get_order_book(self, pair: str) -> Any:
        """
        Fetch the order book of a pair.

        Args:
            pair: Trading pair, e.g. "LCX/USDC".

        Returns:
            Any: Decoded response body.

        Example:
            >>> book = await client.get_order_book("LCX/USDC")
        """
        payload = validate_payload(OrderBookPayload, pair=pair)
        return await self._public("GET", "/api/book", params=payload.to_params())

    async def get_klines(self, pair: str, resolution: str, from_: int, to: int) -> Any:
        """
        Fetch candles from the candle service.

        Args:
            pair: Trading pair.
            resolution: Candle size, e.g. "1D" or "60".
            from_: Range start, seconds since the epoch.
            to: Range end, seconds since the epoch.
        """
        payload = validate_payload(
            MarketKlinePayload, pair=pair, resolution=resolution, from_=from_, to=to
        )
        return await self._public(
            "POST",
            "/v2/market/kline",
            body=payload.to_params(),
            base_url=self.endpoints.kline_url,
        )

    async def get_trades(self, pair: str, offset: int = 1) -> Any:
        """Fetch one page of recent public trades."""
        payload = validate_payload(TradesPayload, pair=pair, offset=offset)
        return await self._public("GET", "/api/trades", params=payload.to_params())

    async def get_pairs(self) -> Any:
        return await self._public("GET", "/api/pairs")

    async def get_pair(self, pair: str) -> Any:
        payload = validate_payload(MarketPairPayload, pair=pair)
        return await self._public("GET", "/api/pair", params=payload.to_params())

    async def get_tickers(self) -> Any:
        return await self._public("GET", "/api/tickers")

    async def get_ticker(self, pair: str) -> Any:
        payload = validate_payload(MarketTickerPayload, pair=pair)
        return await self._public("GET", "/api/ticker", params=payload.to_params())

    # ------------------------------------------------------------------
    # Trading
    # ------------------------------------------------------------------

    async def create_order(
        self,
        pair: str,
        amount: Union[int, float],
        order_type: str,
        side: str,
        price: Optional[Union[int, float]] = None,
        client_order_id: Optional[str] = None,
    ) -> Any:
        """
        Place a new order.

        Args:
            pair: Trading pair.
            amount: Order size in base currency.
            order_type: "LIMIT" or "MARKET".
            side: "BUY" or "SELL".
            price: Limit price; required for LIMIT orders.
            client_order_id: Caller reference echoed back by the exchange.

        Returns:
            Any: Decoded response body.

        Raises:
            AuthenticationError: If credentials are missing.
            PayloadValidationError: If a field breaks its rule.

        Example:
            >>> await client.create_order("LCX/USDC", 100, "LIMIT", "BUY", price=0.05)
        """
        self._require_credentials()
        payload = validate_payload(
            OrderCreatePayload,
            pair=pair,
            amount=amount,
            price=price,
            order_type=order_type,
            side=side,
            client_order_id=client_order_id,
        )
        body = to_api_format(payload.to_params())
        return await self._signed("POST", "/api/create", body=body)

    async def modify_order(
        self,
        order_id: str,
        amount: Union[int, float],
        price: Union[int, float],
    ) -> Any:
        """Change the amount and price of an open order."""
        self._require_credentials()
        payload = validate_payload(OrderModifyPayload, order_id=order_id, amount=amount, price=price)
        body = to_api_format(payload.to_params())
        return await self._signed("PUT", "/api/modify", body=body)

    async def cancel_order(self, order_id: str) -> Any:
        """Cancel one order."""
        self._require_credentials()
        payload = validate_payload(OrderCancelPayload, order_id=order_id)
        return await self._signed("DELETE", "/api/cancel", params=payload.to_params())

    async def cancel_all_orders(self, order_ids: List[str]) -> Any:
        """
        Cancel up to 25 orders in one request.

        Raises:
            AuthenticationError: If credentials are missing.
            PayloadValidationError: If ``order_ids`` is empty or longer than 25.
        """
        self._require_credentials()
        payload = validate_payload(OrderCancelAllPayload, order_ids=order_ids)
        return await self._signed("DELETE", "/order/cancel-all", params=payload.to_query())

    async def get_open_orders(
        self,
        offset: int = 1,
        pair: Optional[str] = None,
        from_date: Optional[int] = None,
        to_date: Optional[int] = None,
    ) -> Any:
        self._require_credentials()
        payload = validate_payload(
            OpenOrdersPayload, offset=offset, pair=pair, from_date=from_date, to_date=to_date
        )
        return await self._signed("GET", "/api/open", params=payload.to_params())

    async def get_order(self, order_id: str) -> Any:
        self._require_credentials()
        payload = validate_payload(OrderDetailsPayload, order_id=order_id)
        return await self._signed("GET", "/api/order", params=payload.to_params())

    async def get_order_history(
        self,
        offset: int = 1,
        pair: Optional[str] = None,
        from_date: Optional[int] = None,
        to_date: Optional[int] = None,
        side: Optional[str] = None,
        order_status: Optional[str] = None,
        order_type: Optional[str] = None,
    ) -> Any:
        """
        Fetch closed and cancelled orders.

        Args:
            offset: Page number, starting at 1.
            pair: Restrict to one trading pair.
            from_date: Range start, milliseconds since the epoch.
            to_date: Range end, milliseconds since the epoch.
            side: "BUY" or "SELL".
            order_status: "CANCEL" or "CLOSED".
            order_type: "LIMIT" or "MARKET".
        """
        self._require_credentials()
        payload = validate_payload(
            OrderHistoryPayload,
            offset=offset,
            pair=pair,
            from_date=from_date,
            to_date=to_date,
            side=side,
            order_status=order_status,
            order_type=order_type,
        )
        return await self._signed("GET", "/api/orderHistory", params=payload.to_params())

    async def get_trade_history(
        self,
        offset: int = 1,
        pair: Optional[str] = None,
        from_date: Optional[int] = None,
        to_date: Optional[int] = None,
    ) -> Any:
        """Fetch the account's own executed trades."""
        self._require_credentials()
        payload = validate_payload(
            TradeHistoryPayload, offset=offset, pair=pair, from_date=from_date, to_date=to_date
        )
        return await self._signed("GET", "/api/uHistory", params=payload.to_params())

    # ------------------------------------------------------------------
    # Account
    # ------------------------------------------------------------------

    async def get_balances(self) -> Any:
        """Fetch balances of every coin."""
        return await self._signed("GET", "/api/balances")

    async def get_balance(self, coin: str) -> Any:
        """Fetch the balance of one coin, e.g. "LCX"."""
        self._require_credentials()
        payload = validate_payload(CoinBalanceDetailsPayload, coin=coin)
        return await self._signed("GET", "/api/balance", params=payload.to_params())

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"LcxRestClient(base_url={self.endpoints.exchange_url}, "
            f"authenticated={self._credentials.is_complete})"
        )
