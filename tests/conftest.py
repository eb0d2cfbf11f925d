"""Shared fixtures and fakes for the LCX client tests.

Provides an in-memory WebSocket connector and an aiohttp-shaped session so
no test touches the network.
"""

from __future__ import annotations

import asyncio
import json
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import aiohttp
import pytest

from lcx_client.auth.credentials import Credentials
from lcx_client.config.models import EndpointConfig

API_KEY = "test-api-key"
SECRET_KEY = "test-secret-key"
FIXED_MILLIS = 1700000000000

_END = object()


# ---------------------------------------------------------------------------
# WebSocket fakes
# ---------------------------------------------------------------------------


class _FakeWebSocket:
    """Async-iterable socket fed from the test.

    Tracking attributes:
        sent: messages passed to send()
        closed: True once close() was called locally
    """

    def __init__(self) -> None:
        self.sent: List[str] = []
        self.closed = False
        self.close_code: Optional[int] = None
        self.close_reason: Optional[str] = None
        self._frames: asyncio.Queue = asyncio.Queue()

    async def send(self, message: str) -> None:
        self.sent.append(message)

    async def close(self) -> None:
        self.closed = True
        self._frames.put_nowait(_END)

    def feed(self, frame: Any) -> None:
        self._frames.put_nowait(frame)

    def remote_close(self, code: int = 1000, reason: str = "") -> None:
        self.close_code = code
        self.close_reason = reason
        self._frames.put_nowait(_END)

    def fail(self, error: BaseException) -> None:
        self._frames.put_nowait(error)

    def __aiter__(self) -> "_FakeWebSocket":
        return self

    async def __anext__(self) -> Any:
        item = await self._frames.get()
        if item is _END:
            raise StopAsyncIteration
        if isinstance(item, BaseException):
            raise item
        return item


class _FakeConnector:
    """Stands in for ``websockets.connect``; records every URL it opens."""

    def __init__(self, error: Optional[BaseException] = None) -> None:
        self.error = error
        self.urls: List[str] = []
        self.kwargs: List[Dict[str, Any]] = []
        self.sockets: List[_FakeWebSocket] = []

    async def __call__(self, url: str, **kwargs: Any) -> _FakeWebSocket:
        self.urls.append(url)
        self.kwargs.append(kwargs)
        if self.error is not None:
            raise self.error
        ws = _FakeWebSocket()
        self.sockets.append(ws)
        return ws

    @property
    def last(self) -> _FakeWebSocket:
        return self.sockets[-1]


# ---------------------------------------------------------------------------
# HTTP fakes
# ---------------------------------------------------------------------------


class _FakeResponse:
    def __init__(self, status: int = 200, payload: Any = None, text: Optional[str] = None) -> None:
        self.status = status
        self._payload = {"status": "success"} if payload is None else payload
        self._text = text

    async def text(self) -> str:
        return self._text if self._text is not None else json.dumps(self._payload)

    def raise_for_status(self) -> None:
        if self.status >= 400:
            raise aiohttp.ClientResponseError(
                request_info=SimpleNamespace(real_url="https://exchange-api.lcx.com"),
                history=(),
                status=self.status,
                message="error",
            )

    async def __aenter__(self) -> "_FakeResponse":
        return self

    async def __aexit__(self, *exc: Any) -> bool:
        return False


class _FakeSession:
    """aiohttp.ClientSession stand-in.

    Tracking attributes:
        calls: one namespace per request with method, url, params, data, headers
    """

    def __init__(self, responses: Optional[List[Any]] = None) -> None:
        self.calls: List[SimpleNamespace] = []
        self.closed = False
        self._responses = list(responses or [])

    def request(self, method: str, url: str, **kwargs: Any) -> Any:
        self.calls.append(SimpleNamespace(method=method, url=url, **kwargs))
        if self._responses:
            response = self._responses.pop(0)
            if isinstance(response, BaseException):
                raise response
            return response
        return _FakeResponse()

    async def close(self) -> None:
        self.closed = True


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(api_key=API_KEY, secret_key=SECRET_KEY)


@pytest.fixture
def endpoints() -> EndpointConfig:
    return EndpointConfig()


@pytest.fixture
def connector() -> _FakeConnector:
    return _FakeConnector()


@pytest.fixture
def session() -> _FakeSession:
    return _FakeSession()


@pytest.fixture
def clock():
    return lambda: FIXED_MILLIS
