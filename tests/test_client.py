import pytest

from lcx_client import LcxClient
from lcx_client.auth.credentials import Credentials
from lcx_client.config.models import ClientConfig, EndpointConfig
from lcx_client.models.connection import ConnectionState

from .conftest import API_KEY, SECRET_KEY, _FakeConnector, _FakeSession


def _config() -> ClientConfig:
    return ClientConfig(
        credentials=Credentials(api_key=API_KEY, secret_key=SECRET_KEY),
        endpoints=EndpointConfig(
            exchange_url="https://rest.example.test",
            kline_url="https://kline.example.test",
            ws_url="wss://ws.example.test",
        ),
    )


def test_default_client_is_public_only():
    client = LcxClient()
    assert not client.config.is_authenticated
    assert client.rest.endpoints.exchange_url == "https://exchange-api.lcx.com"
    assert client.ws.url == "wss://exchange-api.lcx.com"
    assert client.connection_state is ConnectionState.IDLE


@pytest.mark.asyncio
async def test_rest_and_ws_share_config():
    session = _FakeSession()
    connector = _FakeConnector()
    client = LcxClient(_config(), session=session, connector=connector)

    await client.rest.get_balances()
    await client.ws.subscribe_orders(lambda message: None)

    assert session.calls[0].url == "https://rest.example.test/api/balances"
    assert connector.urls[0].startswith("wss://ws.example.test/api/auth/ws?x-access-key=")
    assert client.connection_state is ConnectionState.SUBSCRIBED
    await client.close()


@pytest.mark.asyncio
async def test_context_manager_closes_socket():
    connector = _FakeConnector()
    session = _FakeSession()

    async with LcxClient(_config(), session=session, connector=connector) as client:
        await client.ws.subscribe_ticker(lambda message: None)

    assert connector.last.closed
    assert client.connection_state is ConnectionState.CLOSED
    assert not session.closed


def test_from_config_file(tmp_path, monkeypatch):
    monkeypatch.delenv("LCX_API_KEY", raising=False)
    monkeypatch.delenv("LCX_SECRET_KEY", raising=False)
    path = tmp_path / "lcx.yaml"
    path.write_text("credentials:\n  api_key: k\n  secret_key: s\n", encoding="utf-8")

    client = LcxClient.from_config_file(path)

    assert client.config.is_authenticated
