from pathlib import Path

import pytest

from lcx_client.config import ConfigLoader, ConfigLoadError, load_config
from lcx_client.config.models import ClientConfig, EndpointConfig, LogFormat, LogLevel

EXAMPLE = Path(__file__).resolve().parent.parent / "config" / "lcx.example.yaml"


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "lcx.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_are_public_only():
    config = ConfigLoader(environ={}).load()

    assert not config.is_authenticated
    assert config.endpoints == EndpointConfig()
    assert config.endpoints.kline_url == "https://api-kline-staging.lcx.com"
    assert config.connection.timeout_seconds is None


def test_example_file_loads():
    config = ConfigLoader(EXAMPLE, environ={}).load()

    assert not config.is_authenticated
    assert config.endpoints.ws_url == "wss://exchange-api.lcx.com"
    assert config.logging.format is LogFormat.TEXT


def test_file_values_are_applied(tmp_path):
    path = _write(
        tmp_path,
        """
credentials:
  api_key: file-key
  secret_key: file-secret
endpoints:
  exchange_url: https://example.test/
  ws_url: wss://example.test
connection:
  timeout_seconds: 15
""",
    )
    config = ConfigLoader(path, environ={}).load()

    assert config.is_authenticated
    assert config.endpoints.exchange_url == "https://example.test"
    assert config.connection.timeout_seconds == 15


def test_environment_overrides_file(tmp_path, monkeypatch):
    path = _write(tmp_path, "credentials:\n  api_key: file-key\n  secret_key: file-secret\n")
    monkeypatch.setenv("LCX_API_KEY", "env-key")
    monkeypatch.setenv("LCX_SECRET_KEY", "env-secret")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = load_config(path)

    assert config.credentials.api_key == "env-key"
    assert config.credentials.secret_key == "env-secret"
    assert config.logging.level is LogLevel.DEBUG


def test_invalid_log_level_is_ignored():
    config = ConfigLoader(environ={"LOG_LEVEL": "LOUD"}).load()
    assert config.logging.level is LogLevel.INFO


def test_missing_file_raises(tmp_path):
    with pytest.raises(ConfigLoadError) as exc_info:
        ConfigLoader(tmp_path / "absent.yaml")
    assert exc_info.value.file_path == tmp_path / "absent.yaml"


@pytest.mark.parametrize(
    "text, fragment",
    [
        ("", "empty"),
        ("- a\n- b\n", "mapping"),
        ("exchanges: {}\n", "Unknown configuration sections"),
        ("credentials: [unclosed\n", "Invalid YAML"),
        ("endpoints:\n  ws_url: https://wrong.test\n", "validation failed"),
        ("environment: staging\n", "validation failed"),
    ],
)
def test_bad_files_raise_config_error(tmp_path, text, fragment):
    path = _write(tmp_path, text)
    with pytest.raises(ConfigLoadError, match=fragment):
        ConfigLoader(path, environ={}).load()


def test_config_is_immutable():
    config = ClientConfig()
    with pytest.raises(Exception):
        config.environment = "other"
