"""
Pytest configuration and fixtures for endpoint-client tests.
"""

import pytest

from endpoint_client import HTTPClientConfig, LoggingConfig

from fakes import (
    API_ADDRESS,
    HTTP_REQUEST_TIMEOUT,
    FakeTransport,
    add_auth_header,
    recover_http_errors,
)


@pytest.fixture(autouse=True)
def reset_client_config():
    """Every test starts with an unconfigured client."""
    HTTPClientConfig._reset()
    yield
    HTTPClientConfig._reset()


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def configure_client(fake_transport):
    """
    Factory configuring HTTPClientConfig against the fake transport.

    Example:
        def test_something(configure_client):
            configure_client(error_handler=None)
    """
    def _configure(**overrides):
        options = {
            "transport": fake_transport,
            "api_address": API_ADDRESS,
            "auth_handler": add_auth_header,
            "default_timeout": HTTP_REQUEST_TIMEOUT,
            "error_handler": recover_http_errors,
        }
        options.update(overrides)
        return HTTPClientConfig.configure(**options)

    return _configure


@pytest.fixture
def configured_client(configure_client):
    return configure_client()


@pytest.fixture
def logging_config_with_file(tmp_path):
    """LoggingConfig writing JSON records to a temporary file."""
    return LoggingConfig.create(
        level="DEBUG",
        format="json",
        enable_console=False,
        enable_file=True,
        file_path=str(tmp_path / "client.log"),
    )
