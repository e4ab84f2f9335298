"""
Tests for custom exceptions.
"""

import httpx
import pytest
import requests

from endpoint_client import (
    AlreadyConfiguredError,
    CanceledError,
    ConfigurationError,
    ConnectionError,
    EndpointClientError,
    HTTPError,
    NormalizedRequest,
    NotConfiguredError,
    Response,
    TimeoutError,
    TransportError,
    UnresolvedPathParameterError,
)
from endpoint_client.core.exceptions import (
    classify_httpx_exception,
    classify_requests_exception,
)


@pytest.fixture
def request_obj():
    return NormalizedRequest("GET", "objects", timeout=2000)


class TestConfigurationErrors:
    """Configuration lifecycle errors."""

    def test_not_configured_message(self):
        exc = NotConfiguredError()
        assert str(exc) == "HTTPClient was not configured. Use HTTPClientConfig.configure()."

    def test_already_configured_message(self):
        exc = AlreadyConfiguredError()
        assert str(exc) == "HTTPClient has been already configured."

    def test_configuration_errors_are_fatal(self):
        assert NotConfiguredError().fatal is True
        assert isinstance(AlreadyConfiguredError(), ConfigurationError)
        assert isinstance(NotConfiguredError(), EndpointClientError)


class TestUnresolvedPathParameterError:
    """Unresolved placeholders."""

    def test_attributes(self):
        exc = UnresolvedPathParameterError("objects/{0}/action/{1}", 1)
        assert exc.endpoint == "objects/{0}/action/{1}"
        assert exc.index == 1

    def test_message_names_template_and_index(self):
        exc = UnresolvedPathParameterError("objects/{0}", 0)
        assert str(exc) == (
            "Endpoint objects/{0} path parameters not resolved. "
            "Set value for {0} with HTTPClient.parameters() method."
        )


class TestTransportErrors:
    """Transport error tree."""

    def test_canceled_error(self, request_obj):
        exc = CanceledError(url="objects", request=request_obj, reason="user")
        assert str(exc) == "canceled"
        assert exc.reason == "user"
        assert isinstance(exc, TransportError)
        assert exc.response is None

    def test_timeout_error_message(self):
        exc = TimeoutError("Request timeout", "objects", 2000)
        assert "timeout: 2000ms" in str(exc)
        assert exc.retryable is True

    def test_http_error_carries_response(self, request_obj):
        response = Response(404, data={"message": "missing"}, request=request_obj)
        exc = HTTPError(response)

        assert exc.status_code == 404
        assert exc.response is response
        assert exc.request is request_obj
        assert str(exc) == "HTTP 404 error for objects"

    def test_http_error_without_request(self):
        exc = HTTPError(Response(500), "upstream down")
        assert exc.url is None
        assert "upstream down" in str(exc)


class TestClassifyHttpx:
    """httpx exceptions mapping."""

    def test_timeout(self, request_obj):
        exc = classify_httpx_exception(httpx.ReadTimeout("timed out"), request_obj)
        assert isinstance(exc, TimeoutError)
        assert exc.timeout == 2000

    def test_connect_error(self, request_obj):
        exc = classify_httpx_exception(httpx.ConnectError("refused"), request_obj)
        assert isinstance(exc, ConnectionError)
        assert exc.url == "objects"

    def test_other_error(self, request_obj):
        exc = classify_httpx_exception(httpx.DecodingError("bad gzip"), request_obj)
        assert type(exc) is TransportError
        assert exc.request is request_obj


class TestClassifyRequests:
    """requests exceptions mapping."""

    def test_timeout(self, request_obj):
        exc = classify_requests_exception(requests.exceptions.ReadTimeout(), request_obj)
        assert isinstance(exc, TimeoutError)

    def test_connection_error(self, request_obj):
        exc = classify_requests_exception(requests.exceptions.ConnectionError("refused"), request_obj)
        assert isinstance(exc, ConnectionError)

    def test_other_error(self, request_obj):
        exc = classify_requests_exception(requests.exceptions.TooManyRedirects("loop"), request_obj)
        assert type(exc) is TransportError
