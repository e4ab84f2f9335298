"""
Tests for RequestsTransport using the responses library.
"""

import asyncio
import json
import time

import pytest

requests = pytest.importorskip("requests")
responses = pytest.importorskip("responses")

from endpoint_client import (
    AbortController,
    CanceledError,
    ConnectionError,
    HttpContentType,
    HTTPError,
    NormalizedRequest,
    RequestsTransport,
    TimeoutError,
    Transport,
)

from fakes import API_ADDRESS, MOCKED_RETURN_MANY

OBJECTS_URL = f"{API_ADDRESS}/objects"


@pytest.fixture
def transport():
    return RequestsTransport(API_ADDRESS, 2000)


def test_satisfies_transport_protocol(transport):
    assert isinstance(transport, Transport)


@pytest.mark.parametrize("base_url,url,expected", [
    (API_ADDRESS, "objects", OBJECTS_URL),
    (API_ADDRESS + "/", "/objects", OBJECTS_URL),
    (API_ADDRESS, "https://other.example.com/x", "https://other.example.com/x"),
    ("", "objects", "objects"),
])
def test_full_url(base_url, url, expected):
    assert RequestsTransport(base_url).full_url(url) == expected


class TestPrepare:
    """Request preparation without network."""

    def test_json_body(self, transport):
        prepared = transport.prepare(NormalizedRequest(
            "POST", "objects",
            headers={"Content-Type": HttpContentType.JSON.value},
            data={"id": 1},
        ))

        assert prepared.url == OBJECTS_URL
        assert json.loads(prepared.body) == {"id": 1}

    def test_form_body(self, transport):
        prepared = transport.prepare(NormalizedRequest(
            "POST", "objects",
            headers={"Content-Type": HttpContentType.FORM.value},
            data={"a": "1", "b": "2"},
        ))

        assert prepared.body == "a=1&b=2"
        assert prepared.headers["Content-Type"] == HttpContentType.FORM.value

    def test_multipart_gets_boundary(self, transport):
        prepared = transport.prepare(NormalizedRequest(
            "POST", "objects",
            headers={"Content-Type": HttpContentType.MULTIPART.value},
            data={"title": "report", "file": ("report.txt", b"content")},
        ))

        assert prepared.headers["Content-Type"].startswith("multipart/form-data; boundary=")
        assert b'name="title"' in prepared.body
        assert b'filename="report.txt"' in prepared.body

    def test_query_string(self, transport):
        prepared = transport.prepare(NormalizedRequest(
            "GET", "objects", params={"filter": {"name": "x"}, "page": 2}
        ))

        assert prepared.url == f"{OBJECTS_URL}?filter%5Bname%5D=x&page=2"

    def test_get_does_not_send_body(self, transport):
        prepared = transport.prepare(NormalizedRequest("GET", "objects", data={"ignored": True}))
        assert prepared.body is None

    def test_upload_progress_wraps_body(self, transport):
        transport = RequestsTransport(API_ADDRESS, chunk_size=4)
        events = []
        prepared = transport.prepare(NormalizedRequest(
            "PUT", "objects",
            headers={"Content-Type": HttpContentType.TEXT.value},
            data="0123456789",
            on_upload_progress=events.append,
        ))

        assert prepared.headers["Content-Length"] == "10"
        assert b"".join(prepared.body) == b"0123456789"
        assert [event.loaded for event in events] == [4, 8, 10]


class TestRequests:
    """Requests against mocked responses."""

    @pytest.mark.asyncio
    async def test_get_json(self, transport):
        with responses.RequestsMock() as rsps:
            rsps.add(responses.GET, OBJECTS_URL, json=MOCKED_RETURN_MANY, status=200)

            request = NormalizedRequest("GET", "objects", headers={"x-http-token": "t"})
            response = await transport.request(request)

            assert rsps.calls[0].request.headers["x-http-token"] == "t"

        assert response.status_code == 200
        assert response.data == MOCKED_RETURN_MANY
        assert response.request is request
        assert isinstance(response.raw, requests.Response)

    @pytest.mark.asyncio
    async def test_post_echo(self, transport):
        def echo(request):
            return 201, {"Content-Type": "application/json"}, request.body

        with responses.RequestsMock() as rsps:
            rsps.add_callback(responses.POST, OBJECTS_URL, callback=echo)

            response = await transport.request(NormalizedRequest(
                "POST", "objects",
                headers={"Content-Type": HttpContentType.JSON.value},
                data={"id": 99},
            ))

        assert response.status_code == 201
        assert response.data == {"id": 99}

    @pytest.mark.asyncio
    async def test_404_raises_http_error(self, transport):
        with responses.RequestsMock() as rsps:
            rsps.add(
                responses.GET,
                f"{API_ADDRESS}/non_existing",
                json={"message": "Cannot get /non_existing"},
                status=404,
            )

            with pytest.raises(HTTPError) as exc_info:
                await transport.request(NormalizedRequest("GET", "non_existing"))

        assert exc_info.value.status_code == 404
        assert exc_info.value.response.data == {"message": "Cannot get /non_existing"}

    @pytest.mark.asyncio
    async def test_timeout(self, transport):
        with responses.RequestsMock() as rsps:
            rsps.add(responses.GET, OBJECTS_URL, body=requests.exceptions.ReadTimeout())

            with pytest.raises(TimeoutError):
                await transport.request(NormalizedRequest("GET", "objects"))

    @pytest.mark.asyncio
    async def test_connection_error(self, transport):
        with responses.RequestsMock() as rsps:
            rsps.add(responses.GET, OBJECTS_URL, body=requests.exceptions.ConnectionError("refused"))

            with pytest.raises(ConnectionError) as exc_info:
                await transport.request(NormalizedRequest("GET", "objects"))

        assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectionError)

    @pytest.mark.asyncio
    async def test_abort_returns_control(self, transport):
        def slow(request):
            time.sleep(0.2)
            return 200, {}, "late"

        controller = AbortController()

        with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
            rsps.add_callback(responses.GET, OBJECTS_URL, callback=slow)

            task = asyncio.ensure_future(
                transport.request(NormalizedRequest("GET", "objects", signal=controller.signal))
            )
            await asyncio.sleep(0.05)
            controller.abort()

            with pytest.raises(CanceledError):
                await task

            # Let the worker thread finish while the mock is still active
            await asyncio.sleep(0.3)

    @pytest.mark.asyncio
    async def test_aclose_releases_session(self, transport):
        transport._get_session()
        await transport.aclose()
        assert transport._session is None
