"""Unit tests for the HTTP transport."""

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio
import respx

from ytcaptions.exceptions import RequestFailedError
from ytcaptions.session_cookie import SessionCookie
from ytcaptions.transport import CaptionsHttpClient

URL = "https://youtube.com/watch?hl=en&persist_hl=1&v=abc123"

# --- Fixtures ---


@pytest_asyncio.fixture
async def http() -> AsyncIterator[httpx.AsyncClient]:
    """Provide an httpx client closed after the test."""
    async with httpx.AsyncClient() as client:
        yield client


# --- Tests: CaptionsHttpClient.get ---


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_returns_body_and_sends_headers(
    respx_mock: respx.Router, http: httpx.AsyncClient
) -> None:
    """The body is returned; cookie and user agent headers are sent."""
    route = respx_mock.get(URL).mock(return_value=httpx.Response(200, text="page"))
    client = CaptionsHttpClient(http, SessionCookie("SID=abc"), user_agent="test-ua")

    assert await client.get(URL) == "page"
    request = route.calls.last.request
    assert request.headers["Cookie"] == "SID=abc"
    assert request.headers["User-Agent"] == "test-ua"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_sends_empty_cookie_when_unset(
    respx_mock: respx.Router, http: httpx.AsyncClient
) -> None:
    """The Cookie header is always sent, empty when no cookie is set."""
    route = respx_mock.get(URL).mock(return_value=httpx.Response(200, text="page"))
    client = CaptionsHttpClient(http, SessionCookie())

    await client.get(URL)
    assert route.calls.last.request.headers["Cookie"] == ""


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_follows_cookie_updates(
    respx_mock: respx.Router, http: httpx.AsyncClient
) -> None:
    """Requests read the cookie value current at send time."""
    route = respx_mock.get(URL).mock(return_value=httpx.Response(200, text="page"))
    cookie = SessionCookie()
    client = CaptionsHttpClient(http, cookie)

    await cookie.set("CONSENT=YES+x")
    await client.get(URL)
    assert route.calls.last.request.headers["Cookie"] == "CONSENT=YES+x"
    assert client.cookie is cookie


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [403, 404, 429, 500])
async def test_get_error_status_raises(
    respx_mock: respx.Router, http: httpx.AsyncClient, status_code: int
) -> None:
    """Unsuccessful statuses are wrapped as RequestFailedError."""
    respx_mock.get(URL).mock(return_value=httpx.Response(status_code))
    client = CaptionsHttpClient(http, SessionCookie())

    with pytest.raises(RequestFailedError) as exc:
        await client.get(URL)
    assert exc.value.url == URL
    assert exc.value.status_code == status_code
    assert isinstance(exc.value.__cause__, httpx.HTTPStatusError)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_network_error_raises(
    respx_mock: respx.Router, http: httpx.AsyncClient
) -> None:
    """Network failures are wrapped as RequestFailedError without a status."""
    req = httpx.Request("GET", URL)
    respx_mock.get(URL).mock(
        side_effect=httpx.ConnectError("network-fail", request=req)
    )
    client = CaptionsHttpClient(http, SessionCookie())

    with pytest.raises(RequestFailedError) as exc:
        await client.get(URL)
    assert exc.value.url == URL
    assert exc.value.status_code is None
