"""HTTP access to the platform through a shared httpx client."""

import logging

import httpx

from .exceptions import RequestFailedError
from .session_cookie import SessionCookie

logger = logging.getLogger(__name__)


class CaptionsHttpClient:
    """Perform GET requests carrying the scraper's session cookie.

    Timeouts, pooling and TLS are left to the injected httpx client.

    Attributes:
        _http: The underlying async httpx client.
        _cookie: The session cookie attached to every request.
        _user_agent: Optional User-Agent header value.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        cookie: SessionCookie,
        user_agent: str | None = None,
    ):
        self._http = http
        self._cookie = cookie
        self._user_agent = user_agent

    @property
    def cookie(self) -> SessionCookie:
        """The session cookie attached to every request."""
        return self._cookie

    async def get(self, url: str) -> str:
        """Fetch ``url`` and return the response body.

        Args:
            url: The URL to fetch.

        Returns:
            The decoded response body.

        Raises:
            RequestFailedError: If the request fails or the response status
                is not successful.
        """
        headers = {"Cookie": await self._cookie.get()}
        if self._user_agent:
            headers["User-Agent"] = self._user_agent

        logger.debug("Sending GET request.", extra={"url": url})
        try:
            response = await self._http.get(url, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RequestFailedError(
                "Request to the platform returned an error status.",
                url=url,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise RequestFailedError(
                "Request to the platform failed.",
                url=url,
            ) from e

        return response.text
