"""Session cookie shared by every request of one scraper.

The cookie is read by every outgoing request and written only by the
consent handshake, so it sits behind an asyncio reader/writer lock.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from http.cookiejar import LoadError, MozillaCookieJar
import logging
from pathlib import Path

from .exceptions import CookiesInvalidError

logger = logging.getLogger(__name__)


class SessionCookie:
    """An optional cookie header value guarded by a reader/writer lock.

    Any number of readers may hold the lock at once; a writer waits until
    all readers are gone and blocks new readers while it assigns.

    Attributes:
        _value: The current cookie header value, or None if unset.
        _external: Whether the value was supplied by the caller.
        _readers: Number of readers currently holding the lock.
        _writing: Whether a writer currently holds the lock.
        _cond: Condition used to hand the lock between readers and writers.
    """

    def __init__(self, value: str | None = None):
        self._value = value
        self._external = value is not None
        self._readers = 0
        self._writing = False
        self._cond = asyncio.Condition()

    @property
    def is_external(self) -> bool:
        """Whether the cookie was supplied by the caller rather than derived."""
        return self._external

    @asynccontextmanager
    async def _read_lock(self) -> AsyncIterator[None]:
        async with self._cond:
            await self._cond.wait_for(lambda: not self._writing)
            self._readers += 1
        try:
            yield
        finally:
            async with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @asynccontextmanager
    async def _write_lock(self) -> AsyncIterator[None]:
        async with self._cond:
            await self._cond.wait_for(lambda: not self._writing and self._readers == 0)
            self._writing = True
        try:
            yield
        finally:
            async with self._cond:
                self._writing = False
                self._cond.notify_all()

    async def get(self) -> str:
        """Return the cookie header value, or an empty string if unset."""
        async with self._read_lock():
            return self._value or ""

    async def set(self, value: str) -> None:
        """Replace the cookie header value.

        Args:
            value: The new cookie header value.
        """
        async with self._write_lock():
            self._value = value
        logger.debug("Session cookie updated.")


def load_cookie_header(cookies_path: Path, host: str) -> str:
    """Build a ``Cookie`` header value from a Netscape-format cookies file.

    Only cookies whose domain belongs to ``host`` are kept.

    Args:
        cookies_path: Path to a Netscape-format cookies.txt file.
        host: The platform host, e.g. ``youtube.com``.

    Returns:
        The cookie header value, as ``name=value`` pairs joined by ``"; "``.

    Raises:
        CookiesInvalidError: If the file cannot be loaded or holds no
            cookie for the platform.
    """
    cookie_jar = MozillaCookieJar(cookies_path)
    try:
        cookie_jar.load(ignore_discard=True, ignore_expires=True)
    except (LoadError, OSError) as e:
        raise CookiesInvalidError(
            "Failed to load cookies file.", cookies_path=str(cookies_path)
        ) from e

    domain = host.lstrip(".")
    pairs = [
        f"{cookie.name}={cookie.value}"
        for cookie in cookie_jar
        if cookie.domain.lstrip(".") == domain
        or cookie.domain.endswith(f".{domain}")
    ]
    if not pairs:
        raise CookiesInvalidError(
            "Cookies file holds no cookies for the platform.",
            cookies_path=str(cookies_path),
        )

    logger.debug(
        "Loaded cookies from file.",
        extra={"cookies_path": str(cookies_path), "cookie_count": len(pairs)},
    )
    return "; ".join(pairs)
