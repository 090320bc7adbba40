"""Shared fixtures for integration tests."""

from collections.abc import AsyncIterator
from pathlib import Path

import httpx
import pytest
import pytest_asyncio

from ytcaptions.scraper import DigestScraper
from ytcaptions.session_cookie import load_cookie_header


@pytest.fixture
def cookies_path() -> Path | None:
    """Provide cookies.txt path if it exists, otherwise None.

    Integration tests can use this fixture to conditionally authenticate
    with the platform to avoid rate limiting during testing.
    """
    cookies_file = Path(__file__).parent / "cookies.txt"
    return cookies_file if cookies_file.exists() else None


@pytest_asyncio.fixture
async def scraper(cookies_path: Path | None) -> AsyncIterator[DigestScraper]:
    """Provide a DigestScraper talking to the live platform."""
    cookie = (
        load_cookie_header(cookies_path, "youtube.com")
        if cookies_path is not None
        else None
    )
    async with httpx.AsyncClient(timeout=30.0, follow_redirects=True) as http:
        yield DigestScraper(http, cookie=cookie)
