"""Consent wall detection and consent cookie derivation."""

from . import markers
from .exceptions import FailedToCreateConsentCookieError


def is_consent_wall(html: str) -> bool:
    """Check whether a fetched page is the consent interstitial.

    Args:
        html: The page body.

    Returns:
        True if the page contains the consent form.
    """
    return markers.CONSENT_FORM in html


def create_consent_cookie(
    html: str, host: str = markers.DEFAULT_HOST, video_id: str | None = None
) -> str:
    """Derive the consent cookie from a consent interstitial.

    Args:
        html: The consent page body.
        host: The platform host the cookie is scoped to.
        video_id: The video being fetched, for error context.

    Returns:
        The cookie header value granting consent.

    Raises:
        FailedToCreateConsentCookieError: If the page holds no consent token.
    """
    match = markers.CONSENT_TOKEN_PATTERN.search(html)
    if match is None:
        raise FailedToCreateConsentCookieError(video_id=video_id)
    return markers.CONSENT_COOKIE.format(token=match.group(1), host=host)
