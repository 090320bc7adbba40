"""Builders for the platform pages served to the scraper in tests."""

import json
from typing import Any

VIDEO_ID = "abc123"
WATCH_URL = f"https://youtube.com/watch?hl=en&persist_hl=1&v={VIDEO_ID}"
TRACK_URL_EN = f"https://www.youtube.com/api/timedtext?v={VIDEO_ID}&lang=en"
TRACK_URL_DE = f"https://www.youtube.com/api/timedtext?v={VIDEO_ID}&lang=de&kind=asr"
CONSENT_TOKEN = "cb.20210328-17-p0.de+FX+111"

CAPTIONS: dict[str, Any] = {
    "playerCaptionsTracklistRenderer": {
        "captionTracks": [
            {
                "baseUrl": TRACK_URL_EN,
                "name": {"simpleText": "English"},
                "languageCode": "en",
                "isTranslatable": True,
            },
            {
                "baseUrl": TRACK_URL_DE,
                "name": {"runs": [{"text": "German "}, {"text": "(auto-generated)"}]},
                "languageCode": "de",
                "kind": "asr",
            },
        ],
        "translationLanguages": [
            {"languageCode": "fr", "languageName": {"simpleText": "French"}},
            {"languageCode": "ja", "languageName": {"simpleText": "Japanese"}},
        ],
    }
}


def watch_page(captions: dict[str, Any] | None = CAPTIONS) -> str:
    """Render a minimal watch page embedding ``captions`` as the manifest.

    Args:
        captions: The manifest object, or None for a page without one.

    Returns:
        The page body.
    """
    player = '{"responseContext":{},"playabilityStatus":{"status":"OK"},'
    if captions is not None:
        player += f'"captions":{json.dumps(captions)},'
    player += f'"videoDetails":{{"videoId":"{VIDEO_ID}"}}}}'
    return f"<html><script>var ytInitialPlayerResponse = {player};</script></html>"


def consent_page(token: str | None = CONSENT_TOKEN) -> str:
    """Render the consent interstitial, optionally without its token."""
    inputs = '<input type="hidden" name="gl" value="DE">'
    if token is not None:
        inputs += f'<input type="hidden" name="v" value="{token}">'
    return (
        '<html><body><form action="https://consent.youtube.com/s" method="POST">'
        f"{inputs}</form></body></html>"
    )
