"""Command-line interface for ytcaptions.

Without a caption language the tool prints the video's caption digest as
JSON. With one, it fetches the matching track in the requested format and
prints the decoded transcript, or the raw document for formats without a
decoder.
"""

import json
import logging
import sys
from typing import Any

import httpx

from .config import CaptionsSettings
from .exceptions import CaptionsError
from .formats import has_decoder
from .language_tag import LanguageTagError
from .logging_config import set_context_id, setup_logging
from .scraper import Digest, DigestScraper
from .session_cookie import load_cookie_header

logger = logging.getLogger(__name__)


def digest_to_dict(digest: Digest) -> dict[str, Any]:
    """Render a digest as JSON-compatible data."""
    return {
        "captions": [
            {
                "lang_tag": str(caption.lang_tag),
                "lang_name": caption.lang_name,
                "is_generated": caption.is_generated,
                "is_translatable": caption.is_translatable,
                "url": caption.url,
            }
            for caption in digest.captions
        ],
        "can_be_translated_to": sorted(digest.can_be_translated_to),
    }


async def run(settings: CaptionsSettings, http: httpx.AsyncClient) -> str:
    """Fetch what the settings ask for and render it as text.

    Args:
        settings: The loaded settings; ``video_id`` must be set.
        http: The httpx client to issue requests with.

    Returns:
        The text to print.

    Raises:
        CaptionsError: If any step fails, or no track matches
            ``caption_lang``.
    """
    assert settings.video_id is not None
    cookie = (
        load_cookie_header(settings.cookies_path, settings.platform_host)
        if settings.cookies_path is not None
        else None
    )
    scraper = DigestScraper(
        http,
        cookie=cookie,
        host=settings.platform_host,
        default_lang=settings.default_lang,
        user_agent=settings.user_agent,
    )
    digest = await scraper.fetch(settings.video_id)

    if settings.caption_lang is None:
        return json.dumps(digest_to_dict(digest), indent=2, ensure_ascii=False)

    caption = digest.find_caption(settings.caption_lang)
    if caption is None:
        raise CaptionsError(f"No caption track matches '{settings.caption_lang}'.")
    if settings.translate_to is not None:
        digest.check_translation_target(settings.translate_to)
        caption.translate_to(settings.translate_to)

    if not has_decoder(settings.caption_format):
        return await caption.fetch(settings.caption_format)
    transcript = await caption.fetch_transcript(settings.caption_format)
    return transcript.model_dump_json(indent=2)


async def main_cli() -> int:
    """Load settings, configure logging and run the tool.

    Returns:
        The process exit status.
    """
    settings = CaptionsSettings()  # type: ignore

    setup_logging(
        log_format_type=settings.log_format,
        app_log_level_name=settings.log_level,
        include_stacktrace=settings.log_include_stacktrace,
    )
    logger.debug(
        "Settings loaded.",
        extra={
            "config_file": str(settings.config_file),
            "platform_host": settings.platform_host,
            "caption_format": str(settings.caption_format),
        },
    )

    if settings.video_id is None:
        logger.error("No video given; pass --video-id or set VIDEO_ID.")
        return 2

    set_context_id(settings.video_id)
    async with httpx.AsyncClient(
        timeout=settings.request_timeout, follow_redirects=True
    ) as http:
        try:
            output = await run(settings, http)
        except (CaptionsError, LanguageTagError) as e:
            logger.error("Failed to fetch captions.", exc_info=e)
            return 1

    sys.stdout.write(output + "\n")
    return 0
