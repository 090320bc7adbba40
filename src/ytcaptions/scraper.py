"""Caption digest scraping for platform videos.

``DigestScraper`` fetches a video's watch page, passes the consent wall
when one is served, and turns the embedded caption manifest into a
``Digest`` of ``CaptionTrack`` handles. Each handle fetches its track in
any wire format and decodes the formats that have a decoder.
"""

from dataclasses import dataclass, field
import logging
from typing import cast

import httpx

from . import markers
from .consent import create_consent_cookie, is_consent_wall
from .exceptions import (
    AlreadyTranslatedError,
    CookiesInvalidError,
    FailedToCreateConsentCookieError,
    NotTranslatableError,
    TranslationLanguageNotAvailableError,
)
from .formats import Format, Transcript, decoder_for, srv1, srv2, srv3
from .language_tag import LanguageTag
from .manifest import RawCaptionTrack, extract_manifest
from .session_cookie import SessionCookie
from .transport import CaptionsHttpClient

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CaptionTrack:
    """Handle to one caption track of a video.

    Attributes:
        url: Fetch URL of the track, without a format parameter.
        is_generated: True if produced by automatic speech recognition.
        is_translatable: True if the platform can machine-translate it.
        lang_name: Human-readable name of the track.
        lang_tag: Language of the track.
    """

    url: str
    is_generated: bool
    is_translatable: bool
    lang_name: str
    lang_tag: LanguageTag
    _client: CaptionsHttpClient = field(repr=False, compare=False)

    @property
    def translation_target(self) -> str | None:
        """The language this track is translated to, if any."""
        param = markers.TRANSLATION_PARAM.format(lang="")
        _, marker, rest = self.url.partition(param)
        if not marker:
            return None
        return rest.split("&", 1)[0]

    def translate_to(self, language: LanguageTag | str) -> "CaptionTrack":
        """Request the track machine-translated into ``language``.

        The track is changed in place. Whether the platform offers the
        target is not checked here; see ``Digest.check_translation_target``.

        Args:
            language: The target language.

        Returns:
            This track, for chaining.

        Raises:
            NotTranslatableError: If the track cannot be translated.
            AlreadyTranslatedError: If the track already has a translation
                target.
            LanguageTagError: If ``language`` is a malformed tag string.
        """
        if not self.is_translatable:
            raise NotTranslatableError(lang=str(self.lang_tag))
        if isinstance(language, LanguageTag):
            target = language
        else:
            target = LanguageTag.parse(language)
        if self.translation_target is not None:
            raise AlreadyTranslatedError(lang=str(self.lang_tag), target=str(target))

        self.url += markers.TRANSLATION_PARAM.format(lang=target)
        logger.debug(
            "Caption track translation requested.",
            extra={"lang": str(self.lang_tag), "target": str(target)},
        )
        return self

    async def fetch(self, format: Format = Format.SRV1) -> str:
        """Fetch the raw track in ``format``.

        Args:
            format: The wire format to request.

        Returns:
            The raw document.

        Raises:
            RequestFailedError: If the request fails.
        """
        url = self.url + markers.FORMAT_PARAM.format(format=format)
        logger.debug(
            "Fetching caption track.",
            extra={"lang": str(self.lang_tag), "format": str(format)},
        )
        return await self._client.get(url)

    async def fetch_transcript(self, format: Format) -> Transcript:
        """Fetch the track in ``format`` and decode it.

        Args:
            format: The wire format to request.

        Returns:
            The decoded transcript; its type depends on the format.

        Raises:
            UnsupportedFormatError: If the format has no decoder. No
                request is made in that case.
            RequestFailedError: If the request fails.
            TranscriptDecodeError: If the document fails to decode.
        """
        decoder = decoder_for(format)
        return decoder(await self.fetch(format))

    async def fetch_srv1(self) -> srv1.Transcript:
        """Fetch and decode the track as srv1."""
        return cast(srv1.Transcript, await self.fetch_transcript(Format.SRV1))

    async def fetch_srv2(self) -> srv2.Transcript:
        """Fetch and decode the track as srv2."""
        return cast(srv2.Transcript, await self.fetch_transcript(Format.SRV2))

    async def fetch_srv3(self) -> srv3.Transcript:
        """Fetch and decode the track as srv3."""
        return cast(srv3.Transcript, await self.fetch_transcript(Format.SRV3))

    async def fetch_json3(self) -> Transcript:
        """Fetch and decode the track as json3; no decoder exists yet."""
        return await self.fetch_transcript(Format.JSON3)

    async def fetch_ttml(self) -> Transcript:
        """Fetch and decode the track as TTML; no decoder exists yet."""
        return await self.fetch_transcript(Format.TTML)


@dataclass(frozen=True, slots=True)
class Digest:
    """The caption tracks of a video and the languages they translate to.

    Attributes:
        captions: Caption tracks in manifest order.
        can_be_translated_to: Language codes offered as translation targets.
    """

    captions: tuple[CaptionTrack, ...]
    can_be_translated_to: frozenset[str]

    def find_caption(
        self,
        preference: LanguageTag | str | list[LanguageTag | str],
        generated: bool | None = None,
    ) -> CaptionTrack | None:
        """Find the first caption track matching a language preference.

        Args:
            preference: A language tag, or tags in order of preference.
            generated: If set, only consider tracks whose ``is_generated``
                equals it.

        Returns:
            The first matching track, or None if none matches.
        """
        preferences = preference if isinstance(preference, list) else [preference]
        for pref in preferences:
            tag = pref if isinstance(pref, LanguageTag) else LanguageTag.parse(pref)
            for caption in self.captions:
                if generated is not None and caption.is_generated != generated:
                    continue
                if tag.matches(caption.lang_tag):
                    return caption
        return None

    def check_translation_target(self, language: LanguageTag | str) -> None:
        """Ensure ``language`` is offered as a translation target.

        Args:
            language: The target language.

        Raises:
            TranslationLanguageNotAvailableError: If it is not offered.
            LanguageTagError: If ``language`` is a malformed tag string.
        """
        if isinstance(language, LanguageTag):
            target = language
        else:
            target = LanguageTag.parse(language)
        if str(target) not in self.can_be_translated_to:
            raise TranslationLanguageNotAvailableError(target=str(target))


class DigestScraper:
    """Fetch caption digests for videos.

    The scraper owns one session cookie shared by every request it and its
    caption tracks make. The cookie is either supplied by the caller or
    derived from the consent wall the first time one is served.

    Attributes:
        _client: HTTP client carrying the session cookie.
        _host: Platform host the watch pages are fetched from.
        _default_lang: Interface language used when none is given.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        cookie: str | None = None,
        host: str = markers.DEFAULT_HOST,
        default_lang: str = "en",
        user_agent: str | None = None,
    ):
        self._client = CaptionsHttpClient(http, SessionCookie(cookie), user_agent)
        self._host = host
        self._default_lang = default_lang
        logger.debug(
            "DigestScraper initialized.",
            extra={"host": host, "external_cookie": cookie is not None},
        )

    async def _fetch_video_page(self, video_id: str, lang: str) -> str:
        """Fetch the watch page, passing the consent wall if one is served.

        Args:
            video_id: The video identifier.
            lang: Interface language of the page.

        Returns:
            The watch page body.

        Raises:
            RequestFailedError: If a request fails.
            CookiesInvalidError: If the consent wall is served despite a
                caller-supplied cookie.
            FailedToCreateConsentCookieError: If no consent token can be
                found, or the wall is still served after one retry.
        """
        url = markers.WATCH_URL.format(host=self._host, lang=lang, video_id=video_id)
        log_params = {"video_id": video_id, "lang": lang}

        html = await self._client.get(url)
        if not is_consent_wall(html):
            return html

        if self._client.cookie.is_external:
            raise CookiesInvalidError()

        logger.debug("Consent wall served; creating consent cookie.", extra=log_params)
        await self._client.cookie.set(
            create_consent_cookie(html, self._host, video_id=video_id)
        )

        html = await self._client.get(url)
        if is_consent_wall(html):
            raise FailedToCreateConsentCookieError(video_id=video_id)
        logger.debug("Consent wall passed.", extra=log_params)
        return html

    def _to_caption_track(self, raw: RawCaptionTrack) -> CaptionTrack:
        return CaptionTrack(
            url=raw.base_url,
            is_generated=raw.is_generated,
            is_translatable=raw.is_translatable,
            lang_name=raw.name.text,
            # manifest language codes are trusted to be well formed
            lang_tag=LanguageTag.parse(raw.language_code),
            _client=self._client,
        )

    async def fetch(self, video_id: str, lang: str | None = None) -> Digest:
        """Fetch the caption digest of a video.

        Args:
            video_id: The video identifier.
            lang: Interface language of the watch page, which also sets the
                language of track names. Defaults to the scraper's default.

        Returns:
            The caption tracks and translation targets of the video.

        Raises:
            RequestFailedError: If a request fails.
            CookiesInvalidError: If a caller-supplied cookie is rejected.
            FailedToCreateConsentCookieError: If the consent wall cannot be
                passed.
            CaptchaRequiredError: If the platform demands a captcha.
            VideoUnavailableError: If the video does not exist anymore.
            TranscriptsDisabledError: If the video has no captions.
            InvalidManifestError: If the manifest fails to decode.
        """
        lang = lang or self._default_lang
        logger.debug(
            "Fetching caption digest.", extra={"video_id": video_id, "lang": lang}
        )

        html = await self._fetch_video_page(video_id, lang)
        manifest = extract_manifest(html, video_id=video_id)

        digest = Digest(
            captions=tuple(self._to_caption_track(t) for t in manifest.caption_tracks),
            can_be_translated_to=frozenset(
                t.language_code for t in manifest.translation_languages
            ),
        )
        logger.debug(
            "Caption digest fetched.",
            extra={"video_id": video_id, "track_count": len(digest.captions)},
        )
        return digest
