"""Custom exceptions for ytcaptions.

This module defines all custom exception classes used throughout the
library, organized by the component that raises them and carrying
structured attributes so callers can branch on the kind of failure
rather than on message text.
"""

from typing import Any


class CaptionsError(Exception):
    """Base class for library-specific errors."""


class ConfigLoadError(CaptionsError):
    """Raised when a configuration file fails to load.

    Attributes:
        config_file: Path to the configuration file that failed to load.
    """

    def __init__(
        self,
        message: str,
        config_file: str | None = None,
    ):
        super().__init__(message)
        self.config_file = config_file


class RequestFailedError(CaptionsError):
    """Raised when a request to the platform fails at the transport level.

    The underlying httpx error is always available as ``__cause__``.

    Attributes:
        url: The URL that was requested.
        status_code: The HTTP status code, if a response was received.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class CookiesInvalidError(CaptionsError):
    """Raised when externally supplied cookies are unusable or were rejected.

    Attributes:
        cookies_path: Path to the cookies file, if the cookies came from one.
    """

    def __init__(
        self,
        message: str = "The cookies provided are not valid (may have expired).",
        cookies_path: str | None = None,
    ):
        super().__init__(message)
        self.cookies_path = cookies_path


class PageError(CaptionsError):
    """Base class for errors derived from the content of a video page.

    Attributes:
        video_id: The video identifier whose page was inspected.
    """

    def __init__(self, message: str, video_id: str | None = None):
        super().__init__(message)
        self.video_id = video_id


class VideoUnavailableError(PageError):
    """Raised when the video is no longer available."""

    def __init__(self, video_id: str | None = None):
        super().__init__("The video is no longer available.", video_id=video_id)


class CaptchaRequiredError(PageError):
    """Raised when the platform demands a captcha before serving the page.

    The platform is receiving too many requests from this IP. Either solve
    the captcha in a browser and export the cookies, use a different IP
    address, or wait until the block has been lifted.
    """

    def __init__(self, video_id: str | None = None):
        super().__init__(
            "Too many requests from this IP; a captcha must be solved to continue.",
            video_id=video_id,
        )


class TranscriptsDisabledError(PageError):
    """Raised when subtitles are disabled for the video."""

    def __init__(self, video_id: str | None = None):
        super().__init__("Subtitles are disabled for this video.", video_id=video_id)


class FailedToCreateConsentCookieError(PageError):
    """Raised when the consent wall cannot be passed automatically."""

    def __init__(self, video_id: str | None = None):
        super().__init__(
            "Failed to automatically give consent to saving cookies.",
            video_id=video_id,
        )


class CaptionTrackError(CaptionsError):
    """Base class for errors raised by a caption track handle.

    Attributes:
        lang: The language tag of the track, as a string.
    """

    def __init__(self, message: str, lang: str | None = None):
        super().__init__(message)
        self.lang = lang


class NotTranslatableError(CaptionTrackError):
    """Raised when a translation is requested on a non-translatable track."""

    def __init__(self, lang: str | None = None):
        super().__init__("The requested track is not translatable.", lang=lang)


class AlreadyTranslatedError(CaptionTrackError):
    """Raised when a track that already carries a translation target is translated again.

    Attributes:
        target: The translation target that was requested.
    """

    def __init__(self, lang: str | None = None, target: str | None = None):
        super().__init__("The track has already been translated.", lang=lang)
        self.target = target


class TranslationLanguageNotAvailableError(CaptionsError):
    """Raised when the requested translation target is not offered.

    Attributes:
        target: The translation target that was requested.
    """

    def __init__(self, target: str | None = None):
        super().__init__("The requested translation language is not available.")
        self.target = target


class UnsupportedFormatError(CaptionTrackError):
    """Raised when a typed fetch is requested for a format with no decoder.

    Attributes:
        format: The wire format identifier.
    """

    def __init__(self, format: str, lang: str | None = None):
        super().__init__("No decoder is available for this format.", lang=lang)
        self.format = format


class DecodeError(CaptionsError):
    """Base class for errors raised while decoding platform data."""


class InvalidManifestError(DecodeError):
    """Raised when the embedded caption manifest does not match the expected schema.

    Attributes:
        video_id: The video identifier whose manifest failed to decode.
    """

    def __init__(self, message: str, video_id: str | None = None):
        super().__init__(message)
        self.video_id = video_id


class TranscriptDecodeError(DecodeError):
    """Raised when a transcript document fails to decode.

    Attributes:
        format: The wire format identifier.
        element: The XML tag of the offending element, if known.
        details: Extra structured context describing the failure.
    """

    def __init__(
        self,
        message: str,
        format: str,
        element: str | None = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.format = format
        self.element = element
        self.details = details
