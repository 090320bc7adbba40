"""Fetch and decode platform video captions."""

from .exceptions import (
    AlreadyTranslatedError,
    CaptchaRequiredError,
    CaptionsError,
    CookiesInvalidError,
    DecodeError,
    FailedToCreateConsentCookieError,
    InvalidManifestError,
    NotTranslatableError,
    RequestFailedError,
    TranscriptDecodeError,
    TranscriptsDisabledError,
    TranslationLanguageNotAvailableError,
    UnsupportedFormatError,
    VideoUnavailableError,
)
from .formats import Format, Transcript, decode_transcript
from .language_tag import LanguageTag, LanguageTagError
from .scraper import CaptionTrack, Digest, DigestScraper

__all__ = [
    "AlreadyTranslatedError",
    "CaptchaRequiredError",
    "CaptionTrack",
    "CaptionsError",
    "CookiesInvalidError",
    "DecodeError",
    "Digest",
    "DigestScraper",
    "FailedToCreateConsentCookieError",
    "Format",
    "InvalidManifestError",
    "LanguageTag",
    "LanguageTagError",
    "NotTranslatableError",
    "RequestFailedError",
    "Transcript",
    "TranscriptDecodeError",
    "TranscriptsDisabledError",
    "TranslationLanguageNotAvailableError",
    "UnsupportedFormatError",
    "VideoUnavailableError",
    "decode_transcript",
]
