"""Extraction of the caption manifest embedded in a video page.

The watch page embeds the player configuration as an unescaped JSON
fragment. The caption manifest is the value of its ``"captions"`` key,
which is sliced out by marker strings and validated against the shape
the platform is known to emit.
"""

import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from . import markers
from .exceptions import (
    CaptchaRequiredError,
    InvalidManifestError,
    TranscriptsDisabledError,
    VideoUnavailableError,
)

logger = logging.getLogger(__name__)


class RawRun(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str


class RawName(BaseModel):
    """A display name, given either as plain text or as text runs."""

    model_config = ConfigDict(frozen=True)

    simple_text: str | None = Field(default=None, alias="simpleText")
    runs: list[RawRun] | None = None

    @property
    def text(self) -> str:
        """The display name as a single string."""
        if self.simple_text is not None:
            return self.simple_text
        return "".join(run.text for run in self.runs or [])


class RawCaptionTrack(BaseModel):
    """One caption track as listed in the manifest.

    Attributes:
        base_url: URL the track is fetched from.
        language_code: Language tag of the track.
        is_translatable: Whether the platform can machine-translate it.
        kind: ``"asr"`` for automatically generated tracks.
        name: Human-readable track name.
    """

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(alias="baseUrl")
    language_code: str = Field(alias="languageCode")
    is_translatable: bool = Field(default=False, alias="isTranslatable")
    kind: str | None = None
    name: RawName

    @property
    def is_generated(self) -> bool:
        """Whether the track was produced by speech recognition."""
        return self.kind == "asr"


class RawTranslationLanguage(BaseModel):
    model_config = ConfigDict(frozen=True)

    language_code: str = Field(alias="languageCode")


class RawManifest(BaseModel):
    """The caption track list and the translation targets of a video."""

    model_config = ConfigDict(frozen=True)

    caption_tracks: list[RawCaptionTrack] = Field(alias="captionTracks")
    translation_languages: list[RawTranslationLanguage] = Field(
        default_factory=list[RawTranslationLanguage], alias="translationLanguages"
    )


class RawCaptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    manifest: RawManifest = Field(alias="playerCaptionsTracklistRenderer")


def _classify_missing_manifest(
    html: str, video_id: str | None
) -> CaptchaRequiredError | VideoUnavailableError | TranscriptsDisabledError:
    if markers.CAPTCHA_WIDGET in html:
        return CaptchaRequiredError(video_id=video_id)
    if markers.PLAYABILITY_STATUS not in html:
        return VideoUnavailableError(video_id=video_id)
    return TranscriptsDisabledError(video_id=video_id)


def extract_manifest(html: str, video_id: str | None = None) -> RawManifest:
    """Locate and parse the caption manifest embedded in a video page.

    Args:
        html: The full watch page body.
        video_id: The video identifier, for error context.

    Returns:
        The parsed manifest.

    Raises:
        CaptchaRequiredError: If the manifest is missing and the page shows
            a captcha.
        VideoUnavailableError: If the manifest is missing and the page has
            no playability status.
        TranscriptsDisabledError: If the manifest is missing from an
            otherwise playable page.
        InvalidManifestError: If the manifest is not valid JSON or does not
            match the expected schema.
    """
    _, marker, rest = html.partition(markers.MANIFEST_START)
    if not marker:
        raise _classify_missing_manifest(html, video_id)

    fragment, marker, _ = rest.partition(markers.MANIFEST_END)
    if not marker:
        raise TranscriptsDisabledError(video_id=video_id)

    try:
        captions = RawCaptions.model_validate_json(fragment)
    except ValidationError as e:
        raise InvalidManifestError(
            "Caption manifest does not match the expected schema.",
            video_id=video_id,
        ) from e

    logger.debug(
        "Caption manifest extracted.",
        extra={
            "video_id": video_id,
            "track_count": len(captions.manifest.caption_tracks),
            "translation_language_count": len(
                captions.manifest.translation_languages
            ),
        },
    )
    return captions.manifest
