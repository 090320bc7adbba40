"""Caption wire formats and their transcript decoders.

The platform serves each caption track in several formats, selected by
the ``fmt`` query parameter. Formats with a decoder are registered in
``_DECODERS``; adding a format means adding a module and a registry
entry, without touching the callers of ``decode_transcript``.
"""

from collections.abc import Callable
from enum import Enum
import logging

from ..exceptions import UnsupportedFormatError
from . import srv1, srv2, srv3

logger = logging.getLogger(__name__)


class Format(str, Enum):
    """Wire format identifiers accepted by the ``fmt`` query parameter.

    Values:
        VTT: Web Video Text Tracks.
        TTML: Timed Text Markup Language.
        SRV1: Timed text, version 1 (flat segments).
        SRV2: Timed text, version 2 (segments and windows).
        SRV3: Timed text, version 3 (nested styling).
        JSON3: JSON rendition of srv3.
    """

    VTT = "vtt"
    TTML = "ttml"
    SRV1 = "srv1"
    SRV2 = "srv2"
    SRV3 = "srv3"
    JSON3 = "json3"

    def __str__(self) -> str:
        return self.value


type Transcript = srv1.Transcript | srv2.Transcript | srv3.Transcript

_DECODERS: dict[Format, Callable[[str], Transcript]] = {
    Format.SRV1: srv1.decode,
    Format.SRV2: srv2.decode,
    Format.SRV3: srv3.decode,
}


def has_decoder(format: Format) -> bool:
    """Check whether ``format`` has a registered decoder."""
    return format in _DECODERS


def decoder_for(format: Format) -> Callable[[str], Transcript]:
    """Look up the decoder of a wire format.

    Args:
        format: The wire format.

    Returns:
        A function decoding a raw document of that format.

    Raises:
        UnsupportedFormatError: If no decoder is registered for the format.
    """
    try:
        return _DECODERS[format]
    except KeyError as e:
        raise UnsupportedFormatError(format=str(format)) from e


def decode_transcript(format: Format, text: str) -> Transcript:
    """Decode a raw caption document of the given format.

    Args:
        format: The wire format the document was fetched in.
        text: The raw document.

    Returns:
        The decoded transcript; its type depends on the format.

    Raises:
        UnsupportedFormatError: If no decoder is registered for the format.
        TranscriptDecodeError: If the document fails to decode.
    """
    decoder = decoder_for(format)
    transcript = decoder(text)
    logger.debug("Transcript decoded.", extra={"format": str(format)})
    return transcript


__all__ = [
    "Format",
    "Transcript",
    "decode_transcript",
    "decoder_for",
    "has_decoder",
    "srv1",
    "srv2",
    "srv3",
]
