"""Unit tests for the wire format registry."""

import pytest

from ytcaptions.exceptions import UnsupportedFormatError
from ytcaptions.formats import (
    Format,
    decode_transcript,
    decoder_for,
    has_decoder,
    srv1,
    srv2,
    srv3,
)


@pytest.mark.unit
def test_format_renders_as_query_value():
    """Formats render as the value of the ``fmt`` parameter."""
    assert str(Format.SRV3) == "srv3"
    assert f"&fmt={Format.JSON3}" == "&fmt=json3"


@pytest.mark.unit
@pytest.mark.parametrize(
    ("format", "decoder"),
    [
        (Format.SRV1, srv1.decode),
        (Format.SRV2, srv2.decode),
        (Format.SRV3, srv3.decode),
    ],
)
def test_decoder_for_registered_formats(format: Format, decoder: object):
    """srv1, srv2 and srv3 have decoders."""
    assert has_decoder(format)
    assert decoder_for(format) is decoder


@pytest.mark.unit
@pytest.mark.parametrize("format", [Format.JSON3, Format.TTML, Format.VTT])
def test_decoder_for_unsupported_format_raises(format: Format):
    """Formats without a decoder are reported as unsupported."""
    assert not has_decoder(format)
    with pytest.raises(UnsupportedFormatError) as exc:
        decoder_for(format)
    assert exc.value.format == str(format)


@pytest.mark.unit
def test_decode_transcript_dispatches_on_format():
    """decode_transcript picks the decoder matching the format."""
    transcript = decode_transcript(
        Format.SRV1, '<transcript><text start="0" dur="1">a</text></transcript>'
    )
    assert isinstance(transcript, srv1.Transcript)

    transcript = decode_transcript(
        Format.SRV2, '<timedtext><text t="0">a</text></timedtext>'
    )
    assert isinstance(transcript, srv2.Transcript)


@pytest.mark.unit
def test_decode_transcript_unsupported_format():
    """Decoding json3 is not supported."""
    with pytest.raises(UnsupportedFormatError):
        decode_transcript(Format.JSON3, "{}")
