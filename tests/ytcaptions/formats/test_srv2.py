"""Unit tests for the srv2 segment and window decoder."""

import pytest

from ytcaptions.exceptions import TranscriptDecodeError
from ytcaptions.formats import srv2
from ytcaptions.formats.enums import AnchorPoint, PrintDirection, TextAlignment

SAMPLE = """<?xml version="1.0" encoding="utf-8" ?>
<timedtext>
  <window id="1" op="define" t="0" ap="7" ah="50" av="100" rc="2" cc="32" sd="0" ju="2"/>
  <text t="0" d="1500">first &amp;amp; line</text>
  <text t="1500" d="2000" append="1" r="1" c="4">second</text>
  <text t="3500">third</text>
</timedtext>
"""


@pytest.mark.unit
def test_decode_keeps_document_order():
    """Windows and segments are returned in the order they appear."""
    transcript = srv2.decode(SAMPLE)

    assert [type(e) for e in transcript.elements] == [
        srv2.WindowDefinition,
        srv2.TextSegment,
        srv2.TextSegment,
        srv2.TextSegment,
    ]


@pytest.mark.unit
def test_decode_window_definition():
    """Window attributes map onto their enumerations and integers."""
    window = srv2.decode(SAMPLE).elements[0]

    assert isinstance(window, srv2.WindowDefinition)
    assert window.id == 1
    assert window.operation == "define"
    assert window.timestamp_ms == 0
    assert window.anchor_point is AnchorPoint.BOTTOM_CENTER
    assert window.horizontal_alignment == 50
    assert window.vertical_alignment == 100
    assert window.rows_total == 2
    assert window.columns_total == 32
    assert window.scroll_direction is srv2.ScrollDirection.LTR
    assert window.print_direction is PrintDirection.LTR_HORIZONTAL
    assert window.text_alignment is TextAlignment.CENTER


@pytest.mark.unit
def test_decode_text_segments():
    """Segment timing, flags and text are decoded with their defaults."""
    segments = srv2.decode(SAMPLE).segments()

    assert [s.text for s in segments] == ["first & line", "second", "third"]
    first, second, third = segments
    assert (first.timestamp_ms, first.duration_ms, first.append) == (0, 1500, False)
    assert (second.append, second.r, second.c) == (True, 1, 4)
    assert third.duration_ms == 0


@pytest.mark.unit
def test_decode_empty_document():
    """A root without children yields no elements."""
    transcript = srv2.decode("<timedtext/>")
    assert transcript.elements == ()
    assert transcript.segments() == []


@pytest.mark.unit
def test_decode_rejects_unknown_element():
    """Elements other than <text> and <window> fail to decode."""
    with pytest.raises(TranscriptDecodeError) as exc:
        srv2.decode('<timedtext><head/><text t="0">a</text></timedtext>')
    assert exc.value.format == "srv2"
    assert exc.value.element == "head"


@pytest.mark.unit
@pytest.mark.parametrize(
    ("attribute", "value"),
    [("ap", "9"), ("ju", "4"), ("sd", "2"), ("pd", "4")],
)
def test_decode_rejects_out_of_range_codes(attribute: str, value: str):
    """Enumeration codes outside their defined range fail to decode."""
    attrs = {
        "id": "1",
        "op": "define",
        "t": "0",
        "ap": "0",
        "ah": "0",
        "av": "0",
        "rc": "1",
        "cc": "1",
        "sd": "0",
        "ju": "0",
    }
    attrs[attribute] = value
    rendered = " ".join(f'{k}="{v}"' for k, v in attrs.items())

    with pytest.raises(TranscriptDecodeError) as exc:
        srv2.decode(f"<timedtext><window {rendered}/></timedtext>")
    assert exc.value.element == "window"
    assert exc.value.details


@pytest.mark.unit
def test_decode_rejects_oversized_row_count():
    """Row counts are limited to a single byte."""
    with pytest.raises(TranscriptDecodeError):
        srv2.decode(
            '<timedtext><window id="1" op="define" t="0" ap="0" ah="0" av="0"'
            ' rc="256" cc="1" sd="0" ju="0"/></timedtext>'
        )


@pytest.mark.unit
def test_decode_missing_timestamp_raises():
    """A segment without ``t`` fails to decode."""
    with pytest.raises(TranscriptDecodeError) as exc:
        srv2.decode("<timedtext><text>a</text></timedtext>")
    assert exc.value.element == "text"
