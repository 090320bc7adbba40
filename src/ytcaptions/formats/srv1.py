"""Decoder for srv1, the flat timed-text format.

An srv1 document is a ``<transcript>`` root holding ``<text>`` elements,
each with ``start`` and ``dur`` attributes in seconds::

    <transcript>
      <text start="0.5" dur="2.3">Hi &amp;amp; bye</text>
    </transcript>
"""

from pydantic import Field

from .base import XmlModel, build, child_elements, element_text, parse_document

FORMAT = "srv1"


class TextSegment(XmlModel):
    """A line of text shown for a span of time.

    Attributes:
        start_secs: When the text appears, in seconds.
        duration_secs: How long the text stays, in seconds.
        text: The caption text.
    """

    start_secs: float = Field(alias="start")
    duration_secs: float = Field(alias="dur")
    text: str = ""

    @property
    def end_secs(self) -> float:
        """When the text disappears, in seconds."""
        return self.start_secs + self.duration_secs


class Transcript(XmlModel):
    segments: tuple[TextSegment, ...] = ()


def decode(text: str) -> Transcript:
    """Decode an srv1 document.

    Elements other than ``<text>`` are ignored.

    Args:
        text: The raw document.

    Returns:
        The decoded transcript.

    Raises:
        TranscriptDecodeError: If the document is malformed or a segment
            lacks its timing attributes.
    """
    root = parse_document(text, FORMAT)
    segments = [
        build(
            TextSegment,
            {**element.attrib, "text": element_text(element)},
            FORMAT,
            element.tag,
        )
        for element in child_elements(root)
        if element.tag == "text"
    ]
    return Transcript(segments=tuple(segments))
