"""Decoder for srv2, the segment and window timed-text format.

An srv2 document is a ``<timedtext>`` root holding an ordered mix of
``<text>`` segments and ``<window>`` definitions. All times are integer
milliseconds.
"""

from enum import IntEnum
from typing import Annotated

from pydantic import BeforeValidator, Field

from .base import (
    U8,
    U32,
    XmlModel,
    build,
    child_elements,
    element_text,
    enum_code,
    parse_document,
    unexpected_element,
)
from .enums import (
    AnchorPointCode,
    PrintDirection,
    PrintDirectionCode,
    TextAlignmentCode,
)

FORMAT = "srv2"


class ScrollDirection(IntEnum):
    LTR = 0
    RTL = 1


ScrollDirectionCode = Annotated[ScrollDirection, BeforeValidator(enum_code)]


class TextSegment(XmlModel):
    """A piece of caption text.

    Attributes:
        timestamp_ms: When the text appears.
        duration_ms: How long the text stays.
        append: Whether the text continues the previous segment.
        r: Undocumented integer attribute, kept as sent.
        c: Undocumented integer attribute, kept as sent.
        text: The caption text.
    """

    timestamp_ms: U32 = Field(alias="t")
    duration_ms: U32 = Field(default=0, alias="d")
    append: bool = False
    r: U32 = 0
    c: U32 = 0
    text: str = ""


class WindowDefinition(XmlModel):
    """A positioned region that following text is rendered into.

    Attributes:
        id: Window identifier.
        operation: Window operation, such as ``define``.
        timestamp_ms: When the definition takes effect.
        anchor_point: Point of the window pinned to its position.
        horizontal_alignment: X offset from the left.
        vertical_alignment: Y offset from the top.
        rows_total: Number of text rows.
        columns_total: Number of columns, each one en-dash wide.
        scroll_direction: Direction text scrolls in.
        print_direction: Direction glyphs are laid out in.
        text_alignment: Justification of the text.
    """

    id: U32
    operation: str = Field(alias="op")
    timestamp_ms: U32 = Field(alias="t")
    anchor_point: AnchorPointCode = Field(alias="ap")
    horizontal_alignment: U32 = Field(alias="ah")
    vertical_alignment: U32 = Field(alias="av")
    rows_total: U8 = Field(alias="rc")
    columns_total: U8 = Field(alias="cc")
    scroll_direction: ScrollDirectionCode = Field(alias="sd")
    print_direction: PrintDirectionCode = Field(
        default=PrintDirection.LTR_HORIZONTAL, alias="pd"
    )
    text_alignment: TextAlignmentCode = Field(alias="ju")


type Element = TextSegment | WindowDefinition


class Transcript(XmlModel):
    elements: tuple[TextSegment | WindowDefinition, ...] = ()

    def segments(self) -> list[TextSegment]:
        """Return the text segments, without window definitions."""
        return [e for e in self.elements if isinstance(e, TextSegment)]


def decode(text: str) -> Transcript:
    """Decode an srv2 document.

    Args:
        text: The raw document.

    Returns:
        The decoded transcript, with elements in document order.

    Raises:
        TranscriptDecodeError: If the document is malformed, holds an
            element other than ``<text>`` or ``<window>``, or uses an
            enumeration code outside its range.
    """
    root = parse_document(text, FORMAT)
    elements: list[Element] = []
    for element in child_elements(root):
        match element.tag:
            case "text":
                elements.append(
                    build(
                        TextSegment,
                        {**element.attrib, "text": element_text(element)},
                        FORMAT,
                        element.tag,
                    )
                )
            case "window":
                elements.append(
                    build(WindowDefinition, element.attrib, FORMAT, element.tag)
                )
            case tag:
                raise unexpected_element(FORMAT, tag)
    return Transcript(elements=tuple(elements))
