"""Decoder for srv3, the nested styling timed-text format.

An srv3 document is a ``<timedtext format="3">`` root with two sections.
``<head>`` defines reusable resources by integer id: pens (``<pen>``),
window styles (``<ws>``) and window positions (``<wp>``). ``<body>`` is
an ordered stream of paragraphs (``<p>``) and window references (``<w>``)
that cite those ids. Ids are not resolved here; a paragraph may cite a
pen the head does not define.

Times are integer milliseconds. Paragraph content is plain text
interleaved with ``<s>`` spans that carry their own pen and an offset
relative to the paragraph start. Whitespace-only text before the first
span or after the last one is indentation and is dropped; between two
spans it is kept as a word separator.
"""

from enum import IntEnum
from typing import Annotated

from lxml import etree
from pydantic import BeforeValidator, Field

from ..exceptions import TranscriptDecodeError
from .base import (
    U8,
    U32,
    XmlModel,
    build,
    child_elements,
    element_text,
    enum_code,
    parse_document,
    unescape_text,
    unexpected_element,
)
from .enums import (
    AnchorPointCode,
    PrintDirection,
    PrintDirectionCode,
    TextAlignmentCode,
)

FORMAT = "srv3"


class EdgeType(IntEnum):
    NONE = 0
    HARD_SHADOW = 1
    BEVEL = 2
    GLOW_OUTLINE = 3
    SOFT_SHADOW = 4


class FontStyle(IntEnum):
    """Font family of a pen.

    Android ignores custom fonts and iOS substitutes its own.
    """

    DEFAULT = 0  # same as PROPORTIONAL_SANS_SERIF
    MONOSPACED_SERIF = 1  # Courier New
    PROPORTIONAL_SERIF = 2  # Times New Roman
    MONOSPACED_SANS_SERIF = 3  # Lucida Console
    PROPORTIONAL_SANS_SERIF = 4  # Roboto
    CASUAL = 5  # Comic Sans
    CURSIVE = 6  # Monotype Corsiva
    SMALL_CAPITALS = 7  # Arial with small-caps


class VerticalAlignment(IntEnum):
    SUBSCRIPT = 0
    REGULAR = 1
    SUPERSCRIPT = 2


class RubyPart(IntEnum):
    """Role of a span in ruby annotation."""

    NONE = 0
    BASE = 1  # kanji spans
    PARENTHESIS = 2  # for clients without ruby support
    TEXT_BEFORE = 4  # furigana spans
    TEXT_AFTER = 5  # furigana spans


class ModeHint(IntEnum):
    NONE = 0
    DEFAULT = 1
    SCROLL = 2


EdgeTypeCode = Annotated[EdgeType, BeforeValidator(enum_code)]
FontStyleCode = Annotated[FontStyle, BeforeValidator(enum_code)]
VerticalAlignmentCode = Annotated[VerticalAlignment, BeforeValidator(enum_code)]
RubyPartCode = Annotated[RubyPart, BeforeValidator(enum_code)]
ModeHintCode = Annotated[ModeHint, BeforeValidator(enum_code)]


class Pen(XmlModel):
    """A reusable text styling definition.

    Attributes:
        id: Pen identifier cited by paragraphs and spans.
        bold: Bold text.
        italic: Italic text.
        underline: Underlined text.
        foreground_color: Text color, as ``#RRGGBB``.
        foreground_opacity: Text opacity, 0-255.
        background_color: Background color, as ``#RRGGBB``.
        background_opacity: Background opacity, 0-255.
        edge_color: Outline or shadow color, as ``#RRGGBB``.
        edge_type: Outline or shadow style.
        font_style: Font family.
        font_size_percent: Virtual percentage of the default size. The
            rendered size is ``100 + (sz - 100) / 4`` percent, so 200 only
            makes text 25% larger. Supported on iOS but not Android.
        vertical_alignment: Sub- or superscript. Ignored on mobile.
        ruby_part: Role of the text in ruby annotation.
    """

    id: U32
    bold: bool = Field(default=False, alias="b")
    italic: bool = Field(default=False, alias="i")
    underline: bool = Field(default=False, alias="u")
    foreground_color: str | None = Field(default=None, alias="fc")
    foreground_opacity: U8 | None = Field(default=None, alias="fo")
    background_color: str | None = Field(default=None, alias="bc")
    background_opacity: U8 | None = Field(default=None, alias="bo")
    edge_color: str | None = Field(default=None, alias="ec")
    edge_type: EdgeTypeCode = Field(default=EdgeType.NONE, alias="et")
    font_style: FontStyleCode = Field(default=FontStyle.DEFAULT, alias="fs")
    font_size_percent: U32 | None = Field(default=None, alias="sz")
    vertical_alignment: VerticalAlignmentCode | None = Field(default=None, alias="of")
    ruby_part: RubyPartCode = Field(default=RubyPart.NONE, alias="rb")


class WindowStyle(XmlModel):
    """A reusable window styling definition.

    Attributes:
        id: Window style identifier.
        scroll_direction: Raw scroll direction code; its meaning is not known.
        print_direction: Direction glyphs are laid out in.
        text_alignment: Justification of the text.
        mode_hint: Display mode hint.
        fill_color: Window fill color, as ``#RRGGBB``.
        fill_opacity: Window fill opacity, 0-255.
    """

    id: U32
    scroll_direction: U8 = Field(default=0, alias="sd")
    print_direction: PrintDirectionCode = Field(
        default=PrintDirection.LTR_HORIZONTAL, alias="pd"
    )
    text_alignment: TextAlignmentCode | None = Field(default=None, alias="ju")
    mode_hint: ModeHintCode = Field(default=ModeHint.NONE, alias="mh")
    fill_color: str | None = Field(default=None, alias="wfc")
    fill_opacity: U8 | None = Field(default=None, alias="wfo")


class WindowPosition(XmlModel):
    """A reusable window placement.

    The player maps offsets as ``coord * 0.96 + 2``, so windows land close
    to, not exactly at, the requested spot. In theater mode the offsets
    include the black side bars.

    Attributes:
        id: Window position identifier.
        anchor_point: Point of the window pinned to the offsets.
        left_offset: Horizontal offset in percent of the video width.
        top_offset: Vertical offset in percent of the video height.
        rows_total: Number of text rows.
        columns_total: Number of columns, each one en-dash wide.
    """

    id: U32
    anchor_point: AnchorPointCode | None = Field(default=None, alias="ap")
    left_offset: U32 | None = Field(default=None, alias="ah")
    top_offset: U32 | None = Field(default=None, alias="av")
    rows_total: U8 | None = Field(default=None, alias="rc")
    columns_total: U8 | None = Field(default=None, alias="cc")


class Head(XmlModel):
    pens: tuple[Pen, ...] = ()
    window_styles: tuple[WindowStyle, ...] = ()
    window_positions: tuple[WindowPosition, ...] = ()


class StyledSpan(XmlModel):
    """Text drawn with its own pen.

    Attributes:
        relative_offset_ms: Offset from the paragraph start.
        pen_id: Pen the span is drawn with.
        value: The span text.
    """

    relative_offset_ms: U32 = Field(default=0, alias="t")
    pen_id: U32 | None = Field(default=None, alias="p")
    value: str = ""


type Text = str | StyledSpan


def text_value(text: Text) -> str:
    """Return the text of a plain string or a styled span."""
    if isinstance(text, StyledSpan):
        return text.value
    return text


class TextSegment(XmlModel):
    """A paragraph of caption text.

    Attributes:
        timestamp_ms: When the paragraph appears.
        duration_ms: How long the paragraph stays.
        pen_id: Default pen for the paragraph.
        window_position_id: Window position the paragraph is placed at.
        window_style_id: Window style the paragraph is drawn with.
        texts: Plain strings and styled spans, in document order.
    """

    timestamp_ms: U32 = Field(alias="t")
    duration_ms: U32 = Field(default=0, alias="d")
    pen_id: U32 | None = Field(default=None, alias="p")
    window_position_id: U32 | None = Field(default=None, alias="wp")
    window_style_id: U32 | None = Field(default=None, alias="ws")
    texts: tuple[str | StyledSpan, ...] = ()

    @property
    def text(self) -> str:
        """The full paragraph text, spans included."""
        return "".join(text_value(t) for t in self.texts)


class WindowRef(XmlModel):
    """Opens a window built from a head position and style."""

    id: U32
    timestamp_ms: U32 = Field(alias="t")
    window_position_id: U32 = Field(alias="wp")
    window_style_id: U32 = Field(alias="ws")


class Body(XmlModel):
    elements: tuple[TextSegment | WindowRef, ...] = ()

    def segments(self) -> list[TextSegment]:
        """Return the paragraphs, without window references."""
        return [e for e in self.elements if isinstance(e, TextSegment)]


class Transcript(XmlModel):
    head: Head = Head()
    body: Body
    format_version: U32 = Field(alias="format")


def _append_text(
    texts: list[Text], raw: str | None, between_spans: bool = False
) -> None:
    # whitespace-only text is layout unless it separates two spans
    if raw and (between_spans or raw.strip()):
        texts.append(unescape_text(raw))


def _decode_paragraph(p: etree._Element) -> TextSegment:  # pyright: ignore[reportPrivateUsage]
    texts: list[Text] = []
    _append_text(texts, p.text)
    children = list(p)
    for i, child in enumerate(children):
        if isinstance(child.tag, str):
            if child.tag != "s":
                raise unexpected_element(FORMAT, child.tag)
            texts.append(
                build(
                    StyledSpan,
                    {**child.attrib, "value": element_text(child)},
                    FORMAT,
                    child.tag,
                )
            )
        _append_text(texts, child.tail, between_spans=i + 1 < len(children))
    return build(TextSegment, {**p.attrib, "texts": tuple(texts)}, FORMAT, p.tag)


def _decode_head(head: etree._Element) -> Head:  # pyright: ignore[reportPrivateUsage]
    pens: list[Pen] = []
    window_styles: list[WindowStyle] = []
    window_positions: list[WindowPosition] = []
    for element in child_elements(head):
        match element.tag:
            case "pen":
                pens.append(build(Pen, element.attrib, FORMAT, element.tag))
            case "ws":
                window_styles.append(
                    build(WindowStyle, element.attrib, FORMAT, element.tag)
                )
            case "wp":
                window_positions.append(
                    build(WindowPosition, element.attrib, FORMAT, element.tag)
                )
            case _:
                # unknown head resources are not referenced by the body
                pass
    return Head(
        pens=tuple(pens),
        window_styles=tuple(window_styles),
        window_positions=tuple(window_positions),
    )


def _decode_body(body: etree._Element) -> Body:  # pyright: ignore[reportPrivateUsage]
    elements: list[TextSegment | WindowRef] = []
    for element in child_elements(body):
        match element.tag:
            case "p":
                elements.append(_decode_paragraph(element))
            case "w":
                elements.append(build(WindowRef, element.attrib, FORMAT, element.tag))
            case tag:
                raise unexpected_element(FORMAT, tag)
    return Body(elements=tuple(elements))


def decode(text: str) -> Transcript:
    """Decode an srv3 document.

    Args:
        text: The raw document.

    Returns:
        The decoded transcript. Pen, window style and window position ids
        cited by the body are returned as sent, whether or not the head
        defines them.

    Raises:
        TranscriptDecodeError: If the document is malformed, lacks a body,
            holds an unknown element in the body or inside a paragraph, or
            uses an enumeration code outside its range.
    """
    root = parse_document(text, FORMAT)
    head = root.find("head")
    body = root.find("body")
    if body is None:
        raise TranscriptDecodeError(
            "Document has no body.", format=FORMAT, element="body"
        )

    return build(
        Transcript,
        {
            **root.attrib,
            "head": _decode_head(head) if head is not None else Head(),
            "body": _decode_body(body),
        },
        FORMAT,
        root.tag,
    )
