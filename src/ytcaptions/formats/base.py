"""Shared building blocks for the XML-based timed-text decoders.

Every decoder parses the document with lxml, walks the element tree
itself, and builds frozen pydantic models from each element's attributes.
Text leaves pass through ``unescape_text`` before they reach a model,
because the platform entity-escapes caption text a second time inside
the XML.
"""

from collections.abc import Iterator, Mapping
import html
from typing import Annotated, Any

from lxml import etree
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..exceptions import TranscriptDecodeError


def enum_code(value: Any) -> Any:
    """Convert an attribute string into the integer code of an enumeration."""
    if isinstance(value, str):
        return int(value)
    return value


U8 = Annotated[int, Field(ge=0, le=0xFF)]
U32 = Annotated[int, Field(ge=0, le=0xFFFF_FFFF)]


class XmlModel(BaseModel):
    """Base for immutable transcript models populated from XML attributes."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


def unescape_text(text: str) -> str:
    """Resolve HTML character references left in caption text."""
    return html.unescape(text)


def element_text(element: etree._Element) -> str:  # pyright: ignore[reportPrivateUsage]
    """Return the unescaped text content of an element and its descendants."""
    return unescape_text("".join(element.itertext()))


def parse_document(text: str, format: str) -> etree._Element:  # pyright: ignore[reportPrivateUsage]
    """Parse a timed-text document into its root element.

    Args:
        text: The raw document.
        format: The wire format identifier, for error context.

    Returns:
        The root element.

    Raises:
        TranscriptDecodeError: If the document is not well-formed XML.
    """
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        return etree.fromstring(text.encode("utf-8"), parser=parser)
    except etree.XMLSyntaxError as e:
        raise TranscriptDecodeError(
            "Document is not well-formed XML.", format=format
        ) from e


def child_elements(
    element: etree._Element,  # pyright: ignore[reportPrivateUsage]
) -> Iterator[etree._Element]:  # pyright: ignore[reportPrivateUsage]
    """Yield the child elements of ``element``, skipping comments and processing instructions."""
    for child in element:
        if isinstance(child.tag, str):
            yield child


def build[M: XmlModel](
    model: type[M],
    values: Mapping[str, Any],
    format: str,
    element: str,
) -> M:
    """Validate element attributes into a transcript model.

    Args:
        model: The model class to build.
        values: Attribute values keyed by XML attribute name, plus any
            text content keyed by field name.
        format: The wire format identifier, for error context.
        element: The XML tag being decoded, for error context.

    Returns:
        The validated model.

    Raises:
        TranscriptDecodeError: If a value is missing, malformed, or an
            enumeration code is out of range.
    """
    try:
        return model.model_validate(dict(values))
    except ValidationError as e:
        raise TranscriptDecodeError(
            "Element does not match the expected schema.",
            format=format,
            element=element,
            details=e.errors(include_url=False, include_context=False),
        ) from e


def unexpected_element(format: str, element: str) -> TranscriptDecodeError:
    """Build the error raised for an element the format does not define."""
    return TranscriptDecodeError(
        "Unexpected element in document.", format=format, element=element
    )
