"""Enumerations shared by the srv2 and srv3 window definitions.

The platform encodes each of these as a small integer attribute. Codes
outside the defined range are rejected when decoding.
"""

from enum import IntEnum
from typing import Annotated

from pydantic import BeforeValidator

from .base import enum_code


class AnchorPoint(IntEnum):
    """Point of the caption window that is pinned to its position.

    <pre>
    0 ======== 1 ======== 2
    |                     |
    3          4          5
    |                     |
    6 ======== 7 ======== 8
    </pre>
    """

    TOP_LEFT = 0
    TOP_CENTER = 1
    TOP_RIGHT = 2
    CENTER_LEFT = 3
    CENTER = 4
    CENTER_RIGHT = 5
    BOTTOM_LEFT = 6
    BOTTOM_CENTER = 7
    BOTTOM_RIGHT = 8


class TextAlignment(IntEnum):
    """Justification of text inside a window."""

    START = 0  # left in LTR
    END = 1  # right in LTR
    CENTER = 2
    JUSTIFY = 3


class PrintDirection(IntEnum):
    """Direction glyphs are laid out in.

    Values:
        LTR_HORIZONTAL: Left to right.
        RTL_HORIZONTAL: Right to left.
        VERTICAL_LTR: Upright text; vertical scripts stay upright and
            horizontal scripts are stacked.
        VERTICAL_RTL: Sideways text; laid out horizontally, then the whole
            line is rotated 90 degrees clockwise.
    """

    LTR_HORIZONTAL = 0
    RTL_HORIZONTAL = 1
    VERTICAL_LTR = 2
    VERTICAL_RTL = 3


AnchorPointCode = Annotated[AnchorPoint, BeforeValidator(enum_code)]
TextAlignmentCode = Annotated[TextAlignment, BeforeValidator(enum_code)]
PrintDirectionCode = Annotated[PrintDirection, BeforeValidator(enum_code)]
