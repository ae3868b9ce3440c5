# nineblock/core/decoder.py
"""
Code Decoder: splits a 32-bit identity code into patch and color fields.

Bit layout (bit 0 = least significant):

    0-1    middle patch type (through CENTER_PATCH_TYPES)
    2      middle invert
    3-6    corner patch type
    7      corner invert
    8-9    corner turn
    10-13  side patch type
    14     side invert
    15-16  side turn
    16-20  blue
    21-25  green
    27-31  red

Bit 16 is read twice: as the high bit of side_turn and the low bit of blue.
That overlap is part of the published layout and is kept so that existing
codes keep their images. Bit 26 is not read.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

from nineblock.core.codes import to_code32
from nineblock.core.patches import CENTER_PATCH_TYPES

__all__ = ["RenderSpec", "decode"]


@dataclass(frozen=True)
class RenderSpec:
    middle_type: int
    middle_invert: bool
    corner_type: int
    corner_invert: bool
    corner_turn: int
    side_type: int
    side_invert: bool
    side_turn: int
    red: int
    green: int
    blue: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def decode(code: int) -> RenderSpec:
    """Total over every int; only the low 32 bits are used."""
    c = to_code32(code)
    return RenderSpec(
        middle_type=CENTER_PATCH_TYPES[c & 0x3],
        middle_invert=bool((c >> 2) & 0x1),
        corner_type=(c >> 3) & 0x0F,
        corner_invert=bool((c >> 7) & 0x1),
        corner_turn=(c >> 8) & 0x3,
        side_type=(c >> 10) & 0x0F,
        side_invert=bool((c >> 14) & 0x1),
        side_turn=(c >> 15) & 0x3,
        blue=(c >> 16) & 0x1F,
        green=(c >> 21) & 0x1F,
        red=(c >> 27) & 0x1F,
    )
