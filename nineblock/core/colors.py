# nineblock/core/colors.py
"""
Color Policy: fill color from decoded channels and a guard (stroke) color for
fills that sit too close to the background.
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Sequence, Tuple

import numpy as np
from PIL import ImageColor

__all__ = [
    "RGB",
    "DEFAULT_BACKGROUND",
    "DEFAULT_CONTRAST_THRESHOLD",
    "parse_color",
    "pack_rgb",
    "unpack_rgb",
    "fill_color",
    "color_distance",
    "complementary",
    "pick_colors",
]

logger = logging.getLogger("nineblock.core.colors")

RGB = Tuple[int, int, int]

DEFAULT_BACKGROUND: RGB = (255, 255, 255)
DEFAULT_CONTRAST_THRESHOLD = 32.0


def pack_rgb(color: Sequence[int]) -> int:
    r, g, b = (int(c) & 0xFF for c in color[:3])
    return (r << 16) | (g << 8) | b


def unpack_rgb(value: int) -> RGB:
    return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF


def parse_color(value: Any) -> RGB:
    """
    Accepts "#rrggbb" / CSS names (via Pillow), packed 0xRRGGBB ints and
    3- or 4-item sequences. Alpha is dropped.
    """
    if isinstance(value, str):
        try:
            rgb = ImageColor.getrgb(value.strip())
        except ValueError:
            raise ValueError(f"parse_color: unknown color {value!r}") from None
        return tuple(int(c) for c in rgb[:3])  # type: ignore[return-value]
    if isinstance(value, bool):
        raise TypeError("parse_color: bool is not a color")
    if isinstance(value, int):
        if not 0 <= value <= 0xFFFFFF:
            raise ValueError(f"parse_color: packed color out of range: {value:#x}")
        return unpack_rgb(value)
    if isinstance(value, (tuple, list)):
        if len(value) not in (3, 4):
            raise ValueError(f"parse_color: expected 3 or 4 channels, got {value!r}")
        out = []
        for c in value[:3]:
            if isinstance(c, bool) or not isinstance(c, int) or not 0 <= c <= 255:
                raise ValueError(f"parse_color: channel out of range in {value!r}")
            out.append(c)
        return out[0], out[1], out[2]
    raise TypeError(f"parse_color: unsupported color value {value!r}")


def fill_color(red: int, green: int, blue: int) -> RGB:
    """5-bit channels moved to the top of the 8-bit range."""
    return (red << 3) & 0xFF, (green << 3) & 0xFF, (blue << 3) & 0xFF


def color_distance(c1: Sequence[int], c2: Sequence[int]) -> float:
    """Euclidean distance in RGB space."""
    d = np.subtract(c1[:3], c2[:3], dtype=np.float64)
    return float(np.sqrt(np.dot(d, d)))


def complementary(color: Sequence[int]) -> RGB:
    return unpack_rgb(pack_rgb(color) ^ 0xFFFFFF)


def pick_colors(
    red: int,
    green: int,
    blue: int,
    background: Sequence[int] = DEFAULT_BACKGROUND,
    threshold: float = DEFAULT_CONTRAST_THRESHOLD,
) -> Tuple[RGB, Optional[RGB]]:
    """(fill, stroke); stroke is the complement of fill when fill is too close to background."""
    fill = fill_color(red, green, blue)
    dist = color_distance(fill, background)
    if dist < threshold:
        stroke = complementary(fill)
        logger.debug("guard stroke on: fill=%s background=%s distance=%.2f", fill, tuple(background), dist)
        return fill, stroke
    return fill, None
