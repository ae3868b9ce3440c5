# nineblock/core/patches.py
"""
---
version: 2
kind: module
id: "core-patches"
name: "nineblock.core.patches"
role: "Patch Library (fixed polygon catalog)"
description: >
  Fixed catalog of 16 patch polygons. Every patch is a list of vertex indices
  on a 5x5 grid (numbered 0..24 from the top-left corner, left to right and top
  to bottom) plus a flag set {SYMMETRIC, INVERTED}. PatchLibrary maps the
  catalog to pixel polygons for a given cell size, centered at the origin so
  that rotation about (0,0) is correct for every shape.
interfaces:
  exports: ["Patch", "PATCH_TYPES", "PatchLibrary", "PATCH_SYMMETRIC", "PATCH_INVERTED"]
  used_by: ["nineblock.core.renderer"]
contracts:
  - "catalog is immutable; configure() replaces all shapes at once"
  - "cell_size is an int >= 1; sizes not divisible by 4 round down"
---
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

__all__ = [
    "PATCH_CELLS",
    "PATCH_GRIDS",
    "PATCH_SYMMETRIC",
    "PATCH_INVERTED",
    "Patch",
    "PATCH_TYPES",
    "CENTER_PATCH_TYPES",
    "PatchLibrary",
]

logger = logging.getLogger("nineblock.core.patches")

PATCH_CELLS = 4
PATCH_GRIDS = PATCH_CELLS + 1

PATCH_SYMMETRIC = 1
PATCH_INVERTED = 2

Point = Tuple[int, int]
Polygon = Tuple[Point, ...]


@dataclass(frozen=True)
class Patch:
    vertices: Tuple[int, ...]
    flags: int = 0

    @property
    def symmetric(self) -> bool:
        return bool(self.flags & PATCH_SYMMETRIC)

    @property
    def inverted(self) -> bool:
        return bool(self.flags & PATCH_INVERTED)


_SQUARE = (0, 4, 24, 20, 0)

PATCH_TYPES: Tuple[Patch, ...] = (
    Patch(_SQUARE, PATCH_SYMMETRIC),
    Patch((0, 4, 20, 0)),
    Patch((2, 24, 20, 2)),
    Patch((0, 2, 20, 22, 0)),
    Patch((2, 14, 22, 10, 2), PATCH_SYMMETRIC),
    Patch((0, 14, 24, 22, 0)),
    Patch((2, 24, 22, 13, 11, 22, 20, 2)),
    Patch((0, 14, 22, 0)),
    Patch((6, 8, 18, 16, 6), PATCH_SYMMETRIC),
    Patch((4, 20, 10, 12, 2, 4)),
    Patch((0, 2, 12, 10, 0)),
    Patch((10, 14, 22, 10)),
    Patch((20, 12, 24, 20)),
    Patch((10, 2, 12, 10)),
    Patch((0, 2, 10, 0)),
    Patch(_SQUARE, PATCH_SYMMETRIC | PATCH_INVERTED),
)

# center cell only uses shapes that look the same under every turn
CENTER_PATCH_TYPES: Tuple[int, ...] = (0, 4, 8, 15)


def _vertex_xy(v: int, scale: int, offset: int) -> Point:
    return (v % PATCH_GRIDS) * scale - offset, (v // PATCH_GRIDS) * scale - offset


class PatchLibrary:
    """
    Pixel polygons for PATCH_TYPES at a given cell size.

    Owned by one renderer; shapes are rebuilt by configure() and only read
    afterwards.
    """

    def __init__(self, cell_size: int = 20) -> None:
        self._cell_size = 0
        self._offset = 0
        self._shapes: Tuple[Polygon, ...] = ()
        self.configure(cell_size)

    def configure(self, cell_size: int) -> "PatchLibrary":
        if isinstance(cell_size, bool) or not isinstance(cell_size, int):
            raise TypeError("PatchLibrary.configure: cell_size must be int")
        if cell_size < 1:
            raise ValueError("PatchLibrary.configure: cell_size must be >= 1")
        offset = cell_size // 2
        scale = cell_size // PATCH_CELLS
        shapes: List[Polygon] = []
        for patch in PATCH_TYPES:
            shapes.append(tuple(_vertex_xy(v, scale, offset) for v in patch.vertices))
        # swap in one assignment so readers never see a half-built catalog
        self._cell_size, self._offset, self._shapes = cell_size, offset, tuple(shapes)
        logger.debug("patch library configured: cell_size=%d scale=%d offset=%d", cell_size, scale, offset)
        return self

    @property
    def cell_size(self) -> int:
        return self._cell_size

    @property
    def offset(self) -> int:
        """Distance from a cell's top-left corner to its center."""
        return self._offset

    def __len__(self) -> int:
        return len(self._shapes)

    def shape(self, index: int) -> Polygon:
        return self._shapes[index % len(self._shapes)]

    def patch(self, index: int) -> Patch:
        return PATCH_TYPES[index % len(PATCH_TYPES)]
