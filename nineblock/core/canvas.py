# nineblock/core/canvas.py
"""
---
version: 2
kind: module
id: "core-canvas"
name: "nineblock.core.canvas"
role: "Drawing surface (Pillow adapter)"
description: >
  Thin 2D surface over a Pillow RGB image: rectangle fill, polygon fill and
  stroke under an affine transform (translate + rotate), save/restore of the
  transform and clip state, and resampling to the output size. Polygons are
  rasterized by Pillow into an "L" mask, clipped with numpy and pasted with a
  solid color, so a draw never leaks outside the active clip rectangle.
inputs:
  size: {type: "int|(int,int)", desc: "canvas width/height in pixels"}
  background: {type: "(r,g,b)", desc: "initial fill"}
outputs:
  image: {type: "PIL.Image.Image", mode: "RGB"}
  array: {dtype: "uint8", shape: "(H,W,3)"}
interfaces:
  exports: ["Canvas", "RESAMPLE_METHODS"]
  depends_on: ["numpy", "Pillow"]
  used_by: ["nineblock.core.renderer"]
contracts:
  - "y axis points down; rotate(+90) turns clockwise on screen"
  - "rotations by multiples of 90 degrees are exact (integer vertices stay integer)"
  - "fill_rect covers [x, x+w) x [y, y+h)"
  - "polygon fill/stroke include the far edge; under a cell clip an edge at x+w or y+h is dropped"
  - "resample() propagates Pillow errors unchanged"
---
"""
from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
from PIL import Image, ImageDraw

__all__ = ["Canvas", "RESAMPLE_METHODS", "resample_filter"]

RESAMPLE_METHODS = {
    "nearest": Image.Resampling.NEAREST,
    "bilinear": Image.Resampling.BILINEAR,
    "bicubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
}

Color = Tuple[int, int, int]
Box = Tuple[int, int, int, int]  # x0, y0, x1, y1 (end exclusive)

# exact (cos, sin) for quarter turns
_QUARTER = ((1.0, 0.0), (0.0, 1.0), (-1.0, 0.0), (0.0, -1.0))


def resample_filter(method: str) -> Image.Resampling:
    try:
        return RESAMPLE_METHODS[(method or "bicubic").lower()]
    except KeyError:
        raise ValueError(f"resample_filter: unknown method {method!r}; expected one of {sorted(RESAMPLE_METHODS)}") from None


def _size_wh(size: Union[int, Sequence[int]]) -> Tuple[int, int]:
    if isinstance(size, int):
        return size, size
    w, h = size
    return int(w), int(h)


class Canvas:
    def __init__(self, size: Union[int, Sequence[int]], background: Color = (255, 255, 255)) -> None:
        w, h = _size_wh(size)
        self.image = Image.new("RGB", (w, h), tuple(background))
        self._matrix = np.eye(3, dtype=np.float64)
        self._clip: Optional[Box] = None
        self._stack: List[Tuple[np.ndarray, Optional[Box]]] = []

    # ------------------------------------------------------------------
    # state
    # ------------------------------------------------------------------

    @property
    def size(self) -> Tuple[int, int]:
        return self.image.size

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix.copy()

    @property
    def clip(self) -> Optional[Box]:
        return self._clip

    def save(self) -> None:
        self._stack.append((self._matrix.copy(), self._clip))

    def restore(self) -> None:
        if not self._stack:
            raise RuntimeError("Canvas.restore: no saved state")
        self._matrix, self._clip = self._stack.pop()

    def translate(self, dx: float, dy: float) -> None:
        t = np.array([[1.0, 0.0, dx], [0.0, 1.0, dy], [0.0, 0.0, 1.0]])
        self._matrix = self._matrix @ t

    def rotate(self, degrees: float) -> None:
        if float(degrees) % 90.0 == 0.0:
            c, s = _QUARTER[int(degrees // 90) % 4]
        else:
            rad = math.radians(degrees)
            c, s = math.cos(rad), math.sin(rad)
        r = np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])
        self._matrix = self._matrix @ r

    def clip_rect(self, x: int, y: int, w: int, h: int) -> None:
        """Intersect the clip with a device-space rectangle (ignores the transform)."""
        box = (int(x), int(y), int(x) + int(w), int(y) + int(h))
        if self._clip is not None:
            cx0, cy0, cx1, cy1 = self._clip
            box = (max(box[0], cx0), max(box[1], cy0), min(box[2], cx1), min(box[3], cy1))
        self._clip = box

    # ------------------------------------------------------------------
    # drawing
    # ------------------------------------------------------------------

    def _device(self, points: Sequence[Tuple[float, float]]) -> List[Tuple[int, int]]:
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        hom = np.hstack([pts, np.ones((pts.shape[0], 1))])
        dev = np.rint(hom @ self._matrix.T)[:, :2].astype(np.int64)
        return [(int(px), int(py)) for px, py in dev]

    def _paste_mask(self, mask: Image.Image, color: Color) -> None:
        if self._clip is not None:
            w, h = self.image.size
            x0, y0, x1, y1 = self._clip
            x0, y0 = max(0, x0), max(0, y0)
            x1, y1 = min(w, x1), min(h, y1)
            m = np.asarray(mask, dtype=np.uint8)
            keep = np.zeros_like(m)
            if x1 > x0 and y1 > y0:
                keep[y0:y1, x0:x1] = m[y0:y1, x0:x1]
            mask = Image.fromarray(keep)
        self.image.paste(tuple(color), (0, 0, *self.image.size), mask)

    def fill_rect(self, x: int, y: int, w: int, h: int, color: Color) -> None:
        if w <= 0 or h <= 0:
            return
        corners = self._device([(x, y), (x + w, y), (x + w, y + h), (x, y + h)])
        xs = [p[0] for p in corners]
        ys = [p[1] for p in corners]
        axis_aligned = len(set(xs)) <= 2 and len(set(ys)) <= 2
        mask = Image.new("L", self.image.size, 0)
        draw = ImageDraw.Draw(mask)
        if axis_aligned:
            # Pillow rectangles include the far edge
            draw.rectangle([min(xs), min(ys), max(xs) - 1, max(ys) - 1], fill=255)
        else:
            draw.polygon(corners, fill=255)
        self._paste_mask(mask, color)

    def fill_polygon(self, points: Sequence[Tuple[float, float]], color: Color) -> None:
        mask = Image.new("L", self.image.size, 0)
        ImageDraw.Draw(mask).polygon(self._device(points), fill=255)
        self._paste_mask(mask, color)

    def stroke_polygon(self, points: Sequence[Tuple[float, float]], color: Color) -> None:
        """One-pixel outline of the closed polygon."""
        mask = Image.new("L", self.image.size, 0)
        ImageDraw.Draw(mask).polygon(self._device(points), outline=255)
        self._paste_mask(mask, color)

    # ------------------------------------------------------------------
    # output
    # ------------------------------------------------------------------

    def resample(self, size: Union[int, Sequence[int]], method: str = "bicubic") -> Image.Image:
        return self.image.resize(_size_wh(size), resample=resample_filter(method))

    def to_array(self) -> np.ndarray:
        return np.asarray(self.image, dtype=np.uint8).copy()
