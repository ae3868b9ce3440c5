# nineblock/core/renderer.py
"""
---
version: 2
kind: module
id: "core-renderer"
name: "nineblock.core.renderer"
role: "Nine-block renderer (grid composer + patch renderer)"
description: >
  Decodes an identity code, picks fill/guard colors, lays out nine patches on
  a 3x3 grid (1 center, 4 sides, 4 corners) and draws each one onto a Pillow
  canvas: cell background, patch polygon in a local frame centered on the cell
  and turned by 90-degree steps, optional guard outline. The full-resolution
  canvas (3 * cell_size square) is resampled to the requested size.
inputs:
  code: {type: "int", desc: "identity code; low 32 bits used"}
  size: {type: "int", desc: "output width = height in px"}
outputs:
  image: {type: "PIL.Image.Image", mode: "RGB", shape: "(size,size)"}
interfaces:
  exports: ["Placement", "grid_placements", "NineBlockRenderer", "render", "render_array"]
  depends_on: ["nineblock.core.patches", "nineblock.core.decoder", "nineblock.core.colors",
               "nineblock.core.canvas", "nineblock.core.config", "numpy", "Pillow"]
  used_by: ["nineblock.__main__"]
policy:
  - "patch index and turn are normalized in draw_patch, never at decode time"
  - "each patch is clipped to its own cell, so drawing order does not matter"
  - "library state is only read during render(); reconfigure from one thread"
---
"""
from __future__ import annotations

import logging
from typing import Any, List, Mapping, NamedTuple, Optional, Union

import numpy as np
from PIL import Image

from nineblock.core.canvas import Canvas
from nineblock.core.codes import to_code32
from nineblock.core.colors import RGB, parse_color, pick_colors
from nineblock.core.config import RendererConfig
from nineblock.core.decoder import RenderSpec, decode
from nineblock.core.patches import PatchLibrary

__all__ = ["Placement", "grid_placements", "NineBlockRenderer", "render", "render_array"]

logger = logging.getLogger("nineblock.core.renderer")


class Placement(NamedTuple):
    x: int
    y: int
    patch: int
    turn: int
    invert: bool


def grid_placements(spec: RenderSpec, cell_size: int) -> List[Placement]:
    """
    The nine cells in drawing order: center, sides clockwise from the top,
    corners clockwise from the top-left. Turns are left un-normalized.
    """
    c = cell_size
    out = [Placement(c, c, spec.middle_type, 0, spec.middle_invert)]
    for k, (x, y) in enumerate(((c, 0), (2 * c, c), (c, 2 * c), (0, c))):
        out.append(Placement(x, y, spec.side_type, spec.side_turn + k, spec.side_invert))
    for k, (x, y) in enumerate(((0, 0), (2 * c, 0), (2 * c, 2 * c), (0, 2 * c))):
        out.append(Placement(x, y, spec.corner_type, spec.corner_turn + k, spec.corner_invert))
    return out


class NineBlockRenderer:
    """
    Renders 9-block identicons.

    Usage:
        r = NineBlockRenderer(cell_size=20, background="#ffffff")
        img = r.render(0x1234ABCD, 48)       # PIL RGB image, 48x48
    """

    def __init__(self, config: Optional[Union[RendererConfig, Mapping[str, Any]]] = None, **overrides: Any) -> None:
        if config is None:
            cfg = RendererConfig()
        elif isinstance(config, RendererConfig):
            cfg = config
        else:
            cfg = RendererConfig.from_mapping(config)
        if overrides:
            cfg = cfg.replace(**overrides)
        self._config = cfg
        self._library = PatchLibrary(cfg.cell_size)

    # ------------------------------------------------------------------
    # configuration
    # ------------------------------------------------------------------

    @property
    def config(self) -> RendererConfig:
        return self._config

    @property
    def library(self) -> PatchLibrary:
        return self._library

    @property
    def cell_size(self) -> int:
        """Pixels per patch before downscaling; the source canvas is 3x this."""
        return self._config.cell_size

    @cell_size.setter
    def cell_size(self, value: int) -> None:
        cfg = self._config.replace(cell_size=value)
        self._library.configure(cfg.cell_size)
        self._config = cfg

    @property
    def background(self) -> RGB:
        return self._config.background

    @background.setter
    def background(self, value: Any) -> None:
        self._config = self._config.replace(background=parse_color(value))

    @property
    def contrast_threshold(self) -> float:
        return self._config.contrast_threshold

    @contrast_threshold.setter
    def contrast_threshold(self, value: float) -> None:
        self._config = self._config.replace(contrast_threshold=value)

    @property
    def resample(self) -> str:
        return self._config.resample

    @resample.setter
    def resample(self, value: str) -> None:
        self._config = self._config.replace(resample=value)

    # ------------------------------------------------------------------
    # rendering
    # ------------------------------------------------------------------

    def render(self, code: int, size: int) -> Image.Image:
        """Identicon for `code` (low 32 bits) as a size x size RGB image."""
        if isinstance(size, bool) or not isinstance(size, int):
            raise TypeError("render: size must be int")
        c = to_code32(code)
        spec = decode(c)
        logger.debug("render code=%#010x size=%d spec=%s", c, size, spec)
        canvas = self._compose_canvas(spec)
        return canvas.resample(size, self._config.resample)

    def render_array(self, code: int, size: int) -> np.ndarray:
        return np.asarray(self.render(code, size), dtype=np.uint8)

    def compose(self, spec: RenderSpec) -> Image.Image:
        """Full-resolution image (3 * cell_size square) for a decoded spec."""
        return self._compose_canvas(spec).image

    def _compose_canvas(self, spec: RenderSpec) -> Canvas:
        cfg = self._config
        fill, stroke = pick_colors(spec.red, spec.green, spec.blue, cfg.background, cfg.contrast_threshold)
        canvas = Canvas(cfg.cell_size * 3, cfg.background)
        for p in grid_placements(spec, cfg.cell_size):
            self.draw_patch(canvas, p.x, p.y, p.patch, p.turn, p.invert, fill, stroke)
        return canvas

    def draw_patch(
        self,
        canvas: Canvas,
        x: int,
        y: int,
        patch: int,
        turn: int,
        invert: bool,
        fill: RGB,
        stroke: Optional[RGB] = None,
    ) -> None:
        lib = self._library
        size = lib.cell_size
        offset = lib.offset
        patch %= len(lib)
        turn %= 4
        if lib.patch(patch).inverted:
            invert = not invert
        background = self._config.background

        canvas.fill_rect(x, y, size, size, fill if invert else background)

        canvas.save()
        try:
            canvas.clip_rect(x, y, size, size)
            canvas.translate(x + offset, y + offset)
            canvas.rotate(turn * 90)
            shape = lib.shape(patch)
            canvas.fill_polygon(shape, background if invert else fill)
            # guard goes on top: a filled polygon covers its own boundary pixels
            if stroke is not None:
                canvas.stroke_polygon(shape, stroke)
        finally:
            canvas.restore()


def render(code: int, size: int, **config: Any) -> Image.Image:
    """One-off render with a fresh renderer (no shared state)."""
    return NineBlockRenderer(**config).render(code, size)


def render_array(code: int, size: int, **config: Any) -> np.ndarray:
    return NineBlockRenderer(**config).render_array(code, size)
