# nineblock/core/config.py
"""
Renderer configuration: defaults, normalization of plain mappings (JSON
files, CLI overrides) and the frozen RendererConfig value object.
"""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Union

from nineblock.core.canvas import RESAMPLE_METHODS
from nineblock.core.colors import DEFAULT_BACKGROUND, DEFAULT_CONTRAST_THRESHOLD, RGB, parse_color

__all__ = ["DEFAULTS", "RendererConfig", "normalize_config", "load_config"]

DEFAULTS: Dict[str, Any] = {
    "cell_size": 20,            # px per patch before downscaling; canvas is 3x this
    "background": DEFAULT_BACKGROUND,
    "contrast_threshold": DEFAULT_CONTRAST_THRESHOLD,
    "resample": "bicubic",      # nearest|bilinear|bicubic|lanczos
}


def normalize_config(cfg: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Fills defaults and validates. Accepts a flat mapping or the nested
    {"nineblock": {...}} form used in shared JSON files. Unknown keys raise.
    """
    if not isinstance(cfg, Mapping):
        raise TypeError("normalize_config: cfg must be a mapping/dict")
    body: Dict[str, Any] = dict(cfg)
    if len(body) == 1 and "nineblock" in body:
        inner = body["nineblock"]
        if not isinstance(inner, Mapping):
            raise TypeError("normalize_config: 'nineblock' section must be a mapping")
        body = dict(inner)

    unknown = sorted(k for k in body if k not in DEFAULTS)
    if unknown:
        raise ValueError(f"normalize_config: unknown keys {unknown}")

    out: Dict[str, Any] = {**DEFAULTS, **body}

    cs = out["cell_size"]
    if isinstance(cs, bool) or not isinstance(cs, int):
        raise TypeError("normalize_config: cell_size must be int")
    if cs < 1:
        raise ValueError("normalize_config: cell_size must be >= 1")

    out["background"] = parse_color(out["background"])

    thr = out["contrast_threshold"]
    if isinstance(thr, bool) or not isinstance(thr, (int, float)):
        raise TypeError("normalize_config: contrast_threshold must be a number")
    if thr < 0:
        raise ValueError("normalize_config: contrast_threshold must be >= 0")
    out["contrast_threshold"] = float(thr)

    method = str(out["resample"] or "bicubic").lower()
    if method not in RESAMPLE_METHODS:
        raise ValueError(f"normalize_config: unknown resample method {out['resample']!r}")
    out["resample"] = method
    return out


@dataclass(frozen=True)
class RendererConfig:
    cell_size: int = DEFAULTS["cell_size"]
    background: RGB = DEFAULT_BACKGROUND
    contrast_threshold: float = DEFAULT_CONTRAST_THRESHOLD
    resample: str = DEFAULTS["resample"]

    @classmethod
    def from_mapping(cls, cfg: Mapping[str, Any]) -> "RendererConfig":
        return cls(**normalize_config(cfg))

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["background"] = list(self.background)
        return d

    def replace(self, **overrides: Any) -> "RendererConfig":
        merged = {**asdict(self), **overrides}
        return replace(self, **normalize_config(merged))


def load_config(path: Union[str, Path]) -> RendererConfig:
    p = Path(path)
    data = json.loads(p.read_text(encoding="utf-8"))
    return RendererConfig.from_mapping(data)
