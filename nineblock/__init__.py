# nineblock/__init__.py
"""nineblock: deterministic nine-block identicons rendered with Pillow."""
from __future__ import annotations

from nineblock.core.codes import code_from_bytes, code_from_text, to_code32
from nineblock.core.config import RendererConfig, load_config, normalize_config
from nineblock.core.decoder import RenderSpec, decode
from nineblock.core.renderer import NineBlockRenderer, render, render_array

__all__ = [
    "NineBlockRenderer",
    "RenderSpec",
    "RendererConfig",
    "code_from_bytes",
    "code_from_text",
    "decode",
    "load_config",
    "normalize_config",
    "render",
    "render_array",
    "to_code32",
]

__version__ = "0.1.0"
