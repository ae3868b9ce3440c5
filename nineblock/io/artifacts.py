# nineblock/io/artifacts.py
"""
nineblock.io.artifacts: atomic writes of rendered identicons and their
decoded metadata.

Rules
-----
- Atomic write (tmp file in the target directory, then rename).
- Parent directories are created on demand.
- The image format follows the file suffix (Pillow); default PNG.
"""
from __future__ import annotations

import io
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Union

from PIL import Image

__all__ = ["atomic_write_bytes", "atomic_write_json", "save_image", "image_to_png_bytes"]

PathLike = Union[str, Path]


def atomic_write_bytes(path: PathLike, data: bytes) -> Path:
    """Write bytes atomically; returns the resolved path."""
    p = Path(path).resolve()
    p.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{p.name}.", dir=str(p.parent))
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as tmp:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        tmp_path.replace(p)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    return p


def atomic_write_json(path: PathLike, obj: Any, *, indent: int = 2) -> Path:
    return atomic_write_bytes(path, json.dumps(obj, ensure_ascii=False, indent=indent).encode("utf-8"))


def image_to_png_bytes(img: Image.Image) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def save_image(img: Image.Image, path: PathLike) -> Path:
    """Save `img` atomically; format taken from the suffix (PNG when missing)."""
    p = Path(path)
    fmt = Image.registered_extensions().get(p.suffix.lower(), "PNG")
    if fmt == "PNG":
        return atomic_write_bytes(p, image_to_png_bytes(img))
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return atomic_write_bytes(p, buf.getvalue())
