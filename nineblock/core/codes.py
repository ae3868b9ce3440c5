# nineblock/core/codes.py
"""Identity code helpers: 32-bit truncation and hashing of arbitrary data."""
from __future__ import annotations

import hashlib
from typing import Union

__all__ = ["CODE_MASK", "to_code32", "code_from_bytes", "code_from_text", "parse_code"]

CODE_MASK = 0xFFFFFFFF


def to_code32(code: int) -> int:
    """Low 32 bits of `code` as an unsigned int (negatives in two's complement)."""
    if isinstance(code, bool) or not isinstance(code, int):
        raise TypeError("to_code32: code must be int")
    return code & CODE_MASK


def code_from_bytes(data: bytes, salt: Union[bytes, str] = b"") -> int:
    """First 4 bytes (big-endian) of sha256(salt + data)."""
    if isinstance(salt, str):
        salt = salt.encode("utf-8")
    digest = hashlib.sha256(bytes(salt) + bytes(data)).digest()
    return int.from_bytes(digest[:4], "big")


def code_from_text(text: str, salt: Union[bytes, str] = "") -> int:
    # empty input still gets a stable icon
    if not text:
        text = "?"
    return code_from_bytes(text.encode("utf-8"), salt)


def parse_code(value: str) -> int:
    """Parse a CLI code: decimal, 0x-hex, 0b/0o, optionally negative."""
    s = str(value).strip().replace("_", "")
    try:
        return int(s, 0)
    except ValueError:
        raise ValueError(f"parse_code: not an integer code: {value!r}") from None
