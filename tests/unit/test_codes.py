# tests/unit/test_codes.py
import hashlib

import pytest

from nineblock.core.codes import code_from_bytes, code_from_text, parse_code, to_code32


def test_to_code32_masks():
    assert to_code32(0) == 0
    assert to_code32(-1) == 0xFFFFFFFF
    assert to_code32((1 << 32) | 7) == 7
    assert to_code32(0xFFFFFFFF) == 0xFFFFFFFF


@pytest.mark.parametrize("bad", ["1", 1.0, True, None])
def test_to_code32_rejects_non_int(bad):
    with pytest.raises(TypeError):
        to_code32(bad)


def test_code_from_bytes_is_sha256_prefix():
    expected = int.from_bytes(hashlib.sha256(b"salt" + b"abc").digest()[:4], "big")
    assert code_from_bytes(b"abc", b"salt") == expected
    assert code_from_bytes(b"abc", "salt") == expected


def test_code_from_text_is_stable_and_salted():
    a = code_from_text("alice@example.com")
    assert a == code_from_text("alice@example.com")
    assert 0 <= a < 2 ** 32
    assert a != code_from_text("alice@example.com", salt="pepper")
    assert code_from_text("") == code_from_text("?")


@pytest.mark.parametrize("text,value", [("42", 42), ("0x10", 16), ("-1", -1), ("1_000", 1000), ("0b101", 5)])
def test_parse_code(text, value):
    assert parse_code(text) == value


def test_parse_code_rejects_garbage():
    with pytest.raises(ValueError):
        parse_code("zz")
