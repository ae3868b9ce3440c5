# tests/unit/test_decoder.py
import pytest

from nineblock.core.decoder import RenderSpec, decode


def test_zero_code():
    s = decode(0)
    assert s == RenderSpec(0, False, 0, False, 0, 0, False, 0, 0, 0, 0)


@pytest.mark.parametrize("bits,expected", [(0, 0), (1, 4), (2, 8), (3, 15)])
def test_middle_type_lookup(bits, expected):
    assert decode(bits).middle_type == expected


def test_single_fields():
    assert decode(1 << 2).middle_invert is True
    assert decode(0xF << 3).corner_type == 15
    assert decode(1 << 7).corner_invert is True
    assert decode(3 << 8).corner_turn == 3
    assert decode(0xF << 10).side_type == 15
    assert decode(1 << 14).side_invert is True
    assert decode(1 << 15).side_turn == 1
    assert decode(0x1F << 21).green == 31
    assert decode(0x1F << 27).red == 31


def test_bit16_feeds_side_turn_and_blue():
    # reference layout: bit 16 is the high bit of side_turn and the low bit of blue
    s = decode(1 << 16)
    assert s.side_turn == 2
    assert s.blue == 1


@pytest.mark.xfail(strict=True, reason="reference layout shares bit 16; colors do not start at bit 17")
def test_layout_variant_colors_from_bit17():
    assert decode(1 << 16).blue == 0


@pytest.mark.xfail(strict=True, reason="reference layout shares bit 16; side_turn is not confined to bit 15")
def test_layout_variant_side_turn_bit15_only():
    assert decode(1 << 16).side_turn == 0


def test_bit26_is_not_read():
    s = decode(1 << 26)
    assert s.green == 0 and s.red == 0


def test_all_ones():
    s = decode(0xFFFFFFFF)
    assert s.middle_type == 15 and s.middle_invert
    assert s.corner_type == 15 and s.corner_invert and s.corner_turn == 3
    assert s.side_type == 15 and s.side_invert and s.side_turn == 3
    assert (s.red, s.green, s.blue) == (31, 31, 31)


def test_only_low_32_bits_matter():
    assert decode(-1) == decode(0xFFFFFFFF)
    assert decode((0xDEAD << 32) | 0x1234ABCD) == decode(0x1234ABCD)


def test_rejects_non_int():
    with pytest.raises(TypeError):
        decode("12")


def test_to_dict():
    d = decode(0x1234ABCD).to_dict()
    assert set(d) == {
        "middle_type", "middle_invert", "corner_type", "corner_invert", "corner_turn",
        "side_type", "side_invert", "side_turn", "red", "green", "blue",
    }
